"""Domain models for the meal logger flow."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from calorie_track.domain.meals import MealEntry


class LoggerStage(str, Enum):
    """Stages of the photo logging flow."""

    IDLE = "idle"
    ANALYZING = "analyzing"
    RESULT = "result"
    EDIT = "edit"
    SAVED = "saved"
    FAILED = "failed"


@dataclass(frozen=True)
class MealForm:
    """Working values shown in the result and edit stages."""

    food_items: str = ""
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


@dataclass(frozen=True)
class LoggerSnapshot:
    """Read-only view of the logger state."""

    stage: LoggerStage
    form: MealForm
    image_url: str | None
    editing_meal_id: UUID | None
    saved_meal: MealEntry | None
    error: str | None
