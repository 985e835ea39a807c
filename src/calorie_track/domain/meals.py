"""Domain models for logged meals."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class MealEntry:
    """A logged meal with its macros."""

    id: UUID
    timestamp: str
    food_items: str
    calories: int
    protein: int
    carbs: int
    fat: int
    image_url: str | None = None
    is_edited: bool = False


@dataclass(frozen=True)
class DailyTotals:
    """Summed macros across the current meal list."""

    calories: int
    protein: int
    carbs: int
    fat: int


EMPTY_TOTALS = DailyTotals(calories=0, protein=0, carbs=0, fat=0)
