"""Domain models for the dashboard read model."""

from dataclasses import dataclass
from enum import Enum

from calorie_track.domain.meals import DailyTotals, MealEntry
from calorie_track.domain.profile import NutritionTargets


class ProgressStatus(str, Enum):
    """Traffic-light status of intake against a target."""

    ON_TRACK = "on_track"
    NEAR = "near"
    OVER = "over"


@dataclass(frozen=True)
class MacroProgress:
    """Progress of one nutrient against its daily target."""

    consumed: int
    target: int | None
    percent: int
    progress: float
    status: ProgressStatus


@dataclass(frozen=True)
class DashboardSummary:
    """Totals, targets and meals for the daily dashboard."""

    targets: NutritionTargets | None
    totals: DailyTotals
    calories: MacroProgress
    protein: MacroProgress
    carbs: MacroProgress
    fat: MacroProgress
    meals: list[MealEntry]
