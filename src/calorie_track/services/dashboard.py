"""Dashboard read model: daily totals against profile targets."""

from dataclasses import dataclass

from calorie_track.domain.dashboard import (
    DashboardSummary,
    MacroProgress,
    ProgressStatus,
)
from calorie_track.services.meals import MealLogService
from calorie_track.services.session import SessionState
from calorie_track.services.targets import round_half_up

NEAR_TARGET_RATIO = 0.8


@dataclass
class DashboardService:
    """Service that combines the profile and meal totals for display."""

    session: SessionState
    meal_log_service: MealLogService

    def get_summary(self) -> DashboardSummary:
        """Return totals, progress and meals for the current session."""
        totals = self.meal_log_service.totals()
        targets = self.session.profile.targets if self.session.profile else None
        if targets is None:
            calories = protein = carbs = fat = None
        else:
            calories, protein, carbs, fat = (
                targets.calories,
                targets.protein,
                targets.carbs,
                targets.fat,
            )
        return DashboardSummary(
            targets=targets,
            totals=totals,
            calories=macro_progress(totals.calories, calories),
            protein=macro_progress(totals.protein, protein),
            carbs=macro_progress(totals.carbs, carbs),
            fat=macro_progress(totals.fat, fat),
            meals=self.meal_log_service.list_meals(),
        )


def macro_progress(consumed: int, target: int | None) -> MacroProgress:
    """Compute progress for one nutrient; a missing or zero target yields 0."""
    if not target:
        return MacroProgress(
            consumed=consumed,
            target=target,
            percent=0,
            progress=0.0,
            status=ProgressStatus.ON_TRACK,
        )
    ratio = consumed / target
    return MacroProgress(
        consumed=consumed,
        target=target,
        percent=round_half_up(ratio * 100),
        progress=min(100.0, ratio * 100),
        status=_progress_status(ratio),
    )


def _progress_status(ratio: float) -> ProgressStatus:
    if ratio > 1:
        return ProgressStatus.OVER
    if ratio >= NEAR_TARGET_RATIO:
        return ProgressStatus.NEAR
    return ProgressStatus.ON_TRACK
