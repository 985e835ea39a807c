"""Meal log service over the in-memory session."""

import dataclasses
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from calorie_track.domain.logger import MealForm
from calorie_track.domain.meals import EMPTY_TOTALS, DailyTotals, MealEntry
from calorie_track.services.session import SessionState
from calorie_track.services.targets import round_half_up

_EDITABLE_FIELDS = frozenset(
    {"food_items", "image_url", "calories", "protein", "carbs", "fat"}
)
_NUMERIC_FIELDS = frozenset({"calories", "protein", "carbs", "fat"})

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MealLogService:
    """Maintains the newest-first meal list and derives daily totals."""

    session: SessionState
    timezone_name: str = "UTC"
    clock: Callable[[], datetime] = field(default=_utc_now)

    def list_meals(self) -> list[MealEntry]:
        """Return meals, newest first."""
        return list(self.session.meals)

    def get(self, meal_id: UUID) -> MealEntry | None:
        """Return a meal by id, if present."""
        for meal in self.session.meals:
            if meal.id == meal_id:
                return meal
        return None

    def add(self, meal: MealEntry) -> MealEntry:
        """Prepend a meal to the list."""
        self.session.meals.insert(0, meal)
        _logger.info("Meal added: id=%s calories=%s", meal.id, meal.calories)
        return meal

    def new_entry(self, form: MealForm, image_url: str | None = None) -> MealEntry:
        """Build a fresh entry stamped with the current local time."""
        now = self.clock().astimezone(ZoneInfo(self.timezone_name))
        return MealEntry(
            id=uuid4(),
            timestamp=now.strftime("%H:%M"),
            food_items=form.food_items,
            calories=round_half_up(form.calories),
            protein=round_half_up(form.protein),
            carbs=round_half_up(form.carbs),
            fat=round_half_up(form.fat),
            image_url=image_url,
        )

    def log_meal(self, form: MealForm, image_url: str | None = None) -> MealEntry:
        """Create an entry from form values and add it."""
        return self.add(self.new_entry(form, image_url))

    def update(self, meal_id: UUID, fields: Mapping[str, object]) -> MealEntry | None:
        """Merge fields into a meal and mark it edited.

        Unknown ids are ignored and never create an entry.
        """
        unexpected = set(fields) - _EDITABLE_FIELDS
        if unexpected:
            raise ValueError(f"Fields are not editable: {sorted(unexpected)}")
        changes = {
            key: round_half_up(value) if key in _NUMERIC_FIELDS else value
            for key, value in fields.items()
        }
        for index, meal in enumerate(self.session.meals):
            if meal.id != meal_id:
                continue
            updated = dataclasses.replace(meal, **changes, is_edited=True)
            self.session.meals[index] = updated
            _logger.info("Meal updated: id=%s fields=%s", meal_id, sorted(changes))
            return updated
        return None

    def delete(self, meal_id: UUID) -> bool:
        """Remove a meal; return False when the id was not found."""
        remaining = [meal for meal in self.session.meals if meal.id != meal_id]
        if len(remaining) == len(self.session.meals):
            return False
        self.session.meals[:] = remaining
        _logger.info("Meal deleted: id=%s", meal_id)
        return True

    def totals(self) -> DailyTotals:
        """Sum macros across the current list."""
        total = EMPTY_TOTALS
        for meal in self.session.meals:
            total = DailyTotals(
                calories=total.calories + meal.calories,
                protein=total.protein + meal.protein,
                carbs=total.carbs + meal.carbs,
                fat=total.fat + meal.fat,
            )
        return total
