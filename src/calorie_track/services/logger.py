"""State machine for photo-based meal logging."""

import asyncio
import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from uuid import UUID

from calorie_track.domain.estimates import NutritionEstimate
from calorie_track.domain.logger import LoggerSnapshot, LoggerStage, MealForm
from calorie_track.domain.meals import MealEntry
from calorie_track.errors import (
    EstimationError,
    InvalidTransitionError,
    MealNotFoundError,
)
from calorie_track.services.estimation import NutritionEstimator
from calorie_track.services.meals import MealLogService

_logger = logging.getLogger(__name__)


@dataclass
class MealLoggerService:
    """Drives the idle -> analyzing -> result -> edit -> saved flow.

    Only one estimate is pending at a time. Each upload bumps a generation
    counter and cancels the previous task, so a late result from an older
    upload is never applied.
    """

    estimator: NutritionEstimator
    meal_log_service: MealLogService
    _stage: LoggerStage = field(default=LoggerStage.IDLE, init=False)
    _form: MealForm = field(default_factory=MealForm, init=False)
    _image_url: str | None = field(default=None, init=False)
    _editing_meal_id: UUID | None = field(default=None, init=False)
    _saved_meal: MealEntry | None = field(default=None, init=False)
    _error: str | None = field(default=None, init=False)
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)
    _generation: int = field(default=0, init=False)

    @property
    def stage(self) -> LoggerStage:
        """Return the current stage."""
        return self._stage

    def snapshot(self) -> LoggerSnapshot:
        """Return a read-only view of the logger."""
        return LoggerSnapshot(
            stage=self._stage,
            form=self._form,
            image_url=self._image_url,
            editing_meal_id=self._editing_meal_id,
            saved_meal=self._saved_meal,
            error=self._error,
        )

    async def upload(self, image_url: str) -> LoggerSnapshot:
        """Start analyzing a new photo, superseding any pending estimate."""
        if self._editing_meal_id is not None:
            raise InvalidTransitionError("upload a photo", "editing a saved meal")
        self._cancel_pending()
        self._clear(stage=LoggerStage.ANALYZING)
        self._image_url = image_url
        self._task = asyncio.create_task(
            self._run_estimate(self._generation, image_url)
        )
        _logger.info("Estimate started: generation=%s", self._generation)
        return self.snapshot()

    async def wait_for_estimate(self) -> LoggerSnapshot:
        """Wait until no estimate is pending and return the snapshot."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self.snapshot()

    def begin_edit(self) -> LoggerSnapshot:
        """Open the edit form for the current estimate or a manual entry."""
        self._require("edit details", LoggerStage.RESULT, LoggerStage.IDLE)
        self._stage = LoggerStage.EDIT
        return self.snapshot()

    def update_form(self, fields: Mapping[str, object]) -> LoggerSnapshot:
        """Merge values into the working form."""
        self._require("update the form", LoggerStage.EDIT)
        self._form = dataclasses.replace(self._form, **fields)
        return self.snapshot()

    def cancel_edit(self) -> LoggerSnapshot:
        """Leave the edit form without saving."""
        self._require("cancel editing", LoggerStage.EDIT)
        if self._editing_meal_id is None and self._image_url is not None:
            self._stage = LoggerStage.RESULT
        else:
            self._clear(stage=LoggerStage.IDLE)
        return self.snapshot()

    def confirm(self) -> MealEntry:
        """Save the form as a new meal, or apply it to the meal being edited."""
        self._require("save the meal", LoggerStage.RESULT, LoggerStage.EDIT)
        if self._editing_meal_id is not None:
            fields = dataclasses.asdict(self._form)
            fields["image_url"] = self._image_url
            meal = self.meal_log_service.update(self._editing_meal_id, fields)
            if meal is None:
                raise MealNotFoundError(self._editing_meal_id)
        else:
            meal = self.meal_log_service.log_meal(self._form, self._image_url)
        self._clear(stage=LoggerStage.SAVED)
        self._saved_meal = meal
        return meal

    def open_meal(self, meal_id: UUID) -> LoggerSnapshot:
        """Load an existing meal into the edit form."""
        meal = self.meal_log_service.get(meal_id)
        if meal is None:
            raise MealNotFoundError(meal_id)
        self._cancel_pending()
        self._clear(stage=LoggerStage.EDIT)
        self._form = MealForm(
            food_items=meal.food_items,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
        )
        self._image_url = meal.image_url
        self._editing_meal_id = meal.id
        return self.snapshot()

    def reset(self) -> LoggerSnapshot:
        """Drop pending work and return to idle with an empty form."""
        self._cancel_pending()
        self._clear(stage=LoggerStage.IDLE)
        return self.snapshot()

    async def close(self) -> None:
        """Cancel and await any pending estimate."""
        task = self._task
        self._cancel_pending()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    async def _run_estimate(self, generation: int, image_url: str) -> None:
        try:
            estimate = await self.estimator.estimate(image_url)
        except EstimationError as exc:
            _logger.warning("Estimate failed: generation=%s error=%s", generation, exc)
            self._fail(generation, str(exc))
            return
        except Exception:
            _logger.exception("Estimator raised unexpectedly")
            self._fail(generation, "Estimation failed")
            return
        if generation != self._generation:
            _logger.info("Stale estimate discarded: generation=%s", generation)
            return
        self._apply_estimate(estimate)

    def _apply_estimate(self, estimate: NutritionEstimate) -> None:
        self._form = MealForm(
            food_items=estimate.food_items,
            calories=estimate.calories,
            protein=estimate.protein,
            carbs=estimate.carbs,
            fat=estimate.fat,
        )
        self._stage = LoggerStage.RESULT
        _logger.info("Estimate ready: calories=%s", estimate.calories)

    def _fail(self, generation: int, message: str) -> None:
        if generation != self._generation:
            return
        self._stage = LoggerStage.FAILED
        self._error = message

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            _logger.info("Pending estimate cancelled: generation=%s", self._generation)
        self._task = None
        self._generation += 1

    def _require(self, action: str, *stages: LoggerStage) -> None:
        if self._stage not in stages:
            raise InvalidTransitionError(action, self._stage.value)

    def _clear(self, stage: LoggerStage) -> None:
        self._stage = stage
        self._form = MealForm()
        self._image_url = None
        self._editing_meal_id = None
        self._saved_meal = None
        self._error = None
