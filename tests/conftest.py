"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from calorie_track.config import Settings
from calorie_track.containers import AppContainer
from calorie_track.domain.estimates import NutritionEstimate
from calorie_track.domain.logger import MealForm
from calorie_track.domain.profile import (
    ActivityLevel,
    Gender,
    Goal,
    ProfileInputs,
)
from calorie_track.errors import EstimationError
from calorie_track.services.dashboard import DashboardService
from calorie_track.services.estimation import NutritionEstimator
from calorie_track.services.logger import MealLoggerService
from calorie_track.services.meals import MealLogService
from calorie_track.services.session import SessionState
from calorie_track.services.targets import ProfileService

FIXED_NOW = datetime(2026, 10, 18, 12, 5, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


@dataclass
class FakeEstimator(NutritionEstimator):
    """Fake estimator returning a fixed payload, labelled by image."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "food_items": "Salmon fillet, Quinoa, Asparagus",
            "calories": 520,
            "protein": 41,
            "carbs": 55,
            "fat": 19,
        }
    )
    delays: dict[str, float] = field(default_factory=dict)
    label_by_image: bool = False
    calls: list[str] = field(default_factory=list)
    cancelled: list[str] = field(default_factory=list)

    async def estimate(self, image_url: str) -> NutritionEstimate:
        self.calls.append(image_url)
        try:
            await asyncio.sleep(self.delays.get(image_url, 0))
        except asyncio.CancelledError:
            self.cancelled.append(image_url)
            raise
        payload = dict(self.payload)
        if self.label_by_image:
            payload["food_items"] = f"meal:{image_url}"
        return NutritionEstimate.model_validate(payload)


@dataclass
class FlakyEstimator(NutritionEstimator):
    """Fails a number of times before delegating to a fake estimator."""

    failures: int = 1
    error: Callable[[], Exception] = lambda: EstimationError("Photo unreadable")
    fallback: FakeEstimator = field(default_factory=FakeEstimator)

    async def estimate(self, image_url: str) -> NutritionEstimate:
        if self.failures > 0:
            self.failures -= 1
            raise self.error()
        return await self.fallback.estimate(image_url)


def male_inputs(**overrides: object) -> ProfileInputs:
    values: dict[str, object] = {
        "age": 30,
        "gender": Gender.MALE,
        "height_cm": 180.0,
        "weight_kg": 80.0,
        "activity_level": ActivityLevel.ACTIVE,
        "goal": Goal.LOSE_WEIGHT,
    }
    values.update(overrides)
    return ProfileInputs(**values)


def meal_form(calories: float = 500, **overrides: object) -> MealForm:
    values: dict[str, object] = {
        "food_items": "Turkey sandwich with avocado and greens",
        "calories": calories,
        "protein": 30,
        "carbs": 50,
        "fat": 15,
    }
    values.update(overrides)
    return MealForm(**values)


@pytest.fixture
def settings() -> Settings:
    return Settings(estimator_delay_seconds=0, timezone="UTC")


@pytest.fixture
def session() -> SessionState:
    return SessionState()


@pytest.fixture
def meal_log_service(session: SessionState) -> MealLogService:
    return MealLogService(session=session, timezone_name="UTC", clock=fixed_clock)


@pytest.fixture
def estimator() -> FakeEstimator:
    return FakeEstimator()


@pytest.fixture
def container(
    settings: Settings,
    session: SessionState,
    meal_log_service: MealLogService,
    estimator: FakeEstimator,
) -> AppContainer:
    meal_logger_service = MealLoggerService(
        estimator=estimator,
        meal_log_service=meal_log_service,
    )

    async def close_resources() -> None:
        await meal_logger_service.close()

    return AppContainer(
        settings=settings,
        session=session,
        estimator=estimator,
        profile_service=ProfileService(session),
        meal_log_service=meal_log_service,
        meal_logger_service=meal_logger_service,
        dashboard_service=DashboardService(
            session=session,
            meal_log_service=meal_log_service,
        ),
        close_resources=close_resources,
    )
