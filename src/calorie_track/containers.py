"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from calorie_track.adapters.mock_estimator import MockNutritionEstimator
from calorie_track.config import Settings
from calorie_track.services.dashboard import DashboardService
from calorie_track.services.estimation import NutritionEstimator
from calorie_track.services.logger import MealLoggerService
from calorie_track.services.meals import MealLogService
from calorie_track.services.session import SessionState
from calorie_track.services.targets import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session: SessionState
    estimator: NutritionEstimator
    profile_service: ProfileService
    meal_log_service: MealLogService
    meal_logger_service: MealLoggerService
    dashboard_service: DashboardService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    estimator: NutritionEstimator | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_estimator = estimator or MockNutritionEstimator.create(resolved_settings)
    session = SessionState()
    meal_log_service = MealLogService(
        session=session,
        timezone_name=resolved_settings.timezone,
    )
    meal_logger_service = MealLoggerService(
        estimator=resolved_estimator,
        meal_log_service=meal_log_service,
    )

    async def close_resources() -> None:
        await meal_logger_service.close()

    return AppContainer(
        settings=resolved_settings,
        session=session,
        estimator=resolved_estimator,
        profile_service=ProfileService(session),
        meal_log_service=meal_log_service,
        meal_logger_service=meal_logger_service,
        dashboard_service=DashboardService(
            session=session,
            meal_log_service=meal_log_service,
        ),
        close_resources=close_resources,
    )
