"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, Response, status

from calorie_track.api.logger import router as logger_router
from calorie_track.api.schemas import (
    MealCreateRequest,
    MealFieldsUpdate,
    OnboardingRequest,
)
from calorie_track.app_logging import configure_logging
from calorie_track.containers import AppContainer
from calorie_track.errors import ProfileNotFoundError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "CalorieTrack API started: environment=%s", container.settings.environment
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(logger_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/onboarding/preview")
    async def preview_targets(
        payload: OnboardingRequest, request: Request
    ) -> dict[str, object]:
        """Return the targets the answers would produce, without saving."""
        state_container: AppContainer = request.app.state.container
        inputs = payload.to_inputs()
        return {
            "targets": state_container.profile_service.preview(inputs),
            "height_cm": inputs.height_cm,
            "weight_kg": inputs.weight_kg,
        }

    @app.post("/onboarding")
    async def complete_onboarding(
        payload: OnboardingRequest, request: Request
    ) -> dict[str, object]:
        """Compute targets and store the profile for this session."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.complete(payload.to_inputs())
        return {"profile": profile}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the onboarded profile."""
        state_container: AppContainer = request.app.state.container
        try:
            profile = state_container.profile_service.get_profile()
        except ProfileNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return {"profile": profile}

    @app.get("/meals")
    async def list_meals(request: Request) -> dict[str, object]:
        """Return logged meals, newest first."""
        state_container: AppContainer = request.app.state.container
        return {"meals": state_container.meal_log_service.list_meals()}

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def create_meal(
        payload: MealCreateRequest, request: Request
    ) -> dict[str, object]:
        """Log a manually entered meal."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.meal_log_service.log_meal(
            payload.to_form(), payload.image_url
        )
        return {"meal": meal}

    @app.get("/meals/totals")
    async def meal_totals(request: Request) -> dict[str, object]:
        """Return summed macros across logged meals."""
        state_container: AppContainer = request.app.state.container
        return {"totals": state_container.meal_log_service.totals()}

    @app.patch("/meals/{meal_id}")
    async def update_meal(
        meal_id: UUID, payload: MealFieldsUpdate, request: Request
    ) -> dict[str, object]:
        """Apply partial changes to a logged meal."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.meal_log_service.update(meal_id, payload.changes())
        if meal is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"meal": meal}

    @app.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_meal(meal_id: UUID, request: Request) -> Response:
        """Delete a logged meal; unknown ids are ignored."""
        state_container: AppContainer = request.app.state.container
        state_container.meal_log_service.delete(meal_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/dashboard")
    async def dashboard(request: Request) -> dict[str, object]:
        """Return totals against targets for today's meals."""
        state_container: AppContainer = request.app.state.container
        return {"dashboard": state_container.dashboard_service.get_summary()}

    @app.post("/session/reset")
    async def reset_session(request: Request) -> dict[str, str]:
        """Start a fresh session: clear the profile, meals and logger."""
        state_container: AppContainer = request.app.state.container
        state_container.meal_logger_service.reset()
        state_container.session.reset()
        logger.info("Session reset")
        return {"status": "ok"}

    return app
