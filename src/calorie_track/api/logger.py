"""Meal logger endpoints driving the photo logging flow."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from calorie_track.api.schemas import MealFieldsUpdate, PhotoUpload  # noqa: TC001
from calorie_track.errors import InvalidTransitionError, MealNotFoundError

if TYPE_CHECKING:
    from calorie_track.services.logger import MealLoggerService

router = APIRouter(prefix="/logger", tags=["logger"])


def _logger_service(request: Request) -> MealLoggerService:
    return request.app.state.container.meal_logger_service


def _conflict(exc: InvalidTransitionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get("")
async def get_logger(request: Request) -> dict[str, object]:
    """Return the current logger state."""
    return {"logger": _logger_service(request).snapshot()}


@router.post("/photo")
async def upload_photo(
    payload: PhotoUpload, request: Request, wait: bool = True
) -> dict[str, object]:
    """Start analyzing a photo; optionally wait for the estimate."""
    service = _logger_service(request)
    try:
        snapshot = await service.upload(payload.image_url)
    except InvalidTransitionError as exc:
        raise _conflict(exc) from exc
    if wait:
        snapshot = await service.wait_for_estimate()
    return {"logger": snapshot}


@router.post("/edit")
async def begin_edit(request: Request) -> dict[str, object]:
    """Open the edit form."""
    try:
        return {"logger": _logger_service(request).begin_edit()}
    except InvalidTransitionError as exc:
        raise _conflict(exc) from exc


@router.patch("/form")
async def update_form(payload: MealFieldsUpdate, request: Request) -> dict[str, object]:
    """Change values in the edit form."""
    try:
        return {"logger": _logger_service(request).update_form(payload.changes())}
    except InvalidTransitionError as exc:
        raise _conflict(exc) from exc


@router.post("/cancel")
async def cancel_edit(request: Request) -> dict[str, object]:
    """Leave the edit form without saving."""
    try:
        return {"logger": _logger_service(request).cancel_edit()}
    except InvalidTransitionError as exc:
        raise _conflict(exc) from exc


@router.post("/confirm")
async def confirm(request: Request) -> dict[str, object]:
    """Save the current form as a meal."""
    service = _logger_service(request)
    try:
        meal = service.confirm()
    except InvalidTransitionError as exc:
        raise _conflict(exc) from exc
    except MealNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return {"meal": meal, "logger": service.snapshot()}


@router.post("/reset")
async def reset(request: Request) -> dict[str, object]:
    """Discard the current flow and return to idle."""
    return {"logger": _logger_service(request).reset()}


@router.post("/meals/{meal_id}")
async def open_meal(meal_id: UUID, request: Request) -> dict[str, object]:
    """Load a logged meal into the edit form."""
    try:
        return {"logger": _logger_service(request).open_meal(meal_id)}
    except MealNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
