"""Photo nutrition estimation interface."""

from typing import Protocol

from calorie_track.domain.estimates import NutritionEstimate


class NutritionEstimator(Protocol):
    """Interface for services that estimate nutrition from a meal photo."""

    async def estimate(self, image_url: str) -> NutritionEstimate:
        """Return a nutrition estimate for the referenced image."""
