"""Randomized stand-in for a photo recognition backend."""

import asyncio
import random
from dataclasses import dataclass, field

from calorie_track.config import Settings
from calorie_track.domain.estimates import NutritionEstimate
from calorie_track.services.estimation import NutritionEstimator
from calorie_track.services.targets import round_half_up

FOOD_CATALOG: tuple[str, ...] = (
    "Grilled chicken breast, Brown rice, Steamed broccoli",
    "Salmon fillet, Quinoa, Asparagus",
    "Greek yogurt with berries and granola",
    "Turkey sandwich with avocado and greens",
    "Tofu stir fry with vegetables and noodles",
)

PROTEIN_JITTER_G = 10
CARBS_JITTER_G = 15
FAT_JITTER_G = 6


@dataclass
class MockNutritionEstimator(NutritionEstimator):
    """Returns a random plausible estimate after a fixed delay."""

    delay_seconds: float = 2.2
    min_calories: int = 350
    max_calories: int = 750
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def create(cls, settings: Settings) -> "MockNutritionEstimator":
        """Create an estimator configured from settings."""
        return cls(
            delay_seconds=settings.estimator_delay_seconds,
            min_calories=settings.estimator_min_calories,
            max_calories=settings.estimator_max_calories,
        )

    async def estimate(self, image_url: str) -> NutritionEstimate:
        """Sleep for the configured delay, then return a random estimate."""
        await asyncio.sleep(self.delay_seconds)
        calories = self.rng.randint(self.min_calories, self.max_calories)
        return NutritionEstimate(
            food_items=self.rng.choice(FOOD_CATALOG),
            calories=calories,
            protein=round_half_up(
                calories * 0.3 / 4 + self.rng.uniform(0, PROTEIN_JITTER_G)
            ),
            carbs=round_half_up(
                calories * 0.4 / 4 + self.rng.uniform(0, CARBS_JITTER_G)
            ),
            fat=round_half_up(calories * 0.3 / 9 + self.rng.uniform(0, FAT_JITTER_G)),
        )
