"""Daily calorie and macro targets from biometric inputs.

BMR uses the Mifflin-St Jeor equation. Female and Other share the female
offset. TDEE is BMR times the activity multiplier, then the goal offset is
applied. Macros are a fixed 30/40/30 split of the adjusted calories.
"""

import logging
import math
from dataclasses import dataclass

from calorie_track.domain.profile import (
    GOAL_CALORIE_OFFSETS,
    ActivityLevel,
    Gender,
    Goal,
    HeightUnit,
    NutritionTargets,
    ProfileInputs,
    UserProfile,
    WeightUnit,
)
from calorie_track.errors import ProfileNotFoundError
from calorie_track.services.session import SessionState

CM_PER_INCH = 2.54
KG_PER_POUND = 0.453592

PROTEIN_SHARE = 0.3
CARBS_SHARE = 0.4
FAT_SHARE = 0.3
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

_logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def to_centimeters(value: float, unit: HeightUnit) -> float:
    """Convert a height to centimeters."""
    if unit is HeightUnit.IN:
        return value * CM_PER_INCH
    return value


def to_kilograms(value: float, unit: WeightUnit) -> float:
    """Convert a weight to kilograms."""
    if unit is WeightUnit.LBS:
        return value * KG_PER_POUND
    return value


def bmr_mifflin_st_jeor(
    gender: Gender, age: int, height_cm: float, weight_kg: float
) -> float:
    """Return basal metabolic rate in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender is Gender.MALE:
        return base + 5
    return base - 161


def total_daily_energy_expenditure(bmr: float, activity_level: ActivityLevel) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * activity_level.multiplier


def adjust_for_goal(tdee: float, goal: Goal) -> float:
    """Apply the goal's calorie offset."""
    return tdee + GOAL_CALORIE_OFFSETS[goal]


def calculate_targets(inputs: ProfileInputs) -> NutritionTargets:
    """Compute daily targets. Inputs are assumed complete and well-formed."""
    bmr = bmr_mifflin_st_jeor(
        inputs.gender, inputs.age, inputs.height_cm, inputs.weight_kg
    )
    tdee = total_daily_energy_expenditure(bmr, inputs.activity_level)
    calories = adjust_for_goal(tdee, inputs.goal)
    return NutritionTargets(
        calories=round_half_up(calories),
        protein=round_half_up(calories * PROTEIN_SHARE / KCAL_PER_G_PROTEIN),
        carbs=round_half_up(calories * CARBS_SHARE / KCAL_PER_G_CARBS),
        fat=round_half_up(calories * FAT_SHARE / KCAL_PER_G_FAT),
    )


@dataclass
class ProfileService:
    """Onboarding service that stores the computed profile in the session."""

    session: SessionState

    def preview(self, inputs: ProfileInputs) -> NutritionTargets:
        """Return targets for the inputs without storing anything."""
        return calculate_targets(inputs)

    def complete(self, inputs: ProfileInputs) -> UserProfile:
        """Compute targets and replace the session profile."""
        profile = UserProfile.from_inputs(inputs, calculate_targets(inputs))
        self.session.profile = profile
        _logger.info(
            "Profile completed: goal=%s activity=%s calories=%s",
            profile.goal.value,
            profile.activity_level.value,
            profile.daily_calories,
        )
        return profile

    def get_profile(self) -> UserProfile:
        """Return the current profile."""
        if self.session.profile is None:
            raise ProfileNotFoundError("Onboarding has not been completed")
        return self.session.profile
