"""Domain models for the user profile and nutrition targets."""

from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    """Gender options offered during onboarding."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ActivityLevel(str, Enum):
    """Activity levels, each bound to a TDEE multiplier."""

    SEDENTARY = "Sedentary"
    LIGHTLY_ACTIVE = "Lightly Active"
    ACTIVE = "Active"
    VERY_ACTIVE = "Very Active"

    @property
    def multiplier(self) -> float:
        """Return the TDEE multiplier for this level."""
        return ACTIVITY_MULTIPLIERS[self]


ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
}


class Goal(str, Enum):
    """Weight goals with their daily calorie offsets."""

    LOSE_WEIGHT = "Lose Weight"
    MAINTAIN_WEIGHT = "Maintain Weight"
    BUILD_MUSCLE = "Build Muscle"


GOAL_CALORIE_OFFSETS: dict[Goal, int] = {
    Goal.LOSE_WEIGHT: -500,
    Goal.MAINTAIN_WEIGHT: 0,
    Goal.BUILD_MUSCLE: 300,
}


class HeightUnit(str, Enum):
    """Units accepted for height input."""

    CM = "cm"
    IN = "in"


class WeightUnit(str, Enum):
    """Units accepted for weight input."""

    KG = "kg"
    LBS = "lbs"


@dataclass(frozen=True)
class ProfileInputs:
    """Biometric inputs in metric units, ready for the target calculator."""

    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    goal: Goal


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro targets."""

    calories: int
    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class UserProfile:
    """Onboarded user profile with derived daily targets."""

    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    goal: Goal
    daily_calories: int
    daily_protein: int
    daily_carbs: int
    daily_fat: int

    @classmethod
    def from_inputs(
        cls, inputs: ProfileInputs, targets: NutritionTargets
    ) -> "UserProfile":
        """Build a profile from inputs and their computed targets."""
        return cls(
            age=inputs.age,
            gender=inputs.gender,
            height_cm=inputs.height_cm,
            weight_kg=inputs.weight_kg,
            activity_level=inputs.activity_level,
            goal=inputs.goal,
            daily_calories=targets.calories,
            daily_protein=targets.protein,
            daily_carbs=targets.carbs,
            daily_fat=targets.fat,
        )

    @property
    def targets(self) -> NutritionTargets:
        """Return the daily targets as a standalone value."""
        return NutritionTargets(
            calories=self.daily_calories,
            protein=self.daily_protein,
            carbs=self.daily_carbs,
            fat=self.daily_fat,
        )
