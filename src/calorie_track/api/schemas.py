"""Pydantic request models for the HTTP API."""

from pydantic import BaseModel, Field

from calorie_track.domain.logger import MealForm
from calorie_track.domain.profile import (
    ActivityLevel,
    Gender,
    Goal,
    HeightUnit,
    ProfileInputs,
    WeightUnit,
)
from calorie_track.services.targets import to_centimeters, to_kilograms


class OnboardingRequest(BaseModel):
    """Onboarding answers as entered, in the user's chosen units."""

    goal: Goal
    age: int = Field(ge=10, le=120)
    gender: Gender = Gender.MALE
    height: float = Field(gt=0)
    height_unit: HeightUnit = HeightUnit.CM
    weight: float = Field(gt=0)
    weight_unit: WeightUnit = WeightUnit.KG
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY

    def to_inputs(self) -> ProfileInputs:
        """Convert to metric calculator inputs."""
        return ProfileInputs(
            age=self.age,
            gender=self.gender,
            height_cm=to_centimeters(self.height, self.height_unit),
            weight_kg=to_kilograms(self.weight, self.weight_unit),
            activity_level=self.activity_level,
            goal=self.goal,
        )


class MealCreateRequest(BaseModel):
    """Manually entered meal."""

    food_items: str
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    image_url: str | None = None

    def to_form(self) -> MealForm:
        """Return the macro values as a meal form."""
        return MealForm(
            food_items=self.food_items,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )


class MealFieldsUpdate(BaseModel):
    """Partial meal values; only fields that are set are applied."""

    food_items: str | None = None
    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)

    def changes(self) -> dict[str, object]:
        """Return explicitly set, non-null fields."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class PhotoUpload(BaseModel):
    """Reference to a locally held meal photo."""

    image_url: str = Field(min_length=1)
