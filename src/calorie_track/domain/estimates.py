"""Models for photo nutrition estimates."""

from pydantic import BaseModel, Field


class NutritionEstimate(BaseModel):
    """Structured nutrition estimate for a meal photo."""

    food_items: str
    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fat: int = Field(ge=0)
