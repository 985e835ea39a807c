"""Domain errors raised by calorie tracking services."""


class CalorieTrackError(Exception):
    """Base class for application errors."""


class ProfileNotFoundError(CalorieTrackError):
    """Raised when a profile is required but onboarding has not completed."""


class MealNotFoundError(CalorieTrackError):
    """Raised when a meal id does not match any logged meal."""

    def __init__(self, meal_id: object) -> None:
        super().__init__(f"Meal {meal_id} not found")
        self.meal_id = meal_id


class InvalidTransitionError(CalorieTrackError):
    """Raised when a logger action is not allowed in the current stage."""

    def __init__(self, action: str, stage: str) -> None:
        super().__init__(f"Cannot {action} while logger is {stage}")
        self.action = action
        self.stage = stage


class EstimationError(CalorieTrackError):
    """Raised by estimators when a photo cannot be analyzed."""
