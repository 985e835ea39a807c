"""In-memory session state shared by the application services."""

from dataclasses import dataclass, field

from calorie_track.domain.meals import MealEntry
from calorie_track.domain.profile import UserProfile


@dataclass
class SessionState:
    """Holds the onboarded profile and the newest-first meal list."""

    profile: UserProfile | None = None
    meals: list[MealEntry] = field(default_factory=list)

    def reset(self) -> None:
        """Clear the profile and all logged meals."""
        self.profile = None
        self.meals.clear()
