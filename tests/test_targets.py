"""Tests for the daily target calculator."""

import pytest

from calorie_track.domain.profile import (
    ActivityLevel,
    Gender,
    Goal,
    HeightUnit,
    WeightUnit,
)
from calorie_track.errors import ProfileNotFoundError
from calorie_track.services.session import SessionState
from calorie_track.services.targets import (
    ProfileService,
    adjust_for_goal,
    bmr_mifflin_st_jeor,
    calculate_targets,
    round_half_up,
    to_centimeters,
    to_kilograms,
    total_daily_energy_expenditure,
)
from tests.conftest import male_inputs


def test_bmr_uses_male_offset() -> None:
    assert bmr_mifflin_st_jeor(Gender.MALE, 30, 180, 80) == pytest.approx(1780)


def test_bmr_uses_female_offset() -> None:
    assert bmr_mifflin_st_jeor(Gender.FEMALE, 25, 165, 60) == pytest.approx(1345.25)


def test_bmr_other_shares_female_offset() -> None:
    # Known behaviour: Other is not averaged, it follows the female branch.
    assert bmr_mifflin_st_jeor(Gender.OTHER, 25, 165, 60) == bmr_mifflin_st_jeor(
        Gender.FEMALE, 25, 165, 60
    )


@pytest.mark.parametrize(
    ("level", "multiplier"),
    [
        (ActivityLevel.SEDENTARY, 1.2),
        (ActivityLevel.LIGHTLY_ACTIVE, 1.375),
        (ActivityLevel.ACTIVE, 1.55),
        (ActivityLevel.VERY_ACTIVE, 1.725),
    ],
)
def test_activity_multipliers(level: ActivityLevel, multiplier: float) -> None:
    assert total_daily_energy_expenditure(1000, level) == pytest.approx(
        1000 * multiplier
    )


def test_goal_offsets() -> None:
    assert adjust_for_goal(2000, Goal.LOSE_WEIGHT) == 1500
    assert adjust_for_goal(2000, Goal.MAINTAIN_WEIGHT) == 2000
    assert adjust_for_goal(2000, Goal.BUILD_MUSCLE) == 2300


def test_calculate_targets_for_active_male_losing_weight() -> None:
    # BMR 1780, TDEE 2759, minus 500.
    targets = calculate_targets(male_inputs())

    assert targets.calories == 2259
    assert targets.protein == 169
    assert targets.carbs == 226
    assert targets.fat == 75


def test_calculate_targets_for_sedentary_female_maintaining() -> None:
    targets = calculate_targets(
        male_inputs(
            age=25,
            gender=Gender.FEMALE,
            height_cm=165.0,
            weight_kg=60.0,
            activity_level=ActivityLevel.SEDENTARY,
            goal=Goal.MAINTAIN_WEIGHT,
        )
    )

    assert targets.calories == 1614
    assert targets.protein == 121
    assert targets.carbs == 161
    assert targets.fat == 54


def test_calculate_targets_for_very_active_male_building_muscle() -> None:
    targets = calculate_targets(
        male_inputs(
            age=40,
            height_cm=175.0,
            weight_kg=90.0,
            activity_level=ActivityLevel.VERY_ACTIVE,
            goal=Goal.BUILD_MUSCLE,
        )
    )

    assert targets.calories == 3403
    assert targets.protein == 255
    assert targets.carbs == 340
    assert targets.fat == 113


def test_calculate_targets_rounds_half_calories_up() -> None:
    # 1780 * 1.375 is exactly 2447.5.
    targets = calculate_targets(
        male_inputs(
            activity_level=ActivityLevel.LIGHTLY_ACTIVE,
            goal=Goal.MAINTAIN_WEIGHT,
        )
    )

    assert targets.calories == 2448


def test_calculate_targets_does_not_clamp_negative_calories() -> None:
    targets = calculate_targets(
        male_inputs(
            age=120,
            gender=Gender.FEMALE,
            height_cm=50.0,
            weight_kg=20.0,
            activity_level=ActivityLevel.SEDENTARY,
        )
    )

    assert targets.calories == -798


@pytest.mark.parametrize("age", [18, 35, 70])
@pytest.mark.parametrize("gender", list(Gender))
@pytest.mark.parametrize("level", list(ActivityLevel))
@pytest.mark.parametrize("goal", list(Goal))
def test_macro_energy_stays_close_to_calories(
    age: int, gender: Gender, level: ActivityLevel, goal: Goal
) -> None:
    targets = calculate_targets(
        male_inputs(age=age, gender=gender, activity_level=level, goal=goal)
    )
    macro_kcal = targets.protein * 4 + targets.carbs * 4 + targets.fat * 9

    # Three shares rounded independently plus the rounded calorie total.
    assert abs(macro_kcal - targets.calories) <= 9


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(-2.5) == -2
    assert round_half_up(-2.51) == -3


def test_unit_conversion_to_metric() -> None:
    assert to_centimeters(70, HeightUnit.IN) == pytest.approx(177.8)
    assert to_centimeters(180, HeightUnit.CM) == 180
    assert to_kilograms(154, WeightUnit.LBS) == pytest.approx(69.853168)
    assert round(to_kilograms(154, WeightUnit.LBS), 2) == 69.85
    assert to_kilograms(80, WeightUnit.KG) == 80


def test_profile_service_preview_does_not_store() -> None:
    session = SessionState()
    service = ProfileService(session)

    targets = service.preview(male_inputs())

    assert targets.calories == 2259
    assert session.profile is None


def test_profile_service_complete_replaces_profile() -> None:
    session = SessionState()
    service = ProfileService(session)

    first = service.complete(male_inputs())
    second = service.complete(male_inputs(goal=Goal.BUILD_MUSCLE))

    assert first.daily_calories == 2259
    assert second.daily_calories == 3059
    assert service.get_profile() is second
    assert second.targets.calories == 3059


def test_profile_service_requires_onboarding() -> None:
    service = ProfileService(SessionState())

    with pytest.raises(ProfileNotFoundError):
        service.get_profile()
