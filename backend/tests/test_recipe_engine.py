import pytest

from brewguide.schemas.recipe import BrewMethod, GrindSize, RoastType, WarningSeverity
from brewguide.services.brew_math import fit_durations, round_half_up, round_int
from brewguide.services.recipe_engine import generate_full_recipe, wait_time_after_boil


def warning_ids(recipe) -> list[str]:
    return [warning.id for warning in recipe.warnings]


def test_medium_pour_over_for_one_cup() -> None:
    recipe = generate_full_recipe(RoastType.MEDIUM, GrindSize.MEDIUM, 1000, BrewMethod.POUR_OVER, 1)

    assert recipe.target_temperature_celsius == 93
    assert recipe.wait_time_after_boil_seconds == 95
    assert recipe.coffee_amount_grams == 15.0
    assert recipe.water_for_brewing_ml == 240
    assert recipe.coffee_to_water_ratio == "1:16.0"
    assert recipe.total_brew_time_seconds == 195
    assert recipe.warnings == ()

    timings = [(step.id, step.start_time_seconds, step.duration_seconds) for step in recipe.timed_steps]
    assert timings == [
        ("pourover-bloom", 0, 15),
        ("pourover-bloom-wait", 15, 45),
        ("pourover-mainpour-1", 60, 32),
        ("pourover-waitpour-1", 92, 22),
        ("pourover-mainpour-2", 114, 32),
        ("pourover-drawdown", 146, 49),
    ]


def test_same_inputs_give_equal_recipes() -> None:
    first = generate_full_recipe("light", "coarse", 1200, "french_press", 2)
    second = generate_full_recipe("light", "coarse", 1200, "french_press", 2)

    assert first == second


def test_aeropress_is_limited_to_one_cup() -> None:
    recipe = generate_full_recipe(RoastType.MEDIUM, GrindSize.MEDIUM, 1000, BrewMethod.AEROPRESS, 4)

    assert recipe.inputs.cups == 1
    assert recipe.water_for_brewing_ml == 200
    assert recipe.coffee_amount_grams == 14.3
    assert recipe.coffee_to_water_ratio == "1:14.0"
    assert recipe.total_brew_time_seconds == 75


def test_cups_below_one_are_raised_to_one() -> None:
    recipe = generate_full_recipe(RoastType.MEDIUM, GrindSize.MEDIUM, 1000, BrewMethod.FRENCH_PRESS, 0)

    assert recipe.inputs.cups == 1
    assert recipe.water_for_brewing_ml == 275


def test_french_press_light_fine_warns_and_shortens_brew() -> None:
    recipe = generate_full_recipe(RoastType.LIGHT, GrindSize.FINE, 1000, BrewMethod.FRENCH_PRESS, 2)

    assert recipe.total_brew_time_seconds == 210
    assert recipe.water_for_brewing_ml == 550
    assert recipe.coffee_amount_grams == 36.7
    assert recipe.coffee_to_water_ratio == "1:15.0"
    assert recipe.target_temperature_celsius == 96
    assert recipe.wait_time_after_boil_seconds == 55
    assert warning_ids(recipe) == ["fine-grind-frenchpress"]
    assert recipe.warnings[0].severity == WarningSeverity.CRITICAL


def test_brew_time_is_clamped_to_method_bounds() -> None:
    recipe = generate_full_recipe(RoastType.ESPRESSO, GrindSize.PRE_GROUND_FINE, 1000, BrewMethod.FRENCH_PRESS, 1)

    assert recipe.total_brew_time_seconds == 150


def test_fine_dark_pour_over_cools_the_water() -> None:
    recipe = generate_full_recipe(RoastType.DARK, GrindSize.PRE_GROUND_FINE, 1000, BrewMethod.POUR_OVER, 1)

    assert warning_ids(recipe) == ["preground-fine-pourover-dark"]
    assert recipe.target_temperature_celsius == 86
    assert recipe.wait_time_after_boil_seconds == 191


def test_espresso_pour_over_note_is_dropped_when_temperature_already_adjusted() -> None:
    fine = generate_full_recipe(RoastType.ESPRESSO, GrindSize.FINE, 1000, BrewMethod.POUR_OVER, 1)
    medium = generate_full_recipe(RoastType.ESPRESSO, GrindSize.MEDIUM, 1000, BrewMethod.POUR_OVER, 1)

    assert warning_ids(fine) == ["preground-fine-pourover-dark"]
    assert fine.target_temperature_celsius == 83
    assert warning_ids(medium) == ["espresso-pourover"]
    assert medium.warnings[0].severity == WarningSeverity.INFO
    assert medium.target_temperature_celsius == 88


@pytest.mark.parametrize("grind", [GrindSize.COARSE, GrindSize.MEDIUM_COARSE])
def test_light_coarse_aeropress_warns(grind: GrindSize) -> None:
    recipe = generate_full_recipe(RoastType.LIGHT, grind, 1000, BrewMethod.AEROPRESS, 1)

    assert warning_ids(recipe) == ["light-coarse-aeropress"]


def test_unknown_brew_method_yields_error_step() -> None:
    recipe = generate_full_recipe(RoastType.MEDIUM, GrindSize.MEDIUM, 1000, "siphon", 3)

    assert [step.id for step in recipe.steps] == ["error"]
    assert recipe.steps[0].is_timed is False
    assert recipe.inputs.brew_method == "siphon"
    assert recipe.inputs.cups == 1
    assert recipe.water_for_brewing_ml == 0
    assert recipe.coffee_amount_grams == 0.0
    assert recipe.coffee_to_water_ratio == "1:16.0"
    assert recipe.total_brew_time_seconds == 180
    assert recipe.warnings == ()


def test_unknown_roast_and_grind_fall_back_to_medium() -> None:
    fallback = generate_full_recipe("blonde", "powder", 1000, BrewMethod.POUR_OVER, 1)
    medium = generate_full_recipe(RoastType.MEDIUM, GrindSize.MEDIUM, 1000, BrewMethod.POUR_OVER, 1)

    assert fallback == medium


def test_display_labels_are_accepted() -> None:
    recipe = generate_full_recipe("Dark Roast", "Medium-Coarse", 1000, "Pour-Over", 1)

    assert recipe.inputs.roast_type == RoastType.DARK
    assert recipe.inputs.grind_size == GrindSize.MEDIUM_COARSE
    assert recipe.inputs.brew_method == BrewMethod.POUR_OVER


def test_fuller_kettle_takes_longer_to_cool() -> None:
    assert wait_time_after_boil(93, 500) == 67
    assert wait_time_after_boil(93, 1000) == 95
    assert wait_time_after_boil(93, 1700) > 95
    assert wait_time_after_boil(100, 1000) == 0


def test_rounding_sends_halves_up() -> None:
    assert round_half_up(2.5) == 3.0
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(14.25, 1) == 14.3
    assert round_int(32.4) == 32
    assert round_int(21.6) == 22


def test_fit_durations_scales_to_total() -> None:
    assert fit_durations([15, 10, 15, 10, 10], 35) == [9, 6, 8, 6, 6]
    assert fit_durations([10, 20], 30) == [10, 20]
    assert fit_durations([0, 0], 10) == [0, 0]
