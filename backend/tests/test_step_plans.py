import itertools

import pytest

from brewguide.schemas.recipe import BrewMethod, GrindSize, RoastType
from brewguide.services.recipe_engine import generate_full_recipe

ALL_COMBINATIONS = list(itertools.product(RoastType, GrindSize, BrewMethod))


@pytest.mark.parametrize(("roast", "grind", "method"), ALL_COMBINATIONS)
def test_timed_steps_fill_the_brew_time(roast: RoastType, grind: GrindSize, method: BrewMethod) -> None:
    recipe = generate_full_recipe(roast, grind, 1000, method, 1)
    timed = recipe.timed_steps

    assert timed[0].start_time_seconds == 0
    for previous, current in zip(timed, timed[1:]):
        assert current.start_time_seconds == previous.end_time_seconds
    assert timed[-1].end_time_seconds == recipe.total_brew_time_seconds
    assert all(step.duration_seconds >= 0 for step in timed)


@pytest.mark.parametrize(("roast", "grind", "method"), ALL_COMBINATIONS)
def test_steps_are_bookended_by_untimed_steps(roast: RoastType, grind: GrindSize, method: BrewMethod) -> None:
    recipe = generate_full_recipe(roast, grind, 1000, method, 2)
    steps = recipe.steps

    assert len({step.id for step in steps}) == len(steps)
    assert steps[0].is_timed is False
    assert steps[0].start_time_seconds == 0
    assert steps[-1].is_timed is False
    assert steps[-1].start_time_seconds == recipe.total_brew_time_seconds
    assert all(step.duration_seconds == 0 for step in steps if not step.is_timed)


def test_pour_over_pours_reach_total_water() -> None:
    recipe = generate_full_recipe(RoastType.MEDIUM, GrindSize.MEDIUM, 1000, BrewMethod.POUR_OVER, 2)
    by_id = {step.id: step for step in recipe.steps}

    assert recipe.water_for_brewing_ml == 480
    assert recipe.coffee_amount_grams == 30.0
    assert "Pour 60mL" in by_id["pourover-bloom"].details
    assert "Slowly pour 210mL" in by_id["pourover-mainpour-1"].details
    assert "Aim to reach 270mL total water." in by_id["pourover-mainpour-1"].details
    assert "Aim to reach 480mL total water." in by_id["pourover-mainpour-2"].details
    assert by_id["pourover-drawdown"].title == "6. Final Drawdown"


def test_dark_pour_over_blooms_for_thirty_seconds() -> None:
    recipe = generate_full_recipe(RoastType.DARK, GrindSize.MEDIUM, 1000, BrewMethod.POUR_OVER, 1)
    bloom_wait = next(step for step in recipe.steps if step.id == "pourover-bloom-wait")

    assert bloom_wait.duration_seconds == 30
    assert bloom_wait.details.startswith("Allow coffee to bloom for 30 seconds.")


def test_french_press_plan() -> None:
    recipe = generate_full_recipe(RoastType.MEDIUM, GrindSize.MEDIUM, 1000, BrewMethod.FRENCH_PRESS, 1)
    timings = [(step.id, step.start_time_seconds, step.duration_seconds) for step in recipe.timed_steps]

    assert timings == [
        ("frenchpress-addwater", 0, 20),
        ("frenchpress-initialsteep", 20, 60),
        ("frenchpress-breakcrust", 80, 10),
        ("frenchpress-continuesteep", 90, 150),
        ("frenchpress-press", 240, 30),
    ]
    assert recipe.steps[-1].id == "frenchpress-serve"


def test_light_aeropress_fits_without_compression() -> None:
    recipe = generate_full_recipe(RoastType.LIGHT, GrindSize.MEDIUM, 1000, BrewMethod.AEROPRESS, 1)
    timings = [(step.id, step.duration_seconds) for step in recipe.timed_steps]

    assert recipe.total_brew_time_seconds == 90
    assert timings == [
        ("aeropress-addcoffee", 15),
        ("aeropress-bloomwait", 30),
        ("aeropress-addwater", 10),
        ("aeropress-steep", 15),
        ("aeropress-prepareplunge", 10),
        ("aeropress-plunge", 10),
    ]


def test_short_aeropress_is_compressed_to_total() -> None:
    recipe = generate_full_recipe(RoastType.ESPRESSO, GrindSize.FINE, 1000, BrewMethod.AEROPRESS, 1)
    timings = [(step.id, step.start_time_seconds, step.duration_seconds) for step in recipe.timed_steps]

    assert recipe.total_brew_time_seconds == 35
    assert timings == [
        ("aeropress-addcoffee", 0, 9),
        ("aeropress-addwater", 9, 6),
        ("aeropress-steep", 15, 8),
        ("aeropress-prepareplunge", 23, 6),
        ("aeropress-plunge", 29, 6),
    ]
    steep = next(step for step in recipe.steps if step.id == "aeropress-steep")
    assert steep.details == "Wait for 8 seconds for coffee to steep."
