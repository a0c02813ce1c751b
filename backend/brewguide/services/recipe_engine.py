from __future__ import annotations

import math
from dataclasses import dataclass

from brewguide.schemas.recipe import (
    BrewMethod,
    CalculatedRecipe,
    GrindSize,
    RecipeInputs,
    RoastType,
    WarningMessage,
    WarningSeverity,
)
from brewguide.services import brew_tables as tables
from brewguide.services.brew_math import clamp, round_half_up, round_int
from brewguide.services.step_plans import build_steps

FINE_POUR_OVER_DARK_WARNING_ID = "preground-fine-pourover-dark"


@dataclass(frozen=True)
class CoffeeAndWater:
    coffee_grams: float
    water_ml: int
    ratio: str
    actual_cups: int


def generate_full_recipe(
    roast_type: RoastType | str,
    grind_size: GrindSize | str,
    water_amount_in_kettle_ml: int,
    brew_method: BrewMethod | str,
    cups: int,
) -> CalculatedRecipe:
    """Build the complete recipe for one set of brewing parameters.

    Never raises for odd input: an unknown roast or grind is treated as
    medium, cups are clamped to what the method can brew, and an unknown
    brew method yields a single ``"error"`` step.
    """
    roast = RoastType.parse(roast_type) or RoastType.MEDIUM
    grind = GrindSize.parse(grind_size) or GrindSize.MEDIUM
    method = BrewMethod.parse(brew_method)

    portions = coffee_and_water(method, roast, cups)
    total_brew_time = adjusted_brew_time(method, roast, grind)
    warnings = build_warnings(roast, grind, method)

    target_temp = float(target_temperature(roast))
    if any(warning.id == FINE_POUR_OVER_DARK_WARNING_ID for warning in warnings):
        target_temp = max(
            tables.MIN_TARGET_TEMPERATURE_C,
            target_temp - tables.FINE_POUR_OVER_TEMPERATURE_DROP_C,
        )

    steps = build_steps(
        brew_method=method,
        roast_type=roast,
        coffee_grams=portions.coffee_grams,
        total_water_ml=portions.water_ml,
        total_brew_time_seconds=total_brew_time,
    )

    return CalculatedRecipe(
        target_temperature_celsius=round_int(target_temp),
        wait_time_after_boil_seconds=wait_time_after_boil(target_temp, water_amount_in_kettle_ml),
        coffee_amount_grams=portions.coffee_grams,
        water_for_brewing_ml=portions.water_ml,
        coffee_to_water_ratio=portions.ratio,
        total_brew_time_seconds=total_brew_time,
        steps=steps,
        warnings=tuple(warnings),
        inputs=RecipeInputs(
            roast_type=roast,
            grind_size=grind,
            water_amount_in_kettle_ml=water_amount_in_kettle_ml,
            brew_method=method if method is not None else str(brew_method),
            cups=portions.actual_cups,
        ),
    )


def target_temperature(roast_type: RoastType) -> int:
    return tables.TARGET_TEMPERATURES_C.get(roast_type, tables.TARGET_TEMPERATURES_C[RoastType.MEDIUM])


def wait_time_after_boil(target_temperature_c: float, water_amount_in_kettle_ml: float) -> int:
    """Seconds to let the kettle stand after the boil to reach the target temperature.

    A fuller kettle holds heat longer, so the cooling rate shrinks with the
    square root of the volume relative to the 1000 mL reference.
    """
    if target_temperature_c >= tables.BOILING_POINT_C:
        return 0
    drop_needed = tables.BOILING_POINT_C - target_temperature_c
    volume_factor = math.sqrt(tables.REFERENCE_WATER_VOLUME_ML / max(1, water_amount_in_kettle_ml))
    cooling_rate = tables.BASE_COOLING_RATE_C_PER_MINUTE * volume_factor
    return round_int(drop_needed / cooling_rate * 60)


def max_cups(brew_method: BrewMethod | None) -> int:
    return tables.MAX_CUPS.get(brew_method, tables.DEFAULT_MAX_CUPS)


def coffee_and_water(brew_method: BrewMethod | None, roast_type: RoastType, requested_cups: int) -> CoffeeAndWater:
    actual_cups = int(clamp(requested_cups, 1, max_cups(brew_method)))
    water_ml = tables.WATER_PER_CUP_ML.get(brew_method, 0) * actual_cups

    ratios = tables.COFFEE_WATER_RATIOS.get(brew_method, {})
    ratio = ratios.get(roast_type) or ratios.get(RoastType.MEDIUM) or tables.DEFAULT_COFFEE_WATER_RATIO

    return CoffeeAndWater(
        coffee_grams=round_half_up(water_ml / ratio, 1),
        water_ml=water_ml,
        ratio=f"1:{ratio:.1f}",
        actual_cups=actual_cups,
    )


def adjusted_brew_time(brew_method: BrewMethod | None, roast_type: RoastType, grind_size: GrindSize) -> int:
    base_times = tables.BASE_BREW_TIMES_SECONDS.get(brew_method, {})
    base = base_times.get(roast_type) or base_times.get(RoastType.MEDIUM) or tables.DEFAULT_BREW_TIME_SECONDS
    adjustment = tables.GRIND_ADJUSTMENTS_SECONDS.get(brew_method, {}).get(grind_size, 0)
    lower, upper = tables.BREW_TIME_BOUNDS_SECONDS.get(brew_method, tables.DEFAULT_BREW_TIME_BOUNDS_SECONDS)
    return int(clamp(base + adjustment, lower, upper))


def build_warnings(
    roast_type: RoastType,
    grind_size: GrindSize,
    brew_method: BrewMethod | None,
) -> list[WarningMessage]:
    warnings: list[WarningMessage] = []
    fine_grind = grind_size in tables.FINE_GRINDS

    if fine_grind and brew_method == BrewMethod.POUR_OVER and roast_type in tables.DARK_ROASTS:
        warnings.append(
            WarningMessage(
                id=FINE_POUR_OVER_DARK_WARNING_ID,
                severity=WarningSeverity.CRITICAL,
                message="Pre-ground fine or espresso grind with darker roasts in a pour-over can lead to issues.",
                recommendation=(
                    "This combination may cause over-extraction or clogging. Consider using an AeroPress, "
                    "or if proceeding with pour-over, the calculator has adjusted for cooler water. "
                    "Pour gently and ensure even distribution."
                ),
            )
        )

    if fine_grind and brew_method == BrewMethod.FRENCH_PRESS:
        warnings.append(
            WarningMessage(
                id="fine-grind-frenchpress",
                severity=WarningSeverity.CRITICAL,
                message="Fine grind is likely to pass through a French Press filter.",
                recommendation=(
                    "This can result in a muddy, over-extracted cup. "
                    "A coarser grind is highly recommended for French Press."
                ),
            )
        )

    if (
        roast_type == RoastType.LIGHT
        and grind_size in tables.COARSE_GRINDS
        and brew_method == BrewMethod.AEROPRESS
    ):
        warnings.append(
            WarningMessage(
                id="light-coarse-aeropress",
                severity=WarningSeverity.CRITICAL,
                message="Light roast with a coarse grind in an AeroPress might under-extract.",
                recommendation=(
                    "Light roasts are harder to extract. Consider a finer grind (medium-fine) "
                    "or a longer brew time for better flavor development with AeroPress."
                ),
            )
        )

    already_adjusted = any(warning.id == FINE_POUR_OVER_DARK_WARNING_ID for warning in warnings)
    if roast_type in tables.ESPRESSO_ROASTS and brew_method == BrewMethod.POUR_OVER and not already_adjusted:
        warnings.append(
            WarningMessage(
                id="espresso-pourover",
                severity=WarningSeverity.INFO,
                message="Using Espresso Roast for Pour-Over.",
                recommendation=(
                    "Espresso roasts extract faster. The recipe has been adjusted for cooler water "
                    "and a potentially shorter brew time. Monitor drawdown closely."
                ),
            )
        )

    return warnings
