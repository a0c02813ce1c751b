from __future__ import annotations

from brewguide.schemas.recipe import BrewMethod, GrindSize, RoastType

TARGET_TEMPERATURES_C: dict[RoastType, int] = {
    RoastType.LIGHT: 96,
    RoastType.MEDIUM: 93,
    RoastType.DARK: 91,
    RoastType.ESPRESSO: 88,
    RoastType.ESPRESSO_AXIL: 85,
}

BOILING_POINT_C = 100
MIN_TARGET_TEMPERATURE_C = 70
FINE_POUR_OVER_TEMPERATURE_DROP_C = 5

# Degrees lost per minute by a 1000 mL kettle left to stand after the boil.
BASE_COOLING_RATE_C_PER_MINUTE = 4.4
REFERENCE_WATER_VOLUME_ML = 1000

DEFAULT_WATER_IN_KETTLE_ML = 1000
MIN_WATER_IN_KETTLE_ML = 500
MAX_WATER_IN_KETTLE_ML = 1700

WATER_PER_CUP_ML: dict[BrewMethod, int] = {
    BrewMethod.POUR_OVER: 240,
    BrewMethod.AEROPRESS: 200,
    BrewMethod.FRENCH_PRESS: 275,
}

MAX_CUPS: dict[BrewMethod, int] = {
    BrewMethod.POUR_OVER: 2,
    BrewMethod.AEROPRESS: 1,
    BrewMethod.FRENCH_PRESS: 2,
}
DEFAULT_MAX_CUPS = 1

# Water:coffee, so grams of coffee = water / ratio.
COFFEE_WATER_RATIOS: dict[BrewMethod, dict[RoastType, float]] = {
    BrewMethod.POUR_OVER: {
        RoastType.LIGHT: 16.5,
        RoastType.MEDIUM: 16,
        RoastType.DARK: 15,
        RoastType.ESPRESSO: 15,
        RoastType.ESPRESSO_AXIL: 15,
    },
    BrewMethod.AEROPRESS: {
        RoastType.LIGHT: 15,
        RoastType.MEDIUM: 14,
        RoastType.DARK: 13,
        RoastType.ESPRESSO: 13,
        RoastType.ESPRESSO_AXIL: 13,
    },
    BrewMethod.FRENCH_PRESS: {
        RoastType.LIGHT: 15,
        RoastType.MEDIUM: 14,
        RoastType.DARK: 13,
        RoastType.ESPRESSO: 13,
        RoastType.ESPRESSO_AXIL: 13,
    },
}
DEFAULT_COFFEE_WATER_RATIO = 16

BASE_BREW_TIMES_SECONDS: dict[BrewMethod, dict[RoastType, int]] = {
    BrewMethod.POUR_OVER: {
        RoastType.LIGHT: 210,
        RoastType.MEDIUM: 195,
        RoastType.DARK: 180,
        RoastType.ESPRESSO: 165,
        RoastType.ESPRESSO_AXIL: 180,
    },
    BrewMethod.AEROPRESS: {
        RoastType.LIGHT: 90,
        RoastType.MEDIUM: 75,
        RoastType.DARK: 60,
        RoastType.ESPRESSO: 50,
        RoastType.ESPRESSO_AXIL: 60,
    },
    BrewMethod.FRENCH_PRESS: {
        RoastType.LIGHT: 300,
        RoastType.MEDIUM: 270,
        RoastType.DARK: 240,
        RoastType.ESPRESSO: 210,
        RoastType.ESPRESSO_AXIL: 240,
    },
}
DEFAULT_BREW_TIME_SECONDS = 180

# Medium is the zero point for every method; French Press also treats Coarse as one.
GRIND_ADJUSTMENTS_SECONDS: dict[BrewMethod, dict[GrindSize, int]] = {
    BrewMethod.POUR_OVER: {
        GrindSize.FINE: -45,
        GrindSize.PRE_GROUND_FINE: -45,
        GrindSize.MEDIUM_FINE: -15,
        GrindSize.MEDIUM_COARSE: 15,
        GrindSize.COARSE: 45,
    },
    BrewMethod.AEROPRESS: {
        GrindSize.FINE: -15,
        GrindSize.PRE_GROUND_FINE: -15,
        GrindSize.MEDIUM_FINE: -5,
        GrindSize.MEDIUM_COARSE: 10,
        GrindSize.COARSE: 20,
    },
    BrewMethod.FRENCH_PRESS: {
        GrindSize.FINE: -90,
        GrindSize.PRE_GROUND_FINE: -90,
        GrindSize.MEDIUM_FINE: -45,
        GrindSize.MEDIUM_COARSE: 30,
    },
}

BREW_TIME_BOUNDS_SECONDS: dict[BrewMethod, tuple[int, int]] = {
    BrewMethod.POUR_OVER: (120, 300),
    BrewMethod.AEROPRESS: (30, 180),
    BrewMethod.FRENCH_PRESS: (150, 360),
}
DEFAULT_BREW_TIME_BOUNDS_SECONDS = (60, 360)

FINE_GRINDS = frozenset({GrindSize.FINE, GrindSize.PRE_GROUND_FINE})
COARSE_GRINDS = frozenset({GrindSize.COARSE, GrindSize.MEDIUM_COARSE})
DARK_ROASTS = frozenset({RoastType.DARK, RoastType.ESPRESSO, RoastType.ESPRESSO_AXIL})
ESPRESSO_ROASTS = frozenset({RoastType.ESPRESSO, RoastType.ESPRESSO_AXIL})

POUR_OVER_BLOOM_COFFEE_RATIO = 2
POUR_OVER_BLOOM_POUR_SECONDS = 15
POUR_OVER_BLOOM_WAIT_SECONDS = 45
POUR_OVER_DARK_BLOOM_WAIT_SECONDS = 30
POUR_OVER_MAIN_POURS = 2
POUR_OVER_MIN_PHASE_SECONDS = 30
POUR_OVER_POUR_SHARE = 0.6
POUR_OVER_WAIT_SHARE = 0.4
POUR_OVER_MIN_DRAWDOWN_SECONDS = 15

AEROPRESS_BLOOM_COFFEE_RATIO = 2
AEROPRESS_ADD_COFFEE_SECONDS = 15
AEROPRESS_BLOOM_WAIT_SECONDS = 30
AEROPRESS_ADD_WATER_SECONDS = 10
AEROPRESS_MIN_STEEP_SECONDS = 15
AEROPRESS_PREPARE_PLUNGE_SECONDS = 10
AEROPRESS_PLUNGE_SECONDS = 20
AEROPRESS_PLUNGE_BUFFER_SECONDS = 5
AEROPRESS_MIN_PLUNGE_SECONDS = 10

FRENCH_PRESS_ADD_WATER_SECONDS = 20
FRENCH_PRESS_CRUST_BREAK_WAIT_SECONDS = 60
FRENCH_PRESS_MIN_INITIAL_STEEP_SECONDS = 30
FRENCH_PRESS_BREAK_CRUST_SECONDS = 10
FRENCH_PRESS_MIN_CONTINUE_STEEP_SECONDS = 30
FRENCH_PRESS_PLUNGE_SECONDS = 30
FRENCH_PRESS_MIN_PLUNGE_SECONDS = 10
