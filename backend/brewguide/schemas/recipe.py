from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class _LabelledEnum(str, Enum):
    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: object):
        """Resolve a member from its value, its name or its display label."""
        if isinstance(value, cls):
            return value
        token = str(getattr(value, "value", value)).strip().lower()
        for member in cls:
            if token in (member.value, member.name.lower(), member.label.lower()):
                return member
        return None


class RoastType(_LabelledEnum):
    LIGHT = "light"
    MEDIUM = "medium"
    DARK = "dark"
    ESPRESSO = "espresso"
    ESPRESSO_AXIL = "espresso_axil"


class GrindSize(_LabelledEnum):
    FINE = "fine"
    MEDIUM_FINE = "medium_fine"
    MEDIUM = "medium"
    MEDIUM_COARSE = "medium_coarse"
    COARSE = "coarse"
    PRE_GROUND_FINE = "pre_ground_fine"
    PRE_GROUND_MEDIUM = "pre_ground_medium"


class BrewMethod(_LabelledEnum):
    POUR_OVER = "pour_over"
    AEROPRESS = "aeropress"
    FRENCH_PRESS = "french_press"


class WarningSeverity(str, Enum):
    CRITICAL = "critical"
    INFO = "info"


_LABELS: dict[Enum, str] = {
    RoastType.LIGHT: "Light Roast",
    RoastType.MEDIUM: "Medium Roast",
    RoastType.DARK: "Dark Roast",
    RoastType.ESPRESSO: "Espresso Roast",
    RoastType.ESPRESSO_AXIL: "Espresso Roast (Axil Seasonal)",
    GrindSize.FINE: "Fine",
    GrindSize.MEDIUM_FINE: "Medium-Fine",
    GrindSize.MEDIUM: "Medium",
    GrindSize.MEDIUM_COARSE: "Medium-Coarse",
    GrindSize.COARSE: "Coarse",
    GrindSize.PRE_GROUND_FINE: "Pre-Ground (Fine/Espresso)",
    GrindSize.PRE_GROUND_MEDIUM: "Pre-Ground (Medium)",
    BrewMethod.POUR_OVER: "Pour-Over",
    BrewMethod.AEROPRESS: "AeroPress",
    BrewMethod.FRENCH_PRESS: "French Press",
}


class RecipeStep(BaseModel):
    id: str
    title: str
    details: str
    start_time_seconds: int = Field(ge=0)
    duration_seconds: int = Field(ge=0)
    is_timed: bool

    model_config = ConfigDict(frozen=True)

    @property
    def end_time_seconds(self) -> int:
        return self.start_time_seconds + self.duration_seconds


class WarningMessage(BaseModel):
    id: str
    severity: WarningSeverity
    message: str
    recommendation: str | None = None

    model_config = ConfigDict(frozen=True)


class RecipeInputs(BaseModel):
    roast_type: RoastType
    grind_size: GrindSize
    water_amount_in_kettle_ml: int
    # Unrecognised methods are kept verbatim so the recipe can report them.
    brew_method: BrewMethod | str = Field(union_mode="left_to_right")
    cups: int

    model_config = ConfigDict(frozen=True)


class CalculatedRecipe(BaseModel):
    target_temperature_celsius: int
    wait_time_after_boil_seconds: int
    coffee_amount_grams: float
    water_for_brewing_ml: int
    coffee_to_water_ratio: str
    total_brew_time_seconds: int
    steps: tuple[RecipeStep, ...]
    warnings: tuple[WarningMessage, ...]
    inputs: RecipeInputs

    model_config = ConfigDict(frozen=True)

    @property
    def timed_steps(self) -> tuple[RecipeStep, ...]:
        return tuple(step for step in self.steps if step.is_timed)


class RecipeInputsUpdate(BaseModel):
    roast_type: RoastType | None = None
    grind_size: GrindSize | None = None
    water_amount_in_kettle_ml: int | None = Field(default=None, ge=500, le=1700)
    brew_method: BrewMethod | None = None
    cups: int | None = Field(default=None, ge=1, le=10)
