from fastapi import APIRouter, Query

from brewguide.core.config import settings
from brewguide.schemas.recipe import BrewMethod, CalculatedRecipe, GrindSize, RoastType
from brewguide.services import brew_tables
from brewguide.services.recipe_engine import generate_full_recipe

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("/calculate", response_model=CalculatedRecipe)
def calculate_recipe(
    roast_type: RoastType = Query(default=settings.default_roast_type),
    grind_size: GrindSize = Query(default=settings.default_grind_size),
    water_amount_in_kettle_ml: int = Query(
        default=settings.default_water_in_kettle_ml,
        ge=brew_tables.MIN_WATER_IN_KETTLE_ML,
        le=brew_tables.MAX_WATER_IN_KETTLE_ML,
    ),
    brew_method: BrewMethod = Query(default=settings.default_brew_method),
    cups: int = Query(default=settings.default_cups, ge=1, le=10),
) -> CalculatedRecipe:
    return generate_full_recipe(roast_type, grind_size, water_amount_in_kettle_ml, brew_method, cups)
