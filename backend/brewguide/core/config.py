from pydantic_settings import BaseSettings, SettingsConfigDict

from brewguide.schemas.recipe import BrewMethod, GrindSize, RoastType


class Settings(BaseSettings):
    app_name: str = "Brew Guide API"
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    tick_interval_seconds: float = 1.0

    default_roast_type: RoastType = RoastType.MEDIUM
    default_grind_size: GrindSize = GrindSize.MEDIUM
    default_water_in_kettle_ml: int = 1000
    default_brew_method: BrewMethod = BrewMethod.POUR_OVER
    default_cups: int = 1

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
