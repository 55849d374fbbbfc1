from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_PACKAGE_STATIC_DIR = Path(__file__).parent / "static"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    caffeine_per_cup_mg: float = Field(default=95.0, alias="CAFFEINE_PER_CUP_MG")
    half_life_hours: float = Field(default=5.0, alias="HALF_LIFE_HOURS")
    forecast_horizon_hours: int = Field(default=24, alias="FORECAST_HORIZON_HOURS")
    forecast_step_minutes: int = Field(default=30, alias="FORECAST_STEP_MINUTES")
    forecast_intake_match: Literal["minute", "exact"] = Field(default="minute", alias="FORECAST_INTAKE_MATCH")
    reject_non_positive_doses: bool = Field(default=False, alias="REJECT_NON_POSITIVE_DOSES")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    enable_metrics_endpoint: bool = Field(default=True, alias="ENABLE_METRICS_ENDPOINT")
    static_dir: str = Field(default=str(_PACKAGE_STATIC_DIR), alias="STATIC_DIR")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")

    @property
    def static_path(self) -> Path:
        return Path(self.static_dir)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
