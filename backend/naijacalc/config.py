from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    APP_NAME: str = "NaijaCalc API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Reference data
    TAX_YEAR: str = "2024"

    # Calculation history
    HISTORY_BACKEND: str = "memory"  # "memory" or "file"
    HISTORY_FILE: str = "data/calculation_history.json"
    HISTORY_MAX_RECORDS: int = 100

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
