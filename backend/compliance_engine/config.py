from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
_FRAMEWORKS_DIR = Path(__file__).resolve().parent / "data" / "frameworks"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "CMMC Compliance Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Framework registry
    FRAMEWORKS_DIR: str = str(_FRAMEWORKS_DIR)
    DEFAULT_FRAMEWORK_ID: str = "cmmc-2.0-level1"

    # Engine defaults
    GAP_BENCHMARK: int = 75
    GAP_LIMIT: int = 10
    RECOMMENDATION_LIMIT: int = 10
    RECOMMENDATION_THRESHOLD: int = 2
    REMEDIATION_IMPACT_CAP: int = 25

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]


settings = Settings()
