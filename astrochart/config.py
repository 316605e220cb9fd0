from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ─── App ──────────────────────────────
    APP_NAME: str = "astrochart"
    ENV: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ─── Ephemeris ────────────────────────
    EPHEMERIS_BACKEND: str = "approximate"   # "approximate" | "swisseph"
    SWISSEPH_FLAVOR: str = "moseph"          # "moseph" | "swieph"
    SWISSEPH_EPHE_PATH: Optional[str] = None

    # ─── Chart defaults ───────────────────
    # getTimezoneOffset convention: UTC+8 is -480
    DEFAULT_TZ_OFFSET_MINUTES: float = -480.0
    HOUSE_SYSTEM: str = "equal"
    POLAR_LATITUDE_LIMIT: float = 89.9
    SIGN_LOCALE: str = "en"                  # "en" | "zh"

    # ─── Geocoding ────────────────────────
    GEOCODER_ENABLED: bool = True
    GEOCODER_URL: str = "https://geocoding-api.open-meteo.com/v1/search"
    GEOCODER_TIMEOUT: float = 10.0


settings = Settings()
