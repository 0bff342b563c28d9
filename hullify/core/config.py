import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = os.getenv("ENV", "dev")
    DEFAULT_CURRENCY: str = os.getenv("CURRENCY", "USD")
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "120"))

    # External estimator
    ESTIMATOR_PROVIDER: str = os.getenv("ESTIMATOR_PROVIDER", "openai")  # openai | null
    ESTIMATOR_TIMEOUT_SECONDS: float = float(os.getenv("ESTIMATOR_TIMEOUT_SECONDS", "4.0"))

    # LLM
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TEMPERATURE: float = float(os.getenv("OPENAI_TEMPERATURE", "0.1"))

    # Pricing policy (estimate vs baseline band, range width by confidence)
    CLAMP_BAND_LOW: float = float(os.getenv("CLAMP_BAND_LOW", "0.50"))
    CLAMP_BAND_HIGH: float = float(os.getenv("CLAMP_BAND_HIGH", "1.60"))
    RANGE_WIDTH_HIGH: float = float(os.getenv("RANGE_WIDTH_HIGH", "0.08"))
    RANGE_WIDTH_MEDIUM: float = float(os.getenv("RANGE_WIDTH_MEDIUM", "0.12"))
    RANGE_WIDTH_LOW: float = float(os.getenv("RANGE_WIDTH_LOW", "0.18"))
    ABS_MIN_SPREAD_DOLLARS: int = int(os.getenv("ABS_MIN_SPREAD_DOLLARS", "800"))
    MIN_RANGE_PCT: float = float(os.getenv("MIN_RANGE_PCT", "0.04"))
    PRICE_FLOOR_DOLLARS: int = int(os.getenv("PRICE_FLOOR_DOLLARS", "500"))

    # Synthetic comps
    COMPS_URL: str = os.getenv("COMPS_URL", "https://hullify.net")

    # Security
    API_KEY: str | None = os.getenv("API_KEY")
    RATE_LIMIT_RPM: int = int(os.getenv("RATE_LIMIT_RPM", "60"))

    # CORS
    ALLOW_ORIGINS: str = os.getenv("ALLOW_ORIGINS", "*")

    # Metrics
    PROMETHEUS_ENABLED: bool = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

settings = Settings()
