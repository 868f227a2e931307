"""Runtime configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``SIGNALCORE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SIGNALCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Candles kept per symbol/interval by the engine
    buffer_size: int = 500

    # YAML roster; when unset the default strategies run with default options
    roster_path: str | None = None
    default_strategies: list[str] = ["ma_cross", "macd_cross", "rsi_threshold"]

    # Supertrend used for the engine's per-symbol trend
    supertrend_atr_period: int = 10
    supertrend_atr_multiplier: float = 3.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
