"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "Pivot SuperTrend Signals"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "info"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Ticker data
    data_source: str = "yahoo"  # Options: yahoo, mock
    default_timeframe: str = "1d"
    default_lookback: int = 300  # Candles fetched per call (must cover EMA-200 warm-up)
    mock_candle_count: int = 300

    # Indicator defaults (used when a call argument is absent)
    default_atr_period: int = 14
    default_multiplier: float = 2.0
    default_pivot_lookback: int = 5
    default_volume_period: int = 20
    default_volume_threshold: float = 1.5
    default_swing_lookback: int = 20
    default_max_pivots: int = 5
    default_band_mode: str = "two_bar"  # Options: two_bar, full_fold

    # Email notifications (HTTP relay)
    email_relay_url: Optional[str] = None
    email_relay_token: Optional[str] = None
    email_sender: str = "alerts@pivot-supertrend.local"
    notification_timeout_seconds: float = 10.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
