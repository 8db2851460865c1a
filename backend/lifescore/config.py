"""Application configuration from environment variables."""

from pydantic import BaseModel
from pydantic_settings import BaseSettings
from functools import lru_cache


class EngineTuning(BaseModel):
    """Tunable constants of the progression engine."""

    # XP
    xp_max_base: int = 50  # XP for a 100-score day before streak bonus
    streak_bonus_per_day: float = 0.02
    streak_bonus_cap: float = 0.5
    xp_per_level: int = 100  # Level N -> N+1 costs N * xp_per_level

    # Class modifier: dominant stat must lead the runner-up by this much
    class_modifier_margin: int = 2

    # Fatigue
    fatigue_per_missed_day: int = 20
    fatigue_per_low_day: int = 10
    low_score_threshold: int = 50
    recovery_threshold: int = 70
    recovery_amount: int = 10
    strong_recovery_threshold: int = 90
    strong_recovery_amount: int = 20

    # Bars
    base_hp: int = 100
    hp_per_level: int = 10
    base_mp: int = 50
    mp_per_level: int = 5
    bar_window: int = 7  # check-ins in the trailing score average
    default_average_score: int = 50

    # Stats
    stat_window: int = 14
    neutral_stat: int = 5


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./lifescore.db"

    # Frontend
    frontend_url: str = "http://localhost:3000"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # App settings
    app_name: str = "Life Score API"
    debug: bool = True
    log_dir: str = "logs"

    # Engine
    tuning: EngineTuning = EngineTuning()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_tuning() -> EngineTuning:
    """Shortcut for the engine constants of the cached settings."""
    return get_settings().tuning
