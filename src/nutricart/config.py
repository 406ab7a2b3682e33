"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """NutriCart settings loaded from `NUTRICART_*` environment variables."""

    data_dir: Path = Path("~/.nutricart")
    templates_path: Path | None = None
    expiring_window_days: int = 3
    rebuy_after_days: int = 7
    default_shelf_life_days: int = 14
    history_window: int = 10
    health_swap_latency_seconds: float = 0.8
    prediction_latency_seconds: float = 1.0
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="NUTRICART_",
        env_file=".env",
        extra="ignore",
    )

    def resolved_data_dir(self) -> Path:
        return self.data_dir.expanduser()
