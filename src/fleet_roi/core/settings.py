from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FLEET_ROI_", case_sensitive=False)

    # App
    app_name: str = "Fleet ROI Estimator"
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Calculation defaults
    default_scenario: str = "base"
    default_mode: str = "full"

    # Local persistence
    storage_path: str = "~/.fleet_roi/inputs.json"


settings = Settings()
