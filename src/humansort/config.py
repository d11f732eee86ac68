"""Configuration management for humansort."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from humansort.models.state import DEFAULT_BATCH_SIZE, MAX_BATCH_SIZE, MIN_BATCH_SIZE


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HUMANSORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Sorting
    default_batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE,
        ge=MIN_BATCH_SIZE,
        le=MAX_BATCH_SIZE,
        description="Batch size for newly created ranking states",
    )
    selection_bias: float = Field(
        default=2.0,
        ge=1.0,
        description="Exponent favouring top-rated items when picking a batch",
    )

    # Files
    state_suffix: str = Field(
        default=".humansort",
        description="Suffix appended to a list file name to get its state file",
    )

    # Output
    output_limit: int = Field(
        default=10,
        ge=1,
        description="Items shown by default in the web output view",
    )

    # Web front-end
    web_host: str = Field(default="localhost")
    web_port: int = Field(default=8000)
    web_state_path: Path = Field(
        default=Path(".humansort/app_state.json"),
        description="Where the web app keeps its state",
    )

    # Logging
    log_level: str = Field(default="WARNING")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config()
