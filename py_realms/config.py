"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, overridable through ``PY_REALMS_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="PY_REALMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    # Generation
    relaxation_iterations: int = Field(
        default=3, ge=0, description="Lloyd relaxation passes over the seed points"
    )
    edge_margin: float = Field(
        default=0.0, ge=0.0, description="Inward padding for initial point placement"
    )
    name_attempts_per_territory: int = Field(
        default=100, ge=1, description="Name attempts allowed per requested territory"
    )
    max_territory_count: int = Field(
        default=2000, ge=1, description="Largest territory count accepted"
    )

    # Defaults used by the command line when options are omitted
    default_map_width: float = Field(default=1200, description="Default map width")
    default_map_height: float = Field(default=800, description="Default map height")
    default_territory_count: int = Field(default=20, description="Default territory count")


settings = Settings()
