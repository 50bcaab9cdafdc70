"""
NeighborGood - Configuration Loader

Pydantic-based configuration management with:
- Environment-based configuration (dev/prod)
- YAML file loading with inheritance
- Environment variable overrides
- Type validation via Pydantic

Usage:
    from neighborgood.shared.config import get_config

    config = get_config()  # Uses NG_ENVIRONMENT env var
    config = get_config("dev")  # Explicit environment

    # Access config values
    window = config.statistics.short_window_years
    pattern = config.dates.display_format
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# Configuration Models
# =============================================================================


class ProjectConfig(BaseModel):
    """Project metadata configuration."""

    name: str = "neighborgood"
    version: str = "0.1.0"
    description: str = "Crime statistics and trend indicators by street address"


class StatisticsConfig(BaseModel):
    """Statistics engine configuration."""

    # None means "the current calendar year"
    reference_year: int | None = None
    short_window_years: int = Field(default=5, ge=2)
    stable_threshold_percent: float = Field(default=5.0, ge=0.0)
    six_year_span: int = Field(default=6, ge=1)
    three_year_span: int = Field(default=3, ge=1)
    top_offense_count: int = Field(default=3, ge=0)


class DatesConfig(BaseModel):
    """Date formatting configuration."""

    display_format: str = "%Y-%m-%d"


class LocationsConfig(BaseModel):
    """Reference location dataset configuration."""

    dataset_path: str = "data/cmpd_crime_data.geojson"
    location_field: str = "LOCATION"
    city_field: str = "CITY"
    state_field: str = "STATE"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["json", "text"] = "text"
    include_timestamp: bool = True


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Main configuration class for NeighborGood.

    Loads configuration from:
    1. YAML files in configs/environments/
    2. Environment variables (NG_ prefix, ``__`` for nesting)

    Environment variables take precedence over YAML values.
    """

    model_config = SettingsConfigDict(
        env_prefix="NG_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    environment: Literal["dev", "prod"] = "dev"

    # Configuration sections
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    statistics: StatisticsConfig = Field(default_factory=StatisticsConfig)
    dates: DatesConfig = Field(default_factory=DatesConfig)
    locations: LocationsConfig = Field(default_factory=LocationsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"dev", "prod"}
        if v not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v


# =============================================================================
# Configuration Loading Functions
# =============================================================================


def _get_config_dir() -> Path:
    """Get the configuration directory path."""
    # Try relative path from the project root
    config_dir = Path(__file__).parent.parent.parent / "configs"
    if config_dir.exists():
        return config_dir

    # Try from current working directory
    config_dir = Path.cwd() / "configs"
    if config_dir.exists():
        return config_dir

    raise FileNotFoundError(
        "Could not find configs directory. Ensure you're running from the project root."
    )


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    if not path.exists():
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _env_overrides() -> dict[str, Any]:
    """Values set through NG_ environment variables, nested like the YAML files."""
    overrides = Settings().model_dump(exclude_unset=True)
    # The environment is chosen by get_config, not overridden
    overrides.pop("environment", None)
    return overrides


def _load_config_for_environment(environment: str) -> dict[str, Any]:
    """Load and merge configuration for a specific environment."""
    env_dir = _get_config_dir() / "environments"

    base_config = _load_yaml_file(env_dir / "base.yaml")
    env_config = _load_yaml_file(env_dir / f"{environment}.yaml")

    # Remove inheritance marker if present
    env_config.pop("_inherit", None)

    merged = _deep_merge(base_config, env_config)
    merged["environment"] = environment

    return merged


@lru_cache(maxsize=4)
def get_config(environment: str | None = None) -> Settings:
    """
    Get configuration for the specified environment.

    Args:
        environment: Environment name (dev, prod).
                    If None, uses NG_ENVIRONMENT env var, defaulting to "dev".

    Returns:
        Settings: Validated configuration object.

    Example:
        config = get_config()  # Uses NG_ENVIRONMENT or defaults to dev
        config = get_config("prod")  # Explicit production config
    """
    if environment is None:
        environment = os.getenv("NG_ENVIRONMENT", "dev")

    config = _deep_merge(_load_config_for_environment(environment), _env_overrides())

    return Settings(**config)


def reload_config(environment: str | None = None) -> Settings:
    """
    Reload configuration, clearing the cache.

    Useful for testing or when config files have changed.
    """
    get_config.cache_clear()
    return get_config(environment)


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == "prod"
