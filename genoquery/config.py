"""
Configuration system for genoquery.

Uses Pydantic Settings for type-safe configuration with environment variable support.
The settings object is built once at startup and handed to the app factory.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from genoquery import __version__


class GenoQueryConfig(BaseSettings):
    """Main configuration for genoquery."""

    model_config = SettingsConfigDict(
        env_prefix="GENOQUERY_",
        extra="ignore",
    )

    # Build tag reported by /health and at startup
    version: str = __version__

    # Server
    host: str = "localhost"
    port: int = Field(1323, ge=1, le=65535)

    # Storage
    data_dir: Path = Path("~/.genoquery").expanduser()
    database_path: Optional[Path] = None  # defaults to data_dir / genoquery.db
    reference_fasta: Optional[Path] = None

    # Map store not-found to 404 and store failures to 500 instead of 400
    distinct_error_status: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid:
            raise ValueError(f"Invalid log level. Must be one of: {', '.join(sorted(valid))}")
        return v

    @property
    def addr(self) -> str:
        return f"{self.host}:{self.port}"

    def resolved_database_path(self) -> Path:
        """Database file, falling back to one under ``data_dir``."""
        if self.database_path is not None:
            return self.database_path.expanduser()
        return self.data_dir.expanduser() / "genoquery.db"


@lru_cache()
def get_config() -> GenoQueryConfig:
    """Get cached configuration for command line use."""
    return GenoQueryConfig()
