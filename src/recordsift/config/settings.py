"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (RECORDSIFT_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class RecordsSettings(BaseModel):
    """Record loading configuration."""

    default_adapter: str = Field(
        default="default",
        description="Adapter used for record classes no registered adapter handles",
    )
    preserve_hit_order: bool = Field(
        default=True,
        description="Return records in hit order unless an explicit ordering was requested",
    )


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")

    @field_validator("log_level", "log_format", mode="before")
    @classmethod
    def _lowercase(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the RECORDSIFT_ prefix.
    Nested settings use double underscores.

    Example:
        RECORDSIFT_RECORDS__PRESERVE_HIT_ORDER=false
        RECORDSIFT_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "RECORDSIFT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    records: RecordsSettings = Field(default_factory=RecordsSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are passed as init arguments.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
