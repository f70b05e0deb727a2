"""
Configuration module for PDQ.

Provides strongly-typed configuration with pydantic, supporting both
file-based and environment variable configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiConfig(BaseModel):
    """Platform GraphQL API configuration."""

    url: str = Field(
        default="https://api.monday.com/v2",
        description="GraphQL endpoint URL",
    )
    token: SecretStr | None = Field(
        default=None,
        description="API token sent in the Authorization header",
    )
    api_version: str | None = Field(
        default=None,
        description="Value for the API-Version header (server default if unset)",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Per-request timeout in seconds",
    )

    @field_validator("url")
    @classmethod
    def url_has_scheme(cls, v: str) -> str:
        """Validate that the endpoint is an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return v


class LimitsConfig(BaseModel):
    """Safety ceilings and page sizes for the listing tools."""

    max_user_ids: int = Field(
        default=500,
        ge=1,
        le=10000,
        description="Maximum user IDs accepted in a single query",
    )
    max_team_ids: int = Field(
        default=500,
        ge=1,
        le=10000,
        description="Maximum team IDs accepted in a single query",
    )
    default_user_limit: int = Field(
        default=1000,
        ge=1,
        le=10000,
        description="Users fetched when no IDs are given",
    )
    default_workspace_limit: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Default and maximum page size for workspace listing",
    )
    search_limit: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Default and maximum page size for global search",
    )
    load_into_memory_limit: int = Field(
        default=10000,
        ge=100,
        le=50000,
        description="Entities loaded in one round trip for in-memory search",
    )


class Config(BaseSettings):
    """
    Main PDQ configuration.

    Can be configured via:
    1. Configuration file (pdq.toml or pdq.yaml)
    2. Environment variables with PDQ_ prefix (e.g. PDQ_API__TOKEN)
    3. Programmatic overrides
    """

    model_config = SettingsConfigDict(
        env_prefix="PDQ_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer",
    )

    api: ApiConfig = Field(default_factory=ApiConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from a TOML, YAML or JSON file."""
        import json

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()
        content = path.read_text()

        if suffix == ".toml":
            import tomllib

            data = tomllib.loads(content)
        elif suffix in (".yaml", ".yml"):
            import yaml

            data = yaml.safe_load(content) or {}
        elif suffix == ".json":
            data = json.loads(content)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

        return cls(**data)

    def to_dict(self) -> dict:
        """Convert configuration to dictionary (token masked)."""
        return self.model_dump(mode="json")


def load_config(
    config_path: Path | None = None,
    project_root: Path | None = None,
) -> Config:
    """
    Load configuration with automatic discovery.

    Priority:
    1. Explicit config_path if provided
    2. pdq.toml in project_root
    3. .pdq/config.toml in project_root
    4. pdq.yaml / .pdq/config.yaml in project_root
    5. Default configuration (environment only)
    """
    root = project_root or Path.cwd()

    if config_path is not None:
        return Config.from_file(config_path)

    candidates = [
        root / "pdq.toml",
        root / ".pdq" / "config.toml",
        root / "pdq.yaml",
        root / ".pdq" / "config.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return Config.from_file(candidate)

    return Config()
