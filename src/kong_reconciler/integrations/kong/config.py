"""Kong reconciler configuration models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from kong_reconciler.integrations.kong.exceptions import KongConfigError

ENV_PREFIX = "KONG_RECONCILER_"


class KongConnectionConfig(BaseModel):
    """Kong Admin API connection configuration."""

    model_config = ConfigDict(extra="forbid")

    base_url: str = "http://localhost:8001"
    timeout: int = 30
    verify_ssl: bool = True
    retries: int = 3

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:
        """Validate retries is non-negative."""
        if v < 0:
            raise ValueError("retries must be non-negative")
        return v


class KongAuthConfig(BaseModel):
    """Kong Admin API authentication configuration.

    Credentials are taken as already issued; obtaining them is out of scope.
    """

    model_config = ConfigDict(extra="forbid")

    type: Literal["none", "api_key", "mtls"] = "none"
    api_key: str | None = None
    header_name: str = "Kong-Admin-Token"
    cert_path: str | None = None
    key_path: str | None = None
    ca_path: str | None = None


class ReconcilerConfig(BaseModel):
    """Complete reconciler configuration."""

    model_config = ConfigDict(extra="forbid")

    connection: KongConnectionConfig = KongConnectionConfig()
    auth: KongAuthConfig = KongAuthConfig()

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> ReconcilerConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            KONG_RECONCILER_BASE_URL: Kong Admin API base URL
            KONG_RECONCILER_TIMEOUT: Request timeout in seconds
            KONG_RECONCILER_VERIFY_SSL: "false" or "0" disables TLS verification
            KONG_RECONCILER_API_KEY: API key for authentication
            KONG_RECONCILER_AUTH_TYPE: Authentication type (none, api_key, mtls)
        """
        config_dict = {
            k: dict(v) if isinstance(v, dict) else v for k, v in (base_config or {}).items()
        }
        connection = config_dict.setdefault("connection", {})
        auth = config_dict.setdefault("auth", {})

        if base_url := os.environ.get(f"{ENV_PREFIX}BASE_URL"):
            connection["base_url"] = base_url

        if timeout := os.environ.get(f"{ENV_PREFIX}TIMEOUT"):
            connection["timeout"] = timeout

        if verify_ssl := os.environ.get(f"{ENV_PREFIX}VERIFY_SSL"):
            connection["verify_ssl"] = verify_ssl.lower() not in ("false", "0", "no")

        if api_key := os.environ.get(f"{ENV_PREFIX}API_KEY"):
            auth["api_key"] = api_key
            # A key alone implies key auth
            if auth.get("type", "none") == "none":
                auth["type"] = "api_key"

        if auth_type := os.environ.get(f"{ENV_PREFIX}AUTH_TYPE"):
            auth["type"] = auth_type

        return cls.model_validate(config_dict)

    @classmethod
    def from_file(cls, path: Path | str) -> ReconcilerConfig:
        """Load configuration from a YAML file, then apply environment overrides.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Loaded configuration.

        Raises:
            KongConfigError: If the file is missing, unparsable or invalid.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise KongConfigError(
                "Reconciler configuration not found",
                details=f"Config file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise KongConfigError("Invalid config file format", details=str(e)) from e

        if not isinstance(data, dict):
            raise KongConfigError(
                "Invalid config file format",
                details=f"Expected a mapping at the top level of {config_path}",
            )

        try:
            return cls.from_env(data)
        except ValidationError as e:
            raise KongConfigError("Invalid reconciler configuration", details=str(e)) from e
