"""
Shared configuration management for the Roaming Access Gateway.

Settings come from ``ROAMING_*`` environment variables (and ``.env``), then
from the JSON config file when one exists. The file keeps the historical
``{"address": ..., "port": ..., "users": [...]}`` layout.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


UINT32_MAX = 2 ** 32 - 1


class ConfigFileError(ValueError):
    """Raised when the JSON config file cannot be read or decoded."""


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="ROAMING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = "local"
    log_level: str = "info"

    # Listener
    host: str = "0.0.0.0"
    port: int = 2662

    # Upstream API hosts
    account_api_url: str = "https://app.bilibili.com"
    playurl_api_url: str = "https://api.bilibili.com"
    upstream_timeout: float = 5.0

    # Source file for address/port/users
    config_file: Optional[str] = "config.json"


class ServiceConfig(BaseConfig):
    """Gateway configuration including the account allow-list."""

    users: List[int] = Field(default_factory=list)

    @field_validator("users")
    @classmethod
    def _check_account_ids(cls, value: List[int]) -> List[int]:
        for mid in value:
            if mid < 0 or mid > UINT32_MAX:
                raise ValueError(f"account id out of range: {mid}")
        return value

    @field_validator("account_api_url", "playurl_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def load_config_file(path: str) -> Dict[str, Any]:
    """Read the JSON config file and map it onto settings field names."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigFileError(f"failed to load {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigFileError(f"failed to load {path}: expected a JSON object")

    values: Dict[str, Any] = {}
    if "address" in raw:
        values["host"] = raw["address"]
    for key in ("port", "users"):
        if key in raw:
            values[key] = raw[key]
    return values


def get_config(config_file: Optional[str] = None, **overrides: Any) -> ServiceConfig:
    """Get gateway configuration, layering the JSON file over the environment."""
    config = ServiceConfig(**overrides)
    path = config_file or config.config_file
    if not path or not Path(path).is_file():
        return config

    file_values = load_config_file(path)
    return ServiceConfig(**{**file_values, **overrides, "config_file": path})
