from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from objstore.exceptions import ConfigurationError
from objstore.models import ClientConfig

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

CONFIG_ENV_VAR = "OBJSTORE_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/default.yaml")


class StorageSettings(BaseModel):
    backend: Literal["s3", "local", "recording"] = "s3"
    region: str | None = None
    profile: str | None = None
    endpoint_url: str | None = None
    server_side_encryption: str | None = "AES256"
    local_root: str = ".objstore"

    @field_validator("region", "profile", "endpoint_url", "server_side_encryption", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:  # noqa: D401
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def client_config(self) -> ClientConfig:
        return ClientConfig(
            region=self.region,
            profile=self.profile,
            endpoint_url=self.endpoint_url,
            server_side_encryption=self.server_side_encryption,
        )


class LoggingSettings(BaseModel):
    level: str = Field("INFO")
    json_format: bool = False
    log_file: str | None = None

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:  # noqa: D401
        level = value.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


class Settings(BaseModel):
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                OBJSTORE_CONFIG environment variable or defaults to config/default.yaml.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file does not exist or its content is invalid.
        """
        config_path = path or Path(os.getenv(CONFIG_ENV_VAR, str(DEFAULT_CONFIG_PATH)))
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}", {"path": str(config_path)}
            )
        try:
            with config_path.open("r", encoding="utf-8") as fp:
                payload = yaml.safe_load(fp) or {}
            return cls(**payload)
        except Exception as exc:
            raise ConfigurationError(
                f"Invalid configuration: {exc}", {"path": str(config_path)}
            ) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "Settings",
    "StorageSettings",
    "LoggingSettings",
    "get_settings",
]
