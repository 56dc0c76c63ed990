"""
Pydantic-based configuration system for Rainbridge.

Settings come from an optional TOML or JSON file, a ``.env`` file and the
environment, in that order of precedence for API tokens: values in the
configuration file win, environment variables fill the gaps.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator

from rainbridge.utils.error_handler import ConfigurationError

RAINDROP_TOKEN_ENV = "RAINDROP_API_TOKEN"
KARAKEEP_TOKEN_ENV = "KARAKEEP_API_TOKEN"
KARAKEEP_URL_ENV = "KARAKEEP_BASE_URL"

PLACEHOLDER_TOKENS = {"your-raindrop-token-here", "your-karakeep-token-here"}


def _validate_token(v, info):
    if v is None or v == "":
        return None

    token = v.get_secret_value() if isinstance(v, SecretStr) else str(v)
    if token in PLACEHOLDER_TOKENS:
        raise ValueError(
            f"Please replace the placeholder {info.field_name} with your actual "
            f"API token."
        )
    return SecretStr(token)


class RaindropConfig(BaseModel):
    """Source service settings."""

    api_token: Optional[SecretStr] = Field(
        default=None, description="Raindrop.io API token"
    )
    base_url: str = Field(
        default="https://api.raindrop.io/rest/v1",
        description="Raindrop.io REST API root",
    )

    @field_validator("api_token", mode="before")
    @classmethod
    def validate_token(cls, v, info):
        return _validate_token(v, info)


class KarakeepConfig(BaseModel):
    """Destination service settings."""

    api_token: Optional[SecretStr] = Field(
        default=None, description="Karakeep API token"
    )
    base_url: str = Field(
        default="https://api.karakeep.app/v1",
        description="Karakeep API root (change for self-hosted instances)",
    )

    @field_validator("api_token", mode="before")
    @classmethod
    def validate_token(cls, v, info):
        return _validate_token(v, info)


class NetworkConfig(BaseModel):
    """HTTP behaviour shared by both clients."""

    timeout: float = Field(
        default=30.0, gt=0, le=300, description="Request timeout in seconds"
    )
    max_retries: int = Field(
        default=5, ge=0, le=10, description="Retries after HTTP 429"
    )
    base_delay: float = Field(
        default=1.0, gt=0, le=60, description="First backoff delay in seconds"
    )


class TransferConfig(BaseModel):
    """Import behaviour."""

    workers: int = Field(
        default=1,
        ge=1,
        le=16,
        description="Folders imported concurrently (1 = sequential)",
    )
    max_pages: Optional[int] = Field(
        default=None,
        ge=1,
        description="Safety cap on pages read per collection (unbounded if unset)",
    )


class RainbridgeConfig(BaseModel):
    """Main configuration model."""

    raindrop: RaindropConfig = Field(default_factory=RaindropConfig)
    karakeep: KarakeepConfig = Field(default_factory=KarakeepConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    transfer: TransferConfig = Field(default_factory=TransferConfig)


class ConfigurationManager:
    """Manages loading and validation of configuration from multiple sources."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        env_file: Optional[Path] = None,
        environ: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file (TOML or JSON)
            env_file: ``.env`` file to load; ``.env`` in the working
                directory when omitted
            environ: Environment mapping to read; ``os.environ`` when omitted
        """
        self._config: Optional[RainbridgeConfig] = None
        self._environ = environ
        self._load_configuration(config_path, env_file)

    def _load_configuration(
        self, config_path: Optional[Path], env_file: Optional[Path]
    ) -> None:
        config_data: Dict[str, Any] = {}
        if config_path:
            config_data = self._load_config_file(Path(config_path))

        if self._environ is None:
            load_dotenv(env_file or Path.cwd() / ".env")
            self._environ = dict(os.environ)

        self._load_tokens_from_env(config_data)

        try:
            self._config = RainbridgeConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(format_validation_error(e)) from e

    def _load_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Load configuration from TOML or JSON file."""
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()
        try:
            if suffix == ".toml":
                return toml.load(config_path)
            elif suffix == ".json":
                with open(config_path, "r", encoding="utf-8") as f:
                    return json.load(f)
        except (toml.TomlDecodeError, json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {config_path}: {e}"
            ) from e

        raise ConfigurationError(
            f"Unsupported configuration file format: {config_path.suffix}"
        )

    def _load_tokens_from_env(self, config_data: Dict[str, Any]) -> None:
        """Fill API tokens (and the Karakeep URL) from the environment."""
        raindrop = config_data.setdefault("raindrop", {})
        karakeep = config_data.setdefault("karakeep", {})

        raindrop_token = self._environ.get(RAINDROP_TOKEN_ENV)
        karakeep_token = self._environ.get(KARAKEEP_TOKEN_ENV)
        karakeep_url = self._environ.get(KARAKEEP_URL_ENV)

        if raindrop_token and not raindrop.get("api_token"):
            raindrop["api_token"] = raindrop_token
        if karakeep_token and not karakeep.get("api_token"):
            karakeep["api_token"] = karakeep_token
        if karakeep_url and "base_url" not in karakeep:
            karakeep["base_url"] = karakeep_url

    def update_from_cli_args(self, args: Dict[str, Any]) -> None:
        """Apply command-line overrides; ``None`` values are ignored."""
        config_dict = self.config.model_dump()

        if args.get("workers") is not None:
            config_dict["transfer"]["workers"] = args["workers"]
        if args.get("max_pages") is not None:
            config_dict["transfer"]["max_pages"] = args["max_pages"]
        if args.get("max_retries") is not None:
            config_dict["network"]["max_retries"] = args["max_retries"]
        if args.get("karakeep_url"):
            config_dict["karakeep"]["base_url"] = args["karakeep_url"]

        try:
            self._config = RainbridgeConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(format_validation_error(e)) from e

    @property
    def config(self) -> RainbridgeConfig:
        if not self._config:
            raise RuntimeError("Configuration not loaded")
        return self._config

    def get_token(self, service: str) -> Optional[str]:
        """Get the API token for ``"raindrop"`` or ``"karakeep"``."""
        section = getattr(self.config, service, None)
        if section is None:
            raise ValueError(f"Unknown service: {service}")
        if section.api_token is None:
            return None
        return section.api_token.get_secret_value()

    def require_tokens(self) -> None:
        """
        Raise ``ConfigurationError`` naming every missing API token.
        """
        missing: List[str] = []
        if not self.get_token("raindrop"):
            missing.append(RAINDROP_TOKEN_ENV)
        if not self.get_token("karakeep"):
            missing.append(KARAKEEP_TOKEN_ENV)

        if missing:
            raise ConfigurationError(
                "Missing API token(s): "
                + ", ".join(missing)
                + ". Set them in the environment, a .env file or the "
                "configuration file."
            )


def format_validation_error(error: ValidationError) -> str:
    """
    Convert a Pydantic ValidationError into a readable message.

    Args:
        error: Pydantic ValidationError instance

    Returns:
        One line per invalid setting
    """
    lines = ["Configuration validation failed:"]
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "configuration"
        lines.append(f"  {location}: {detail.get('msg', 'invalid value')}")
    return "\n".join(lines)
