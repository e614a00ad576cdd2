"""Configuration for the gun-trust command surface."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

DEFAULT_HOME = Path("~/.gun-trust")
DEFAULT_CONFIG_PATH = DEFAULT_HOME / "config.yaml"
CONFIG_ENV_VAR = "GUN_TRUST_CONFIG"

# Organization written into every generated certificate
DEFAULT_ORGANIZATION = "gun-trust"


class KeysConfig(BaseModel):
    """Locations and policy used by the keys commands."""

    model_config = {"validate_default": True}

    trust_dir: Path = Field(
        default=DEFAULT_HOME / "trusted_certificates",
        description="Directory holding trusted CA certificates",
    )
    private_dir: Path = Field(
        default=DEFAULT_HOME / "private",
        description="Root of the private key namespace",
    )
    fetch_timeout: float = Field(
        default=10.0, gt=0, description="Timeout in seconds for URL fetches"
    )
    organization: str = Field(
        default=DEFAULT_ORGANIZATION,
        description="Organization for generated certificates",
    )

    @field_validator("trust_dir", "private_dir", mode="after")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @classmethod
    def from_file(cls, config_path: Optional[str | Path] = None) -> "KeysConfig":
        """Load configuration from a YAML file.

        When no path is given, GUN_TRUST_CONFIG is consulted and then the
        default location; a missing file at the default location yields
        the defaults.

        Args:
            config_path: Explicit path to a YAML config file

        Returns:
            KeysConfig instance

        Raises:
            ConfigurationError: If an explicit file is missing or the file
                cannot be parsed
        """
        explicit = config_path is not None or CONFIG_ENV_VAR in os.environ
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
        config_path = Path(config_path).expanduser()

        if not config_path.exists():
            if explicit:
                raise ConfigurationError(f"Config file not found: {config_path}")
            return cls()

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read config {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config {config_path} must be a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config {config_path}: {e}") from e
