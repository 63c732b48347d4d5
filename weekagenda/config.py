"""
Configuration management using Pydantic models loaded from YAML.
"""

import os
from pathlib import Path

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

from .services.week_agenda import DEFAULT_HEADER_FORMAT

CONFIG_ENV_VAR = "WEEKAGENDA_CONFIG"


class DisplayConfig(BaseModel):
    """Settings for laying out and labelling the week."""
    row_height: float = 48.0  # height of a full 24h day column
    header_format: str = DEFAULT_HEADER_FORMAT
    locale: str = "en"

    @field_validator("row_height")
    @classmethod
    def validate_row_height(cls, value: float) -> float:
        """Ensure the day column has a usable height."""
        if value <= 0:
            raise ValueError(f"row_height must be greater than zero, got {value}")
        return value

    @field_validator("header_format")
    @classmethod
    def validate_header_format(cls, value: str) -> str:
        """Ensure header labels are not blank."""
        if not value.strip():
            raise ValueError("header_format must not be empty")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    target: str = "week"
    timezone: str = "UTC"  # used to read agenda files, never to convert
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @field_validator("target")
    @classmethod
    def validate_target(cls, value: str) -> str:
        """Ensure the rendering target is named."""
        if not value.strip():
            raise ValueError("target must not be empty")
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is known to pendulum."""
        try:
            pendulum.timezone(value)
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """
    Resolve the config file used when none is given on the command line.

    Order: $WEEKAGENDA_CONFIG, ./config.yaml, ~/.config/weekagenda/config.yaml.
    The last candidate is returned even if it does not exist.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    local_path = Path.cwd() / "config.yaml"
    if local_path.exists():
        return local_path

    return Path.home() / ".config" / "weekagenda" / "config.yaml"
