"""
A module for exposing the environment configuration of the transaction tools.

This module is responsible for loading, parsing, and validating the
configuration from an `env.yaml` file. It uses Pydantic to ensure that the
configuration adheres to expected formats and types.

Functions:
- create_default_config: Creates a default configuration file if it doesn't exist.
- apply_config: Applies a loaded configuration to the transaction defaults and logging.

Classes:
- EnvConfig: Loads the configuration and exposes it as Python objects.
- Defaults: Default values used when building transactions.
- LoggingConfig: Log level and optional log file.
- Config: Represents the overall configuration structure with validation.

Usage:
- Initialize an instance of EnvConfig to load the configuration.
- Access configuration values via attributes (e.g., EnvConfig().defaults.chain_id).
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from jinja2 import Environment, PackageLoader
from pydantic import BaseModel, Field, ValidationError, field_validator

from ethereum_tx_logging import LogLevel, configure_logging, get_logger
from ethereum_tx_types import TransactionDefaults

logger = get_logger(__name__)

ENV_PATH_VARIABLE = "ETHEREUM_TX_CONFIG"
DEFAULT_ENV_PATH = Path("env.yaml")


def env_path() -> Path:
    """Return the configuration path, overridable through `ETHEREUM_TX_CONFIG`."""
    return Path(os.environ.get(ENV_PATH_VARIABLE, DEFAULT_ENV_PATH))


class Defaults(BaseModel):
    """
    Default values used when building transactions.

    Attributes:
    - chain_id (int): Chain ID of typed transactions that do not specify one.

    """

    chain_id: int = Field(1, ge=0)


class LoggingConfig(BaseModel):
    """
    Represents the logging configuration.

    Attributes:
    - log_level (str): Name or numeric value of the log level.
    - log_file (Path): Optional file that receives a copy of the log.

    """

    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def check_log_level(cls, value):
        """Check that the log level is known to the logging module."""
        LogLevel.from_cli(str(value))
        return str(value)


class Config(BaseModel):
    """
    Represents the overall environment configuration.

    Attributes:
    - defaults (Defaults): Transaction defaults.
    - logging (LoggingConfig): Logging setup.

    """

    defaults: Defaults = Defaults()
    logging: LoggingConfig = LoggingConfig()


class EnvConfig(Config):
    """
    Loads and validates environment configuration from `env.yaml`.

    This is a wrapper class for the Config model. It reads a config file
    from disk into a Config model and then exposes it.
    """

    def __init__(self, path: Optional[Path] = None):
        """Init for the EnvConfig class."""
        path = env_path() if path is None else Path(path)
        if not path.exists():
            raise FileNotFoundError(
                f"The configuration file '{path}' does not exist. "
                "Run `ethtx make-config` to create it."
            )

        with path.open("r") as file:
            try:
                config_data = yaml.safe_load(file) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid configuration: {e}") from e
        if not isinstance(config_data, dict):
            raise ValueError(f"Invalid configuration: expected a mapping in '{path}'")
        try:
            # Validate and parse with Pydantic
            super().__init__(**config_data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e
        logger.debug(f"loaded configuration from {path}")


def create_default_config(path: Optional[Path] = None) -> Path:
    """
    Render the default configuration to `path`.

    An existing file is never overwritten: `FileExistsError` is raised instead.
    """
    path = env_path() if path is None else Path(path)
    if path.exists():
        raise FileExistsError(
            f"The configuration file '{path}' already exists. "
            "Please update it manually if needed."
        )

    template_environment = Environment(
        loader=PackageLoader("ethereum_tx_config"), trim_blocks=True, lstrip_blocks=True
    )
    template = template_environment.get_template("env.yaml.j2")

    with path.open("w") as file:
        file.write(template.render(config=Config()))
    return path


def apply_config(config: Config) -> None:
    """Apply the configured transaction defaults and set up logging."""
    TransactionDefaults.chain_id = config.defaults.chain_id
    configure_logging(log_level=config.logging.log_level, log_file=config.logging.log_file)
    logger.verbose(f"default chain ID set to {config.defaults.chain_id}")
