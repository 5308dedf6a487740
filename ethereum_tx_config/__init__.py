"""
Initializes the config package.

The config package is responsible for loading the environment configuration
of the transaction tools and applying it to the transaction defaults and the
logging setup.
"""

from .env import (
    Config,
    Defaults,
    EnvConfig,
    LoggingConfig,
    apply_config,
    create_default_config,
    env_path,
)

__all__ = [
    "Config",
    "Defaults",
    "EnvConfig",
    "LoggingConfig",
    "apply_config",
    "create_default_config",
    "env_path",
]
