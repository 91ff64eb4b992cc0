"""Configuration loading for jvmsym."""

from settings.config import (
    ConfigError,
    JvmSymConfig,
    MalformedPolicy,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "ConfigError",
    "JvmSymConfig",
    "MalformedPolicy",
    "load_config",
    "resolve_output_dir",
]
