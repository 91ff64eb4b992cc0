from __future__ import annotations

from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field

CONFIG_FILENAME = "jvmsym.toml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
MalformedPolicy = Literal["skip", "abort"]


class JvmSymConfig(BaseModel):
    """Configuration for decoding and record validation."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".jvmsym",
        description="Directory holding exported symbol record files",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Minimum severity for console logging",
    )
    on_malformed: MalformedPolicy = Field(
        default="abort",
        description=(
            "Treatment of malformed descriptors in records: 'abort' reports an "
            "error, 'skip' reports a warning and moves on"
        ),
    )
    strict_schema_version: bool = Field(
        default=False,
        description="Treat records without schema_version as errors",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the root.

    The config output_dir must be a non-empty relative path that remains
    within the root after resolution. Absolute paths and paths that escape
    the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_dir.startswith("~") or output_path.is_absolute():
        msg = "output_dir must be a relative path within the root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> JvmSymConfig:
    """Load configuration from jvmsym.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return JvmSymConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return JvmSymConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
