from __future__ import annotations

from pathlib import Path

import pytest

from settings.config import ConfigError, load_config, resolve_output_dir


def _write_config(root: Path, toml_content: str) -> None:
    (root / "jvmsym.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.output_dir == ".jvmsym"
    assert config.log_level == "WARNING"
    assert config.on_malformed == "abort"
    assert config.strict_schema_version is False


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.on_malformed == "abort"


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
output_dir = "records"
log_level = "DEBUG"
on_malformed = "skip"
strict_schema_version = true
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.output_dir == "records"
    assert config.log_level == "DEBUG"
    assert config.on_malformed == "skip"
    assert config.strict_schema_version is True


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_malformed_policy_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'on_malformed = "ignore"')

    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "log_level = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_resolve_output_dir_inside_root(tmp_path: Path) -> None:
    assert resolve_output_dir(tmp_path, "out") == (tmp_path / "out").resolve()


@pytest.mark.parametrize("bad", ["", "~/records", "../outside", "/abs/path"])
def test_resolve_output_dir_rejects_escapes(tmp_path: Path, bad: str) -> None:
    with pytest.raises(ConfigError):
        resolve_output_dir(tmp_path, bad)
