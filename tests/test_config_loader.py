"""Unit tests for configuration loader."""

import json
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from quant_toolkit.config.loader import load_config


def test_load_config_defaults_without_file() -> None:
    """Test defaults apply when no path is given or configured."""
    config = load_config()
    assert config.initial_cash == Decimal("10000")
    assert config.detailed_logging is False


def test_load_config_from_explicit_path(tmp_path: Path) -> None:
    """Test loading config from explicit file path."""
    config_file = tmp_path / "engine.json"
    config_file.write_text(json.dumps({"initial_cash": "5000", "detailed_logging": True}))

    config = load_config(str(config_file))
    assert config.initial_cash == Decimal("5000")
    assert config.detailed_logging is True


def test_load_config_from_env_var(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test loading config from QUANT_TOOLKIT_CONFIG_PATH environment variable."""
    config_file = tmp_path / "env_config.json"
    config_file.write_text(json.dumps({"initial_cash": 20000}))

    monkeypatch.setenv("QUANT_TOOLKIT_CONFIG_PATH", str(config_file))

    config = load_config()
    assert config.initial_cash == Decimal("20000")


def test_load_config_file_not_found(tmp_path: Path) -> None:
    """Test error when config file doesn't exist."""
    nonexistent = tmp_path / "nonexistent.json"

    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config(str(nonexistent))


def test_load_config_invalid_json(tmp_path: Path) -> None:
    """Test error when config file has invalid JSON."""
    config_file = tmp_path / "invalid.json"
    config_file.write_text("{ invalid json }")

    with pytest.raises(json.JSONDecodeError):
        load_config(str(config_file))


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test environment variables take precedence over file values."""
    config_file = tmp_path / "engine.json"
    config_file.write_text(json.dumps({"initial_cash": "5000", "log_level": "INFO"}))

    monkeypatch.setenv("QUANT_TOOLKIT_INITIAL_CASH", "7500.25")
    monkeypatch.setenv("QUANT_TOOLKIT_LOG_LEVEL", "debug")

    config = load_config(str(config_file))
    assert config.initial_cash == Decimal("7500.25")
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("1", True), ("YES", True), ("on", True), ("false", False), ("0", False)],
)
def test_detailed_logging_env(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    """Test boolean parsing of QUANT_TOOLKIT_DETAILED_LOGGING."""
    monkeypatch.setenv("QUANT_TOOLKIT_DETAILED_LOGGING", raw)
    assert load_config().detailed_logging is expected


def test_invalid_env_value(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test invalid override values surface as validation errors."""
    monkeypatch.setenv("QUANT_TOOLKIT_INITIAL_CASH", "-100")

    with pytest.raises(ValidationError):
        load_config()
