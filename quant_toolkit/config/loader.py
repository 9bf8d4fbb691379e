"""Configuration loader with JSON file and environment variable support."""

import json
import os
from pathlib import Path
from typing import Any

from .models import EngineConfig

_TRUE_VALUES = {"1", "true", "yes", "on"}


def load_config(config_path: str | None = None) -> EngineConfig:
    """
    Load configuration from a JSON file with environment variable overrides.

    Priority: env vars > config file > defaults

    Args:
        config_path: Path to JSON config file. If None, uses QUANT_TOOLKIT_CONFIG_PATH;
                     if that is unset too, only defaults and env overrides apply.

    Returns:
        Validated EngineConfig instance

    Raises:
        FileNotFoundError: If the given config file doesn't exist
        json.JSONDecodeError: If config file has invalid JSON
        pydantic.ValidationError: If config values are invalid
    """
    if config_path is None:
        config_path = os.environ.get("QUANT_TOOLKIT_CONFIG_PATH")

    config_data: dict[str, Any] = {}
    if config_path is not None:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        with open(config_file) as f:
            config_data = json.load(f)

    # Format: QUANT_TOOLKIT_<FIELD>
    if initial_cash := os.environ.get("QUANT_TOOLKIT_INITIAL_CASH"):
        config_data["initial_cash"] = initial_cash

    if detailed := os.environ.get("QUANT_TOOLKIT_DETAILED_LOGGING"):
        config_data["detailed_logging"] = detailed.strip().lower() in _TRUE_VALUES

    if log_level := os.environ.get("QUANT_TOOLKIT_LOG_LEVEL"):
        config_data["log_level"] = log_level.upper()

    return EngineConfig(**config_data)
