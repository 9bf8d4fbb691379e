"""Unit tests for configuration models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from quant_toolkit.config.models import EngineConfig
from quant_toolkit.models import Amount


def test_engine_config_defaults() -> None:
    """Test EngineConfig default values."""
    config = EngineConfig()
    assert config.initial_cash == Decimal("10000")
    assert config.detailed_logging is False
    assert config.log_level == "INFO"


def test_initial_cash_amount() -> None:
    """Test initial cash is exposed as an Amount."""
    config = EngineConfig(initial_cash=Decimal("2500.50"))
    assert config.initial_cash_amount == Amount.of("2500.50")


def test_initial_cash_from_string() -> None:
    """Test numeric strings are coerced without float rounding."""
    config = EngineConfig(initial_cash="0.1")  # type: ignore[arg-type]
    assert config.initial_cash == Decimal("0.1")


def test_zero_initial_cash_allowed() -> None:
    """Test zero is a valid starting balance."""
    assert EngineConfig(initial_cash=Decimal(0)).initial_cash_amount.is_zero()


def test_negative_initial_cash_rejected() -> None:
    """Test negative starting cash is invalid."""
    with pytest.raises(ValidationError):
        EngineConfig(initial_cash=Decimal("-1"))


def test_invalid_log_level_rejected() -> None:
    """Test unknown log levels are invalid."""
    with pytest.raises(ValidationError):
        EngineConfig(log_level="VERBOSE")  # type: ignore[arg-type]
