"""Configuration package for the backtest engine."""

from .loader import load_config
from .models import EngineConfig

__all__ = [
    "EngineConfig",
    "load_config",
]
