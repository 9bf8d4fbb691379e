"""Pydantic configuration models with type safety and validation."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from quant_toolkit.models.numeric import Amount


class EngineConfig(BaseModel):
    """Backtest engine configuration."""

    initial_cash: Decimal = Field(
        default=Decimal("10000"),
        ge=0,
        description="Starting portfolio cash balance",
    )
    detailed_logging: bool = Field(
        default=False,
        description="Log every snapshot's value and actions at DEBUG level",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level used by entry-point scripts",
    )

    @property
    def initial_cash_amount(self) -> Amount:
        """Starting cash as an Amount."""
        return Amount(self.initial_cash)
