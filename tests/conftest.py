import os
import sys
from decimal import Decimal
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:  # pragma: no cover
    sys.path.append(str(PROJECT_ROOT))

from quant_toolkit.models import Amount, Price, SimpleSnapshot  # noqa: E402
from quant_toolkit.strategy import Portfolio  # noqa: E402
from tests.helpers import START_TIME, make_snapshots  # noqa: E402


@pytest.fixture
def snapshots() -> list[SimpleSnapshot]:
    """Five hourly ETH/USD snapshots priced 100, 105, ..., 120."""
    return make_snapshots(5)


@pytest.fixture
def snapshot() -> SimpleSnapshot:
    """Single snapshot with ETH/USD at 2000 and BTC/USD at 40000."""
    return SimpleSnapshot(
        timestamp=START_TIME,
        price_map={"ETH/USD": Price.of(2000), "BTC/USD": Price.of(40000)},
        metadata={"funding_rate": Decimal("0.0001")},
    )


@pytest.fixture
def portfolio() -> Portfolio:
    """Portfolio holding 10000 cash and nothing else."""
    return Portfolio(Amount.of(10000))


@pytest.fixture(autouse=True)
def clean_config_env() -> Generator[None, None, None]:
    """Ensure QUANT_TOOLKIT_* env vars do not interfere with tests unless explicitly set."""
    original_env = {}
    keys_to_clear = [
        "QUANT_TOOLKIT_CONFIG_PATH",
        "QUANT_TOOLKIT_INITIAL_CASH",
        "QUANT_TOOLKIT_DETAILED_LOGGING",
        "QUANT_TOOLKIT_LOG_LEVEL",
    ]

    for key in keys_to_clear:
        if key in os.environ:
            original_env[key] = os.environ[key]
            os.environ.pop(key, None)

    yield

    for key, value in original_env.items():
        os.environ[key] = value
