"""Random-walk bar generator used when no market data is available."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Mapping

import numpy as np

from ..core.bars import Bar
from ..core.clock import filter_weekend_days
from .base import BarSource

LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_PRICE = 450.0
BASE_PRICES: Mapping[str, float] = {
    "SPY": 450.0,
    "AAPL": 175.0,
    "GOOGL": 2800.0,
    "TSLA": 800.0,
    "MSFT": 350.0,
}

DAILY_VOLATILITY = 0.015
DAILY_DRIFT = 0.0003
INTRADAY_SPREAD = 0.008
MIN_VOLUME = 35_000_000
VOLUME_RANGE = 40_000_000


class SyntheticBarSource(BarSource):
    """Generate a plausible daily history for ``symbol``.

    ``days`` calendar days ending the day before ``end`` are simulated as a
    log-normal random walk; weekend days are dropped afterwards, so the result
    holds roughly ``days * 5 / 7`` bars.
    """

    name = "synthetic"

    def __init__(
        self,
        *,
        days: int = 252,
        end: date | None = None,
        random_state: np.random.Generator | int | None = None,
    ) -> None:
        if days <= 0:
            raise ValueError("days must be positive")
        self.days = int(days)
        self.end = end
        self._rng = (
            random_state
            if isinstance(random_state, np.random.Generator)
            else np.random.default_rng(random_state)
        )

    def fetch_bars(self, symbol: str) -> list[Bar]:
        ticker = symbol.strip().upper()
        base_price = BASE_PRICES.get(ticker, DEFAULT_BASE_PRICE)
        end = self.end or date.today()
        start = end - timedelta(days=self.days)
        LOGGER.info("Generating %s days of synthetic %s data", self.days, ticker)

        rng = self._rng
        shocks = (rng.random(self.days) - 0.5) * 2 * DAILY_VOLATILITY
        prices = base_price * np.exp(np.cumsum(DAILY_DRIFT + shocks))
        spread = prices * INTRADAY_SPREAD

        opens = prices + (rng.random(self.days) - 0.5) * spread
        closes = prices + (rng.random(self.days) - 0.5) * spread
        highs = np.maximum(opens, closes) + rng.random(self.days) * spread * 0.3
        lows = np.minimum(opens, closes) - rng.random(self.days) * spread * 0.3
        volumes = np.floor(rng.random(self.days) * VOLUME_RANGE) + MIN_VOLUME

        bars = [
            Bar(
                date=start + timedelta(days=offset),
                open=round(float(opens[offset]), 2),
                high=round(float(highs[offset]), 2),
                low=round(float(lows[offset]), 2),
                close=round(float(closes[offset]), 2),
                volume=float(volumes[offset]),
                adj_close=round(float(closes[offset]), 2),
            )
            for offset in range(self.days)
        ]
        return filter_weekend_days(bars)


__all__ = ["BASE_PRICES", "SyntheticBarSource"]
