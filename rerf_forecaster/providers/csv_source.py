"""Load daily bars from a Yahoo-style CSV export."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from ..core.bars import Bar, bars_from_frame
from ..core.clock import filter_weekend_days
from .base import BarSource

LOGGER = logging.getLogger(__name__)


class CsvBarSource(BarSource):
    """Read ``Date,Open,High,Low,Close,Volume[,Adj Close]`` rows from ``path``.

    The symbol is informational only; the file is expected to hold a single series.
    """

    name = "csv"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def fetch_bars(self, symbol: str) -> list[Bar]:
        frame = pd.read_csv(self.path)
        frame.columns = [str(column).strip() for column in frame.columns]
        missing = {"Date", "Close"} - set(frame.columns)
        if missing:
            raise ValueError(
                f"{self.path} is missing required column(s): {', '.join(sorted(missing))}"
            )

        frame["Date"] = pd.to_datetime(frame["Date"], errors="coerce")
        frame = frame.dropna(subset=["Date"])
        bars = filter_weekend_days(bars_from_frame(frame))
        if not bars:
            raise ValueError(f"{self.path} does not contain any usable price rows")

        LOGGER.info("Loaded %s %s bars from %s", len(bars), symbol.upper(), self.path)
        return bars


__all__ = ["CsvBarSource"]
