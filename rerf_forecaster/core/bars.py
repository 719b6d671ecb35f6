"""Daily bar records and their pandas representation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Iterable

import pandas as pd

PRICE_COLUMNS: tuple[str, ...] = ("Open", "High", "Low", "Close", "Volume", "Adj Close")


@dataclass(frozen=True, slots=True)
class Bar:
    """A single daily OHLCV observation."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float
    adj_close: float

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["date"] = self.date.isoformat()
        return payload


def bars_to_frame(bars: Iterable[Bar]) -> pd.DataFrame:
    """Return ``bars`` as a dataframe indexed by ``Date``."""

    records = [
        {
            "Date": pd.Timestamp(bar.date),
            "Open": bar.open,
            "High": bar.high,
            "Low": bar.low,
            "Close": bar.close,
            "Volume": bar.volume,
            "Adj Close": bar.adj_close,
        }
        for bar in bars
    ]
    if not records:
        return pd.DataFrame(columns=list(PRICE_COLUMNS), index=pd.DatetimeIndex([], name="Date"))
    return pd.DataFrame.from_records(records).set_index("Date")


def bars_from_frame(frame: pd.DataFrame) -> list[Bar]:
    """Convert a price dataframe into chronologically ordered bars.

    The frame may carry the dates either as its index or as a ``Date`` column.
    Missing ``Open``/``High``/``Low``/``Adj Close`` values default to the close and a
    missing ``Volume`` defaults to zero. Rows without a close are dropped.
    """

    if "Close" not in frame.columns:
        raise ValueError("The dataframe must contain a 'Close' column to build bars.")

    data = frame.copy()
    if "Date" in data.columns:
        data = data.set_index("Date")
    data.index = pd.to_datetime(data.index)

    data["Close"] = pd.to_numeric(data["Close"], errors="coerce")
    data = data.loc[data["Close"].notna()].copy()
    for column in ("Open", "High", "Low", "Adj Close"):
        if column in data.columns:
            values = pd.to_numeric(data[column], errors="coerce")
            data[column] = values.fillna(data["Close"])
        else:
            data[column] = data["Close"]
    if "Volume" in data.columns:
        data["Volume"] = pd.to_numeric(data["Volume"], errors="coerce").fillna(0.0)
    else:
        data["Volume"] = 0.0

    data = data.sort_index()
    return [
        Bar(
            date=timestamp.date(),
            open=float(row["Open"]),
            high=float(row["High"]),
            low=float(row["Low"]),
            close=float(row["Close"]),
            volume=float(row["Volume"]),
            adj_close=float(row["Adj Close"]),
        )
        for timestamp, row in data.iterrows()
    ]


__all__ = ["Bar", "PRICE_COLUMNS", "bars_from_frame", "bars_to_frame"]
