"""Technical indicator computations used by the feature builder."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view

RSI_PERIOD = 14
NEUTRAL_RSI = 50.0


def _close_array(prices: Sequence[Any] | pd.Series | np.ndarray) -> np.ndarray:
    if isinstance(prices, pd.Series):
        return prices.to_numpy(dtype=float)
    if isinstance(prices, np.ndarray):
        return prices.astype(float, copy=False)
    return np.asarray(
        [float(getattr(item, "close", item)) for item in prices], dtype=float
    )


def _rsi_from_averages(avg_gain: np.ndarray | float, avg_loss: np.ndarray | float):
    # A zero average loss is replaced by 1 rather than producing an infinite RS.
    divisor = np.where(np.asarray(avg_loss) == 0, 1.0, avg_loss)
    rs = np.asarray(avg_gain) / divisor
    return 100.0 - (100.0 / (1.0 + rs))


def relative_strength_index(
    prices: Sequence[Any] | pd.Series | np.ndarray, period: int = RSI_PERIOD
) -> float:
    """Return the RSI of the last ``period`` close-to-close changes in ``prices``.

    ``prices`` may be a sequence of bars (anything with a ``close`` attribute) or of
    plain closes. Fewer than ``period`` observations yield the neutral value 50.
    Averages always divide by ``period``, so with exactly ``period`` observations the
    ``period - 1`` available changes are averaged over ``period``.
    """

    close = _close_array(prices)
    if close.size < period:
        return NEUTRAL_RSI

    changes = np.diff(close)
    window = np.concatenate([np.zeros(period), changes])[-period:]
    avg_gain = np.clip(window, 0.0, None).sum() / period
    avg_loss = (-np.clip(window, None, 0.0)).sum() / period
    return float(_rsi_from_averages(avg_gain, avg_loss))


def rolling_rsi(close: pd.Series, period: int = RSI_PERIOD) -> pd.Series:
    """Return the RSI of every growing prefix of ``close``.

    Element ``i`` equals ``relative_strength_index(close.iloc[: i + 1])``.
    """

    values = close.to_numpy(dtype=float)
    if values.size == 0:
        return pd.Series(dtype=float, index=close.index, name=f"RSI_{period}")

    delta = np.concatenate([[0.0], np.diff(values)])
    padded = np.concatenate([np.zeros(period - 1), delta])
    windows = sliding_window_view(padded, period)
    avg_gain = np.clip(windows, 0.0, None).sum(axis=1) / period
    avg_loss = (-np.clip(windows, None, 0.0)).sum(axis=1) / period

    rsi = _rsi_from_averages(avg_gain, avg_loss)
    observations = np.arange(1, values.size + 1)
    rsi = np.where(observations < period, NEUTRAL_RSI, rsi)
    return pd.Series(rsi, index=close.index, name=f"RSI_{period}")


def simple_moving_average(
    prices: Sequence[Any] | pd.Series | np.ndarray,
    period: int,
    index: int | None = None,
) -> float:
    """Mean of the trailing ``period`` closes ending at ``index`` (default: last).

    Near the start of the series fewer observations are averaged; later values are
    never used.
    """

    close = _close_array(prices)
    if close.size == 0:
        raise ValueError("simple_moving_average requires at least one price")
    end = close.size - 1 if index is None else int(index)
    if end < 0 or end >= close.size:
        raise IndexError(f"index {index} out of range for {close.size} prices")
    start = max(0, end - period + 1)
    return float(close[start : end + 1].mean())


def rolling_sma(close: pd.Series, period: int) -> pd.Series:
    return close.rolling(window=period, min_periods=1).mean().rename(f"SMA_{period}")


def price_change_ratios(close: pd.Series) -> pd.DataFrame:
    """Return the signed and absolute bar-over-bar change relative to the prior close.

    The first row has no predecessor and is reported as zero.
    """

    previous = close.shift(1)
    change = ((close - previous) / previous).fillna(0.0)
    return pd.DataFrame(
        {"price_change": change, "volatility": change.abs()},
        index=close.index,
    )


__all__ = [
    "NEUTRAL_RSI",
    "RSI_PERIOD",
    "price_change_ratios",
    "relative_strength_index",
    "rolling_rsi",
    "rolling_sma",
    "simple_moving_average",
]
