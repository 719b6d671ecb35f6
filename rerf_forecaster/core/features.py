"""Feature matrix construction for the residual-enhanced forecaster."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from .bars import Bar, bars_to_frame
from .indicators import price_change_ratios, rolling_rsi, rolling_sma

FEATURE_WINDOW = 60
VOLUME_NORMALIZER = 40_000_000.0

# Column 0 is the unpenalised intercept; the solver relies on this order.
FEATURE_COLUMNS: tuple[str, ...] = (
    "intercept",
    "close",
    "sma5",
    "sma20",
    "rsi",
    "volatility",
    "price_change",
    "volume_ratio",
    "sma_ratio",
    "volatility_squared",
    "rsi_normalized",
    "close_x_volatility",
    "sma5_x_rsi",
)


def trailing_window(bars: Sequence[Bar], window: int = FEATURE_WINDOW) -> list[Bar]:
    """Return the last ``min(window, len(bars))`` bars."""

    return list(bars[-window:]) if window > 0 else []


def build_feature_matrix(
    bars: Sequence[Bar], window: int = FEATURE_WINDOW
) -> pd.DataFrame:
    """Build one feature row per bar of the trailing window.

    Every indicator is computed on the windowed bars only, so the first row of the
    window behaves like the start of a series (no prior close, short averages).
    """

    frame = bars_to_frame(trailing_window(bars, window))
    if frame.empty:
        return pd.DataFrame(columns=list(FEATURE_COLUMNS), dtype=float)

    close = frame["Close"].astype(float)
    volume = frame["Volume"].astype(float)

    sma5 = rolling_sma(close, 5)
    sma20 = rolling_sma(close, 20)
    rsi = rolling_rsi(close)
    changes = price_change_ratios(close)
    volatility = changes["volatility"]

    features = pd.DataFrame(
        {
            "intercept": np.ones(len(close)),
            "close": close,
            "sma5": sma5,
            "sma20": sma20,
            "rsi": rsi,
            "volatility": volatility,
            "price_change": changes["price_change"],
            "volume_ratio": volume / VOLUME_NORMALIZER,
            "sma_ratio": sma5 / sma20,
            "volatility_squared": volatility * volatility,
            "rsi_normalized": (rsi - 50.0) / 50.0,
            "close_x_volatility": close * volatility,
            "sma5_x_rsi": sma5 * rsi / 100.0,
        },
        index=frame.index,
    )
    return features.loc[:, list(FEATURE_COLUMNS)]


def training_targets(bars: Sequence[Bar], window: int = FEATURE_WINDOW) -> np.ndarray:
    """Closing prices aligned with the rows of :func:`build_feature_matrix`."""

    return np.asarray([bar.close for bar in trailing_window(bars, window)], dtype=float)


__all__ = [
    "FEATURE_COLUMNS",
    "FEATURE_WINDOW",
    "VOLUME_NORMALIZER",
    "build_feature_matrix",
    "trailing_window",
    "training_targets",
]
