"""Bar sources feeding the forecaster."""

from .base import BarSource, ensure_chronological
from .csv_source import CsvBarSource
from .synthetic import BASE_PRICES, SyntheticBarSource

__all__ = [
    "BASE_PRICES",
    "BarSource",
    "CsvBarSource",
    "SyntheticBarSource",
    "ensure_chronological",
]
