from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Iterable, Literal, Sequence

import pandas as pd

Trend = Literal["up", "down", "neutral"]

NEXT_WEEK_INDEX = 6


@dataclass(frozen=True)
class Prediction:
    """Forecast for a single trading day."""

    date: date
    predicted_price: float
    confidence_interval_lower: float
    confidence_interval_upper: float
    trend: Trend

    @property
    def confidence_width(self) -> float:
        return self.confidence_interval_upper - self.confidence_interval_lower

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dictionary representation suitable for serialization."""

        payload = asdict(self)
        payload["date"] = self.date.isoformat()
        return payload


@dataclass(frozen=True)
class ForecastSummary:
    """Headline figures derived from a prediction sequence."""

    next_week_target: float | None
    confidence_range: float
    trend: Trend
    forecast_days: int
    final_price: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_predictions(predictions: Sequence[Prediction]) -> ForecastSummary | None:
    """Summarise a forecast the way the dashboard headline cards present it.

    ``next_week_target`` is the seventh prediction (``None`` for shorter forecasts)
    and ``confidence_range`` is the half-width of the first prediction's band.
    """

    if not predictions:
        return None

    first = predictions[0]
    next_week = (
        predictions[NEXT_WEEK_INDEX].predicted_price
        if len(predictions) > NEXT_WEEK_INDEX
        else None
    )
    return ForecastSummary(
        next_week_target=next_week,
        confidence_range=round(first.confidence_interval_upper - first.predicted_price, 2),
        trend=first.trend,
        forecast_days=len(predictions),
        final_price=predictions[-1].predicted_price,
    )


def predictions_to_frame(predictions: Iterable[Prediction]) -> pd.DataFrame:
    """Return one row per prediction indexed by ``date``."""

    columns = [
        "date",
        "predicted_price",
        "confidence_interval_lower",
        "confidence_interval_upper",
        "trend",
    ]
    frame = pd.DataFrame([asdict(item) for item in predictions], columns=columns)
    frame["date"] = pd.to_datetime(frame["date"])
    return frame.set_index("date")


__all__ = [
    "ForecastSummary",
    "Prediction",
    "Trend",
    "predictions_to_frame",
    "summarize_predictions",
]
