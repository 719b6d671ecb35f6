"""Day-by-day forecast loop combining trend, noise and the residual ensemble."""

from __future__ import annotations

import logging
import math
from datetime import timedelta
from typing import Any, Mapping, Sequence

import numpy as np

from ..bars import Bar
from ..clock import is_weekend
from ..config import ModelParams
from ..features import build_feature_matrix, training_targets
from .ensembles import ResidualBootstrapEnsemble
from .lasso import lasso_regression
from .prediction_result import Prediction, Trend

LOGGER = logging.getLogger(__name__)

TREND_LOOKBACK = 10
TREND_WEIGHT = 0.3
DAILY_VOLATILITY = 0.02
TIME_DECAY_RATE = 0.05
RESIDUAL_WEIGHT = 0.1
HORIZON_EXPONENT = 1.5
CONFIDENCE_Z = 1.96


def average_daily_change(bars: Sequence[Bar], lookback: int = TREND_LOOKBACK) -> float:
    """Average close-to-close move across the last ``lookback`` bars."""

    recent = [bar.close for bar in bars[-lookback:]]
    if len(recent) < 2:
        return 0.0
    return (recent[-1] - recent[0]) / (len(recent) - 1)


def confidence_half_width(std: float, days_ahead: int) -> float:
    """Half-width of the band: ``1.96 * std * days_ahead ** 1.5``."""

    return CONFIDENCE_Z * std * math.pow(days_ahead, HORIZON_EXPONENT)


def classify_trend(price: float, reference: float) -> Trend:
    if price > reference:
        return "up"
    if price < reference:
        return "down"
    return "neutral"


def _resolve_params(params: ModelParams | Mapping[str, Any] | None) -> ModelParams:
    if isinstance(params, ModelParams):
        return params
    return ModelParams.from_mapping(params)


def _resolve_rng(random_state: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def generate_predictions(
    bars: Sequence[Bar],
    forecast_days: int,
    params: ModelParams | Mapping[str, Any] | None = None,
    *,
    random_state: np.random.Generator | int | None = None,
) -> list[Prediction]:
    """Forecast ``forecast_days`` trading days past the last bar.

    The trailing window of ``bars`` is turned into features, fitted with the
    coordinate-descent Lasso, and the fit's residuals drive a bootstrap ensemble
    whose spread sets the confidence band. Weekend dates are skipped without
    consuming a prediction. An empty ``bars`` sequence yields an empty list.

    ``random_state`` seeds (or is) the generator behind every random draw, so two
    calls with the same seed and inputs return identical predictions.
    """

    if not bars:
        return []

    model_params = _resolve_params(params)
    rng = _resolve_rng(random_state)

    features = build_feature_matrix(bars)
    targets = training_targets(bars)
    fit = lasso_regression(features.to_numpy(dtype=float), targets, model_params.lasso_penalty)
    ensemble = ResidualBootstrapEnsemble(fit.residuals, model_params.n_estimators)

    last_price = float(bars[-1].close)
    trend_component = average_daily_change(bars) * TREND_WEIGHT

    LOGGER.info("Starting forecast from last close %.2f on %s", last_price, bars[-1].date)

    predictions: list[Prediction] = []
    current_price = last_price
    days_ahead = 1
    current_date = bars[-1].date + timedelta(days=1)

    while len(predictions) < forecast_days:
        if is_weekend(current_date):
            current_date = current_date + timedelta(days=1)
            continue

        volatility_component = (rng.random() - 0.5) * last_price * DAILY_VOLATILITY
        time_decay = math.exp(-days_ahead * TIME_DECAY_RATE)

        members = ensemble.predict(days_ahead, rng)
        mean_residual = float(members.mean())
        variance = float(members.var())

        current_price += (
            trend_component
            + volatility_component * time_decay
            + mean_residual * RESIDUAL_WEIGHT
        )
        interval = confidence_half_width(math.sqrt(variance), days_ahead)

        predictions.append(
            Prediction(
                date=current_date,
                predicted_price=round(current_price, 2),
                confidence_interval_lower=round(current_price - interval, 2),
                confidence_interval_upper=round(current_price + interval, 2),
                trend=classify_trend(current_price, last_price),
            )
        )

        days_ahead += 1
        current_date = current_date + timedelta(days=1)

    if predictions:
        LOGGER.info(
            "Forecast range %.2f to %.2f over %s trading days",
            predictions[0].predicted_price,
            predictions[-1].predicted_price,
            len(predictions),
        )
    return predictions


__all__ = [
    "average_daily_change",
    "classify_trend",
    "confidence_half_width",
    "generate_predictions",
]
