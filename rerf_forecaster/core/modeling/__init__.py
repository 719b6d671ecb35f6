"""Modeling package exposing the solver, residual ensemble and forecast loop."""

from .ensembles import ResidualBootstrapEnsemble, simulate_residual_ensemble
from .exceptions import InsufficientHistoryError
from .forecaster import generate_predictions
from .lasso import CoordinateDescentLasso, LassoFit, lasso_regression
from .prediction_result import (
    ForecastSummary,
    Prediction,
    predictions_to_frame,
    summarize_predictions,
)

__all__ = [
    "CoordinateDescentLasso",
    "ForecastSummary",
    "InsufficientHistoryError",
    "LassoFit",
    "Prediction",
    "ResidualBootstrapEnsemble",
    "generate_predictions",
    "lasso_regression",
    "predictions_to_frame",
    "simulate_residual_ensemble",
    "summarize_predictions",
]
