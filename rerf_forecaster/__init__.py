"""Residual-enhanced price forecasting with bootstrap confidence bands."""

from rerf_forecaster.app import ForecastApplication, RunResult
from rerf_forecaster.core import (
    Bar,
    ForecasterConfig,
    ModelParams,
    Prediction,
    build_config,
    generate_predictions,
    load_environment,
)

__all__ = [
    "Bar",
    "ForecastApplication",
    "ForecasterConfig",
    "ModelParams",
    "Prediction",
    "RunResult",
    "build_config",
    "generate_predictions",
    "load_environment",
]
