"""Core analytical components for the residual-enhanced forecaster."""

from rerf_forecaster.core.bars import Bar, bars_from_frame, bars_to_frame
from rerf_forecaster.core.config import (
    ForecasterConfig,
    ModelParams,
    build_config,
    load_environment,
)
from rerf_forecaster.core.features import FEATURE_COLUMNS, build_feature_matrix
from rerf_forecaster.core.indicators import relative_strength_index, simple_moving_average
from rerf_forecaster.core.modeling import (
    ForecastSummary,
    InsufficientHistoryError,
    LassoFit,
    Prediction,
    ResidualBootstrapEnsemble,
    generate_predictions,
    lasso_regression,
    summarize_predictions,
)
from rerf_forecaster.core.optimizer import OptimizationResult, optimize_parameters

__all__ = [
    "Bar",
    "FEATURE_COLUMNS",
    "ForecastSummary",
    "ForecasterConfig",
    "InsufficientHistoryError",
    "LassoFit",
    "ModelParams",
    "OptimizationResult",
    "Prediction",
    "ResidualBootstrapEnsemble",
    "bars_from_frame",
    "bars_to_frame",
    "build_config",
    "build_feature_matrix",
    "generate_predictions",
    "lasso_regression",
    "load_environment",
    "optimize_parameters",
    "relative_strength_index",
    "simple_moving_average",
    "summarize_predictions",
]
