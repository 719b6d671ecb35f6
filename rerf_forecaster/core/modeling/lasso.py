"""L1-penalised linear regression fitted by cyclic coordinate descent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.preprocessing import StandardScaler

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_ITER = 100
DEFAULT_TOLERANCE = 1e-4


@dataclass(frozen=True)
class LassoFit:
    """Coefficients and in-sample residuals of a fitted model.

    Residuals are measured against the standardised design matrix, one per
    training row.
    """

    coefficients: np.ndarray
    residuals: np.ndarray
    n_iter: int
    converged: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "coefficients": self.coefficients.tolist(),
            "residuals": self.residuals.tolist(),
            "n_iter": self.n_iter,
            "converged": self.converged,
        }


def _soft_threshold(value: float, threshold: float) -> float:
    if value > threshold:
        return value - threshold
    if value < -threshold:
        return value + threshold
    return 0.0


class CoordinateDescentLasso(BaseEstimator, RegressorMixin):
    """Lasso regression where column 0 of ``X`` is an unpenalised intercept.

    Columns ``1..p-1`` are standardised to zero mean and unit population variance
    (constant columns keep a scale of 1) before fitting. The penalty is applied as a
    soft threshold of ``penalty / n_samples`` on every non-intercept coordinate.
    """

    def __init__(
        self,
        penalty: float = 1.0,
        *,
        max_iter: int = DEFAULT_MAX_ITER,
        tol: float = DEFAULT_TOLERANCE,
    ) -> None:
        self.penalty = penalty
        self.max_iter = max_iter
        self.tol = tol

    def fit(self, X: Any, y: Any) -> "CoordinateDescentLasso":
        X_array = np.asarray(X, dtype=float)
        y_array = np.asarray(y, dtype=float).ravel()
        if X_array.ndim != 2 or X_array.shape[0] == 0 or X_array.shape[1] == 0:
            raise ValueError("X must be a non-empty two dimensional matrix")
        if X_array.shape[0] != y_array.shape[0]:
            raise ValueError(
                f"X has {X_array.shape[0]} rows but y has {y_array.shape[0]} values"
            )
        if self.penalty < 0:
            raise ValueError("penalty must be non-negative")

        n_samples, n_features = X_array.shape
        # Columns whose variance is zero up to rounding noise get scale 1.
        self.scaler_ = StandardScaler() if n_features > 1 else None
        if self.scaler_ is not None:
            self.scaler_.fit(X_array[:, 1:])
        X_std = self._standardize(X_array)

        threshold = float(self.penalty) / n_samples
        coef = np.zeros(n_features, dtype=float)
        converged = False
        iterations = 0

        for iterations in range(1, int(self.max_iter) + 1):
            previous = coef.copy()
            for j in range(n_features):
                column = X_std[:, j]
                partial_residual = y_array - (X_std @ coef - column * coef[j])
                correlation = float(partial_residual @ column) / n_samples
                if j == 0:
                    coef[j] = correlation
                else:
                    coef[j] = _soft_threshold(correlation, threshold)

            if float(np.abs(coef - previous).sum()) < self.tol:
                converged = True
                break

        self.coef_ = coef
        self.residuals_ = y_array - X_std @ coef
        self.n_iter_ = iterations
        self.converged_ = converged
        LOGGER.debug(
            "Coordinate descent finished after %s iterations (converged=%s)",
            iterations,
            converged,
        )
        return self

    def predict(self, X: Any) -> np.ndarray:
        if not hasattr(self, "coef_"):
            raise RuntimeError("Model must be fitted before predicting.")
        return self._standardize(np.asarray(X, dtype=float)) @ self.coef_

    def _standardize(self, X: np.ndarray) -> np.ndarray:
        if self.scaler_ is None:
            return X.copy()
        return np.hstack([X[:, :1], self.scaler_.transform(X[:, 1:])])

    def to_fit(self) -> LassoFit:
        return LassoFit(
            coefficients=self.coef_.copy(),
            residuals=self.residuals_.copy(),
            n_iter=self.n_iter_,
            converged=self.converged_,
        )


def lasso_regression(X: Any, y: Any, penalty: float) -> LassoFit:
    """Fit :class:`CoordinateDescentLasso` and return its coefficients and residuals."""

    return CoordinateDescentLasso(penalty=penalty).fit(X, y).to_fit()


__all__ = ["CoordinateDescentLasso", "LassoFit", "lasso_regression"]
