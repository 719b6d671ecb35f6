"""Bootstrap ensemble simulated over regression residuals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

MEMBER_NOISE_SCALE = 0.01


@dataclass(frozen=True)
class ResidualBootstrapEnsemble:
    """Simulate ``n_estimators`` nonparametric predictors from model residuals.

    Each member is the mean of a bootstrap resample of the residuals plus a uniform
    perturbation in ``[-0.5, 0.5) * 0.01 * sqrt(days_ahead)``, so member spread grows
    with the forecast horizon. No trees are grown.
    """

    residuals: np.ndarray
    n_estimators: int = 100

    def __post_init__(self) -> None:
        residuals = np.asarray(self.residuals, dtype=float).ravel()
        if residuals.size == 0:
            raise ValueError("ResidualBootstrapEnsemble requires at least one residual")
        if int(self.n_estimators) <= 0:
            raise ValueError("n_estimators must be positive")
        object.__setattr__(self, "residuals", residuals)
        object.__setattr__(self, "n_estimators", int(self.n_estimators))

    def predict(self, days_ahead: int, rng: np.random.Generator) -> np.ndarray:
        """Return one residual prediction per member for a ``days_ahead`` horizon."""

        n = self.residuals.size
        indices = rng.integers(0, n, size=(self.n_estimators, n))
        bootstrap_means = self.residuals[indices].mean(axis=1)
        noise = (rng.random(self.n_estimators) - 0.5) * MEMBER_NOISE_SCALE * np.sqrt(days_ahead)
        return bootstrap_means + noise


def simulate_residual_ensemble(
    residuals: Any,
    n_estimators: int,
    days_ahead: int,
    rng: np.random.Generator | int | None = None,
) -> np.ndarray:
    """Functional shortcut around :class:`ResidualBootstrapEnsemble`."""

    generator = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
    return ResidualBootstrapEnsemble(residuals, n_estimators).predict(days_ahead, generator)


__all__ = ["MEMBER_NOISE_SCALE", "ResidualBootstrapEnsemble", "simulate_residual_ensemble"]
