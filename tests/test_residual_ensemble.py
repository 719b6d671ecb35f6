import numpy as np
import pytest

from rerf_forecaster.core.modeling.ensembles import (
    ResidualBootstrapEnsemble,
    simulate_residual_ensemble,
)


def test_returns_one_prediction_per_member() -> None:
    ensemble = ResidualBootstrapEnsemble(np.linspace(-1, 1, 25), n_estimators=40)
    predictions = ensemble.predict(3, np.random.default_rng(0))
    assert predictions.shape == (40,)


def test_same_seed_reproduces_members() -> None:
    residuals = np.random.default_rng(1).normal(size=60)
    first = simulate_residual_ensemble(residuals, 50, 2, rng=42)
    second = simulate_residual_ensemble(residuals, 50, 2, rng=42)
    np.testing.assert_array_equal(first, second)


def test_constant_residuals_only_vary_by_member_noise() -> None:
    days_ahead = 9
    predictions = simulate_residual_ensemble(np.full(30, 2.5), 500, days_ahead, rng=3)

    bound = 0.5 * 0.01 * np.sqrt(days_ahead)
    assert np.all(predictions >= 2.5 - bound - 1e-12)
    assert np.all(predictions <= 2.5 + bound + 1e-12)


def test_member_spread_grows_with_horizon() -> None:
    residuals = np.zeros(20)
    near = simulate_residual_ensemble(residuals, 4_000, 1, rng=5)
    far = simulate_residual_ensemble(residuals, 4_000, 64, rng=5)
    assert far.std() > 4 * near.std()


def test_bootstrap_means_stay_within_residual_range() -> None:
    residuals = np.array([-3.0, -1.0, 0.5, 2.0, 4.0])
    predictions = simulate_residual_ensemble(residuals, 200, 1, rng=9)
    assert predictions.min() >= residuals.min() - 0.005
    assert predictions.max() <= residuals.max() + 0.005


def test_rejects_invalid_configuration() -> None:
    with pytest.raises(ValueError):
        ResidualBootstrapEnsemble(np.ones(3), n_estimators=0)
    with pytest.raises(ValueError):
        ResidualBootstrapEnsemble(np.array([]), n_estimators=5)
