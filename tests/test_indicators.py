import numpy as np
import pandas as pd
import pytest

from rerf_forecaster.core.bars import Bar
from rerf_forecaster.core.indicators import (
    price_change_ratios,
    relative_strength_index,
    rolling_rsi,
    simple_moving_average,
)


def _bars(closes: list[float]) -> list[Bar]:
    dates = pd.bdate_range("2024-01-01", periods=len(closes))
    return [
        Bar(date=ts.date(), open=c, high=c, low=c, close=c, volume=1_000_000, adj_close=c)
        for ts, c in zip(dates, closes)
    ]


def test_rsi_is_neutral_below_fourteen_observations() -> None:
    rng = np.random.default_rng(3)
    for length in range(0, 14):
        closes = list(100 + rng.normal(0, 5, size=length))
        assert relative_strength_index(closes) == 50.0


def test_rsi_stays_within_bounds() -> None:
    rng = np.random.default_rng(11)
    for length in (14, 15, 30, 60, 120):
        closes = 100 * np.exp(np.cumsum(rng.normal(0, 0.03, size=length)))
        value = relative_strength_index(closes)
        assert 0.0 <= value <= 100.0


def test_rsi_averages_thirteen_changes_over_fourteen() -> None:
    closes = [100.0 + step for step in range(14)]
    expected = 100 - 100 / (1 + 13 / 14)
    assert relative_strength_index(closes) == pytest.approx(expected)


def test_rsi_only_uses_the_last_fourteen_changes() -> None:
    closes = [100.0, 50.0] + [50.0 + 2 * step for step in range(1, 15)]
    # The early drop falls outside the window, so losses are zero and replaced by 1.
    assert relative_strength_index(closes) == pytest.approx(100 - 100 / (1 + 2.0))


def test_rsi_all_losses_is_low() -> None:
    closes = [200.0 - step for step in range(20)]
    assert relative_strength_index(closes) == pytest.approx(0.0)


def test_rsi_accepts_bar_sequences() -> None:
    closes = [100, 101, 99, 102, 104, 103, 101, 100, 98, 99, 101, 103, 104, 106, 105]
    assert relative_strength_index(_bars(closes)) == pytest.approx(
        relative_strength_index(closes)
    )


def test_rolling_rsi_matches_prefix_computation() -> None:
    rng = np.random.default_rng(5)
    close = pd.Series(100 + np.cumsum(rng.normal(0, 1.5, size=45)))
    rolling = rolling_rsi(close)

    expected = [relative_strength_index(close.iloc[: i + 1]) for i in range(len(close))]
    np.testing.assert_allclose(rolling.to_numpy(), expected, rtol=1e-12, atol=1e-9)
    assert (rolling.iloc[:13] == 50.0).all()


def test_simple_moving_average_uses_available_history() -> None:
    prices = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    assert simple_moving_average(prices, 5, index=0) == 1.0
    assert simple_moving_average(prices, 5, index=1) == 1.5
    assert simple_moving_average(prices, 5) == pytest.approx(4.0)


def test_simple_moving_average_rejects_empty_input() -> None:
    with pytest.raises(ValueError):
        simple_moving_average([], 5)


def test_price_change_ratios_first_row_is_zero() -> None:
    close = pd.Series([100.0, 110.0, 99.0])
    ratios = price_change_ratios(close)

    assert ratios["price_change"].tolist() == pytest.approx([0.0, 0.1, -0.1])
    assert ratios["volatility"].tolist() == pytest.approx([0.0, 0.1, 0.1])
