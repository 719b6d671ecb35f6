from datetime import date

import pytest

from rerf_forecaster.app import ForecastApplication, build_bar_source
from rerf_forecaster.core.config import ForecasterConfig, ModelParams
from rerf_forecaster.core.modeling.exceptions import InsufficientHistoryError
from rerf_forecaster.providers import CsvBarSource, SyntheticBarSource


def _app(days: int = 252, **config_overrides) -> ForecastApplication:
    config = ForecasterConfig(random_state=0, **config_overrides)
    source = SyntheticBarSource(days=days, end=date(2024, 6, 3), random_state=0)
    return ForecastApplication(config, bar_source=source)


def test_run_forecast_payload() -> None:
    result = _app(forecast_days=12).run("forecast")

    assert result.status == "ok"
    payload = result.payload
    assert payload["symbol"] == "SPY"
    assert payload["data_source"] == "synthetic"
    assert payload["forecast_days"] == 12
    assert len(payload["predictions"]) == 12
    assert payload["summary"]["forecast_days"] == 12
    assert payload["predictions"][0]["date"] > payload["last_date"]
    assert payload["model_params"] == ModelParams().to_dict()


def test_run_optimize_adopts_best_parameters() -> None:
    app = _app(forecast_days=5)
    result = app.run("optimize")

    best = result.payload["optimization"]["best_params"]
    assert result.payload["model_params"] == best
    assert app.config.model_params.to_dict() == best


def test_optimize_with_short_history_raises() -> None:
    with pytest.raises(InsufficientHistoryError):
        _app(days=20).optimize()


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(ValueError):
        _app().run("train")


def test_forecast_accepts_preloaded_bars() -> None:
    app = _app(forecast_days=3)
    bars = app.load_bars()
    assert len(app.forecast(bars)) == 3
    assert app.forecast([]) == []


def test_build_bar_source_follows_config(tmp_path) -> None:
    csv_config = ForecasterConfig(data_source="csv", csv_path=tmp_path / "bars.csv")
    assert isinstance(build_bar_source(csv_config), CsvBarSource)
    assert isinstance(build_bar_source(ForecasterConfig()), SyntheticBarSource)


def test_from_environment_uses_overrides(monkeypatch) -> None:
    monkeypatch.delenv("RERF_MODEL_PARAMS", raising=False)
    app = ForecastApplication.from_environment(symbol="msft", forecast_days=4, random_state=2)

    assert app.config.symbol == "MSFT"
    assert app.config.forecast_days == 4
    assert isinstance(app.bar_source, SyntheticBarSource)
