"""Top-level application orchestration for the residual-enhanced forecaster."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from rerf_forecaster.core import (
    Bar,
    ForecasterConfig,
    ModelParams,
    OptimizationResult,
    Prediction,
    build_config,
    generate_predictions,
    load_environment,
    optimize_parameters,
    summarize_predictions,
)
from rerf_forecaster.providers import (
    BarSource,
    CsvBarSource,
    SyntheticBarSource,
    ensure_chronological,
)

LOGGER = logging.getLogger(__name__)

MODES: tuple[str, ...] = ("forecast", "optimize")


@dataclass(slots=True)
class RunResult:
    """Wrapper used by the application to provide consistent responses."""

    status: str
    payload: dict[str, Any]


def build_bar_source(config: ForecasterConfig) -> BarSource:
    """Instantiate the bar source selected by ``config.data_source``."""

    if config.data_source == "csv":
        return CsvBarSource(config.csv_path)
    return SyntheticBarSource(days=config.history_days, random_state=config.random_state)


class ForecastApplication:
    """Coordinate the bar source, the forecaster and the parameter optimiser."""

    def __init__(self, config: ForecasterConfig, bar_source: BarSource | None = None) -> None:
        self.config = config
        self.bar_source = bar_source or build_bar_source(config)

    @classmethod
    def from_environment(cls, **overrides: Any) -> "ForecastApplication":
        """Create an application instance using environment variables and overrides."""

        load_environment()
        config = build_config(**overrides)
        LOGGER.debug("Initialised configuration for symbol %s", config.symbol)
        return cls(config)

    # ------------------------------------------------------------------
    # High level orchestration helpers
    # ------------------------------------------------------------------
    def load_bars(self) -> list[Bar]:
        LOGGER.info("Loading %s bars from %s source", self.config.symbol, self.bar_source.name)
        return ensure_chronological(self.bar_source.fetch_bars(self.config.symbol))

    def forecast(self, bars: list[Bar] | None = None) -> list[Prediction]:
        """Forecast ``config.forecast_days`` trading days for the configured symbol."""

        history = self.load_bars() if bars is None else bars
        return generate_predictions(
            history,
            self.config.forecast_days,
            self.config.model_params,
            random_state=self.config.random_state,
        )

    def optimize(self, bars: list[Bar] | None = None) -> OptimizationResult:
        """Search the parameter grid and adopt the winning parameters."""

        history = self.load_bars() if bars is None else bars
        result = optimize_parameters(
            history, self.config.model_params, random_state=self.config.random_state
        )
        self.update_params(result.best_params)
        return result

    def update_params(self, params: ModelParams) -> None:
        if params == self.config.model_params:
            return
        self.config = replace(self.config, model_params=params)
        LOGGER.info("Switched model parameters to %s", params.to_dict())

    def run(self, mode: str = "forecast") -> RunResult:
        """Dispatch ``mode`` and wrap the outcome in a :class:`RunResult`."""

        if mode not in MODES:
            raise ValueError(f"Unknown mode '{mode}'. Expected one of {', '.join(MODES)}.")

        bars = self.load_bars()
        payload: dict[str, Any] = {
            "symbol": self.config.symbol,
            "data_source": self.bar_source.name,
            "bars": len(bars),
            "last_close": bars[-1].close if bars else None,
            "last_date": bars[-1].date.isoformat() if bars else None,
        }

        if mode == "optimize":
            payload["optimization"] = self.optimize(bars).to_dict()

        predictions = self.forecast(bars)
        summary = summarize_predictions(predictions)
        payload.update(
            {
                "forecast_days": self.config.forecast_days,
                "model_params": self.config.model_params.to_dict(),
                "predictions": [item.to_dict() for item in predictions],
                "summary": summary.to_dict() if summary is not None else None,
            }
        )
        return RunResult(status="ok", payload=payload)


__all__ = ["ForecastApplication", "MODES", "RunResult", "build_bar_source"]
