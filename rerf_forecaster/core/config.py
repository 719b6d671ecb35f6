"""Configuration utilities for the residual-enhanced forecaster."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

DEFAULT_SYMBOL = "SPY"
DEFAULT_FORECAST_DAYS = 30
MAX_FORECAST_DAYS = 45
DEFAULT_HISTORY_DAYS = 252
DATA_SOURCES: tuple[str, ...] = ("synthetic", "csv")


@dataclass(frozen=True)
class ModelParams:
    """Hyper-parameters accepted by the forecaster.

    Only ``n_estimators`` and ``lasso_penalty`` influence the forecast. The tree
    settings, ``regression_weight`` and ``feature_importance_threshold`` are accepted
    and carried through unchanged so that parameter payloads from older clients keep
    validating.
    """

    n_estimators: int = 100
    max_depth: int = 10
    min_samples_split: int = 5
    min_samples_leaf: int = 2
    regression_weight: float = 0.3
    feature_importance_threshold: float = 0.01
    lasso_penalty: float = 1.0

    def __post_init__(self) -> None:
        try:
            whole = int(self.n_estimators)
        except (TypeError, ValueError) as exc:
            raise ValueError("n_estimators must be an integer.") from exc
        if isinstance(self.n_estimators, bool) or whole != self.n_estimators:
            raise ValueError("n_estimators must be an integer.")
        if self.n_estimators <= 0:
            raise ValueError("n_estimators must be positive.")
        try:
            penalty = float(self.lasso_penalty)
        except (TypeError, ValueError) as exc:
            raise ValueError("lasso_penalty must be a number.") from exc
        if penalty < 0:
            raise ValueError("lasso_penalty must be non-negative.")
        object.__setattr__(self, "lasso_penalty", penalty)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "ModelParams":
        if not isinstance(payload, Mapping):
            return cls()

        defaults = cls()

        def _coerce_int(key: str) -> int:
            default = getattr(defaults, key)
            try:
                return int(payload.get(key, default))
            except (TypeError, ValueError):
                return default

        def _coerce_float(key: str) -> float:
            default = getattr(defaults, key)
            try:
                return float(payload.get(key, default))
            except (TypeError, ValueError):
                return default

        return cls(
            n_estimators=_coerce_int("n_estimators"),
            max_depth=_coerce_int("max_depth"),
            min_samples_split=_coerce_int("min_samples_split"),
            min_samples_leaf=_coerce_int("min_samples_leaf"),
            regression_weight=_coerce_float("regression_weight"),
            feature_importance_threshold=_coerce_float("feature_importance_threshold"),
            lasso_penalty=_coerce_float("lasso_penalty"),
        )

    def with_overrides(self, **overrides: Any) -> "ModelParams":
        known = {f.name for f in fields(self)}
        cleaned = {key: value for key, value in overrides.items() if key in known and value is not None}
        return replace(self, **cleaned) if cleaned else self

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _coerce_forecast_days(value: Any | None) -> int:
    """Validate the forecast horizon and clamp it to the supported range."""

    if value is None:
        return DEFAULT_FORECAST_DAYS

    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("forecast_days must be an integer.") from exc

    return min(MAX_FORECAST_DAYS, max(1, parsed))


def _coerce_random_state(value: Any | None) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("random_state must be an integer.") from exc


def _parse_model_params(value: Mapping[str, Any] | str | None) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    text = str(value).strip()
    if not text:
        return {}
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError("model_params must be a JSON object.") from exc
    if not isinstance(parsed, Mapping):
        raise ValueError("model_params must be a JSON object.")
    return dict(parsed)


@dataclass
class ForecasterConfig:
    """Runtime configuration for :class:`~rerf_forecaster.app.ForecastApplication`."""

    symbol: str = DEFAULT_SYMBOL
    forecast_days: int = DEFAULT_FORECAST_DAYS
    model_params: ModelParams = field(default_factory=ModelParams)
    random_state: Optional[int] = None
    data_source: str = "synthetic"
    csv_path: Optional[Path] = None
    history_days: int = DEFAULT_HISTORY_DAYS

    def __post_init__(self) -> None:
        self.symbol = str(self.symbol or DEFAULT_SYMBOL).strip().upper() or DEFAULT_SYMBOL
        self.forecast_days = _coerce_forecast_days(self.forecast_days)
        if not isinstance(self.model_params, ModelParams):
            self.model_params = ModelParams.from_mapping(self.model_params)
        source = str(self.data_source or "synthetic").strip().lower()
        if source not in DATA_SOURCES:
            raise ValueError(
                f"Unknown data source '{self.data_source}'. Expected one of {', '.join(DATA_SOURCES)}."
            )
        self.data_source = source
        if self.csv_path is not None:
            self.csv_path = Path(self.csv_path).expanduser()
        if self.data_source == "csv" and self.csv_path is None:
            raise ValueError("A csv_path is required when data_source is 'csv'.")
        self.history_days = max(1, int(self.history_days))

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "forecast_days": self.forecast_days,
            "model_params": self.model_params.to_dict(),
            "random_state": self.random_state,
            "data_source": self.data_source,
            "csv_path": str(self.csv_path) if self.csv_path is not None else None,
            "history_days": self.history_days,
        }


def load_environment() -> None:
    """Load configuration from an optional ``.env`` file."""

    load_dotenv()


def build_config(
    symbol: Optional[str] = None,
    forecast_days: Optional[int | str] = None,
    model_params: Optional[Mapping[str, Any] | str] = None,
    random_state: Optional[int | str] = None,
    data_source: Optional[str] = None,
    csv_path: Optional[str | Path] = None,
    history_days: Optional[int] = None,
    lasso_penalty: Optional[float] = None,
    n_estimators: Optional[int] = None,
) -> ForecasterConfig:
    """Build a :class:`ForecasterConfig` from explicit values and the environment.

    Explicit arguments win over ``RERF_*`` environment variables, which win over the
    defaults.
    """

    load_environment()

    csv_value = csv_path or os.getenv("RERF_CSV_PATH") or None
    source_value = data_source or os.getenv("RERF_DATA_SOURCE") or (
        "csv" if csv_value else "synthetic"
    )

    params_payload = _parse_model_params(os.getenv("RERF_MODEL_PARAMS"))
    params_payload.update(_parse_model_params(model_params))
    params = ModelParams.from_mapping(params_payload).with_overrides(
        lasso_penalty=lasso_penalty,
        n_estimators=n_estimators,
    )

    return ForecasterConfig(
        symbol=symbol or os.getenv("RERF_SYMBOL") or DEFAULT_SYMBOL,
        forecast_days=_coerce_forecast_days(
            forecast_days if forecast_days is not None else os.getenv("RERF_FORECAST_DAYS")
        ),
        model_params=params,
        random_state=_coerce_random_state(
            random_state if random_state is not None else os.getenv("RERF_RANDOM_STATE")
        ),
        data_source=source_value,
        csv_path=Path(csv_value) if csv_value else None,
        history_days=history_days or DEFAULT_HISTORY_DAYS,
    )


__all__ = [
    "DATA_SOURCES",
    "DEFAULT_FORECAST_DAYS",
    "DEFAULT_HISTORY_DAYS",
    "DEFAULT_SYMBOL",
    "MAX_FORECAST_DAYS",
    "ForecasterConfig",
    "ModelParams",
    "build_config",
    "load_environment",
]
