"""Command line entry point for the residual-enhanced forecaster."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

from rerf_forecaster.app import MODES, ForecastApplication

LOGGER = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    default_symbol = os.getenv("RERF_SYMBOL", "SPY")

    parser = argparse.ArgumentParser(
        description="Forecast a price path with bootstrap confidence bands.",
    )
    parser.add_argument(
        "--mode",
        choices=list(MODES),
        default="forecast",
        help="Pipeline mode to run (default: %(default)s).",
    )
    parser.add_argument("--symbol", default=default_symbol, help="Ticker symbol to forecast.")
    parser.add_argument(
        "--days",
        type=int,
        help="Number of trading days to forecast (1-45, default: 30).",
    )
    parser.add_argument(
        "--csv",
        help="Read historical bars from a Yahoo-style CSV file instead of simulating them.",
    )
    parser.add_argument("--seed", type=int, help="Seed for every random draw.")
    parser.add_argument("--model-params", help="JSON string of model hyper-parameters.")
    parser.add_argument("--lasso-penalty", type=float, help="L1 penalty strength.")
    parser.add_argument("--n-estimators", type=int, help="Residual ensemble size.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    overrides: dict[str, Any] = {
        "symbol": args.symbol,
        "forecast_days": args.days,
        "csv_path": args.csv,
        "random_state": args.seed,
        "model_params": args.model_params,
        "lasso_penalty": args.lasso_penalty,
        "n_estimators": args.n_estimators,
    }

    try:
        app = ForecastApplication.from_environment(**overrides)
        result = app.run(args.mode)
    except Exception as exc:  # pylint: disable=broad-except
        LOGGER.exception("Forecast execution failed")
        print(json.dumps({"status": "error", "message": str(exc)}), file=sys.stderr)
        return 1

    output = {"status": result.status, **result.payload}
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
