"""
baselines/run_baselines.py — Compare equal weight and risk parity equity curves.
Loads the daily returns file, runs both strategies, logs a metrics table and
writes Date,EquityEqual,EquityVolWeighted to the results CSV.

Runnable standalone: python baselines/run_baselines.py [--input ETF--Data.csv]
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from utils import load_config, ensure_directories, resolve_path
from backtesting.engine import summarize_strategy
from backtesting.metrics import build_comparison_table
from backtesting.results import assemble_results, write_results
from baselines.equal_weight import equal_weight_equity
from baselines.risk_parity import run_risk_parity
from data.loader import InputDataError, load_returns, validate_row_count

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def run_comparison(
    returns_wide: pd.DataFrame,
    window_size: int = 20,
    start_value: float = 100.0,
) -> Dict[str, Any]:
    """Run both strategies on the same returns and assemble the output rows.

    Args:
        returns_wide: DataFrame (dates x assets) of daily simple returns.
        window_size: Rolling volatility lookback for risk parity.
        start_value: Starting equity for both curves.

    Returns:
        Dict with keys: results (assembled DataFrame), equal_weight (equity
        Series), risk_parity (run_risk_parity output), metrics (comparison
        table, metrics as rows).
    """
    logger.info(
        "Running strategies on %d days x %d assets (window=%d, start=%.1f)",
        len(returns_wide), returns_wide.shape[1], window_size, start_value,
    )
    equity_equal = equal_weight_equity(returns_wide, start_value=start_value)
    risk_parity = run_risk_parity(returns_wide, window_size=window_size, start_value=start_value)

    results = assemble_results(
        returns_wide.index.tolist(), equity_equal.values, risk_parity["equity"].values,
    )

    metrics = build_comparison_table({
        "Equal Weight": summarize_strategy("Equal Weight", equity_equal),
        "Risk Parity": summarize_strategy("Risk Parity", risk_parity["equity"]),
    })

    return {
        "results": results,
        "equal_weight": equity_equal,
        "risk_parity": risk_parity,
        "metrics": metrics,
    }


def run_pipeline(config: Dict[str, Any]) -> pd.DataFrame:
    """Load the input file, compute both curves, and write the results file.

    Raises:
        InputDataError: The input is unreadable or too short. Nothing is written.
    """
    paths = config["paths"]
    strategy_cfg = config["strategy"]
    output_cfg = config["output"]
    window_size = strategy_cfg["window_size"]

    returns_wide = load_returns(
        resolve_path(paths["input"]),
        skip_rows_after_header=config["data"]["skip_rows_after_header"],
        strict=config["data"]["strict"],
    )
    validate_row_count(len(returns_wide), window_size)

    comparison = run_comparison(
        returns_wide,
        window_size=window_size,
        start_value=strategy_cfg["start_value"],
    )
    logger.info("\n%s", comparison["metrics"].round(4).to_string())

    ensure_directories(config)
    output_path = write_results(
        comparison["results"],
        resolve_path(paths["output"]),
        float_format=output_cfg["float_format"],
    )

    if output_cfg.get("plot", False):
        from backtesting.plots import plot_equity_curves
        plot_equity_curves(
            comparison["results"],
            resolve_path(paths["figures"]) / "equity_curves.png",
        )

    logger.info("Done! Results in %s.", output_path)
    return comparison["results"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Equal weight vs. risk parity equity curves")
    parser.add_argument("--config", default=None, help="Config file (default: config.yaml)")
    parser.add_argument("--input", default=None, help="Override paths.input")
    parser.add_argument("--output", default=None, help="Override paths.output")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on malformed rows instead of dropping them")
    parser.add_argument("--plot", action="store_true", help="Also save an equity curve chart")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)

    if args.input is not None:
        config["paths"]["input"] = args.input
    if args.output is not None:
        config["paths"]["output"] = args.output
    if args.strict:
        config["data"]["strict"] = True
    if args.plot:
        config["output"]["plot"] = True

    try:
        run_pipeline(config)
    except InputDataError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
