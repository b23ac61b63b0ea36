"""
backtesting/results.py — Aligns the two equity curves by date and writes them.

Output format (fixed header):
    Date,EquityEqual,EquityVolWeighted
One row per input day. Risk parity rows before its first defined day carry
the 0.0 placeholder unchanged.
"""

import logging
from pathlib import Path
from typing import Iterator, Sequence, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["Date", "EquityEqual", "EquityVolWeighted"]


def assemble_results(
    dates: Sequence[str],
    equity_equal: Sequence[float],
    equity_vol: Sequence[float],
) -> pd.DataFrame:
    """Build the (date, equityEqual, equityVol) row table.

    Args:
        dates: Date token for every day, in input order.
        equity_equal: Equal-weight equity curve (same length).
        equity_vol: Risk parity equity curve (same length, 0.0 placeholders
            before the first defined day are kept as-is).

    Returns:
        DataFrame with columns RESULT_COLUMNS and a 0..n-1 index.
    """
    dates = list(dates)
    equity_equal = [float(v) for v in equity_equal]
    equity_vol = [float(v) for v in equity_vol]
    if not len(dates) == len(equity_equal) == len(equity_vol):
        raise ValueError(
            f"Length mismatch: {len(dates)} dates, {len(equity_equal)} equal-weight "
            f"values, {len(equity_vol)} risk parity values"
        )

    return pd.DataFrame({
        "Date": dates,
        "EquityEqual": equity_equal,
        "EquityVolWeighted": equity_vol,
    }, columns=RESULT_COLUMNS)


def iter_result_rows(results: pd.DataFrame) -> Iterator[Tuple[str, float, float]]:
    """Yield (date, equityEqual, equityVol) tuples in date order."""
    for date, eq_equal, eq_vol in results[RESULT_COLUMNS].itertuples(index=False, name=None):
        yield date, eq_equal, eq_vol


def write_results(
    results: pd.DataFrame,
    path: Union[str, Path],
    float_format: str = "%.6g",
) -> Path:
    """Write the assembled rows as CSV with the fixed header."""
    path = Path(path)
    results[RESULT_COLUMNS].to_csv(path, index=False, float_format=float_format)
    logger.info("Saved %d rows to %s", len(results), path)
    return path
