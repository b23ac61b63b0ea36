"""
backtesting/engine.py — Equity compounding shared by both strategies.

Key properties:
- Equity starts at a fixed value on the strategy's first defined day
- Each later day compounds: equity[t] = equity[t-1] * (1 + r[t])
- Days before the first defined day hold a 0.0 placeholder
"""

import logging
from typing import Any, Dict, Sequence

import numpy as np
import pandas as pd

from backtesting.metrics import compute_all_metrics, defined_equity

logger = logging.getLogger(__name__)


def compound_equity(
    daily_returns: Sequence[float],
    start_value: float = 100.0,
    first_day: int = 0,
) -> np.ndarray:
    """Compound daily portfolio returns into an equity curve.

    The return on `first_day` itself is never applied; equity is set to
    `start_value` there and compounding starts on the following day.

    Args:
        daily_returns: Portfolio return for every day (length n).
        start_value: Equity on `first_day`.
        first_day: Index of the first defined day.

    Returns:
        Array of length n, 0.0 before `first_day`. All zeros when
        `first_day >= n`.
    """
    daily_returns = np.asarray(daily_returns, dtype=float)
    n = len(daily_returns)
    equity = np.zeros(n)
    if first_day >= n:
        return equity

    equity[first_day] = start_value
    for t in range(first_day + 1, n):
        equity[t] = equity[t - 1] * (1.0 + daily_returns[t])
    return equity


def summarize_strategy(
    name: str,
    equity: pd.Series,
) -> Dict[str, Any]:
    """Compute metrics for one equity curve and log a one-line summary.

    Args:
        name: Strategy name for logging.
        equity: Equity curve, possibly with leading 0.0 placeholders.

    Returns:
        Dict of metric_name -> value.
    """
    metrics = compute_all_metrics(equity)
    defined = defined_equity(equity)
    if len(defined) == 0:
        logger.warning("%s | no defined equity values", name)
        return metrics

    logger.info(
        "%s | %s to %s | Final: %.4f | Return: %.2f%% | Sharpe: %.3f | MaxDD: %.2f%%",
        name, defined.index[0], defined.index[-1],
        defined.iloc[-1],
        metrics["Total Return"] * 100,
        metrics["Sharpe Ratio"],
        metrics["Max Drawdown"] * 100,
    )
    return metrics
