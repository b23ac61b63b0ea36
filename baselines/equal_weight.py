"""
baselines/equal_weight.py — Equal-weight (1/N) strategy.

Holds every asset at 1/N each day, so the portfolio return is the simple
average of the asset returns. Equity starts at 100 on the first day.
"""

import pandas as pd

from backtesting.engine import compound_equity


def equal_weight_daily_returns(returns_wide: pd.DataFrame) -> pd.Series:
    """Average of the asset returns on each day."""
    n_assets = returns_wide.shape[1]
    if n_assets == 0:
        raise ValueError("Equal weighting needs at least one asset column")
    return returns_wide.sum(axis=1) / n_assets


def equal_weight_equity(
    returns_wide: pd.DataFrame,
    start_value: float = 100.0,
) -> pd.Series:
    """Equity curve of the daily-rebalanced equal-weight portfolio.

    equity[0] = start_value; equity[t] = equity[t-1] * (1 + mean return on t).
    Day 0's own return is never applied.
    """
    if len(returns_wide) == 0:
        raise ValueError("Equal weighting needs at least one day of returns")
    daily = equal_weight_daily_returns(returns_wide)
    equity = compound_equity(daily.to_numpy(), start_value=start_value, first_day=0)
    return pd.Series(equity, index=returns_wide.index, name="EquityEqual")
