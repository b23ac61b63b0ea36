"""
backtesting/metrics.py — Performance metric computations.
Computes summary metrics of an equity curve for the strategy comparison log.

Runnable standalone: python backtesting/metrics.py
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from typing import Dict

import numpy as np
import pandas as pd

TRADING_DAYS = 252


def defined_equity(equity: pd.Series) -> pd.Series:
    """Equity curve from its first defined (nonzero) day onward."""
    nonzero = np.flatnonzero(equity.to_numpy() != 0.0)
    if len(nonzero) == 0:
        return equity.iloc[:0]
    return equity.iloc[nonzero[0]:]


def daily_returns_from_equity(equity: pd.Series) -> pd.Series:
    """Daily simple returns implied by the defined part of an equity curve."""
    return defined_equity(equity).pct_change().dropna()


def total_return(equity: pd.Series) -> float:
    """Final equity over starting equity, minus one."""
    defined = defined_equity(equity)
    if len(defined) == 0:
        return 0.0
    return defined.iloc[-1] / defined.iloc[0] - 1


def annualized_return(daily_returns: pd.Series) -> float:
    """Annualized return from daily returns."""
    if len(daily_returns) == 0:
        return 0.0
    mean_daily = daily_returns.mean()
    return (1 + mean_daily) ** TRADING_DAYS - 1


def annualized_volatility(daily_returns: pd.Series) -> float:
    """Annualized volatility from daily returns."""
    if len(daily_returns) < 2:
        return 0.0
    return daily_returns.std() * np.sqrt(TRADING_DAYS)


def sharpe_ratio(daily_returns: pd.Series) -> float:
    """Annualized Sharpe ratio (assuming risk-free rate ~ 0)."""
    vol = annualized_volatility(daily_returns)
    if vol < 1e-10:
        return 0.0
    return annualized_return(daily_returns) / vol


def max_drawdown(daily_returns: pd.Series) -> float:
    """Maximum drawdown (as a positive fraction, e.g., 0.25 = 25% drawdown)."""
    if len(daily_returns) == 0:
        return 0.0
    cumulative = (1 + daily_returns).cumprod()
    rolling_peak = cumulative.cummax().clip(lower=1.0)
    drawdown = (cumulative - rolling_peak) / rolling_peak
    return abs(drawdown.min())


def calmar_ratio(daily_returns: pd.Series) -> float:
    """Calmar ratio: annualized return / max drawdown."""
    mdd = max_drawdown(daily_returns)
    if mdd < 1e-10:
        return 0.0
    return annualized_return(daily_returns) / mdd


def sortino_ratio(daily_returns: pd.Series) -> float:
    """Sortino ratio: annualized return / downside deviation."""
    downside = daily_returns[daily_returns < 0]
    if len(downside) < 2:
        return 0.0
    downside_std = downside.std() * np.sqrt(TRADING_DAYS)
    if downside_std < 1e-10:
        return 0.0
    return annualized_return(daily_returns) / downside_std


def compute_all_metrics(equity: pd.Series) -> Dict[str, float]:
    """Compute all metrics for one equity curve.

    Args:
        equity: Equity curve indexed by Date. Leading 0.0 placeholders
            (days before the strategy starts) are ignored.

    Returns:
        Dict of metric_name -> value.
    """
    daily_returns = daily_returns_from_equity(equity)
    return {
        "Total Return": total_return(equity),
        "Ann. Return": annualized_return(daily_returns),
        "Ann. Volatility": annualized_volatility(daily_returns),
        "Sharpe Ratio": sharpe_ratio(daily_returns),
        "Max Drawdown": max_drawdown(daily_returns),
        "Calmar Ratio": calmar_ratio(daily_returns),
        "Sortino Ratio": sortino_ratio(daily_returns),
    }


def build_comparison_table(all_metrics: Dict[str, Dict[str, float]]) -> pd.DataFrame:
    """Metrics as rows, strategies as columns."""
    return pd.DataFrame(all_metrics)


if __name__ == "__main__":
    # Quick self-test with random returns
    np.random.seed(42)
    dates = pd.bdate_range("2020-01-01", periods=500).strftime("%Y-%m-%d")
    fake_returns = np.random.randn(500) * 0.01 + 0.0003
    fake_equity = pd.Series(100.0 * np.cumprod(1 + fake_returns), index=dates)

    metrics = compute_all_metrics(fake_equity)
    for k, v in metrics.items():
        print(f"  {k:20s}: {v:+.4f}")
