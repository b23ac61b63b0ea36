"""
baselines/risk_parity.py — Risk parity (inverse-volatility) strategy.

Allocates inversely proportional to each asset's 20-day rolling population
volatility, normalized to sum to 1, and rebalances every day. Volatilities
come from one RollingWindowStats per asset, rolled forward one day at a time
instead of being recomputed over the whole window.

Window alignment: day t is priced with the window covering days
[t - window_size - 1, t - 2], i.e. the stats lag the priced day by two days.
The window is rolled only after day t has been priced. Equity is defined
from day window_size (start value) onward; earlier days hold 0.0.
"""

import logging
from typing import Any, Dict

import numpy as np
import pandas as pd

from backtesting.engine import compound_equity
from backtesting.rolling_stats import RollingWindowStats

logger = logging.getLogger(__name__)


def inverse_vol_weights(vols: Dict[str, float]) -> Dict[str, float]:
    """Inverse-volatility weights normalized to sum to 1.

    An asset with exactly zero volatility gets weight 0. If every asset has
    zero volatility, every weight is 0.
    """
    inv_vol = {asset: (0.0 if vol == 0.0 else 1.0 / vol) for asset, vol in vols.items()}
    total = sum(inv_vol.values())
    if total > 0.0:
        return {asset: inv / total for asset, inv in inv_vol.items()}
    return {asset: 0.0 for asset in inv_vol}


def run_risk_parity(
    returns_wide: pd.DataFrame,
    window_size: int = 20,
    start_value: float = 100.0,
) -> Dict[str, Any]:
    """Run the inverse-volatility strategy over the full return history.

    Args:
        returns_wide: DataFrame (dates x assets) of daily simple returns.
        window_size: Rolling volatility lookback in days.
        start_value: Equity on day `window_size`.

    Returns:
        Dict with keys:
            equity: Series (length n), 0.0 before day `window_size`.
            weights: DataFrame of weights used on each priced day
                (days window_size + 1 .. n - 1).
            volatilities: DataFrame of the rolling volatilities behind them.
            daily_returns: Series of the portfolio return on each priced day.
            zero_vol_days: Number of priced days where every asset had
                zero volatility (flat equity).
    """
    assets = returns_wide.columns.tolist()
    dates = returns_wide.index
    n = len(returns_wide)
    series = {asset: returns_wide[asset].to_numpy(dtype=float) for asset in assets}

    daily_returns = np.zeros(n)
    weights_history = []
    vol_history = []
    priced_days = []
    zero_vol_days = 0

    if n > window_size:
        stats = {}
        for asset in assets:
            stats[asset] = RollingWindowStats(window_size)
            stats[asset].initialize(series[asset][:window_size])

        for t in range(window_size + 1, n):
            vols = {asset: stats[asset].standard_deviation() for asset in assets}
            weights = inverse_vol_weights(vols)
            if not any(weights.values()):
                zero_vol_days += 1

            port_ret = 0.0
            for asset in assets:
                port_ret += weights[asset] * series[asset][t]
            daily_returns[t] = port_ret

            weights_history.append(weights)
            vol_history.append(vols)
            priced_days.append(t)

            # Roll: day t - window_size - 1 leaves, day t - 1 enters
            old_idx = t - window_size - 1
            for asset in assets:
                outgoing = series[asset][old_idx] if old_idx >= 0 else None
                stats[asset].add_and_remove(series[asset][t - 1], outgoing)
    else:
        logger.warning(
            "Only %d rows for a %d-day window; risk parity equity is undefined.",
            n, window_size,
        )

    if zero_vol_days > 0:
        logger.warning(
            "%d days with zero volatility on every asset; equity held flat.",
            zero_vol_days,
        )

    equity = compound_equity(daily_returns, start_value=start_value, first_day=window_size)
    priced_index = dates[priced_days]

    return {
        "equity": pd.Series(equity, index=dates, name="EquityVolWeighted"),
        "weights": pd.DataFrame(weights_history, index=priced_index, columns=assets),
        "volatilities": pd.DataFrame(vol_history, index=priced_index, columns=assets),
        "daily_returns": pd.Series(daily_returns[priced_days], index=priced_index, name="Risk Parity"),
        "zero_vol_days": zero_vol_days,
    }


def risk_parity_equity(
    returns_wide: pd.DataFrame,
    window_size: int = 20,
    start_value: float = 100.0,
) -> pd.Series:
    """Equity curve of the inverse-volatility strategy only."""
    return run_risk_parity(returns_wide, window_size, start_value)["equity"]
