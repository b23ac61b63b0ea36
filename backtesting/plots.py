"""
backtesting/plots.py — Equity curve chart for the strategy comparison.
"""

import logging
from pathlib import Path
from typing import Union

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for saving plots
import matplotlib.pyplot as plt
import pandas as pd

from backtesting.metrics import defined_equity

logger = logging.getLogger(__name__)


def plot_equity_curves(
    results: pd.DataFrame,
    path: Union[str, Path],
) -> Path:
    """Plot both equity curves and save the figure.

    The risk parity curve is drawn from its first defined day only, so
    the 0.0 placeholders do not show up as a drop to zero.

    Args:
        results: Assembled table (Date, EquityEqual, EquityVolWeighted).
        path: PNG file to write.

    Returns:
        The path written.
    """
    path = Path(path)
    x = pd.RangeIndex(len(results))
    equal = pd.Series(results["EquityEqual"].to_numpy(), index=x)
    vol = defined_equity(pd.Series(results["EquityVolWeighted"].to_numpy(), index=x))

    fig, ax = plt.subplots(figsize=(14, 6))
    ax.plot(equal.index, equal.values, label="Equal Weight")
    ax.plot(vol.index, vol.values, label="Risk Parity (20d inverse vol)")

    n_ticks = min(10, len(results))
    if n_ticks > 0:
        tick_pos = [int(round(i * (len(results) - 1) / max(n_ticks - 1, 1))) for i in range(n_ticks)]
        ax.set_xticks(tick_pos)
        ax.set_xticklabels([results["Date"].iloc[i] for i in tick_pos], rotation=45, ha="right")

    ax.set_title("Equity Curves: Equal Weight vs. Risk Parity")
    ax.set_xlabel("Date")
    ax.set_ylabel("Equity")
    ax.legend()
    plt.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    logger.info("Saved equity curve plot to %s", path)
    return path
