import numpy as np
import pytest

from baselines.equal_weight import equal_weight_equity
from baselines.risk_parity import inverse_vol_weights, risk_parity_equity, run_risk_parity

WINDOW = 20


def naive_risk_parity(values: np.ndarray, window: int = WINDOW, start_value: float = 100.0):
    """Recompute every day's weights from scratch over days [t-window-1, t-2]."""
    n, n_assets = values.shape
    equity = np.zeros(n)
    if n <= window:
        return equity
    equity[window] = start_value
    for t in range(window + 1, n):
        vols = values[t - window - 1:t - 1].std(axis=0, ddof=0)
        inv = np.array([0.0 if v == 0.0 else 1.0 / v for v in vols])
        weights = inv / inv.sum() if inv.sum() > 0 else np.zeros(n_assets)
        equity[t] = equity[t - 1] * (1 + weights @ values[t])
    return equity


def test_inverse_vol_weights_basic():
    weights = inverse_vol_weights({"A": 0.1, "B": 0.2})
    assert weights["A"] == pytest.approx(2 / 3)
    assert weights["B"] == pytest.approx(1 / 3)


def test_inverse_vol_weights_zero_vol_gets_zero():
    weights = inverse_vol_weights({"A": 0.0, "B": 0.01, "C": 0.03})
    assert weights["A"] == 0.0
    assert weights["B"] + weights["C"] == pytest.approx(1.0)
    assert weights["B"] == pytest.approx(0.75)


def test_inverse_vol_weights_all_zero():
    assert inverse_vol_weights({"A": 0.0, "B": 0.0, "C": 0.0}) == {"A": 0.0, "B": 0.0, "C": 0.0}


def test_matches_from_scratch_recompute(random_returns):
    result = run_risk_parity(random_returns, window_size=WINDOW)
    expected = naive_risk_parity(random_returns.to_numpy())
    np.testing.assert_allclose(result["equity"].to_numpy(), expected, rtol=1e-9)


def test_equity_placeholders_and_start(random_returns):
    equity = risk_parity_equity(random_returns)
    assert len(equity) == len(random_returns)
    assert (equity.iloc[:WINDOW] == 0.0).all()
    assert equity.iloc[WINDOW] == 100.0
    assert equity.name == "EquityVolWeighted"


def test_compounding_uses_weighted_return(random_returns):
    result = run_risk_parity(random_returns)
    equity = result["equity"]
    weights = result["weights"]
    for date in weights.index[:10]:
        t = random_returns.index.get_loc(date)
        port_ret = float((weights.loc[date] * random_returns.loc[date]).sum())
        assert result["daily_returns"].loc[date] == pytest.approx(port_ret)
        assert equity.iloc[t] == pytest.approx(equity.iloc[t - 1] * (1 + port_ret))


def test_weights_sum_to_one_on_every_priced_day(random_returns):
    weights = run_risk_parity(random_returns)["weights"]
    assert len(weights) == len(random_returns) - WINDOW - 1
    assert weights.index[0] == random_returns.index[WINDOW + 1]
    np.testing.assert_allclose(weights.sum(axis=1).to_numpy(), 1.0)
    assert (weights >= 0.0).all().all()


def test_lower_vol_asset_gets_larger_weight(random_returns):
    weights = run_risk_parity(random_returns)["weights"]
    # Column vols are 2%, 3%, 1%
    assert (weights["XLK_ret"] > weights["XOP_ret"]).mean() > 0.9


def test_deterministic(random_returns):
    first = run_risk_parity(random_returns)
    second = run_risk_parity(random_returns)
    assert first["equity"].equals(second["equity"])
    assert first["weights"].equals(second["weights"])


def test_constant_asset_gets_zero_weight(returns_factory):
    rng = np.random.default_rng(3)
    n = 40
    data = np.column_stack([
        np.full(n, 0.01),
        rng.normal(0.0, 0.02, n),
        rng.normal(0.0, 0.01, n),
    ])
    weights = run_risk_parity(returns_factory(data))["weights"]
    assert len(weights) == n - WINDOW - 1
    assert (weights["XLF_ret"] == 0.0).all()
    np.testing.assert_allclose((weights["XOP_ret"] + weights["XLK_ret"]).to_numpy(), 1.0)


def test_twenty_one_days_defines_only_start(returns_factory):
    rng = np.random.default_rng(5)
    data = np.column_stack([np.full(21, 0.01), rng.normal(0, 0.02, 21), rng.normal(0, 0.01, 21)])
    result = run_risk_parity(returns_factory(data))
    assert result["equity"].iloc[WINDOW] == 100.0
    assert (result["equity"].iloc[:WINDOW] == 0.0).all()
    assert result["weights"].empty


def test_all_zero_returns(returns_factory):
    returns = returns_factory(np.zeros((25, 3)))
    result = run_risk_parity(returns)
    equity = result["equity"]
    assert (equity.iloc[WINDOW:] == 100.0).all()
    assert (equity.iloc[:WINDOW] == 0.0).all()
    assert (result["weights"] == 0.0).all().all()
    assert (result["daily_returns"] == 0.0).all()
    assert result["zero_vol_days"] == 25 - WINDOW - 1
    assert (equal_weight_equity(returns) == 100.0).all()


def test_single_asset_shock_uses_lagged_window(returns_factory):
    n = 30
    data = np.zeros((n, 3))
    data[25, 0] = 0.10
    returns = returns_factory(data)
    dates = returns.index

    equal = equal_weight_equity(returns)
    assert equal.iloc[25] == pytest.approx(equal.iloc[24] * (1 + 0.10 / 3))

    result = run_risk_parity(returns)
    vols = result["volatilities"]
    weights = result["weights"]

    # Day 25 is priced from days 4..23; the shock is not in the window yet
    assert vols.loc[dates[25], "XLF_ret"] == 0.0
    assert weights.loc[dates[25], "XLF_ret"] == 0.0
    assert result["equity"].iloc[25] == 100.0

    # Day 26 uses days 5..24, still without the shock
    assert weights.loc[dates[26], "XLF_ret"] == 0.0

    # Day 27 uses days 6..25, the first window containing it
    assert vols.loc[dates[27], "XLF_ret"] == pytest.approx(data[6:26, 0].std())
    assert weights.loc[dates[27], "XLF_ret"] == 1.0


def test_window_equal_to_row_count_defines_nothing(returns_factory):
    rng = np.random.default_rng(11)
    returns = returns_factory(rng.normal(0, 0.01, size=(WINDOW, 3)))
    result = run_risk_parity(returns)
    assert (result["equity"] == 0.0).all()
    assert result["weights"].empty
    assert result["daily_returns"].empty


def test_generalizes_to_other_asset_counts(returns_factory):
    rng = np.random.default_rng(9)
    data = rng.normal(0, 1.0, size=(60, 5)) * np.array([0.01, 0.02, 0.03, 0.04, 0.05])
    returns = returns_factory(data, assets=["A", "B", "C", "D", "E"])
    result = run_risk_parity(returns)
    np.testing.assert_allclose(result["equity"].to_numpy(), naive_risk_parity(data), rtol=1e-9)
    assert list(result["weights"].columns) == ["A", "B", "C", "D", "E"]


def test_custom_window_and_start(random_returns):
    result = run_risk_parity(random_returns, window_size=5, start_value=1.0)
    assert result["equity"].iloc[5] == 1.0
    np.testing.assert_allclose(
        result["equity"].to_numpy(),
        naive_risk_parity(random_returns.to_numpy(), window=5, start_value=1.0),
        rtol=1e-9,
    )


def test_asset_turning_constant_after_volatile_stretch_gets_zero_weight(returns_factory):
    for seed in range(25):
        rng = np.random.default_rng(seed)
        data = np.column_stack([
            np.concatenate([rng.normal(0.0, 0.3, 200), np.full(60, 0.01)]),
            rng.normal(0.0, 0.02, 260),
            rng.normal(0.0, 0.01, 260),
        ])
        weights = run_risk_parity(returns_factory(data))["weights"]
        assert (weights["XLF_ret"].iloc[-30:] == 0.0).all()
        np.testing.assert_allclose((weights["XOP_ret"] + weights["XLK_ret"]).iloc[-30:].to_numpy(), 1.0)
