import numpy as np
import pandas as pd
import pytest

ASSETS = ["XLF_ret", "XOP_ret", "XLK_ret"]


def make_returns(data, assets=ASSETS) -> pd.DataFrame:
    """Wide returns frame with business-day date tokens as the index."""
    data = np.asarray(data, dtype=float)
    dates = pd.bdate_range("2021-01-04", periods=len(data)).strftime("%Y-%m-%d")
    return pd.DataFrame(data, index=pd.Index(list(dates), name="Date"), columns=assets)


def write_returns_csv(path, returns_wide: pd.DataFrame, dummy_row: bool = True, extra_lines=()):
    """Write returns in the input file layout: header, dummy row, data rows."""
    lines = [",".join(["Date"] + returns_wide.columns.tolist())]
    if dummy_row:
        lines.append(",".join(["Date"] + ["Return"] * returns_wide.shape[1]))
    for date, row in returns_wide.iterrows():
        lines.append(",".join([date] + [repr(float(v)) for v in row.values]))
    lines.extend(extra_lines)
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def random_returns() -> pd.DataFrame:
    rng = np.random.default_rng(42)
    vols = np.array([0.02, 0.03, 0.01])
    return make_returns(rng.normal(0.0004, 1.0, size=(120, 3)) * vols)


@pytest.fixture
def returns_factory():
    return make_returns


@pytest.fixture
def csv_writer():
    return write_returns_csv
