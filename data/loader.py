"""
data/loader.py — Daily returns file loading and input validation.
Reads the delimited daily-returns file and hands the core a wide returns
frame (dates x assets).

File layout: a header row (Date,<asset>,<asset>,...), one or more dummy
rows, then one row per trading day. Malformed rows are dropped unless
strict mode is on.

Runnable standalone: python data/loader.py [path]
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import logging
from typing import List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from utils import load_config, resolve_path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


class InputDataError(Exception):
    """Fatal problem with the input data. The run produces no output."""


class InputUnavailableError(InputDataError):
    """The input file cannot be opened, or is empty."""


class InsufficientDataError(InputDataError):
    """Fewer valid rows than the volatility lookback needs."""


class MalformedRowError(InputDataError):
    """A data row failed to parse (strict mode only)."""


def _read_raw(path: Path, skip_rows_after_header: int, strict: bool) -> Tuple[pd.DataFrame, int]:
    """Read every field as text, skipping the dummy rows after the header.

    Returns the raw frame (header in row 0) and the number of rows dropped
    for having too many fields.
    """
    too_long: List[List[str]] = []

    def on_bad_line(fields: List[str]) -> Optional[List[str]]:
        if strict:
            raise MalformedRowError(f"Malformed row (wrong field count): {','.join(fields)}")
        too_long.append(fields)
        return None

    try:
        raw = pd.read_csv(
            path,
            header=None,
            skiprows=range(1, 1 + skip_rows_after_header),
            dtype=str,
            engine="python",
            on_bad_lines=on_bad_line,
            skip_blank_lines=True,
        )
    except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
        raise InputUnavailableError(f"Error opening file {path}: {e}") from e
    except pd.errors.EmptyDataError as e:
        raise InputUnavailableError(f"File {path} is empty or invalid.") from e

    return raw, len(too_long)


def load_returns(
    path: Union[str, Path],
    skip_rows_after_header: int = 1,
    strict: bool = False,
) -> pd.DataFrame:
    """Load daily asset returns from a delimited text file.

    Args:
        path: File to read.
        skip_rows_after_header: Dummy rows between the header and the data.
        strict: Raise MalformedRowError instead of dropping bad rows.

    Returns:
        DataFrame indexed by Date (text tokens, file order) with one float
        column of daily simple returns per asset, in header order.
    """
    path = Path(path)
    raw, n_too_long = _read_raw(path, skip_rows_after_header, strict)

    header = [str(h).strip() for h in raw.iloc[0].tolist()]
    if len(header) < 2:
        raise InputUnavailableError(f"Header of {path} names no asset columns.")
    assets = header[1:]

    body = raw.iloc[1:].reset_index(drop=True)
    if len(body) > 0:
        body = body.apply(lambda col: col.str.strip())

    dates = body.iloc[:, 0]
    returns = body.iloc[:, 1:].apply(pd.to_numeric, errors="coerce")
    returns.columns = assets

    # Non-numeric tokens coerce to NaN; inf/-inf parse but are rejected too
    finite = np.isfinite(returns.to_numpy(dtype=float)).all(axis=1)
    valid = dates.notna() & (dates != "") & pd.Series(finite, index=returns.index)
    n_bad = int((~valid).sum())

    if strict and n_bad > 0:
        first_bad = body[~valid].iloc[0].fillna("").tolist()
        raise MalformedRowError(f"Malformed row: {','.join(first_bad)}")

    dropped = n_bad + n_too_long
    if dropped > 0:
        logger.warning("Dropped %d malformed rows from %s", dropped, path)

    returns = returns.loc[valid].astype(float)
    returns.index = pd.Index(dates.loc[valid].tolist(), name="Date")

    logger.info(
        "Loaded %d rows x %d assets (%s) from %s",
        len(returns), len(assets), ", ".join(assets), path,
    )
    return returns


def validate_row_count(n_rows: int, window_size: int = 20) -> None:
    """Reject inputs too short for one full volatility window."""
    if n_rows < window_size:
        raise InsufficientDataError(
            f"Not enough data rows: {n_rows} < window size {window_size}."
        )


if __name__ == "__main__":
    config = load_config()
    input_path = sys.argv[1] if len(sys.argv) > 1 else resolve_path(config["paths"]["input"])
    returns_wide = load_returns(
        input_path,
        skip_rows_after_header=config["data"]["skip_rows_after_header"],
        strict=config["data"]["strict"],
    )
    logger.info("Returns shape: %s", returns_wide.shape)
    print(returns_wide.describe().to_string())
