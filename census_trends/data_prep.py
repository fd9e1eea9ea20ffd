from __future__ import annotations
import logging
from typing import Tuple

import pandas as pd

from .errors import FormatError, ParseError, SchemaError

logger = logging.getLogger(__name__)

ID_COL = "Area_name"
CODE_COL = "STCOU"
KEY_COL = "item_id"
YEAR_PIVOT = 24  # two-digit years above this are 19xx


def load_census(locator: str, *, expected_ext: str = ".csv") -> pd.DataFrame:
    """
    Read one Census CSV (path or URL) into a DataFrame.

    The extension is checked before anything is fetched; STCOU is kept as text
    so leading zeros survive. Columns are exactly the source header.
    """
    if not isinstance(locator, str) or not locator.endswith(expected_ext):
        raise FormatError(f"Expected a '{expected_ext}' locator, got: {locator!r}")

    logger.info(f"Loading census file: {locator}")
    df = pd.read_csv(locator, dtype={CODE_COL: str})
    logger.info(f"Loaded {len(df):,} rows with {len(df.columns)} columns")
    return df


def reshape_long(
    df: pd.DataFrame,
    *,
    id_col: str = ID_COL,
    value_suffix: str = "D",
    value_name: str = "value",
) -> pd.DataFrame:
    """
    Wide -> long:
      keep area_name (renamed from id_col), STCOU and every column ending in
      value_suffix, then emit one row per (area, value column).
    Rows come out in input order, value columns in header order within a row.
    """
    missing = [c for c in (id_col, CODE_COL) if c not in df.columns]
    if missing:
        raise SchemaError(f"Table is missing required columns: {missing}. Found: {list(df.columns)}")

    value_cols = [c for c in df.columns if c not in (id_col, CODE_COL) and str(c).endswith(value_suffix)]
    if not value_cols:
        logger.warning(f"No columns ending in '{value_suffix}'; long table is empty")
        return pd.DataFrame(columns=["area_name", CODE_COL, KEY_COL, value_name])

    narrow = df[[id_col, CODE_COL] + value_cols].rename(columns={id_col: "area_name"})
    out = narrow.melt(
        id_vars=["area_name", CODE_COL],
        value_vars=value_cols,
        var_name=KEY_COL,
        value_name=value_name,
    )
    # melt stacks column-by-column; reorder to row-by-row
    out["_row"] = list(range(len(narrow))) * len(value_cols)
    out = out.sort_values("_row", kind="stable").drop(columns="_row").reset_index(drop=True)

    logger.info(f"Reshaped {len(df):,} rows x {len(value_cols)} value columns -> {len(out):,} long rows")
    return out


def two_digit_year(yy: str) -> int:
    """'99' -> 1999, '24' -> 2024, '25' -> 1925."""
    if not isinstance(yy, str) or len(yy) != 2 or not (yy.isascii() and yy.isdigit()):
        raise ParseError(f"Year fragment must be two digits, got: {yy!r}")
    prefix = "19" if int(yy) > YEAR_PIVOT else "20"
    return int(prefix + yy)


def parse_item_id(item_id: str) -> Tuple[int, str]:
    """Split an item_id like 'EDU010187D' into (1987, 'EDU0101')."""
    if not isinstance(item_id, str) or len(item_id) < 9:
        raise ParseError(f"item_id must be at least 9 characters, got: {item_id!r}")
    try:
        year = two_digit_year(item_id[7:9])
    except ParseError as e:
        raise ParseError(f"Bad year fragment in item_id {item_id!r}: {e}") from e
    return year, item_id[:7]


def add_year_measure(df: pd.DataFrame, *, key_col: str = KEY_COL) -> pd.DataFrame:
    """
    Add derived fields from the key column:
      year (four-digit int), measure (7-char code)
    Returns a copy.
    """
    if key_col not in df.columns:
        raise SchemaError(f"Table has no '{key_col}' column. Found: {list(df.columns)}")

    out = df.copy()
    parsed = [parse_item_id(k) for k in out[key_col]]
    out["year"] = pd.Series([p[0] for p in parsed], index=out.index, dtype="int64")
    out["measure"] = pd.Series([p[1] for p in parsed], index=out.index, dtype="object")
    return out
