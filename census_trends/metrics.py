import logging
from typing import List

import pandas as pd

from .errors import ConfigError
from .geography import NO_DIVISION

logger = logging.getLogger(__name__)

DEFAULT_VALUE_FIELD = "Enrollment_Value"


def _require(df: pd.DataFrame, cols, what: str) -> None:
    miss = [c for c in cols if c not in df.columns]
    if miss:
        raise ConfigError(f"{what} is missing columns: {miss}. Found: {list(df.columns)}")


def _numeric(s: pd.Series) -> pd.Series:
    # non-numeric cells count as missing, not zero
    return pd.to_numeric(s, errors="coerce")


def _check_selection(top_or_bottom: str, n) -> str:
    if not isinstance(top_or_bottom, str) or top_or_bottom.lower() not in ("top", "bottom"):
        raise ConfigError(f"top_or_bottom must be 'top' or 'bottom', got {top_or_bottom!r}")
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ConfigError(f"n must be a positive integer, got {n!r}")
    return top_or_bottom.lower()


def state_division_means(state_df: pd.DataFrame, value_field: str = DEFAULT_VALUE_FIELD) -> pd.DataFrame:
    """Mean of value_field per (division, year), 'ERROR' divisions dropped."""
    _require(state_df, ["division", "year", value_field], "state table")
    keep = state_df["division"] != NO_DIVISION
    df = state_df.loc[keep, ["division", "year", value_field]].assign(
        **{value_field: lambda d: _numeric(d[value_field])}
    )
    agg = (df.groupby(["division", "year"])[value_field]
             .mean()
             .reset_index())
    return agg


def county_area_means(
    county_df: pd.DataFrame,
    state_abbrev: str = "NC",
    value_field: str = DEFAULT_VALUE_FIELD,
) -> pd.DataFrame:
    """Per-area mean of value_field within one state; areas keep first-seen order."""
    _require(county_df, ["state_abbrev", "area_name", value_field], "county table")
    in_state = county_df["state_abbrev"] == state_abbrev
    sub = county_df.loc[in_state, ["area_name", value_field]].assign(
        **{value_field: lambda d: _numeric(d[value_field])}
    )
    return (sub.groupby("area_name", sort=False)[value_field]
               .mean()
               .rename("mean_value")
               .reset_index())


def select_county_areas(
    county_df: pd.DataFrame,
    state_abbrev: str = "NC",
    top_or_bottom: str = "top",
    n: int = 5,
    value_field: str = DEFAULT_VALUE_FIELD,
) -> List[str]:
    """
    Names of the n areas with the highest ('top') or lowest ('bottom') mean.
    Ties keep their original order; n past the end just returns every area.
    """
    direction = _check_selection(top_or_bottom, n)
    means = county_area_means(county_df, state_abbrev, value_field)
    ranked = means.sort_values("mean_value", ascending=(direction == "bottom"),
                               kind="stable", na_position="last")
    chosen = ranked["area_name"].head(n).tolist()
    if n > len(means):
        logger.info(f"Requested {n} areas for {state_abbrev}; only {len(means)} available")
    return chosen


def county_series(
    county_df: pd.DataFrame,
    state_abbrev: str = "NC",
    top_or_bottom: str = "top",
    n: int = 5,
    value_field: str = DEFAULT_VALUE_FIELD,
) -> pd.DataFrame:
    """Raw rows (not means) of the selected areas, restricted to the state."""
    _require(county_df, ["year"], "county table")
    chosen = select_county_areas(county_df, state_abbrev, top_or_bottom, n, value_field)
    in_state = county_df[county_df["state_abbrev"] == state_abbrev]
    out = in_state[in_state["area_name"].isin(chosen)].copy()
    out[value_field] = _numeric(out[value_field])
    return out.reset_index(drop=True)
