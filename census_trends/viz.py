from __future__ import annotations
import logging
import os
from typing import Optional, Tuple, Union

import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.ticker import StrMethodFormatter

from .errors import ConfigError
from .geography import CensusPair, GeoKind, GeoTable
from .metrics import DEFAULT_VALUE_FIELD, county_series, state_division_means

logger = logging.getLogger(__name__)

MARKERS = ["o", "s", "^", "D", "v", "<", ">"]


def _ensure_dir(p: Optional[str]) -> None:
    if p:
        d = os.path.dirname(p)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)


def _style_axes(ax: plt.Axes, title: str, ylabel: str) -> None:
    ax.set_title(title)
    ax.set_xlabel("Year")
    ax.set_ylabel(ylabel)
    ax.yaxis.set_major_formatter(StrMethodFormatter("{x:,.0f}"))
    ax.tick_params(axis="x", labelrotation=45)
    ax.grid(True, alpha=0.3)


def _finish(fig: plt.Figure, out_path: Optional[str], show: bool) -> Optional[str]:
    fig.tight_layout()
    saved = None
    if out_path:
        _ensure_dir(out_path)
        fig.savefig(out_path, dpi=150, bbox_inches="tight")
        saved = out_path
        logger.info(f"Saved chart: {out_path}")
    if show:
        plt.show()
    else:
        plt.close(fig)
    return saved


def plot_state(
    state_df: pd.DataFrame,
    value_field: str = DEFAULT_VALUE_FIELD,
    out_path: Optional[str] = None,
    show: bool = False,
) -> Tuple[plt.Figure, plt.Axes, Optional[str], pd.DataFrame]:
    """
    Mean value_field per division across years, one line per division.
    'ERROR' (non-state) rows are left out.
    """
    means = state_division_means(state_df, value_field)
    if means.empty:
        raise ConfigError(f"No state rows with a known division to plot for '{value_field}'")
    if means[value_field].isna().all():
        raise ConfigError(f"'{value_field}' has no numeric values to plot")

    fig, ax = plt.subplots(figsize=(10, 6))
    for i, (division, sub) in enumerate(means.groupby("division")):
        sub = sub.sort_values("year")
        ax.plot(sub["year"].to_numpy(), sub[value_field].to_numpy(),
                marker=MARKERS[i % len(MARKERS)], linewidth=1.8, markersize=5, label=division)

    _style_axes(ax, f"Mean {value_field} by Census Division", f"Mean {value_field}")
    ax.legend(title="Division", fontsize=9)

    saved = _finish(fig, out_path, show)
    return fig, ax, saved, means


def plot_county(
    county_df: pd.DataFrame,
    value_field: str = DEFAULT_VALUE_FIELD,
    state_abbrev: str = "NC",
    top_or_bottom: str = "top",
    n: int = 5,
    out_path: Optional[str] = None,
    show: bool = False,
) -> Tuple[plt.Figure, plt.Axes, Optional[str], pd.DataFrame]:
    """
    Raw value_field across years for the top/bottom-n areas of one state
    (ranked by each area's overall mean).
    """
    series = county_series(county_df, state_abbrev, top_or_bottom, n, value_field)
    if series.empty:
        raise ConfigError(f"No county rows for state '{state_abbrev}'")
    if series[value_field].isna().all():
        raise ConfigError(f"'{value_field}' has no numeric values to plot")

    fig, ax = plt.subplots(figsize=(10, 6))
    for i, (area, sub) in enumerate(series.groupby("area_name", sort=False)):
        sub = sub.sort_values("year")
        ax.plot(sub["year"].to_numpy(), sub[value_field].to_numpy(),
                marker=MARKERS[i % len(MARKERS)], linewidth=1.8, markersize=5, label=area)

    label = top_or_bottom.lower().capitalize()
    shown = series["area_name"].nunique()
    _style_axes(ax, f"{value_field}: {label} {shown} Areas in {state_abbrev}", value_field)
    ax.legend(title="Area", fontsize=9)

    saved = _finish(fig, out_path, show)
    return fig, ax, saved, series


def plot(
    table: Union[GeoTable, CensusPair, pd.DataFrame],
    kind: Optional[GeoKind] = None,
    **kwargs,
):
    """Route a tagged table to plot_county / plot_state."""
    if isinstance(table, CensusPair):
        raise ConfigError("Pass pair.county or pair.state, not the whole pair")
    if isinstance(table, GeoTable):
        if kind is not None and kind is not table.kind:
            raise ConfigError(f"kind={kind.name} does not match table kind {table.kind.name}")
        kind, frame = table.kind, table.frame
    else:
        if kind is None:
            raise ConfigError("kind is required when plotting a bare DataFrame")
        frame = table

    if kind is GeoKind.COUNTY:
        return plot_county(frame, **kwargs)
    elif kind is GeoKind.STATE:
        return plot_state(frame, **kwargs)
    raise ConfigError(f"Unknown geography kind: {kind!r}")
