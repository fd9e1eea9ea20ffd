"""
County / state split for long-format Census rows.

Area names come in two shapes in these files:
  "Autauga, AL"   -> county row (comma + two-letter state code)
  "ALABAMA"       -> state row (upper-case name; also "UNITED STATES")
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet

import pandas as pd

from .errors import ParseError, SchemaError

logger = logging.getLogger(__name__)

COUNTY_RX = re.compile(r", [A-Z]{2}")
ANCHORED_COUNTY_RX = re.compile(r", [A-Z]{2}$")

NO_DIVISION = "ERROR"

DIVISIONS: Dict[str, FrozenSet[str]] = {
    "New England": frozenset({
        "CONNECTICUT", "MAINE", "MASSACHUSETTS", "NEW HAMPSHIRE", "RHODE ISLAND", "VERMONT",
    }),
    "Midwest": frozenset({"NEW JERSEY", "NEW YORK", "PENNSYLVANIA"}),
    "East North Central": frozenset({"ILLINOIS", "INDIANA", "MICHIGAN", "OHIO", "WISCONSIN"}),
    "West North Central": frozenset({
        "IOWA", "KANSAS", "MINNESOTA", "MISSOURI", "NEBRASKA", "NORTH DAKOTA", "SOUTH DAKOTA",
    }),
    "South Atlantic": frozenset({
        "DELAWARE", "DISTRICT OF COLUMBIA", "FLORIDA", "GEORGIA", "MARYLAND",
        "NORTH CAROLINA", "SOUTH CAROLINA", "VIRGINIA", "WEST VIRGINIA",
    }),
    "East South Central": frozenset({"ALABAMA", "KENTUCKY", "MISSISSIPPI", "TENNESSEE"}),
    "West South Central": frozenset({"ARKANSAS", "LOUISIANA", "OKLAHOMA", "TEXAS"}),
    "Mountain": frozenset({
        "ARIZONA", "COLORADO", "IDAHO", "MONTANA", "NEVADA", "NEW MEXICO", "UTAH", "WYOMING",
    }),
    "Pacific": frozenset({"ALASKA", "CALIFORNIA", "HAWAII", "OREGON", "WASHINGTON"}),
}

_NAME_TO_DIVISION: Dict[str, str] = {
    name: division for division, names in DIVISIONS.items() for name in names
}


class GeoKind(Enum):
    COUNTY = "county"
    STATE = "state"


@dataclass(frozen=True, eq=False)
class GeoTable:
    """A frame plus the geography level its rows belong to."""
    kind: GeoKind
    frame: pd.DataFrame

    def __len__(self) -> int:
        return len(self.frame)


@dataclass(frozen=True, eq=False)
class CensusPair:
    """County and state tables produced from the same source(s)."""
    county: GeoTable
    state: GeoTable

    def __post_init__(self):
        if self.county.kind is not GeoKind.COUNTY or self.state.kind is not GeoKind.STATE:
            raise SchemaError(
                f"CensusPair expects (COUNTY, STATE) tables, got ({self.county.kind.name}, {self.state.kind.name})"
            )


def is_county(area_name) -> bool:
    """True when the name contains ', XX' (two upper-case letters) anywhere."""
    return isinstance(area_name, str) and COUNTY_RX.search(area_name) is not None


def has_anchored_suffix(area_name) -> bool:
    return isinstance(area_name, str) and ANCHORED_COUNTY_RX.search(area_name) is not None


def state_suffix(area_name: str) -> str:
    """Last two characters of the area name, e.g. 'Wake, NC' -> 'NC'."""
    if not isinstance(area_name, str) or len(area_name) < 2:
        raise ParseError(f"Cannot take a state suffix from {area_name!r}")
    return area_name[-2:]


def division_for(area_name) -> str:
    """Exact-match lookup of an upper-case state name; anything else is 'ERROR'."""
    if not isinstance(area_name, str):
        return NO_DIVISION
    return _NAME_TO_DIVISION.get(area_name, NO_DIVISION)


def classify(df: pd.DataFrame, *, strict: bool = False) -> CensusPair:
    """
    Split rows into county / state tables.

    County rows get `state_abbrev`, state rows get `division`. A county name
    whose ', XX' match is not at the end of the string still takes its last two
    characters as the abbreviation (logged as a warning); with strict=True such
    rows raise ParseError instead.
    """
    if "area_name" not in df.columns:
        raise SchemaError(f"Table has no 'area_name' column. Found: {list(df.columns)}")

    names = df["area_name"]
    county_mask = names.map(is_county).astype(bool)

    county = df.loc[county_mask].copy()
    state = df.loc[~county_mask].copy()

    unanchored = ~county["area_name"].map(has_anchored_suffix).astype(bool)
    if unanchored.any():
        bad = county.loc[unanchored, "area_name"].unique().tolist()
        if strict:
            raise ParseError(f"County names without a trailing state code: {bad[:5]}")
        logger.warning(f"{int(unanchored.sum())} county rows have a mid-string state code; "
                       f"abbreviation taken from last two characters (e.g. {bad[:3]})")

    county["state_abbrev"] = county["area_name"].map(state_suffix).astype(object)
    state["division"] = state["area_name"].map(division_for).astype(object)

    logger.info(f"Classified {len(df):,} rows -> {len(county):,} county, {len(state):,} state")
    return CensusPair(GeoTable(GeoKind.COUNTY, county), GeoTable(GeoKind.STATE, state))
