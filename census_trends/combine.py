from __future__ import annotations
import logging
from typing import List

import pandas as pd

from .errors import ConfigError, SchemaError
from .geography import CensusPair, GeoKind, GeoTable

logger = logging.getLogger(__name__)


def _stack(tables: List[GeoTable], kind: GeoKind) -> GeoTable:
    expected = set(tables[0].frame.columns)
    for i, t in enumerate(tables):
        if t.kind is not kind:
            raise SchemaError(f"Source {i}: expected a {kind.name} table, got {t.kind.name}")
        cols = set(t.frame.columns)
        if cols != expected:
            raise SchemaError(
                f"Source {i}: {kind.value} columns differ from source 0 "
                f"(missing={sorted(expected - cols)}, extra={sorted(cols - expected)})"
            )
    # align column order on the first source before stacking
    order = list(tables[0].frame.columns)
    frame = pd.concat([t.frame[order] for t in tables], ignore_index=True)
    return GeoTable(kind, frame)


def combine_census(*pairs: CensusPair) -> CensusPair:
    """
    Append the county tables of every pair into one, and the state tables into
    another. Source order is kept, rows are not deduplicated.
    """
    if not pairs:
        raise ConfigError("combine_census needs at least one (county, state) pair")

    county = _stack([p.county for p in pairs], GeoKind.COUNTY)
    state = _stack([p.state for p in pairs], GeoKind.STATE)
    logger.info(f"Combined {len(pairs)} sources -> {len(county):,} county, {len(state):,} state rows")
    return CensusPair(county, state)
