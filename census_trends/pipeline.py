from __future__ import annotations
import logging
from typing import Iterable

from .combine import combine_census
from .data_prep import add_year_measure, load_census, reshape_long
from .errors import ConfigError
from .geography import CensusPair, classify
from .metrics import DEFAULT_VALUE_FIELD

logger = logging.getLogger(__name__)


def process_census(
    locator: str,
    *,
    value_name: str = DEFAULT_VALUE_FIELD,
    expected_ext: str = ".csv",
    strict: bool = False,
) -> CensusPair:
    """load -> reshape -> year/measure -> county/state split, for one file."""
    wide = load_census(locator, expected_ext=expected_ext)
    long = reshape_long(wide, value_name=value_name)
    enriched = add_year_measure(long)
    return classify(enriched, strict=strict)


def process_many(
    locators: Iterable[str],
    *,
    value_name: str = DEFAULT_VALUE_FIELD,
    expected_ext: str = ".csv",
    strict: bool = False,
) -> CensusPair:
    """Run process_census over every locator and stack the results."""
    locators = list(locators)
    if not locators:
        raise ConfigError("No census sources given")
    logger.info(f"Processing {len(locators)} census sources")
    pairs = [
        process_census(loc, value_name=value_name, expected_ext=expected_ext, strict=strict)
        for loc in locators
    ]
    return combine_census(*pairs)
