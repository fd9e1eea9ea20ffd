from .combine import combine_census
from .data_prep import add_year_measure, load_census, parse_item_id, reshape_long, two_digit_year
from .errors import CensusError, ConfigError, FormatError, ParseError, SchemaError
from .geography import (
    DIVISIONS,
    CensusPair,
    GeoKind,
    GeoTable,
    classify,
    division_for,
    has_anchored_suffix,
    is_county,
    state_suffix,
)
from .metrics import county_area_means, county_series, select_county_areas, state_division_means
from .pipeline import process_census, process_many
from .viz import plot, plot_county, plot_state

__version__ = "0.1.0"
