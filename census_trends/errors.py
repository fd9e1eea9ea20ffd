from __future__ import annotations


class CensusError(Exception):
    """Base class for every error raised by the pipeline."""


class FormatError(CensusError, ValueError):
    """Locator does not carry the expected file extension."""


class ParseError(CensusError, ValueError):
    """An item_id (or area name) could not be decoded."""


class SchemaError(CensusError, ValueError):
    """Columns are missing or do not line up across tables."""


class ConfigError(CensusError, ValueError):
    """Invalid aggregation / plotting parameters."""
