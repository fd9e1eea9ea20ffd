"""
Configuration for census_trends
Uses Pydantic Settings so defaults can be overridden from the environment or a .env file
"""
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DATASETS_BASE = "https://www4.stat.ncsu.edu/~online/datasets"


class PlotSettings(BaseSettings):
    """Defaults for aggregation and charts"""
    value_field: str = Field("Enrollment_Value", alias="CENSUS_VALUE_FIELD")
    state_abbrev: str = Field("NC", alias="CENSUS_STATE")
    top_or_bottom: str = Field("top", alias="CENSUS_TOP_OR_BOTTOM")
    n: int = Field(5, alias="CENSUS_TOP_N")
    output_dir: str = Field("charts", alias="CENSUS_OUTPUT_DIR")

    @field_validator("top_or_bottom")
    @classmethod
    def validate_top_or_bottom(cls, v: str) -> str:
        v = v.lower()
        if v not in ("top", "bottom"):
            raise ValueError("top_or_bottom must be 'top' or 'bottom'")
        return v

    @field_validator("state_abbrev")
    @classmethod
    def validate_state_abbrev(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 2 or not v.isalpha():
            raise ValueError(f"state_abbrev must be a two-letter code, got {v!r}")
        return v

    @field_validator("n")
    @classmethod
    def validate_n(cls, v: int) -> int:
        if v < 1:
            raise ValueError("n must be >= 1")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class SourceSettings(BaseSettings):
    """Input locations"""
    expected_ext: str = Field(".csv", alias="CENSUS_EXPECTED_EXT")
    # comma-separated in the environment
    sources_raw: str = Field(
        f"{DATASETS_BASE}/EDU01a.csv,{DATASETS_BASE}/EDU01b.csv",
        alias="CENSUS_SOURCES",
    )

    @property
    def sources(self) -> List[str]:
        return [s.strip() for s in self.sources_raw.split(",") if s.strip()]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class AppSettings(BaseSettings):
    """Application-wide settings"""
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Settings:
    """Lazily built settings groups"""
    _plot: Optional[PlotSettings] = None
    _source: Optional[SourceSettings] = None
    _app: Optional[AppSettings] = None

    @property
    def plot(self) -> PlotSettings:
        if self._plot is None:
            self._plot = PlotSettings()  # type: ignore
        return self._plot

    @property
    def source(self) -> SourceSettings:
        if self._source is None:
            self._source = SourceSettings()  # type: ignore
        return self._source

    @property
    def app(self) -> AppSettings:
        if self._app is None:
            self._app = AppSettings()  # type: ignore
        return self._app


settings = Settings()
