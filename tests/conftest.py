import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from census_trends import add_year_measure, classify, reshape_long


@pytest.fixture
def wide_df() -> pd.DataFrame:
    # two value columns ending in D, one flag column ending in F
    return pd.DataFrame({
        "Area_name": ["UNITED STATES", "ALABAMA", "Autauga, AL", "NORTH CAROLINA",
                      "Wake, NC", "Durham, NC", "Orange, NC"],
        "STCOU": ["00000", "01000", "01001", "37000", "37183", "37063", "37135"],
        "EDU010187F": [0, 0, 0, 0, 0, 0, 0],
        "EDU010187D": [40024299, 733735, 6829, 1086871, 52000, 24000, 14000],
        "EDU010188D": [39967624, 728234, 6900, 1085248, 54000, 25000, 13000],
    })


@pytest.fixture
def long_df(wide_df) -> pd.DataFrame:
    return reshape_long(wide_df, value_name="Enrollment_Value")


@pytest.fixture
def pair(long_df):
    return classify(add_year_measure(long_df))


@pytest.fixture
def csv_path(tmp_path, wide_df):
    p = tmp_path / "EDU01a.csv"
    wide_df.to_csv(p, index=False)
    return p
