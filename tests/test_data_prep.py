import pandas as pd
import pytest

from census_trends import (
    FormatError,
    ParseError,
    SchemaError,
    add_year_measure,
    load_census,
    parse_item_id,
    reshape_long,
    two_digit_year,
)


def test_load_rejects_wrong_extension_before_fetch():
    # would fail with a network / file error if it tried to read
    with pytest.raises(FormatError):
        load_census("https://example.invalid/EDU01a.xlsx")
    with pytest.raises(FormatError):
        load_census("/no/such/file.txt")


def test_load_reads_header_and_keeps_stcou_text(csv_path, wide_df):
    df = load_census(str(csv_path))
    assert list(df.columns) == list(wide_df.columns)
    assert len(df) == len(wide_df)
    assert df.loc[0, "STCOU"] == "00000"


def test_load_extension_checked_on_raw_locator(monkeypatch, wide_df):
    fetched = []

    def fake_read_csv(locator, **kwargs):
        fetched.append(locator)
        return wide_df.copy()

    monkeypatch.setattr(pd, "read_csv", fake_read_csv)

    # ends in .csv, so it is fetched even with a query earlier in the string
    url = "https://example.invalid/get?file=EDU01a.csv"
    assert len(load_census(url)) == len(wide_df)
    assert fetched == [url]

    # does not end in .csv: refused before any fetch
    for bad in ("https://example.invalid/EDU01a.csv?raw=1", "EDU01a.CSV", "EDU01a.csv#top"):
        with pytest.raises(FormatError):
            load_census(bad)
    assert fetched == [url]


def test_reshape_row_count_and_columns(wide_df):
    out = reshape_long(wide_df)
    assert list(out.columns) == ["area_name", "STCOU", "item_id", "value"]
    assert len(out) == len(wide_df) * 2
    assert set(out["item_id"]) == {"EDU010187D", "EDU010188D"}


def test_reshape_keeps_every_value_in_row_order(wide_df):
    out = reshape_long(wide_df, value_name="Enrollment_Value")
    first = out.iloc[:2]
    assert first["area_name"].tolist() == ["UNITED STATES", "UNITED STATES"]
    assert first["item_id"].tolist() == ["EDU010187D", "EDU010188D"]
    assert first["Enrollment_Value"].tolist() == [40024299, 39967624]

    wake = out[out["area_name"] == "Wake, NC"].set_index("item_id")["Enrollment_Value"]
    assert wake.to_dict() == {"EDU010187D": 52000, "EDU010188D": 54000}


def test_reshape_does_not_touch_input(wide_df):
    before = wide_df.copy()
    reshape_long(wide_df)
    pd.testing.assert_frame_equal(wide_df, before)


def test_reshape_without_value_columns_is_empty():
    df = pd.DataFrame({"Area_name": ["ALABAMA"], "STCOU": ["01000"], "EDU010187F": [0]})
    out = reshape_long(df)
    assert out.empty
    assert list(out.columns) == ["area_name", "STCOU", "item_id", "value"]


def test_reshape_requires_identifier_columns():
    with pytest.raises(SchemaError):
        reshape_long(pd.DataFrame({"name": ["x"], "STCOU": ["1"], "EDU010187D": [1]}))


@pytest.mark.parametrize("yy, year", [("99", 1999), ("00", 2000), ("24", 2024), ("25", 1925), ("87", 1987)])
def test_two_digit_year_pivot(yy, year):
    assert two_digit_year(yy) == year


def test_parse_item_id():
    assert parse_item_id("EDU010187D") == (1987, "EDU0101")
    assert parse_item_id("PST045209D") == (2009, "PST0452")


@pytest.mark.parametrize("bad", ["EDU0101", "EDU0101AB", "EDU01018", None, 12345678901])
def test_parse_item_id_rejects_malformed(bad):
    with pytest.raises(ParseError):
        parse_item_id(bad)


def test_add_year_measure(long_df):
    out = add_year_measure(long_df)
    assert "year" not in long_df.columns
    assert set(out["year"]) == {1987, 1988}
    assert set(out["measure"]) == {"EDU0101"}
    assert out["year"].dtype == "int64"


def test_add_year_measure_names_bad_key():
    df = pd.DataFrame({"area_name": ["X"], "STCOU": ["1"], "item_id": ["EDU0101xxD"], "value": [1]})
    with pytest.raises(ParseError, match="EDU0101xxD"):
        add_year_measure(df)
