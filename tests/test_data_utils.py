import math

import pandas as pd
import pytest

from disaster_atlas.utils.data_utils import (
    ALL,
    aggregate_counts,
    category_options,
    detail_items,
    display_value,
    filter_details,
    normalize_name,
    restore_selection,
)


@pytest.mark.parametrize("raw, expected", [
    ("  France ", "france"),
    ("CÔTE D'IVOIRE", "côte d'ivoire"),
    ("", ""),
    (None, ""),
    (float("nan"), ""),
])
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


def test_aggregate_all_merges_case_variants():
    rows = pd.DataFrame({
        "Country": ["France", "france"],
        "disaster": ["flood", "storm"],
        "disaster_count": [3, 2],
    })
    agg = aggregate_counts(rows, "all")
    assert agg.counts == {"france": 5}
    assert agg.max_count == 5


def test_aggregate_filter_is_case_insensitive():
    rows = pd.DataFrame({
        "Country": ["France", "france"],
        "disaster": ["flood", "storm"],
        "disaster_count": [3, 2],
    })
    agg = aggregate_counts(rows, "Flood")
    assert agg.counts == {"france": 3}
    assert agg.max_count == 3


def test_category_partitions_sum_to_all_total():
    rows = pd.DataFrame({
        "Country": ["A", "b", "B ", "c", "a", "C"],
        "disaster": ["Flood", "storm", "flood", "Drought", " STORM", "drought"],
        "disaster_count": [1, 2, 3, 4, 5, 6],
    })
    total = aggregate_counts(rows, ALL).total
    assert total == 21

    categories = {normalize_name(c) for c in rows["disaster"]}
    parts = sum(aggregate_counts(rows, c).total for c in categories)
    assert parts == total

    storm = aggregate_counts(rows, "Storm")
    assert storm.counts == {"b": 2, "a": 5}


def test_empty_filter_result_defaults_max_to_one():
    rows = pd.DataFrame({"Country": ["France"], "disaster": ["flood"], "disaster_count": [3]})
    agg = aggregate_counts(rows, "volcano")
    assert agg.counts == {}
    assert agg.max_count == 1
    assert agg.count_for("France") == 0


def test_non_numeric_counts_are_zero():
    rows = pd.DataFrame({
        "Country": ["France", "Spain"],
        "disaster": ["flood", "flood"],
        "disaster_count": ["3", "n/a"],
    })
    agg = aggregate_counts(rows)
    assert agg.counts == {"france": 3, "spain": 0}
    assert agg.max_count == 3


def test_count_for_normalizes_lookup():
    rows = pd.DataFrame({"Country": ["France"], "disaster": ["flood"], "disaster_count": [3]})
    agg = aggregate_counts(rows)
    assert agg.count_for("  FRANCE") == 3
    assert agg.count_for(None) == 0


def test_category_options_and_restore():
    rows = pd.DataFrame({"disaster": ["storm", " flood", "storm", None]})
    opts = category_options(rows)
    assert opts == ["all", "flood", "storm"]
    assert restore_selection("storm", opts) == "storm"
    assert restore_selection("Flood", opts) == "flood"
    assert restore_selection("volcano", opts) == "all"


def test_category_options_collapse_case_variants():
    rows = pd.DataFrame({"disaster": ["Flood", " flood", "FLOOD ", "storm", "All"]})
    assert category_options(rows) == ["all", "Flood", "storm"]


def test_filter_details_by_country_and_category():
    details = pd.DataFrame({
        "Country": ["France", "france ", "Spain"],
        "disaster": ["Flood", "storm", "flood"],
    })
    assert len(filter_details(details, "France")) == 2
    assert len(filter_details(details, "FRANCE", "flood")) == 1
    assert filter_details(details, "Italy").empty


@pytest.mark.parametrize("value, expected", [
    (None, "Unknown"),
    (math.nan, "Unknown"),
    ("  ", "Unknown"),
    (12.0, "12"),
    (0, "0"),
    ("Seine", "Seine"),
])
def test_display_value(value, expected):
    assert display_value(value) == expected


def test_detail_items_fill_unknown():
    rows = pd.DataFrame({"Country": ["France"], "event_name": ["Seine"], "deaths": [3]})
    (item,) = detail_items(rows)
    assert item == {
        "Disaster Type": "Unknown",
        "Event Name": "Seine",
        "Deaths": "3",
        "Affected": "Unknown",
        "Start Event": "Unknown",
        "End Event": "Unknown",
    }
