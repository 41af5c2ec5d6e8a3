# src/disaster_atlas/utils/data_utils.py
"""
data_utils.py
-------------
Country-name normalization (the join key between geometry and tables),
per-country aggregation under a category filter, and the detail-row helpers
used by the country panel.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

ALL = "all"
UNKNOWN = "Unknown"

DETAIL_FIELDS = [
    ("disaster_type", "Disaster Type"),
    ("event_name", "Event Name"),
    ("deaths", "Deaths"),
    ("affected", "Affected"),
    ("start", "Start Event"),
    ("end", "End Event"),
]


# ----------------------------
# Normalization
# ----------------------------
def normalize_name(name) -> str:
    """Trim + lowercase. Missing values normalize to "" (never a real country)."""
    if name is None:
        return ""
    try:
        if pd.isna(name):
            return ""
    except (TypeError, ValueError):
        pass
    return str(name).strip().lower()


def normalize_series(s: pd.Series) -> pd.Series:
    """Vectorized normalize_name."""
    return s.fillna("").astype(str).str.strip().str.lower()


def is_all(filter_value) -> bool:
    return filter_value is None or normalize_name(filter_value) in ("", ALL)


# ----------------------------
# Aggregation
# ----------------------------
@dataclass
class Aggregate:
    counts: Dict[str, float] = field(default_factory=dict)
    max_count: float = 1

    def count_for(self, name) -> float:
        return self.counts.get(normalize_name(name), 0)

    @property
    def total(self) -> float:
        return sum(self.counts.values())


def filter_by_category(rows: pd.DataFrame, filter_value, category_col: str = "disaster") -> pd.DataFrame:
    if is_all(filter_value) or rows.empty:
        return rows
    return rows[normalize_series(rows[category_col]) == normalize_name(filter_value)]


def aggregate_counts(rows: pd.DataFrame, filter_value=ALL,
                     country_col: str = "Country",
                     category_col: str = "disaster",
                     count_col: str = "disaster_count") -> Aggregate:
    """
    Sum `count_col` per normalized country after applying the category filter.
    max_count is the largest sum, or 1 when nothing is left (keeps the color
    domain non-degenerate).
    """
    d = filter_by_category(rows, filter_value, category_col)
    if d.empty:
        return Aggregate({}, 1)

    grouped = (
        d.assign(
            _country=normalize_series(d[country_col]),
            _count=pd.to_numeric(d[count_col], errors="coerce").fillna(0),
        )
        .groupby("_country")["_count"]
        .sum()
    )
    counts = {k: (int(v) if float(v).is_integer() else float(v)) for k, v in grouped.items()}
    max_count = max(counts.values()) if counts else 0
    return Aggregate(counts, max_count if max_count > 0 else 1)


def category_options(rows: pd.DataFrame, category_col: str = "disaster") -> List[str]:
    """
    Dropdown options: "all" followed by one trimmed label per normalized
    category (first spelling seen wins).
    """
    if rows.empty or category_col not in rows.columns:
        return [ALL]
    labels = rows[category_col].dropna().astype(str).str.strip()
    first_spelling = {}
    for label in labels:
        key = normalize_name(label)
        if key and key != ALL and key not in first_spelling:
            first_spelling[key] = label
    return [ALL] + sorted(first_spelling.values())


def restore_selection(saved, options: List[str]) -> str:
    if saved in options:
        return saved
    wanted = normalize_name(saved)
    for opt in options:
        if normalize_name(opt) == wanted:
            return opt
    return ALL


# ----------------------------
# Detail rows
# ----------------------------
def filter_details(details: pd.DataFrame, country, filter_value=ALL) -> pd.DataFrame:
    """Detail rows for one country under the current category filter."""
    if details.empty or "Country" not in details.columns:
        return details.iloc[0:0]
    d = details[normalize_series(details["Country"]) == normalize_name(country)]
    if "disaster" in d.columns:
        d = filter_by_category(d, filter_value)
    elif not is_all(filter_value):
        d = d.iloc[0:0]
    return d


def display_value(value) -> str:
    """Render a detail cell; blanks and NaN become "Unknown"."""
    if value is None:
        return UNKNOWN
    try:
        if pd.isna(value):
            return UNKNOWN
    except (TypeError, ValueError):
        pass
    text = str(value).strip()
    if not text:
        return UNKNOWN
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return text


def detail_items(rows: pd.DataFrame) -> List[Dict[str, str]]:
    """One {label: value} dict per detail row, in DETAIL_FIELDS order."""
    items = []
    for rec in rows.to_dict(orient="records"):
        items.append({label: display_value(rec.get(col)) for col, label in DETAIL_FIELDS})
    return items
