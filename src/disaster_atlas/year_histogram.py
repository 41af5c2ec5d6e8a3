"""
year_histogram.py
-----------------
"Natural Disasters by Continent" panel: one bar chart per region counting
events per disaster subgroup, optionally restricted to a single start year.
Independent of the continent maps.
"""
from typing import Dict, List

import pandas as pd
from plotly import graph_objects as go

from disaster_atlas.config import ALL
from disaster_atlas.utils.plot_utils import build_region_histogram

YEAR_COL = "Start Year"
REGION_COL = "Region"
SUBGROUP_COL = "Disaster Subgroup"


def year_options(df: pd.DataFrame) -> List:
    """["all"] + sorted unique start years."""
    years = pd.to_numeric(df[YEAR_COL], errors="coerce").dropna().astype(int).unique()
    return [ALL] + sorted(int(y) for y in years)


def filter_year(df: pd.DataFrame, year=ALL) -> pd.DataFrame:
    if year is None or str(year).strip().lower() == ALL:
        return df
    return df[pd.to_numeric(df[YEAR_COL], errors="coerce") == int(year)]


def count_by_region(df: pd.DataFrame, year=ALL) -> pd.DataFrame:
    """Rows per (Region, Disaster Subgroup) for the selected year."""
    d = filter_year(df, year).dropna(subset=[REGION_COL, SUBGROUP_COL])
    return (
        d.groupby([REGION_COL, SUBGROUP_COL], as_index=False)
        .size()
        .rename(columns={"size": "Count"})
    )


def panel_title(year=ALL) -> str:
    year_text = "All Years" if str(year).strip().lower() == ALL else f"Year {year}"
    return f"Natural Disasters by Continent ({year_text})"


def build_histograms(df: pd.DataFrame, year=ALL) -> Dict[str, go.Figure]:
    """
    One figure per region, in order of first appearance in the data. Regions
    without rows for the year are skipped.
    """
    counts = count_by_region(df, year)
    regions = filter_year(df, year)[REGION_COL].dropna().unique()
    figures = {}
    for region in regions:
        region_counts = counts[counts[REGION_COL] == region]
        if region_counts.empty:
            continue
        figures[region] = build_region_histogram(region_counts, region)
    return figures
