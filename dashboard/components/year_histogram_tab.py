# dashboard/components/year_histogram_tab.py
"""
Natural Disasters by Continent: one subgroup bar chart per region, with a
global year selector. Charts are rebuilt from scratch on every change.
"""
import logging

import pandas as pd
import streamlit as st

from disaster_atlas.config import ALL, DATA_ROOT
from disaster_atlas.data_pipeline.loader import DataLoadError, DataSource, load_histogram_source
from disaster_atlas.utils.plot_utils import PLOTLY_CFG_NOZOOM
from disaster_atlas.year_histogram import build_histograms, panel_title, year_options

logger = logging.getLogger(__name__)

CHARTS_PER_ROW = 3


def section_title(text: str):
    st.markdown(f'<div class="gv-section-title">{text}</div>', unsafe_allow_html=True)


@st.cache_data(show_spinner=False)
def load_records(root: str) -> pd.DataFrame:
    return load_histogram_source(DataSource(root))


def render(entered: bool = True):
    try:
        df = load_records(DATA_ROOT)
    except DataLoadError as e:
        logger.error(str(e))
        st.error(f"Could not load the disaster records. {e}")
        return

    years = year_options(df)
    year = st.selectbox(
        "Filter by Year:",
        years,
        format_func=lambda y: "All Years" if y == ALL else str(y),
        key="atlas_year",
    )

    section_title(panel_title(year))
    figures = build_histograms(df, year)
    if not figures:
        st.info("No disasters recorded for this year.")
        return

    items = list(figures.items())
    for start in range(0, len(items), CHARTS_PER_ROW):
        cols = st.columns(CHARTS_PER_ROW)
        for col, (region, fig) in zip(cols, items[start:start + CHARTS_PER_ROW]):
            with col:
                st.plotly_chart(fig, use_container_width=True, config=PLOTLY_CFG_NOZOOM,
                                key=f"atlas_hist_{region}")
