# dashboard/components/session.py
"""
Session-scoped dashboard controller. One controller (and its filter store)
per browser session, so filter choices survive page and region switches.
"""
import streamlit as st

from disaster_atlas.data_pipeline.loader import DataSource
from disaster_atlas.renderer import DashboardController

CONTROLLER_KEY = "atlas_controller"
REGION_KEY = "atlas_region_radio"
PAGE_PARAM = "page"


def get_controller() -> DashboardController:
    if CONTROLLER_KEY not in st.session_state:
        st.session_state[CONTROLLER_KEY] = DashboardController(DataSource())
    return st.session_state[CONTROLLER_KEY]


def go_to_region(region: str):
    """Open the Continent Maps page on `region` (world map click)."""
    st.session_state[REGION_KEY] = region
    st.query_params[PAGE_PARAM] = "Continent Maps"
