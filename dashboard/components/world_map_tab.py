# dashboard/components/world_map_tab.py
"""
World view: every continent on one map, colored by the world counts file.
Clicking a country jumps to its continent on the Continent Maps page.
"""
import streamlit as st

from dashboard.components.session import get_controller, go_to_region
from disaster_atlas.config import WORLD
from disaster_atlas.utils.plot_utils import PLOTLY_CFG_MAP

MAP_KEY = "atlas_map_world"


def section_title(text: str):
    st.markdown(f'<div class="gv-section-title">{text}</div>', unsafe_allow_html=True)


def story_context(text: str):
    st.markdown(f'<div class="gv-context">{text}</div>', unsafe_allow_html=True)


def _on_world_select():
    ctrl = get_controller()
    event = st.session_state.get(MAP_KEY) or {}
    points = (event.get("selection") or {}).get("points") or []
    if not points:
        return
    country = ctrl.view(WORLD).country_at(points[0].get("curve_number", -1))
    continent = ctrl.continent_for(country)
    if continent:
        go_to_region(continent)


def render(entered: bool = True):
    ctrl = get_controller()
    view = ctrl.view(WORLD)
    if entered or (not view.is_rendered and view.error is None):
        with st.spinner("Loading world map..."):
            view = ctrl.on_region_entered(WORLD)

    section_title("Natural Disasters Worldwide")
    if not view.is_rendered:
        st.error(f"Could not load the world map. {view.error or ''}")
        return

    agg = view.aggregate
    story_context(
        f"{len(agg.counts)} countries with records; up to {agg.max_count:,} disasters per country. "
        "Click a country to open its continent."
    )
    st.plotly_chart(
        view.figure,
        use_container_width=True,
        config=PLOTLY_CFG_MAP,
        key=MAP_KEY,
        on_select=_on_world_select,
        selection_mode="points",
    )
