# dashboard/components/continent_maps_tab.py

"""
continent_maps_tab.py
---------------------
One choropleth per continent:
- the continent picker plays the role of scrolling a section into view
  (entering a continent reloads it with its remembered filter)
- a per-continent "Disaster Group" filter
- hover shows the country, click opens the country detail panel
"""

import html
from functools import partial

import streamlit as st

from dashboard.components.session import REGION_KEY, get_controller
from disaster_atlas.config import ALL, CONTINENTS, REGION_LABELS
from disaster_atlas.renderer import RegionView
from disaster_atlas.utils.plot_utils import PLOTLY_CFG_MAP

ALL_LABEL = "All Disaster Groups"


# ----------------------------
# Small helpers (titles, anchors)
# ----------------------------
def _anchor(id_: str):
    st.markdown(f'<div id="{id_}"></div>', unsafe_allow_html=True)


def section_title(text: str):
    st.markdown(f'<div class="gv-section-title">{text}</div>', unsafe_allow_html=True)


def subsection_title(text: str):
    st.markdown(f'<div class="gv-subsection-title">{text}</div>', unsafe_allow_html=True)


def story_context(text: str):
    st.markdown(f'<div class="gv-context">{text}</div>', unsafe_allow_html=True)


def _filter_key(region: str) -> str:
    return f"atlas_filter_{region}"


def _map_key(region: str) -> str:
    return f"atlas_map_{region}"


# ----------------------------
# Callbacks (run before the rerun)
# ----------------------------
def _on_filter_change(region: str):
    get_controller().on_filter_changed(region, st.session_state[_filter_key(region)])


def _on_map_select(region: str):
    ctrl = get_controller()
    event = st.session_state.get(_map_key(region)) or {}
    points = (event.get("selection") or {}).get("points") or []
    if not points:
        return
    country = ctrl.view(region).country_at(points[0].get("curve_number", -1))
    if country:
        ctrl.on_country_clicked(region, country)


def _on_close(region: str):
    get_controller().on_panel_closed(region)


# ----------------------------
# Pieces
# ----------------------------
def _filter_select(view: RegionView):
    key = _filter_key(view.region)
    # keep the widget in sync with the restored selection before it is built
    if st.session_state.get(key) != view.filter_option:
        st.session_state[key] = view.filter_option
    st.selectbox(
        "Disaster Group",
        options=view.filter_options,
        format_func=lambda v: ALL_LABEL if v == ALL else v,
        key=key,
        on_change=_on_filter_change,
        args=(view.region,),
    )


def _detail_panel(view: RegionView):
    panel = view.panel
    if panel is None:
        return
    subsection_title(html.escape(panel.country))
    st.markdown(f"**{html.escape(panel.type_label)}** {panel.count_label}")
    if panel.message:
        st.markdown(f"<p>{panel.message}</p>", unsafe_allow_html=True)
    else:
        blocks = []
        for item in panel.items:
            lines = "<br>".join(
                f"<strong>{label}:</strong> {html.escape(value)}" for label, value in item.items()
            )
            blocks.append(f'<div class="disasters-list-item">{lines}</div>')
        st.markdown("".join(blocks), unsafe_allow_html=True)
    st.button("Close", key=f"atlas_close_{view.region}", on_click=_on_close, args=(view.region,))


# ----------------------------
# Main render
# ----------------------------
def render(entered: bool = True):
    ctrl = get_controller()

    _anchor("sec-continents-overview")
    section_title("Disasters per Country")
    st.markdown(
        "Choose a continent, then a disaster group. Countries are shaded by the number "
        "of recorded disasters; gray means no data. Click a country for its event list."
    )

    st.session_state.setdefault(REGION_KEY, CONTINENTS[0])
    prev = st.session_state.get("atlas_prev_region")
    region = st.radio(
        "Continent", CONTINENTS, format_func=REGION_LABELS.get, horizontal=True, key=REGION_KEY
    )
    st.session_state["atlas_prev_region"] = region

    view = ctrl.view(region)
    if entered or region != prev or (not view.is_rendered and view.error is None):
        with st.spinner(f"Loading {REGION_LABELS[region]}..."):
            view = ctrl.on_region_entered(region)

    st.markdown("---")
    _anchor(f"sec-{region}")
    section_title(REGION_LABELS[region])

    if not view.is_rendered:
        st.error(f"Could not load data for {REGION_LABELS[region]}. {view.error or ''}")
        return

    col_map, col_side = st.columns([3, 1], gap="large")
    with col_side:
        _filter_select(view)
        agg = view.aggregate
        story_context(
            f"{len(agg.counts)} countries with records; highest count {agg.max_count:,}."
            if agg.counts else "No disasters recorded for this selection."
        )
        _detail_panel(view)

    with col_map:
        st.plotly_chart(
            view.figure,
            use_container_width=False,
            config=PLOTLY_CFG_MAP,
            key=_map_key(region),
            on_select=partial(_on_map_select, region),
            selection_mode="points",
        )
