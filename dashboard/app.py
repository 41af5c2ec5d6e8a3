# app.py
import sys
from pathlib import Path
import streamlit as st

# --- sys.path so imports work no matter how you run the app ---
ROOT = Path(__file__).resolve().parent.parent
for p in (ROOT, ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.append(str(p))

from dashboard.components import (
    home,
    continent_maps_tab,
    world_map_tab,
    year_histogram_tab,
)
from disaster_atlas import config
from disaster_atlas.utils import style_config

# ----------------------------
# PAGE CONFIG + BASE STYLE
# ----------------------------
st.set_page_config(page_title="Disaster Atlas", page_icon=None, layout="wide")
style_config.apply_streamlit_style()
config.setup_logging()

# ----------------------------
# NAV STRUCTURE
# ----------------------------
PAGES = {
    "Home": home.render,
    "World Map": world_map_tab.render,
    "Continent Maps": continent_maps_tab.render,
    "Disasters by Year": year_histogram_tab.render,
}
ORDER = list(PAGES.keys())
DEFAULT_PAGE = "World Map"

st.sidebar.header("Navigation")

# ----------------------------
# QUERY PARAMS (page only)
# ----------------------------
qp = st.query_params
page = qp.get("page", DEFAULT_PAGE)
if page not in ORDER:
    page = DEFAULT_PAGE
st.query_params["page"] = page

# ----------------------------
# VERTICAL MENU
# ----------------------------
def side_menu_html(active_page: str) -> str:
    blocks = ['<div class="gv-side">']
    for p in ORDER:
        wrap_cls = "gv-side-item gv-side-item--active" if p == active_page else "gv-side-item"
        blocks.append(
            f'<div class="{wrap_cls}"><a class="gv-side-link" href="?page={p}" target="_self" rel="noopener">{p}</a></div>'
        )
    blocks.append("</div>")
    return "".join(blocks)

st.sidebar.markdown(side_menu_html(page), unsafe_allow_html=True)

# ----------------------------
# TITLE HELPERS
# ----------------------------
def gv_page_title(text: str):
    st.markdown(f'<div class="gv-page-title"><h1>{text}</h1></div>', unsafe_allow_html=True)

# ----------------------------
# ROUTING
# ----------------------------
# a page counts as "entered" when the previous run showed another page
entered = st.session_state.get("atlas_prev_page") != page
st.session_state["atlas_prev_page"] = page

gv_page_title(page)
PAGES[page](entered=entered)

# ----------------------------
# FOOTER
# ----------------------------
st.markdown("---")
st.caption("Source: EM-DAT – Centre for Research on the Epidemiology of Disasters (CRED).")
