"""
home.py
-------
Minimal landing page showing what the atlas offers.
"""

import streamlit as st

# ===========================
# THEME HELPERS
# ===========================
def _anchor(id_: str):
    st.markdown(f'<div id="{id_}"></div>', unsafe_allow_html=True)

def section_title(text: str):
    st.markdown(f'<div class="gv-section-title">{text}</div>', unsafe_allow_html=True)

def subsection_title(text: str):
    st.markdown(f'<div class="gv-subsection-title">{text}</div>', unsafe_allow_html=True)

# ===========================
# MAIN RENDER
# ===========================
def render(entered: bool = True):
    _anchor("sec-home-overview")
    section_title("Overview")
    st.markdown(
        "This dashboard maps recorded natural disasters per country, continent by continent, "
        "and summarizes them by disaster subgroup and year."
    )

    st.markdown("---")
    subsection_title("How to use it")
    st.markdown(
        "- **World Map**: global totals; click a country to open its continent.\n"
        "- **Continent Maps**: filter by disaster group, hover for names, click a country for its events.\n"
        "- **Disasters by Year**: per-continent bar charts of disaster subgroups for a chosen year."
    )
