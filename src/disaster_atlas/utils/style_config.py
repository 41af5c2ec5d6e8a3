"""
style_config.py
---------------
Centralizes dashboard palettes, fonts and the count -> color mapping shared by
the continent and world maps.
"""
from plotly.colors import sample_colorscale

COLOR_SCHEME = {
    "background": "#F8F9FA",
    "panel": "#1a1a1a",
    "primary": "#2c2c2c",
    "accent": "#4ECDC4",
    "text": "#212529",
}

FONTS = {
    "header": "Helvetica, Arial, sans-serif",
    "body": "Open Sans, sans-serif",
}

# ----------------------------
# Choropleth
# ----------------------------
MAP_COLORSCALE = "YlOrRd"
NO_DATA_COLOR = "#d3d3d3"
MAP_STROKE = "#000"
WORLD_STROKE = "#333"
MAP_OPACITY = 0.8

# ----------------------------
# Disaster subgroups (year panel)
# ----------------------------
SUBGROUP_COLORS = {
    "Biological": "#00c40a",        # green
    "Climatological": "#4ECDC4",    # teal
    "Geophysical": "#45B7D1",       # blue
    "Hydrological": "#FFA07A",      # orange
    "Meteorological": "#98D8C8",    # mint
    "Extra-terrestrial": "#F7DC6F", # yellow
}
FALLBACK_SUBGROUP_COLOR = "#cccccc"


def color_for(count, max_count) -> str:
    """
    Fill color for a country.

    Zero (a join miss included) is the reserved no-data gray; anything else is
    sampled from MAP_COLORSCALE over the domain [0, max_count].
    """
    if not count or count <= 0:
        return NO_DATA_COLOR
    max_count = max_count if max_count and max_count > 0 else 1
    t = min(max(float(count) / float(max_count), 0.0), 1.0)
    return sample_colorscale(MAP_COLORSCALE, [t])[0]


def subgroup_color(subgroup) -> str:
    return SUBGROUP_COLORS.get(subgroup, FALLBACK_SUBGROUP_COLOR)


def apply_streamlit_style():
    """
    Injects custom CSS into the Streamlit app: theme colors, section bars and
    the country detail panel.
    """
    import streamlit as st

    custom_css = f"""
        <style>
            body {{
                background-color: {COLOR_SCHEME['background']};
                color: {COLOR_SCHEME['text']};
                font-family: {FONTS['body']};
            }}

            h1, h2, h3 {{
                font-family: {FONTS['header']};
            }}

            .gv-section-title {{
                background-color: {COLOR_SCHEME['primary']};
                color: white;
                font-weight: 700;
                padding: 0.5rem 1rem;
                border-radius: 6px;
                margin: 1rem 0 0.5rem 0;
            }}

            .gv-subsection-title {{
                border-left: 4px solid {COLOR_SCHEME['accent']};
                font-weight: 600;
                padding-left: 0.6rem;
                margin: 0.8rem 0 0.4rem 0;
            }}

            .gv-context {{ font-size: .95rem; color: #3f3f46; margin: 2px 0 10px 2px; }}

            .disasters-list-item {{
                border-bottom: 1px solid #ddd;
                padding: 0.5rem 0;
                font-size: 0.9rem;
            }}
        </style>
    """

    st.markdown(custom_css, unsafe_allow_html=True)
    st.session_state["theme_loaded"] = True
