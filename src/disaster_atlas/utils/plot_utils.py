"""
plot_utils.py
-------------
Figure builders for the dashboard visuals: the projected choropleth (one
filled polygon trace per country) and the per-region subgroup bar chart.
"""
from typing import List, Optional

import geopandas as gpd
import pandas as pd
import plotly.express as px
from plotly import graph_objects as go

from disaster_atlas.utils.data_utils import Aggregate
from disaster_atlas.utils.projection import Projection, polygon_rings
from disaster_atlas.utils.style_config import (
    COLOR_SCHEME,
    MAP_COLORSCALE,
    MAP_OPACITY,
    MAP_STROKE,
    color_for,
    subgroup_color,
)
from disaster_atlas.config import HISTOGRAM_HEIGHT, HISTOGRAM_WIDTH

UNKNOWN_COUNTRY = "Unknown Country"

# Plotly configs
PLOTLY_CFG_MAP = {
    "displaylogo": False,
    "scrollZoom": False,
    "modeBarButtonsToRemove": ["lasso2d", "select2d", "autoScale2d"],
}
PLOTLY_CFG_NOZOOM = {
    "displaylogo": False,
    "scrollZoom": False,
    "modeBarButtonsToRemove": [
        "zoom", "pan", "zoomIn2d", "zoomOut2d", "autoScale2d", "resetScale2d", "select2d", "lasso2d", "zoom2d"
    ],
}


def feature_name(name) -> Optional[str]:
    if name is None or pd.isna(name) or not str(name).strip():
        return None
    return str(name)


def feature_path(geom, projection: Projection):
    """Projected x/y of every ring of a shape, rings separated by None."""
    xs: List[Optional[float]] = []
    ys: List[Optional[float]] = []
    for ring in polygon_rings(geom):
        rx, ry = projection.project_many(ring[:, 0], ring[:, 1])
        if xs:
            xs.append(None)
            ys.append(None)
        xs.extend(rx.tolist())
        ys.extend(ry.tolist())
    return xs, ys


def build_map_figure(shapes: gpd.GeoDataFrame, projection: Projection, agg: Aggregate,
                     stroke: str = MAP_STROKE, stroke_width: float = 0.75,
                     fixed_canvas: bool = True, colorbar_title: str = "Disasters") -> go.Figure:
    """
    Choropleth drawn from scratch: trace i is row i of `shapes`, followed by
    one invisible trace that carries the color bar.
    """
    fig = go.Figure()
    for raw_name, geom in zip(shapes["name"], shapes.geometry):
        name = feature_name(raw_name)
        label = name or UNKNOWN_COUNTRY
        count = agg.count_for(name)
        xs, ys = feature_path(geom, projection)
        fig.add_trace(go.Scatter(
            x=xs, y=ys,
            mode="lines",
            fill="toself",
            fillcolor=color_for(count, agg.max_count),
            line=dict(color=stroke, width=stroke_width),
            opacity=MAP_OPACITY,
            name=label,
            hoveron="fills+points",
            hoverinfo="name",
            customdata=[label] * len(xs),
            showlegend=False,
        ))

    fig.add_trace(go.Scatter(
        x=[None], y=[None], mode="markers",
        marker=dict(
            colorscale=MAP_COLORSCALE, cmin=0, cmax=agg.max_count, color=[0],
            showscale=True,
            colorbar=dict(title=colorbar_title, tickformat="d", nticks=6, thickness=12),
        ),
        hoverinfo="skip",
        showlegend=False,
    ))

    xaxis = dict(visible=False, scaleanchor="y", scaleratio=1)
    yaxis = dict(visible=False, autorange="reversed")
    if fixed_canvas:
        xaxis["range"] = [0, projection.width]
        yaxis = dict(visible=False, range=[projection.height, 0])
    fig.update_layout(
        width=projection.width,
        height=projection.height,
        margin=dict(l=0, r=0, t=0, b=0),
        xaxis=xaxis,
        yaxis=yaxis,
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
        hovermode="closest",
        clickmode="event+select",
        dragmode=False,
    )
    return fig


def build_region_histogram(region_counts: pd.DataFrame, region: str) -> go.Figure:
    """Bars of event count per disaster subgroup for one region."""
    color_map = {sg: subgroup_color(sg) for sg in region_counts["Disaster Subgroup"].unique()}
    fig = px.bar(
        region_counts.sort_values("Disaster Subgroup"),
        x="Disaster Subgroup", y="Count",
        color="Disaster Subgroup", color_discrete_map=color_map,
        text="Count", title=region,
    )
    fig.update_traces(
        opacity=0.8, textposition="outside", cliponaxis=False,
        hovertemplate="<b>%{x}</b><br>Count: %{y:,}<extra></extra>",
    )
    fig.update_layout(
        width=HISTOGRAM_WIDTH,
        height=HISTOGRAM_HEIGHT,
        margin=dict(t=40, r=20, b=100, l=60),
        showlegend=False,
        bargap=0.2,
        xaxis=dict(title="Disaster Subgroup", tickangle=-45),
        yaxis=dict(title="Count", nticks=6, rangemode="tozero"),
        paper_bgcolor=COLOR_SCHEME["panel"],
        plot_bgcolor=COLOR_SCHEME["panel"],
        font=dict(color="white", size=12),
        title=dict(x=0.5, xanchor="center", font=dict(size=20)),
    )
    return fig
