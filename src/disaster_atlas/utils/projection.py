"""
projection.py
-------------
Fits a spherical Mercator transform (scale + translate) to a region's
geometry so it fills a fixed canvas, then applies the hand-calibrated
per-continent correction.

Planar coordinates come from EPSG:3857 divided by the earth radius, so scale
is expressed in pixels per radian.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple

import geopandas as gpd
import numpy as np
import pyproj

from disaster_atlas.config import MAP_HEIGHT, MAP_WIDTH, WORLD_HEIGHT, WORLD_WIDTH

GEOGRAPHIC_CRS = "EPSG:4326"
MERCATOR_CRS = "EPSG:3857"
EARTH_RADIUS = 6378137.0
MAX_LATITUDE = 85.0511287798

FILL_RATIO = 0.8
CONTINENT_CENTER = (10.0, 50.0)

# (scale multiplier, dx, dy). Calibrated by eye against the continent canvases;
# there is no formula behind these numbers.
REGION_ADJUSTMENTS: Dict[str, Tuple[float, float, float]] = {
    "europe":        (200, 350, 125),
    "asia":          (55, 80, 0),
    "africa":        (50, 125, -300),
    "north_america": (45, -35, 250),
    "south_america": (50, 25, -600),
    "oceania":       (45, 450, -850),
}
IDENTITY_ADJUSTMENT = (1, 0, 0)

_to_mercator = pyproj.Transformer.from_crs(
    pyproj.CRS(GEOGRAPHIC_CRS), pyproj.CRS(MERCATOR_CRS), always_xy=True
)


def mercator(lon, lat) -> Tuple[np.ndarray, np.ndarray]:
    """Degrees -> unit-sphere Mercator (radians); latitude clipped to the square map."""
    lon = np.atleast_1d(np.asarray(lon, dtype=float))
    lat = np.clip(np.atleast_1d(np.asarray(lat, dtype=float)), -MAX_LATITUDE, MAX_LATITUDE)
    x, y = _to_mercator.transform(lon, lat)
    return np.asarray(x) / EARTH_RADIUS, np.asarray(y) / EARTH_RADIUS


@dataclass(frozen=True)
class Projection:
    scale: float
    translate: Tuple[float, float]
    center: Tuple[float, float] = (0.0, 0.0)
    width: int = MAP_WIDTH
    height: int = MAP_HEIGHT

    def project_many(self, lon, lat) -> Tuple[np.ndarray, np.ndarray]:
        """Arrays of (lon, lat) in degrees -> canvas pixels, y growing downwards."""
        mx, my = mercator(lon, lat)
        cx, cy = mercator(*self.center)
        tx, ty = self.translate
        return tx + self.scale * (mx - cx), ty - self.scale * (my - cy)

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        xs, ys = self.project_many(lon, lat)
        return float(xs[0]), float(ys[0])


# ----------------------------
# Geometry
# ----------------------------
def polygon_rings(geom) -> Iterator[np.ndarray]:
    """(n, 2) lon/lat arrays for every exterior and interior ring of a (Multi)Polygon."""
    if geom is None or geom.is_empty:
        return
    polygons = geom.geoms if geom.geom_type == "MultiPolygon" else [geom]
    for poly in polygons:
        yield np.asarray(poly.exterior.coords)[:, :2]
        for ring in poly.interiors:
            yield np.asarray(ring.coords)[:, :2]


def collection_bounds(shapes: gpd.GeoDataFrame) -> Tuple[float, float, float, float]:
    """(min_lon, min_lat, max_lon, max_lat) over every shape."""
    if shapes.empty:
        raise ValueError("geometry collection has no coordinates")
    bounds = tuple(float(v) for v in shapes.total_bounds)
    if not np.all(np.isfinite(bounds)):
        raise ValueError("geometry collection has no coordinates")
    return bounds


# ----------------------------
# Fitting
# ----------------------------
def base_fit(bounds, width: int = MAP_WIDTH, height: int = MAP_HEIGHT) -> Tuple[float, Tuple[float, float]]:
    x0, y0, x1, y1 = bounds
    dx, dy = x1 - x0, y1 - y0
    if dx <= 0 or dy <= 0:
        raise ValueError(f"degenerate bounding box: {bounds}")
    scale = min(width / dx, height / dy) * FILL_RATIO
    xc, yc = (x0 + x1) / 2, (y0 + y1) / 2
    return scale, (width / 2 - scale * xc, height / 2 - scale * yc)


def adjustment_for(region: str) -> Tuple[float, float, float]:
    return REGION_ADJUSTMENTS.get(region, IDENTITY_ADJUSTMENT)


def fit_projection(shapes: gpd.GeoDataFrame, region: str,
                   width: int = MAP_WIDTH, height: int = MAP_HEIGHT) -> Projection:
    scale, (tx, ty) = base_fit(collection_bounds(shapes), width, height)
    k, dx, dy = adjustment_for(region)
    return Projection(
        scale=scale * k,
        translate=(tx + dx, ty + dy),
        center=CONTINENT_CENTER,
        width=width,
        height=height,
    )


def world_projection() -> Projection:
    return Projection(scale=230, translate=(860, 560), width=WORLD_WIDTH, height=WORLD_HEIGHT)
