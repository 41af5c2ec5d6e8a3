"""
validate_data.py
----------------
Schema checks for the atlas input files, including every GeoJSON feature.
Anything that fails here is treated as malformed content by the loader.
"""
from typing import Iterable, List

import pandas as pd

COUNT_COLUMNS = ["Country", "disaster", "disaster_count"]
DETAIL_COLUMNS = ["Country", "disaster", "disaster_type", "event_name",
                  "deaths", "affected", "start", "end"]
DETAIL_REQUIRED = ["Country"]
HISTOGRAM_COLUMNS = ["Start Year", "Region", "Disaster Subgroup"]


class SchemaError(ValueError):
    """A table or GeoJSON document does not have the expected shape."""


def missing_columns(df: pd.DataFrame, required: Iterable[str]) -> List[str]:
    return [c for c in required if c not in df.columns]


def validate(df: pd.DataFrame, required: Iterable[str], name: str = "table") -> pd.DataFrame:
    """Raise SchemaError if any required column is absent; return df otherwise."""
    missing = missing_columns(df, required)
    if missing:
        raise SchemaError(f"{name} is missing columns: {', '.join(missing)}")
    return df


def validate_counts(df: pd.DataFrame, name: str = "counts") -> pd.DataFrame:
    validate(df, COUNT_COLUMNS, name)
    out = df.copy()
    out["disaster_count"] = pd.to_numeric(out["disaster_count"], errors="coerce").fillna(0)
    return out


def validate_details(df: pd.DataFrame, name: str = "details") -> pd.DataFrame:
    # every other detail column is optional and rendered as "Unknown"
    return validate(df, DETAIL_REQUIRED, name)


def validate_histogram(df: pd.DataFrame, name: str = "histogram source") -> pd.DataFrame:
    validate(df, HISTOGRAM_COLUMNS, name)
    out = df.copy()
    out["Start Year"] = pd.to_numeric(out["Start Year"], errors="coerce").astype("Int64")
    return out


def _is_position(pt) -> bool:
    return (
        isinstance(pt, (list, tuple))
        and len(pt) >= 2
        and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in pt[:2])
    )


def _is_ring(ring) -> bool:
    # a closed linear ring needs at least four positions
    return isinstance(ring, list) and len(ring) >= 4 and all(_is_position(pt) for pt in ring)


def _is_polygon(rings) -> bool:
    return isinstance(rings, list) and len(rings) > 0 and all(_is_ring(r) for r in rings)


def validate_feature(feat, where: str) -> None:
    if not isinstance(feat, dict):
        raise SchemaError(f"{where} is not a GeoJSON feature")
    props = feat.get("properties")
    if props is not None and not isinstance(props, dict):
        raise SchemaError(f"{where} has malformed properties")
    geom = feat.get("geometry")
    if not isinstance(geom, dict):
        raise SchemaError(f"{where} has no geometry")
    gtype, coords = geom.get("type"), geom.get("coordinates")
    if gtype == "Polygon":
        ok = _is_polygon(coords)
    elif gtype == "MultiPolygon":
        ok = isinstance(coords, list) and len(coords) > 0 and all(_is_polygon(p) for p in coords)
    else:
        raise SchemaError(f"{where} has unsupported geometry type {gtype!r}")
    if not ok:
        raise SchemaError(f"{where} has malformed {gtype} coordinates")


def validate_geojson(doc, name: str = "geometry") -> dict:
    """FeatureCollection of Polygon / MultiPolygon features with well-formed rings."""
    if not isinstance(doc, dict) or doc.get("type") != "FeatureCollection":
        raise SchemaError(f"{name} is not a GeoJSON FeatureCollection")
    if not isinstance(doc.get("features"), list):
        raise SchemaError(f"{name} has no feature list")
    for i, feat in enumerate(doc["features"]):
        validate_feature(feat, f"{name} feature {i}")
    return doc
