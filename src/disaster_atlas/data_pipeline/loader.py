"""
loader.py
---------
Fetches the per-region inputs of the atlas:

- geometry:  geometria/<region>.geojson
- counts:    disasters/disasters_<region>.csv
- details:   disaster_info/<region>_disaster_info.csv

plus the world counts file and the flat EM-DAT extract used by the year panel.
Paths are resolved against a local folder or an http(s) base URL.

The three fetches of a region run concurrently and the result is only handed
back once all of them succeeded; any failure raises DataLoadError. Geometry
is validated feature by feature and handed on as a GeoDataFrame in EPSG:4326
with a `name` column.
"""
from __future__ import annotations

import io
import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List

import geopandas as gpd
import pandas as pd
import requests

from disaster_atlas import config
from disaster_atlas.data_pipeline.validate_data import (
    validate_counts,
    validate_details,
    validate_geojson,
    validate_histogram,
)
from disaster_atlas.utils.projection import GEOGRAPHIC_CRS

logger = logging.getLogger(__name__)

GEOMETRY_PATH = "geometria/{region}.geojson"
COUNTS_PATH = "disasters/disasters_{region}.csv"
DETAILS_PATH = "disaster_info/{region}_disaster_info.csv"
WORLD_COUNTS_PATH = "disasters/disasters_world.csv"
HISTOGRAM_PATH = "emdat-data-processed.csv"


class DataLoadError(RuntimeError):
    """One of the inputs of a region could not be fetched or parsed."""

    def __init__(self, region: str, what: str, cause: Exception):
        super().__init__(f"Error loading {what} for {region}: {cause}")
        self.region = region
        self.what = what
        self.cause = cause


# ----------------------------
# Sources
# ----------------------------
class DataSource:
    """Resolves relative input paths against a directory or a base URL."""

    def __init__(self, root: str = None, timeout: float = None):
        self.root = root if root is not None else config.DATA_ROOT
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT

    @property
    def is_remote(self) -> bool:
        return self.root.startswith(("http://", "https://"))

    def location(self, relpath: str) -> str:
        if self.is_remote:
            return self.root.rstrip("/") + "/" + relpath
        return os.path.join(self.root, *relpath.split("/"))

    def read_text(self, relpath: str) -> str:
        loc = self.location(relpath)
        if self.is_remote:
            response = requests.get(loc, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        with open(loc, encoding="utf-8") as f:
            return f.read()

    def read_json(self, relpath: str):
        return json.loads(self.read_text(relpath))

    def read_csv(self, relpath: str) -> pd.DataFrame:
        return pd.read_csv(io.StringIO(self.read_text(relpath)))

    def __repr__(self):
        return f"DataSource({self.root!r})"


# ----------------------------
# Results
# ----------------------------
@dataclass
class RegionData:
    region: str
    shapes: gpd.GeoDataFrame
    counts: pd.DataFrame
    details: pd.DataFrame = field(default_factory=pd.DataFrame)

    @property
    def names(self) -> List:
        return list(self.shapes["name"])


def geometry_frame(doc: dict) -> gpd.GeoDataFrame:
    """Validated FeatureCollection -> GeoDataFrame (one row per feature, in file order)."""
    features = [
        {"type": "Feature", "properties": f.get("properties") or {}, "geometry": f["geometry"]}
        for f in doc["features"]
    ]
    if not features:
        return gpd.GeoDataFrame(
            {"name": pd.Series([], dtype=object)},
            geometry=gpd.GeoSeries([], crs=GEOGRAPHIC_CRS),
        )
    shapes = gpd.GeoDataFrame.from_features(features, crs=GEOGRAPHIC_CRS)
    if "name" not in shapes.columns:
        shapes["name"] = None
    return shapes


# ----------------------------
# Fetch helpers
# ----------------------------
def _fetch_geometry(source: DataSource, region: str) -> gpd.GeoDataFrame:
    path = GEOMETRY_PATH.format(region=region)
    return geometry_frame(validate_geojson(source.read_json(path), path))


def _fetch_counts(source: DataSource, path: str) -> pd.DataFrame:
    return validate_counts(source.read_csv(path), path)


def _fetch_details(source: DataSource, region: str) -> pd.DataFrame:
    path = DETAILS_PATH.format(region=region)
    return validate_details(source.read_csv(path), path)


def _gather(region: str, jobs: Dict[str, tuple]) -> Dict[str, object]:
    """Run every job concurrently; return all results or raise on the first failure."""
    with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
        futures = {name: pool.submit(fn, *args) for name, (fn, *args) in jobs.items()}
        results = {}
        for name, fut in futures.items():
            try:
                results[name] = fut.result()
            except (OSError, ValueError, requests.RequestException) as e:
                raise DataLoadError(region, name, e) from e
    return results


# ----------------------------
# Public API
# ----------------------------
def load_region(source: DataSource, region: str) -> RegionData:
    region = config.region_key(region)
    logger.info(f"Loading data for {region} from {source}")
    res = _gather(region, {
        "geometry": (_fetch_geometry, source, region),
        "counts": (_fetch_counts, source, COUNTS_PATH.format(region=region)),
        "details": (_fetch_details, source, region),
    })
    data = RegionData(region, res["geometry"], res["counts"], res["details"])
    logger.info(
        f"Loaded {region}: {len(data.shapes)} features, "
        f"{len(data.counts)} count rows, {len(data.details)} detail rows"
    )
    return data


def load_world(source: DataSource, continents: List[str] = None) -> RegionData:
    """Every continent's geometry merged into one collection, plus world counts."""
    continents = continents or config.CONTINENTS
    logger.info(f"Loading world view ({len(continents)} continents) from {source}")
    jobs = {c: (_fetch_geometry, source, c) for c in continents}
    jobs["counts"] = (_fetch_counts, source, WORLD_COUNTS_PATH)
    res = _gather(config.WORLD, jobs)

    parts = [res[c].assign(continent=c) for c in continents]
    shapes = gpd.GeoDataFrame(pd.concat(parts, ignore_index=True), geometry="geometry", crs=GEOGRAPHIC_CRS)
    return RegionData(config.WORLD, shapes, res["counts"])


def load_histogram_source(source: DataSource) -> pd.DataFrame:
    try:
        df = validate_histogram(source.read_csv(HISTOGRAM_PATH), HISTOGRAM_PATH)
    except (OSError, ValueError, requests.RequestException) as e:
        raise DataLoadError("histogram", HISTOGRAM_PATH, e) from e
    logger.info(f"Loaded {len(df)} records for the year panel")
    return df
