import json

import pandas as pd
import pytest

from disaster_atlas.data_pipeline.loader import DataSource, geometry_frame


def square(x0, y0, size):
    return [[x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size], [x0, y0]]


def feature(name, ring, multi=False):
    if multi:
        geometry = {"type": "MultiPolygon", "coordinates": [[ring]]}
    else:
        geometry = {"type": "Polygon", "coordinates": [ring]}
    return {"type": "Feature", "properties": {"name": name}, "geometry": geometry}


EUROPE = {
    "type": "FeatureCollection",
    "features": [
        feature("France", square(0, 40, 10)),
        feature("Spain", square(-10, 35, 10), multi=True),
        feature(" Portugal ", square(-10, 45, 5)),
    ],
}

AFRICA = {
    "type": "FeatureCollection",
    "features": [feature("Morocco", square(-10, 25, 10))],
}

EUROPE_COUNTS = pd.DataFrame({
    "Country": ["France", "france", "Spain"],
    "disaster": ["flood", "storm", " Flood "],
    "disaster_count": [3, 2, 4],
})

EUROPE_DETAILS = pd.DataFrame({
    "Country": ["France", "France", "Spain"],
    "disaster": ["flood", "storm", "flood"],
    "disaster_type": ["Flood", "Storm", "Flash flood"],
    "event_name": ["Seine", None, "Valencia"],
    "deaths": [12, None, 200],
    "affected": [1000, 50, None],
    "start": ["2019-03-07", "2020-01", None],
    "end": ["2019-03-20", None, None],
})

WORLD_COUNTS = pd.DataFrame({
    "Country": ["France", "Morocco"],
    "disaster": ["Hydrological", "Geophysical"],
    "disaster_count": [7, 2],
})

HISTOGRAM = pd.DataFrame({
    "Start Year": [2019, 2019, 2019, 2020, 2020],
    "Region": ["Europe", "Europe", "Asia", "Europe", "Africa"],
    "Disaster Subgroup": ["Hydrological", "Hydrological", "Geophysical", "Meteorological", "Other"],
})


def write_region(root, region, geometry, counts, details=None):
    (root / "geometria").mkdir(exist_ok=True)
    (root / "disasters").mkdir(exist_ok=True)
    (root / "disaster_info").mkdir(exist_ok=True)
    (root / "geometria" / f"{region}.geojson").write_text(json.dumps(geometry), encoding="utf-8")
    counts.to_csv(root / "disasters" / f"disasters_{region}.csv", index=False)
    if details is not None:
        details.to_csv(root / "disaster_info" / f"{region}_disaster_info.csv", index=False)


@pytest.fixture
def data_root(tmp_path):
    write_region(tmp_path, "europe", EUROPE, EUROPE_COUNTS, EUROPE_DETAILS)
    write_region(tmp_path, "africa", AFRICA, EUROPE_COUNTS.iloc[0:0], EUROPE_DETAILS.iloc[0:0])
    WORLD_COUNTS.to_csv(tmp_path / "disasters" / "disasters_world.csv", index=False)
    HISTOGRAM.to_csv(tmp_path / "emdat-data-processed.csv", index=False)
    return tmp_path


@pytest.fixture
def source(data_root):
    return DataSource(str(data_root))


def shapes(collection):
    return geometry_frame(collection)
