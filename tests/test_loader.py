import json

import pytest
import requests

from disaster_atlas.data_pipeline import loader
from disaster_atlas.data_pipeline.loader import (
    DataLoadError,
    DataSource,
    load_histogram_source,
    load_region,
    load_world,
)

from conftest import square


def test_load_region_combines_all_three_inputs(source):
    data = load_region(source, "europe")
    assert data.region == "europe"
    assert data.names == ["France", "Spain", " Portugal "]
    assert data.shapes.crs == "EPSG:4326"
    assert list(data.shapes.geom_type) == ["Polygon", "MultiPolygon", "Polygon"]
    assert list(data.counts["disaster_count"]) == [3, 2, 4]
    assert len(data.details) == 3


def test_hyphenated_region_key(source):
    assert load_region(source, "Europe").region == "europe"


def test_missing_input_fails_whole_load(source, data_root):
    (data_root / "disaster_info" / "europe_disaster_info.csv").unlink()
    with pytest.raises(DataLoadError) as exc:
        load_region(source, "europe")
    assert exc.value.region == "europe"
    assert exc.value.what == "details"


def test_unknown_region_fails(source):
    with pytest.raises(DataLoadError):
        load_region(source, "antarctica")


def test_malformed_geometry_fails(source, data_root):
    (data_root / "geometria" / "europe.geojson").write_text("{not json", encoding="utf-8")
    with pytest.raises(DataLoadError) as exc:
        load_region(source, "europe")
    assert exc.value.what == "geometry"


def test_geometry_must_be_feature_collection(source, data_root):
    (data_root / "geometria" / "europe.geojson").write_text(json.dumps({"type": "Feature"}), encoding="utf-8")
    with pytest.raises(DataLoadError):
        load_region(source, "europe")


@pytest.mark.parametrize("features", [
    ["oops"],
    [{"type": "Feature", "properties": {"name": "X"}, "geometry": {"type": "Polygon", "coordinates": [[1, 2]]}}],
    [{"type": "Feature", "properties": {"name": "X"}, "geometry": {"type": "Polygon", "coordinates": [[[1, 2]]]}}],
    [{"type": "Feature", "properties": {"name": "X"}, "geometry": {"type": "Point", "coordinates": [1, 2]}}],
    [{"type": "Feature", "properties": {"name": "X"}, "geometry": None}],
    [{"type": "Feature", "properties": "X", "geometry": {"type": "Polygon", "coordinates": [square(0, 0, 1)]}}],
    [{"type": "Feature", "properties": {}, "geometry": {"type": "MultiPolygon", "coordinates": [[["a", "b"]]]}}],
])
def test_malformed_features_fail_load(source, data_root, features):
    doc = {"type": "FeatureCollection", "features": features}
    (data_root / "geometria" / "europe.geojson").write_text(json.dumps(doc), encoding="utf-8")
    with pytest.raises(DataLoadError) as exc:
        load_region(source, "europe")
    assert exc.value.what == "geometry"


def test_features_without_properties_load_unnamed(source, data_root):
    doc = {"type": "FeatureCollection", "features": [
        {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": [square(0, 0, 1)]}},
    ]}
    (data_root / "geometria" / "europe.geojson").write_text(json.dumps(doc), encoding="utf-8")
    data = load_region(source, "europe")
    assert len(data.shapes) == 1
    assert data.names[0] is None


def test_counts_missing_columns_fail(source, data_root):
    (data_root / "disasters" / "disasters_europe.csv").write_text("Country,disaster\nFrance,flood\n", encoding="utf-8")
    with pytest.raises(DataLoadError) as exc:
        load_region(source, "europe")
    assert "disaster_count" in str(exc.value)


def test_load_world_tags_continents(data_root):
    data = load_world(DataSource(str(data_root)), continents=["europe", "africa"])
    continents = dict(zip(data.shapes["name"], data.shapes["continent"]))
    assert continents["France"] == "europe"
    assert continents["Morocco"] == "africa"
    assert data.details.empty
    assert set(data.counts["Country"]) == {"France", "Morocco"}


def test_load_world_needs_every_continent(data_root):
    with pytest.raises(DataLoadError):
        load_world(DataSource(str(data_root)), continents=["europe", "asia"])


def test_histogram_source(source):
    df = load_histogram_source(source)
    assert len(df) == 5
    assert set(df["Start Year"].dropna()) == {2019, 2020}


class FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_remote_source(monkeypatch, data_root):
    calls = []

    def fake_get(url, timeout=None):
        calls.append((url, timeout))
        rel = url.split("example.org/data/", 1)[1]
        path = data_root / rel
        if not path.exists():
            return FakeResponse("", 404)
        return FakeResponse(path.read_text(encoding="utf-8"))

    monkeypatch.setattr(loader.requests, "get", fake_get)
    src = DataSource("https://example.org/data/", timeout=5)
    data = load_region(src, "europe")
    assert len(data.shapes) == 3
    assert sorted(u for u, _ in calls) == [
        "https://example.org/data/disaster_info/europe_disaster_info.csv",
        "https://example.org/data/disasters/disasters_europe.csv",
        "https://example.org/data/geometria/europe.geojson",
    ]
    assert all(t == 5 for _, t in calls)

    with pytest.raises(DataLoadError):
        load_region(src, "asia")
