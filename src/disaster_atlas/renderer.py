"""
renderer.py
-----------
Per-region view state machine and the controller the UI talks to.

Each region moves UNLOADED -> LOADING -> RENDERED(filter). A render always
starts from scratch: refit the projection, rebuild every polygon, recompute
the aggregate for the active filter and recolor. A failed load drops the
region back to UNLOADED and leaves every other region untouched.

UI layers dispatch:
    on_region_entered(region)            section scrolled / opened
    on_filter_changed(region, value)     category dropdown
    on_country_clicked(region, country)  polygon click -> detail panel
    on_panel_closed(region)              close button of the panel
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from plotly import graph_objects as go

from disaster_atlas import config
from disaster_atlas.data_pipeline.loader import (
    DataLoadError,
    DataSource,
    RegionData,
    load_region,
    load_world,
)
from disaster_atlas.state import SelectionStore
from disaster_atlas.utils.data_utils import (
    ALL,
    Aggregate,
    aggregate_counts,
    category_options,
    detail_items,
    filter_details,
    normalize_name,
    restore_selection,
)
from disaster_atlas.utils.plot_utils import UNKNOWN_COUNTRY, build_map_figure, feature_name
from disaster_atlas.utils.projection import Projection, fit_projection, world_projection
from disaster_atlas.utils.style_config import MAP_STROKE, WORLD_STROKE

logger = logging.getLogger(__name__)

NO_DISASTERS_MESSAGE = "No disasters found for this type in this country."


class RegionStatus(Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    RENDERED = "rendered"


@dataclass
class DetailPanel:
    country: str
    filter_value: str
    items: List[Dict[str, str]] = field(default_factory=list)

    @property
    def count_label(self) -> str:
        return f"{len(self.items)} disasters"

    @property
    def type_label(self) -> str:
        return f"{self.filter_value} |"

    @property
    def message(self) -> Optional[str]:
        return None if self.items else NO_DISASTERS_MESSAGE


@dataclass
class RegionView:
    region: str
    status: RegionStatus = RegionStatus.UNLOADED
    filter_value: str = ALL
    filter_option: str = ALL
    data: Optional[RegionData] = None
    projection: Optional[Projection] = None
    aggregate: Optional[Aggregate] = None
    figure: Optional[go.Figure] = None
    feature_names: List[str] = field(default_factory=list)
    filter_options: List[str] = field(default_factory=lambda: [ALL])
    panel: Optional[DetailPanel] = None
    error: Optional[str] = None

    @property
    def is_rendered(self) -> bool:
        return self.status is RegionStatus.RENDERED

    def country_at(self, trace_index: int) -> Optional[str]:
        """Map a clicked trace number back to its country."""
        if 0 <= trace_index < len(self.feature_names):
            return self.feature_names[trace_index]
        return None


class DashboardController:
    def __init__(self, source: DataSource = None, store: SelectionStore = None):
        self.source = source or DataSource()
        self.store = store if store is not None else SelectionStore()
        self.views: Dict[str, RegionView] = {}

    def view(self, region: str) -> RegionView:
        key = config.region_key(region)
        if key not in self.views:
            self.views[key] = RegionView(key)
        return self.views[key]

    # ----------------------------
    # Commands
    # ----------------------------
    def on_region_entered(self, region: str) -> RegionView:
        return self._load(region, self.store.get(region))

    def on_filter_changed(self, region: str, value) -> RegionView:
        logger.info(f"Type selected: {value} for {region}")
        self.store.set(region, value)
        return self._load(region, self.store.get(region))

    def on_country_clicked(self, region: str, country) -> Optional[DetailPanel]:
        v = self.view(region)
        if not v.is_rendered or v.data is None:
            logger.warning(f"Click on {country} ignored: {v.region} is not rendered")
            return None
        label = str(country) if country is not None and str(country).strip() else UNKNOWN_COUNTRY
        rows = filter_details(v.data.details, country, v.filter_value)
        v.panel = DetailPanel(label, v.filter_value, detail_items(rows))
        logger.debug(f"Detail panel for {label} ({v.region}): {len(v.panel.items)} rows")
        return v.panel

    def on_panel_closed(self, region: str) -> None:
        self.view(region).panel = None

    def continent_for(self, country) -> Optional[str]:
        """Continent of a country in the loaded world view (world map click target)."""
        world = self.views.get(config.WORLD)
        if world is None or world.data is None:
            return None
        wanted = normalize_name(country)
        shapes = world.data.shapes
        for name, continent in zip(shapes["name"], shapes["continent"]):
            if normalize_name(name) == wanted:
                return continent
        return None

    # ----------------------------
    # State machine
    # ----------------------------
    def _load(self, region: str, filter_value) -> RegionView:
        v = self.view(region)
        v.status = RegionStatus.LOADING
        try:
            if v.region == config.WORLD:
                data = load_world(self.source)
            else:
                data = load_region(self.source, v.region)
        except DataLoadError as e:
            logger.error(str(e))
            self._unload(v, str(e))
            return v

        self.store.set(v.region, filter_value)
        self._render(v, data, filter_value)
        return v

    def _render(self, v: RegionView, data: RegionData, filter_value) -> None:
        logger.info(f"Updating map for {v.region}...")
        if v.region == config.WORLD:
            projection = world_projection()
            stroke, fixed = WORLD_STROKE, False
        else:
            try:
                projection = fit_projection(data.shapes, v.region)
            except ValueError as e:
                logger.error(f"Cannot fit projection for {v.region}: {e}")
                self._unload(v, str(e))
                return
            stroke, fixed = MAP_STROKE, True
        logger.debug(f"Projection scale: {projection.scale}, translate: {projection.translate}")

        # an unknown filter only changes what the dropdown shows; the map is
        # still aggregated under the requested value
        filter_value = filter_value or ALL
        options = category_options(data.counts)
        agg = aggregate_counts(data.counts, filter_value)

        v.data = data
        v.projection = projection
        v.aggregate = agg
        v.filter_options = options
        v.filter_value = filter_value
        v.filter_option = restore_selection(filter_value, options)
        v.feature_names = [feature_name(n) or UNKNOWN_COUNTRY for n in data.names]
        v.figure = build_map_figure(data.shapes, projection, agg, stroke=stroke, fixed_canvas=fixed)
        v.panel = None
        v.error = None
        v.status = RegionStatus.RENDERED
        logger.debug(f"Bound {len(v.feature_names)} features for {v.region}, max={agg.max_count}")

    @staticmethod
    def _unload(v: RegionView, error: str) -> None:
        v.status = RegionStatus.UNLOADED
        v.error = error
        v.data = None
        v.figure = None
        v.aggregate = None
        v.panel = None
