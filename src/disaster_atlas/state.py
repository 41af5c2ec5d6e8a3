"""
state.py
--------
Per-region filter selection. Owned by the dashboard controller and kept for
the whole session so a region re-entered later comes back with the same filter.
"""
from typing import Dict

from disaster_atlas.config import ALL, region_key


class SelectionStore:
    def __init__(self):
        self._selected: Dict[str, str] = {}

    def get(self, region: str) -> str:
        return self._selected.get(region_key(region), ALL)

    def set(self, region: str, value) -> None:
        self._selected[region_key(region)] = value if value else ALL

    def __contains__(self, region: str) -> bool:
        return region_key(region) in self._selected

    def items(self):
        return dict(self._selected).items()

    def __repr__(self):
        return f"SelectionStore({self._selected!r})"
