"""
config.py
---------
Central settings for the atlas: data location, canvas sizes, region keys and
logging setup. Values can be overridden through environment variables (or a
local .env file).
"""
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

DATA_ROOT = os.getenv("DISASTER_ATLAS_DATA", "data")
HTTP_TIMEOUT = float(os.getenv("DISASTER_ATLAS_TIMEOUT", "20"))
LOG_LEVEL = os.getenv("DISASTER_ATLAS_LOG_LEVEL", "INFO")

# ----------------------------
# Regions
# ----------------------------
WORLD = "world"
ALL = "all"

CONTINENTS = ["europe", "asia", "africa", "north_america", "south_america", "oceania"]

REGION_LABELS = {
    "europe": "Europe",
    "asia": "Asia",
    "africa": "Africa",
    "north_america": "North America",
    "south_america": "South America",
    "oceania": "Oceania",
    WORLD: "World",
}

# ----------------------------
# Canvas
# ----------------------------
MAP_WIDTH = 800
MAP_HEIGHT = 600
WORLD_WIDTH = 1000
WORLD_HEIGHT = 800

HISTOGRAM_WIDTH = 380
HISTOGRAM_HEIGHT = 320


def region_key(region: str) -> str:
    """File-system form of a region key ("north-america" -> "north_america")."""
    return region.strip().lower().replace("-", "_")


LOG_HANDLER_NAME = "disaster_atlas"


def setup_logging(level=None) -> None:
    """Install a single stdout handler on the root logger."""
    logger = logging.getLogger()
    logger.setLevel(level or LOG_LEVEL)
    for h in list(logger.handlers):
        if h.get_name() == LOG_HANDLER_NAME:
            logger.removeHandler(h)

    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    ch.set_name(LOG_HANDLER_NAME)
    logger.addHandler(ch)
