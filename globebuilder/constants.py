"""Configuration constants, paths, and logging setup."""

import pathlib
import logging

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configure base paths
BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
OUTPUT_DIR = BASE_DIR / "output"

# ── Globe defaults ──────────────────────────────────────────────────────
DEFAULT_SLICES = 100
DEFAULT_STACKS = 100
DEFAULT_GLOBE_RADIUS = 10000.0
DEFAULT_BASEMAP = "blue_marble_2048.tif"
DEFAULT_FEATURES = "world_2010.geojson"

# Features float this far above the globe surface to avoid z-fighting
FEATURE_SURFACE_OFFSET = 1.0

# Property key holding a feature's identifying name
FEATURE_NAME_KEY = "NAME"

# GeoJSON rings repeat their first point, so 5 points = 4 distinct vertices
MIN_RING_POINTS = 5

# Supersampling factor for antialiased basemap polygon fills
BASEMAP_SUPERSAMPLE = 4

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
