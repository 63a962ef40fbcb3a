"""GlobeBuilder package — globe meshes and basemap textures from GeoJSON.

Import constants FIRST so logging and .env configuration are in place
before any other module logs.
"""

from globebuilder import constants as _constants  # noqa: F401

from globebuilder.builder import GlobeAssets, GlobeBuilder
from globebuilder.config import GlobeConfig
from globebuilder.models import Feature, Mesh
