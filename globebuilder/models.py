"""Mesh and feature data classes."""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .constants import FEATURE_NAME_KEY

logger = logging.getLogger(__name__)

# ── GPU vertex layouts ──────────────────────────────────────────────────
# Little-endian, tightly packed: 12 bytes per globe vertex,
# 24 bytes per feature vertex.
GLOBE_VERTEX = np.dtype([('pos', '<f4', (3,))])
FEATURE_VERTEX = np.dtype([('pos', '<f4', (3,)), ('color', '<f4', (3,))])
INDEX_DTYPE = np.dtype('<u4')

# GeoJSON geometry kinds. Only MultiPolygon produces geometry; the rest
# are recognised and ignored.
MULTI_POLYGON = 'MultiPolygon'
IGNORED_GEOMETRY_TYPES = frozenset({
    'Point', 'MultiPoint',
    'LineString', 'MultiLineString',
    'Polygon', 'GeometryCollection',
})


@dataclass(eq=False)
class Mesh:
    """Triangle mesh: structured vertex array plus uint32 indices (stride 3)."""
    vertices: np.ndarray
    indices: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=INDEX_DTYPE))

    def __post_init__(self):
        self.indices = np.ascontiguousarray(self.indices, dtype=INDEX_DTYPE).reshape(-1)
        if len(self.indices) % 3:
            raise ValueError(f"Index count {len(self.indices)} is not a multiple of 3")

    @classmethod
    def empty(cls, vertex_dtype: np.dtype) -> "Mesh":
        return cls(vertices=np.zeros(0, dtype=vertex_dtype))

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def positions(self) -> np.ndarray:
        """(n, 3) float32 view of vertex positions."""
        return self.vertices['pos']

    @property
    def faces(self) -> np.ndarray:
        """(m, 3) view of the index buffer."""
        return self.indices.reshape(-1, 3)

    @property
    def stride(self) -> int:
        """Bytes per vertex."""
        return self.vertices.dtype.itemsize

    def vertex_bytes(self) -> bytes:
        return np.ascontiguousarray(self.vertices).tobytes()

    def index_bytes(self) -> bytes:
        return self.indices.tobytes()


@dataclass
class Feature:
    """A named administrative feature with a raw GeoJSON geometry."""
    name: str
    geometry: Optional[dict] = None

    @classmethod
    def from_geojson(cls, raw: dict) -> Optional["Feature"]:
        """Build a Feature from a GeoJSON feature mapping.

        Returns None when the properties are missing or the name key is
        absent or null.
        """
        properties = raw.get('properties')
        if not properties:
            return None
        name = properties.get(FEATURE_NAME_KEY)
        if name is None:
            return None
        if not isinstance(name, str):
            name = json.dumps(name)
        return cls(name=name, geometry=raw.get('geometry'))

    @property
    def geom_type(self) -> Optional[str]:
        if not self.geometry:
            return None
        return self.geometry.get('type')

    def polygons(self) -> list:
        """Polygons of a MultiPolygon geometry; empty for every other kind.

        Each polygon is a list of rings, each ring a list of (lon, lat) pairs.
        """
        geom_type = self.geom_type
        if geom_type is None:
            return []
        if geom_type == MULTI_POLYGON:
            return self.geometry.get('coordinates') or []
        if geom_type in IGNORED_GEOMETRY_TYPES:
            return []
        logger.info(f"skipping {self.name} [unknown geometry type {geom_type!r}]")
        return []


def load_feature_collection(data) -> list:
    """Return the raw feature mappings of a GeoJSON document.

    *data* may be JSON bytes, a JSON string, or an already-parsed mapping.
    A bare Feature is treated as a one-element collection.
    """
    if isinstance(data, (bytes, bytearray)):
        data = data.decode('utf-8-sig')
    if isinstance(data, str):
        data = json.loads(data)
    if not isinstance(data, dict):
        raise ValueError("GeoJSON document must be an object")

    doc_type = data.get('type')
    if doc_type == 'FeatureCollection':
        return list(data.get('features') or [])
    if doc_type == 'Feature':
        return [data]
    raise ValueError(f"Expected a FeatureCollection or Feature, got {doc_type!r}")


def parse_features(raw_features) -> list:
    """Keep only features with a usable name."""
    features = []
    skipped = 0
    for raw in raw_features:
        feature = Feature.from_geojson(raw)
        if feature is None:
            skipped += 1
            continue
        features.append(feature)
    if skipped:
        logger.info(f"Skipped {skipped} features without a {FEATURE_NAME_KEY}")
    return features
