"""Polygon assembly, constrained triangulation, and sphere projection."""

import logging
from typing import Callable

import numpy as np
import trimesh
from shapely.errors import GEOSException
from shapely.geometry import Polygon
from shapely.validation import explain_validity

from .constants import FEATURE_SURFACE_OFFSET, MIN_RING_POINTS
from .errors import InvalidRingError, TriangulationError

logger = logging.getLogger(__name__)

# triangulate(points, contours) -> (vertices, faces); raises TriangulationError
Triangulator = Callable[[list, list], tuple]


# ── Polygon assembly ────────────────────────────────────────────────────

class FeaturePolygon:
    """Flat point list plus closed contours (outer ring first, then holes).

    Points are stored as (lat, lon): GeoJSON (lon, lat) pairs swapped.
    Each contour lists indices into ``points`` and ends with its own
    first index, so rings are closed by reference rather than by a
    duplicated point.
    """

    def __init__(self):
        self.points: list[tuple[float, float]] = []
        self.contours: list[list[int]] = []

    def add_linear_ring(self, ring) -> None:
        """Append a closed GeoJSON ring.

        Raises InvalidRingError when the ring has fewer than
        ``MIN_RING_POINTS`` coordinates (closing repeat included).
        """
        n = len(ring)
        if n < MIN_RING_POINTS:
            raise InvalidRingError(f"ring has {n} points, need {MIN_RING_POINTS}")

        offset = len(self.points)
        contour = list(range(offset, offset + n))
        contour[-1] = contour[0]

        self.points.extend((float(c[1]), float(c[0])) for c in ring[:-1])
        self.contours.append(contour)

    def triangulate(self, triangulator: Triangulator = None):
        """Run *triangulator* (default :func:`triangulate_contours`)."""
        triangulator = triangulator or triangulate_contours
        return triangulator(self.points, self.contours)


def assemble_polygon(rings, name: str = "") -> FeaturePolygon | None:
    """Build a FeaturePolygon from one GeoJSON polygon's rings.

    An invalid outer ring drops the polygon (returns None); an invalid
    hole drops only that hole.
    """
    polygon = FeaturePolygon()
    for idx, ring in enumerate(rings):
        try:
            polygon.add_linear_ring(ring)
        except InvalidRingError as e:
            if idx == 0:
                logger.info(f"skipping {name} [invalid outer contour: {e}]")
                return None
            logger.debug(f"{name}: dropping hole {idx} [{e}]")
    if not polygon.contours:
        logger.info(f"skipping {name} [polygon has no rings]")
        return None
    return polygon


# ── Constrained triangulation ───────────────────────────────────────────

def triangulate_contours(points, contours):
    """Triangulate the polygon bounded by ``contours[0]`` minus the holes.

    Uses ``trimesh.creation.triangulate_polygon`` (earcut), which keeps
    every contour edge and leaves holes empty.  Self-intersecting,
    degenerate, or otherwise invalid contours raise TriangulationError.

    Returns (vertices, faces): an (n, 2) float array in the same plane as
    *points* and an (m, 3) int array indexing it.
    """
    if not contours:
        raise TriangulationError("no contours")

    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    # Drop each contour's closing index; shapely closes rings itself
    rings = [pts[list(c[:-1])] for c in contours]

    try:
        polygon = Polygon(rings[0], rings[1:])
    except (ValueError, GEOSException) as e:
        raise TriangulationError(f"cannot build polygon: {e}") from e

    if polygon.is_empty or polygon.area <= 0:
        raise TriangulationError("degenerate polygon")
    if not polygon.is_valid:
        raise TriangulationError(explain_validity(polygon))

    try:
        vertices, faces = trimesh.creation.triangulate_polygon(polygon, engine='earcut')
    except Exception as e:
        raise TriangulationError(f"triangulation failed: {e}") from e

    faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
    if len(faces) == 0:
        raise TriangulationError("triangulation produced no triangles")
    return np.asarray(vertices, dtype=np.float64).reshape(-1, 2), faces


# ── Sphere projection ───────────────────────────────────────────────────

def project_to_sphere(points, radius: float) -> np.ndarray:
    """Map (lat, lon) plane points in degrees onto the feature shell.

    The shell sits ``FEATURE_SURFACE_OFFSET`` above the globe.  The first
    coordinate, shifted by pi, is used as the polar angle; this keeps the
    feature layer aligned with the basemap texture, so keep it as is.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    shell = radius + FEATURE_SURFACE_OFFSET

    u = np.radians(pts[:, 0]) + np.pi
    v = np.radians(pts[:, 1])

    return np.column_stack([
        -np.cos(u) * np.cos(v) * shell,
        np.sin(u) * shell,
        np.cos(u) * np.sin(v) * shell,
    ])


def unproject_from_sphere(positions, radius: float) -> np.ndarray:
    """Inverse of :func:`project_to_sphere` for lat in (-90, 90), lon in (-180, 180)."""
    pos = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    shell = radius + FEATURE_SURFACE_OFFSET

    lat = -np.degrees(np.arcsin(np.clip(pos[:, 1] / shell, -1.0, 1.0)))
    lon = np.degrees(np.arctan2(-pos[:, 2], pos[:, 0]))
    return np.column_stack([lat, lon])
