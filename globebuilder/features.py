"""Combined, per-feature colored mesh of administrative boundaries."""

import logging

import numpy as np

from .colors import name_to_rgb
from .errors import TriangulationError
from .geometry import Triangulator, assemble_polygon, project_to_sphere, triangulate_contours
from .models import FEATURE_VERTEX, INDEX_DTYPE, Mesh

logger = logging.getLogger(__name__)


def build_feature_mesh(features, radius: float,
                       triangulator: Triangulator = triangulate_contours) -> Mesh:
    """Triangulate every MultiPolygon feature onto the sphere shell.

    Each polygon is assembled, triangulated, projected, and tinted with its
    feature's color; indices are offset by the running vertex count.
    Failures skip the ring, polygon or feature and never abort the build.

    Parameters
    ----------
    features : list of Feature
        Named features (see ``models.parse_features``).
    radius : float
        Globe radius; features are lifted one unit above it.
    triangulator : callable
        ``triangulate(points, contours) -> (vertices, faces)``.
    """
    vert_chunks: list[np.ndarray] = []
    face_chunks: list[np.ndarray] = []
    offset = 0
    built = 0
    skipped = 0

    for feature in features:
        polygons = feature.polygons()
        if not polygons:
            continue

        color = name_to_rgb(feature.name)

        for rings in polygons:
            polygon = assemble_polygon(rings, name=feature.name)
            if polygon is None:
                skipped += 1
                continue

            try:
                points, faces = polygon.triangulate(triangulator)
            except TriangulationError as e:
                logger.info(f"skipping {feature.name} [{e}]")
                skipped += 1
                continue

            v = np.zeros(len(points), dtype=FEATURE_VERTEX)
            v['pos'] = project_to_sphere(points, radius)
            v['color'] = color

            vert_chunks.append(v)
            face_chunks.append(np.asarray(faces, dtype=np.int64).reshape(-1) + offset)
            offset += len(v)
            built += 1

    if vert_chunks:
        vertices = np.concatenate(vert_chunks)
        indices = np.concatenate(face_chunks).astype(INDEX_DTYPE)
        mesh = Mesh(vertices=vertices, indices=indices)
    else:
        mesh = Mesh.empty(FEATURE_VERTEX)

    logger.info(f"Feature mesh: {built} polygons built, {skipped} skipped, "
                f"{mesh.vertex_count} vertices, {mesh.triangle_count} triangles")
    return mesh
