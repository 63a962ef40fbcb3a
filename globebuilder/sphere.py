"""UV-sphere globe mesh generation."""

import math
import logging

import numpy as np

from .models import GLOBE_VERTEX, INDEX_DTYPE, Mesh

logger = logging.getLogger(__name__)


def build_globe_mesh(slices: int, stacks: int, radius: float) -> Mesh:
    """Generate a closed UV-sphere with pole fans and quad strips.

    Vertex order: north pole, ``stacks - 1`` latitude bands of ``slices``
    vertices each (north to south), south pole.  Produces
    ``slices * (stacks - 1) + 2`` vertices and
    ``6 * slices * (stacks - 2) + 6 * slices`` indices.

    Parameters
    ----------
    slices : int
        Longitude subdivisions, at least 3.
    stacks : int
        Latitude subdivisions, at least 2.
    radius : float
        Sphere radius, positive.
    """
    if slices < 3:
        raise ValueError(f"slices must be >= 3, got {slices}")
    if stacks < 2:
        raise ValueError(f"stacks must be >= 2, got {stacks}")
    if not radius > 0:
        raise ValueError(f"radius must be > 0, got {radius}")

    verts = [[0.0, radius, 0.0]]

    for i in range(stacks - 1):
        phi = math.pi * (i + 1) / stacks
        sin_phi = math.sin(phi)
        cos_phi = math.cos(phi)
        for j in range(slices):
            theta = 2 * math.pi * j / slices
            verts.append([
                sin_phi * math.cos(theta) * radius,
                cos_phi * radius,
                sin_phi * math.sin(theta) * radius,
            ])

    verts.append([0.0, -radius, 0.0])

    north = 0
    south = len(verts) - 1
    last_band = slices * (stacks - 2) + 1

    faces = []

    # Pole fans
    for i in range(slices):
        faces.append([north, (i + 1) % slices + 1, i + 1])
    for i in range(slices):
        faces.append([south, last_band + i, last_band + (i + 1) % slices])

    # Quad strips between consecutive bands
    for j in range(stacks - 2):
        j0 = j * slices + 1
        j1 = (j + 1) * slices + 1
        for i in range(slices):
            i0 = j0 + i
            i1 = j0 + (i + 1) % slices
            i2 = j1 + (i + 1) % slices
            i3 = j1 + i
            faces.append([i3, i0, i1])
            faces.append([i1, i2, i3])

    vertices = np.zeros(len(verts), dtype=GLOBE_VERTEX)
    vertices['pos'] = np.array(verts, dtype=np.float32)

    mesh = Mesh(vertices=vertices, indices=np.array(faces, dtype=INDEX_DTYPE))
    logger.info(f"Globe mesh: {mesh.vertex_count} vertices, "
                f"{mesh.triangle_count} triangles")
    return mesh
