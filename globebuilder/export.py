"""Serialize globe artifacts: raw GPU buffers, GLB scenes, and PNG textures."""

import logging
import pathlib

import numpy as np
import trimesh

from .basemap import Basemap
from .models import Mesh

logger = logging.getLogger(__name__)

GLOBE_BASE_COLOR = [0.8, 0.8, 0.8, 1.0]


def write_buffers(mesh: Mesh, directory, name: str) -> tuple:
    """Write ``<name>.vertices.bin`` and ``<name>.indices.bin``.

    Returns the two paths.
    """
    directory = pathlib.Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    vertex_path = directory / f"{name}.vertices.bin"
    index_path = directory / f"{name}.indices.bin"
    vertex_path.write_bytes(mesh.vertex_bytes())
    index_path.write_bytes(mesh.index_bytes())
    logger.info(f"Wrote {name} buffers: {mesh.vertex_count} vertices "
                f"({mesh.stride} B each), {len(mesh.indices)} indices")
    return vertex_path, index_path


def mesh_to_trimesh(mesh: Mesh) -> trimesh.Trimesh:
    """Convert to a trimesh without merging or reordering vertices.

    Meshes with a ``color`` field carry per-vertex colors.
    """
    verts_arr = np.array(mesh.positions, dtype=np.float64)
    faces_arr = np.array(mesh.faces, dtype=np.int64)

    if 'color' in mesh.vertices.dtype.names:
        colors = np.clip(np.round(mesh.vertices['color'] * 255), 0, 255).astype(np.uint8)
        alpha = np.full((len(colors), 1), 255, dtype=np.uint8)
        return trimesh.Trimesh(vertices=verts_arr, faces=faces_arr,
                               vertex_colors=np.hstack([colors, alpha]),
                               process=False)
    return trimesh.Trimesh(vertices=verts_arr, faces=faces_arr, process=False)


def write_scene(globe: Mesh, features: Mesh, output_path) -> str:
    """Write globe and feature meshes into one GLB scene."""
    output_path = pathlib.Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    glb_scene = trimesh.Scene()

    globe_mesh = mesh_to_trimesh(globe)
    material = trimesh.visual.material.PBRMaterial(
        baseColorFactor=GLOBE_BASE_COLOR,
        doubleSided=False,
    )
    globe_mesh.visual = trimesh.visual.TextureVisuals(material=material)
    glb_scene.add_geometry(globe_mesh, geom_name='globe')

    if features.vertex_count and features.triangle_count:
        glb_scene.add_geometry(mesh_to_trimesh(features), geom_name='features')
    else:
        logger.warning("Feature mesh is empty; GLB contains only the globe")

    glb_scene.export(str(output_path), file_type='glb')
    logger.info(f"GLB file generated successfully: {output_path}")
    return str(output_path)


def write_basemap(basemap: Basemap, output_path) -> str:
    """Write the composited basemap as PNG."""
    output_path = pathlib.Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    basemap.image.save(output_path, format='PNG')
    logger.info(f"Basemap written: {output_path} ({basemap.width}x{basemap.height})")
    return str(output_path)
