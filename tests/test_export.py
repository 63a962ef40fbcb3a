import numpy as np
import trimesh
from PIL import Image

from globebuilder import export
from globebuilder.basemap import Basemap
from globebuilder.features import build_feature_mesh
from globebuilder.models import FEATURE_VERTEX, GLOBE_VERTEX
from globebuilder.sphere import build_globe_mesh


def test_write_buffers(tmp_path):
    mesh = build_globe_mesh(8, 4, 1.0)
    vertex_path, index_path = export.write_buffers(mesh, tmp_path / "out", "globe")

    assert vertex_path.stat().st_size == 12 * mesh.vertex_count
    assert index_path.stat().st_size == 4 * len(mesh.indices)

    vertices = np.frombuffer(vertex_path.read_bytes(), dtype=GLOBE_VERTEX)
    np.testing.assert_array_equal(vertices["pos"], mesh.positions)
    indices = np.frombuffer(index_path.read_bytes(), dtype="<u4")
    np.testing.assert_array_equal(indices, mesh.indices)


def test_feature_buffers_are_24_bytes(tmp_path, square_feature):
    mesh = build_feature_mesh([square_feature], 10.0)
    vertex_path, _ = export.write_buffers(mesh, tmp_path, "features")
    vertices = np.frombuffer(vertex_path.read_bytes(), dtype=FEATURE_VERTEX)
    assert vertex_path.stat().st_size == 24 * mesh.vertex_count
    np.testing.assert_array_equal(vertices["color"], mesh.vertices["color"])


def test_mesh_to_trimesh_keeps_vertices(square_feature):
    mesh = build_feature_mesh([square_feature], 10.0)
    tm = export.mesh_to_trimesh(mesh)

    assert len(tm.vertices) == mesh.vertex_count
    assert len(tm.faces) == mesh.triangle_count
    expected = np.round(mesh.vertices["color"][0] * 255).astype(np.uint8)
    assert tm.visual.vertex_colors[0][:3].tolist() == expected.tolist()


def test_write_scene(tmp_path, square_feature):
    globe = build_globe_mesh(16, 8, 10.0)
    features = build_feature_mesh([square_feature], 10.0)
    path = export.write_scene(globe, features, tmp_path / "scene" / "globe.glb")

    scene = trimesh.load(path)
    assert isinstance(scene, trimesh.Scene)
    assert len(scene.geometry) == 2


def test_write_basemap(tmp_path):
    basemap = Basemap(Image.new("RGBA", (12, 6), (1, 2, 3, 255)))
    path = export.write_basemap(basemap, tmp_path / "basemap.png")

    with Image.open(path) as image:
        assert image.size == (12, 6)
        assert image.mode == "RGBA"
