import io
import json

import pytest
from PIL import Image

from globebuilder.models import Feature

SQUARE = [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0], [0.0, 0.0]]
HOLE = [[4.0, 4.0], [6.0, 4.0], [6.0, 6.0], [4.0, 6.0], [4.0, 4.0]]
# Triangle with an extra point on its base, so the ring has 5 coordinates
TRIANGLE = [[0.0, 0.0], [5.0, 0.0], [10.0, 0.0], [0.0, 10.0], [0.0, 0.0]]


def make_feature(name, polygons, geom_type="MultiPolygon"):
    """Raw GeoJSON feature mapping."""
    return {
        "type": "Feature",
        "properties": {"NAME": name},
        "geometry": {"type": geom_type, "coordinates": polygons},
    }


def square_at(lon, lat, size):
    return [[lon, lat], [lon + size, lat], [lon + size, lat + size],
            [lon, lat + size], [lon, lat]]


@pytest.fixture
def square_feature():
    return Feature(name="Square", geometry={"type": "MultiPolygon", "coordinates": [[SQUARE]]})


@pytest.fixture
def feature_collection():
    """Two valid features and one without a name."""
    return {
        "type": "FeatureCollection",
        "features": [
            make_feature("Alpha", [[square_at(-45.0, -45.0, 90.0)]]),
            make_feature("Beta", [[square_at(100.0, 10.0, 20.0)]]),
            make_feature(None, [[square_at(-20.0, -20.0, 40.0)]]),
        ],
    }


@pytest.fixture
def png_bytes():
    """Factory for encoded PNG images of a solid color."""
    def _make(width=360, height=180, color=(0, 0, 0, 255)):
        buf = io.BytesIO()
        Image.new("RGBA", (width, height), color).save(buf, format="PNG")
        return buf.getvalue()
    return _make


@pytest.fixture
def assets(png_bytes, feature_collection):
    return {
        "basemap.png": png_bytes(),
        "world.geojson": json.dumps(feature_collection).encode("utf-8"),
    }
