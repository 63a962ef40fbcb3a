import pytest

from globebuilder import GlobeBuilder, GlobeConfig
from globebuilder.builder import normalize_asset_name
from globebuilder.errors import BasemapDecodeError


def _config(**kwargs):
    values = dict(slices=12, stacks=6, globe_radius=100.0,
                  basemap="basemap.png", features="world.geojson", color_seed=11)
    values.update(kwargs)
    return GlobeConfig(**values)


def test_build_produces_all_artifacts(assets):
    result = GlobeBuilder(_config()).build(assets)

    assert result.globe.vertex_count == 12 * 5 + 2
    assert result.features.triangle_count == 4  # two squares
    assert result.basemap.size == (360, 180)


def test_seeded_build_is_deterministic(assets):
    a = GlobeBuilder(_config()).build(assets)
    b = GlobeBuilder(_config()).build(assets)
    assert a.basemap.tobytes() == b.basemap.tobytes()
    assert a.features.vertex_bytes() == b.features.vertex_bytes()


def test_padding_applied(assets):
    result = GlobeBuilder(_config(basemap_padding=(5, 5))).build(assets)
    assert result.basemap.size == (350, 170)


def test_missing_asset(assets):
    with pytest.raises(FileNotFoundError):
        GlobeBuilder(_config(features="missing.geojson")).build(assets)


def test_path_style_asset_names(assets):
    assets = {"maps/basemap.png": assets["basemap.png"],
              "maps/world.geojson": assets["world.geojson"]}
    config = _config(basemap="maps::basemap.png", features="maps::world.geojson")
    result = GlobeBuilder(config).build(assets)
    assert result.features.vertex_count > 0


def test_undecodable_basemap(assets):
    assets["basemap.png"] = b"\x00\x01garbage"
    with pytest.raises(BasemapDecodeError):
        GlobeBuilder(_config()).build(assets)


def test_invalid_config_fails_fast():
    with pytest.raises(ValueError):
        GlobeBuilder(_config(slices=2))
    with pytest.raises(ValueError):
        GlobeBuilder(_config(stacks=1))


def test_injected_triangulator_is_used(assets):
    calls = []

    def fake(points, contours):
        calls.append(len(contours))
        return [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)], [[0, 1, 2]]

    result = GlobeBuilder(_config(), triangulator=fake).build(assets)
    assert calls == [1, 1]
    assert result.features.triangle_count == 2


def test_normalize_asset_name():
    assert normalize_asset_name("shaders::render") == "shaders/render"
    assert normalize_asset_name("plain.tif") == "plain.tif"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("GLOBE_SLICES", "24")
    monkeypatch.setenv("GLOBE_BASEMAP_PADDING", "3, 4")
    monkeypatch.setenv("GLOBE_COLOR_SEED", "7")
    config = GlobeConfig.from_env(stacks=10)

    assert config.slices == 24
    assert config.stacks == 10
    assert config.basemap_padding == (3, 4)
    assert config.color_seed == 7


def test_config_defaults(monkeypatch):
    for key in ("GLOBE_SLICES", "GLOBE_STACKS", "GLOBE_RADIUS", "GLOBE_BASEMAP",
                "GLOBE_BASEMAP_PADDING", "GLOBE_FEATURES", "GLOBE_COLOR_SEED"):
        monkeypatch.delenv(key, raising=False)
    config = GlobeConfig.from_env()
    assert (config.slices, config.stacks, config.globe_radius) == (100, 100, 10000.0)
    assert config.basemap == "blue_marble_2048.tif"
    assert config.features == "world_2010.geojson"
