"""GlobeBuilder — thin orchestrator that delegates to focused modules."""

import logging
import random
import time
from dataclasses import dataclass

from .basemap import Basemap
from .config import GlobeConfig
from .features import build_feature_mesh
from .geometry import Triangulator, triangulate_contours
from .models import Mesh, load_feature_collection, parse_features
from .sphere import build_globe_mesh

logger = logging.getLogger(__name__)


def normalize_asset_name(name: str) -> str:
    """Asset names may use ``::`` as a path separator."""
    return name.replace("::", "/")


def _get_asset(assets: dict, name: str) -> bytes:
    key = normalize_asset_name(name)
    data = assets.get(key)
    if data is None:
        data = assets.get(name)
    if data is None:
        raise FileNotFoundError(f"Asset not found: {key}")
    return data


@dataclass
class GlobeAssets:
    """Artifacts handed to the rendering layer."""
    globe: Mesh
    features: Mesh
    basemap: Basemap


class GlobeBuilder:
    def __init__(self, config: GlobeConfig = None,
                 triangulator: Triangulator = triangulate_contours):
        """
        config: sphere parameters and asset names (defaults to GlobeConfig()).
        triangulator: polygon triangulation capability for the feature mesh.
        """
        self.config = config or GlobeConfig()
        self.config.validate()
        self.triangulator = triangulator

    def color_source(self) -> random.Random:
        """Random source for basemap fill colors; seeded when configured."""
        return random.Random(self.config.color_seed)

    def build(self, assets: dict) -> GlobeAssets:
        """Build globe mesh, feature mesh and basemap from in-memory assets.

        *assets* maps asset names to their bytes.  A missing basemap or
        features asset raises FileNotFoundError; undecodable basemap bytes
        raise BasemapDecodeError.
        """
        cfg = self.config
        timings = {}

        basemap_bytes = _get_asset(assets, cfg.basemap)
        features_bytes = _get_asset(assets, cfg.features)

        t0 = time.perf_counter()
        features = parse_features(load_feature_collection(features_bytes))
        timings["1. Parse features"] = time.perf_counter() - t0
        logger.info(f"Loaded {len(features)} named features from {cfg.features}")

        t0 = time.perf_counter()
        basemap = Basemap.from_bytes(basemap_bytes, cfg.basemap_padding)
        basemap.with_features(features, color_source=self.color_source())
        timings["2. Basemap"] = time.perf_counter() - t0

        t0 = time.perf_counter()
        globe = build_globe_mesh(cfg.slices, cfg.stacks, cfg.globe_radius)
        timings["3. Globe mesh"] = time.perf_counter() - t0

        t0 = time.perf_counter()
        feature_mesh = build_feature_mesh(features, cfg.globe_radius,
                                          triangulator=self.triangulator)
        timings["4. Feature mesh"] = time.perf_counter() - t0

        total = 0.0
        for label, dur in timings.items():
            logger.info(f"  {label}: {dur:.2f}s")
            total += dur
        logger.info(f"  TOTAL: {total:.2f}s")

        return GlobeAssets(globe=globe, features=feature_mesh, basemap=basemap)
