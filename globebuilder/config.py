"""Globe build configuration."""

import os
from dataclasses import dataclass
from typing import Optional

from .constants import (
    DEFAULT_SLICES, DEFAULT_STACKS, DEFAULT_GLOBE_RADIUS,
    DEFAULT_BASEMAP, DEFAULT_FEATURES,
)


def _env_padding(value: str) -> tuple:
    """Parse a ``"w,h"`` padding string."""
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Padding must look like 'w,h', got {value!r}")
    return int(parts[0]), int(parts[1])


@dataclass
class GlobeConfig:
    slices: int = DEFAULT_SLICES
    stacks: int = DEFAULT_STACKS
    globe_radius: float = DEFAULT_GLOBE_RADIUS
    basemap: str = DEFAULT_BASEMAP
    basemap_padding: tuple = (0, 0)
    features: str = DEFAULT_FEATURES
    color_seed: Optional[int] = None

    @classmethod
    def from_env(cls, **overrides) -> "GlobeConfig":
        """Build a config from ``GLOBE_*`` environment variables.

        Keyword arguments win over the environment.
        """
        env = os.environ
        values = {}
        if env.get("GLOBE_SLICES"):
            values["slices"] = int(env["GLOBE_SLICES"])
        if env.get("GLOBE_STACKS"):
            values["stacks"] = int(env["GLOBE_STACKS"])
        if env.get("GLOBE_RADIUS"):
            values["globe_radius"] = float(env["GLOBE_RADIUS"])
        if env.get("GLOBE_BASEMAP"):
            values["basemap"] = env["GLOBE_BASEMAP"].strip()
        if env.get("GLOBE_BASEMAP_PADDING"):
            values["basemap_padding"] = _env_padding(env["GLOBE_BASEMAP_PADDING"])
        if env.get("GLOBE_FEATURES"):
            values["features"] = env["GLOBE_FEATURES"].strip()
        if env.get("GLOBE_COLOR_SEED"):
            values["color_seed"] = int(env["GLOBE_COLOR_SEED"])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def validate(self) -> None:
        """Raise ValueError when the sphere or padding parameters are unusable."""
        if self.slices < 3:
            raise ValueError(f"slices must be >= 3, got {self.slices}")
        if self.stacks < 2:
            raise ValueError(f"stacks must be >= 2, got {self.stacks}")
        if not self.globe_radius > 0:
            raise ValueError(f"globe_radius must be > 0, got {self.globe_radius}")
        pw, ph = self.basemap_padding
        if pw < 0 or ph < 0:
            raise ValueError(f"basemap_padding must be non-negative, got {self.basemap_padding}")
