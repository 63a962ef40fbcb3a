"""Basemap texture: cropped base image with painted administrative regions."""

import io
import math
import logging
import random

from PIL import Image, ImageDraw, UnidentifiedImageError

from .constants import BASEMAP_SUPERSAMPLE
from .errors import BasemapDecodeError

logger = logging.getLogger(__name__)


def lonlat_to_pixel(lon: float, lat: float, width: int, height: int) -> tuple:
    """Equirectangular (lon, lat) degrees to integer pixel coordinates."""
    px = math.floor(((lon / 180.0 + 1.0) * 0.5) * width)
    py = math.floor((1.0 - (lat / 90.0 + 1.0) * 0.5) * height)
    return px, py


def ring_to_pixels(ring, width: int, height: int) -> list:
    """Project a closed ring, dropping consecutive duplicates and the closing point."""
    pixels = []
    for coord in ring:
        p = lonlat_to_pixel(coord[0], coord[1], width, height)
        if not pixels or pixels[-1] != p:
            pixels.append(p)
    if len(pixels) > 1 and pixels[-1] == pixels[0]:
        pixels.pop()
    return pixels


def random_color(color_source) -> tuple:
    """Opaque RGBA color drawn from *color_source* (a ``random.Random``)."""
    return (color_source.randint(0, 255),
            color_source.randint(0, 255),
            color_source.randint(0, 255),
            255)


class Basemap:
    """RGBA base texture cropped to its logical content region."""

    def __init__(self, image: Image.Image):
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        self.image = image

    @property
    def size(self) -> tuple:
        return self.image.size

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @classmethod
    def from_bytes(cls, data: bytes, padding=(0, 0)) -> "Basemap":
        """Decode encoded image bytes and strip *padding* (w, h) from each edge.

        Raises BasemapDecodeError when Pillow cannot decode *data*.
        """
        try:
            with Image.open(io.BytesIO(data)) as src:
                image = src.convert('RGBA')
        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"Could not decode basemap image: {e}")
            raise BasemapDecodeError(f"Could not decode basemap image: {e}") from e
        return cls.from_image(image, padding)

    @classmethod
    def from_image(cls, image: Image.Image, padding=(0, 0)) -> "Basemap":
        pad_w, pad_h = padding
        if pad_w < 0 or pad_h < 0:
            raise ValueError(f"padding must be non-negative, got {padding}")
        width = image.width - pad_w * 2
        height = image.height - pad_h * 2
        if width <= 0 or height <= 0:
            raise ValueError(f"padding {padding} leaves no content in a "
                             f"{image.width}x{image.height} image")

        cropped = image.crop((pad_w, pad_h, pad_w + width, pad_h + height))
        logger.info(f"Basemap: {image.width}x{image.height} cropped to "
                    f"{width}x{height}")
        return cls(cropped)

    def with_features(self, features, color_source=None,
                      first_polygon_only: bool = True) -> "Basemap":
        """Paint each feature's outer ring as a filled antialiased polygon.

        Only the first polygon of each MultiPolygon is painted unless
        *first_polygon_only* is False.  Colors come from *color_source*;
        pass a seeded ``random.Random`` for repeatable output.  Drawing is
        in place and later features cover earlier ones.
        """
        color_source = color_source or random.Random()
        painted = 0

        for feature in features:
            polygons = feature.polygons()
            if first_polygon_only:
                polygons = polygons[:1]

            for rings in polygons:
                if not rings:
                    continue
                pixels = ring_to_pixels(rings[0], self.width, self.height)
                if len(set(pixels)) < 3:
                    logger.debug(f"{feature.name}: outer ring collapses to "
                                 f"{len(set(pixels))} pixels")
                    continue
                if self.fill_polygon(pixels, random_color(color_source)):
                    painted += 1

        logger.info(f"Basemap: painted {painted} regions")
        return self

    def fill_polygon(self, pixels, color, supersample: int = BASEMAP_SUPERSAMPLE) -> bool:
        """Alpha-blend a filled polygon using a supersampled coverage mask.

        Returns False when the polygon lies entirely outside the image.
        """
        xs = [p[0] for p in pixels]
        ys = [p[1] for p in pixels]
        x0, x1 = max(min(xs), 0), min(max(xs) + 1, self.width)
        y0, y1 = max(min(ys), 0), min(max(ys) + 1, self.height)
        if x0 >= x1 or y0 >= y1:
            return False

        box_w, box_h = x1 - x0, y1 - y0
        s = supersample

        # Vertices sit on pixel centres
        mask = Image.new('L', (box_w * s, box_h * s), 0)
        ImageDraw.Draw(mask).polygon(
            [((x - x0 + 0.5) * s, (y - y0 + 0.5) * s) for x, y in pixels],
            fill=255,
        )
        mask = mask.resize((box_w, box_h), Image.Resampling.BOX)

        box = (x0, y0, x1, y1)
        region = self.image.crop(box)
        fill = Image.new('RGBA', (box_w, box_h), tuple(color))
        self.image.paste(Image.composite(fill, region, mask), box)
        return True

    def tobytes(self) -> bytes:
        """Row-major RGBA bytes, stride 4 * width."""
        return self.image.tobytes()
