"""Exception types raised by the globe geometry pipeline."""


class GlobeBuilderError(Exception):
    """Base class for GlobeBuilder errors."""


class InvalidRingError(GlobeBuilderError, ValueError):
    """A linear ring is too short to describe a polygon boundary."""


class TriangulationError(GlobeBuilderError, ValueError):
    """A polygon's contours could not be triangulated."""


class BasemapDecodeError(GlobeBuilderError, ValueError):
    """The base image bytes could not be decoded."""
