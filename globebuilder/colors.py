"""Deterministic feature colors."""

import hashlib


def name_to_rgb8(name: str) -> tuple:
    """Hash *name* to an (r, g, b) byte triple, stable across runs."""
    digest = hashlib.sha256(name.encode('utf-8')).digest()
    return digest[0], digest[1], digest[2]


def name_to_rgb(name: str) -> tuple:
    """Same color as :func:`name_to_rgb8`, scaled to floats in [0, 1]."""
    r, g, b = name_to_rgb8(name)
    return r / 255.0, g / 255.0, b / 255.0
