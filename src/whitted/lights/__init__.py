"""Lights module for local illumination.

Components:
    light: Light base class and LightType enumeration
    ambient: Constant, direction-less ambient light
    directional: Parallel light from an infinitely distant source
    registry: Taichi field storage and per-type dispatch

Each light contributes a direction and a radiance (radiance_scale * color)
to the shading equation. Lights are read-only during rendering.
"""

from .ambient import AmbientLight, ambient_direction
from .directional import DirectionalLight, directional_direction
from .light import Light, LightType

__all__ = [
    "Light",
    "LightType",
    "AmbientLight",
    "DirectionalLight",
    "ambient_direction",
    "directional_direction",
]
