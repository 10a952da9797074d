"""Ambient light: a constant, direction-less contribution.

The ambient term stands in for all the indirect light a local shading
model ignores. It has no meaningful direction, so its direction is the
zero vector; only its radiance is used, scaled by the material's ambient
reflectance.
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.ray import vec3
from whitted.lights.light import Light, LightType


class AmbientLight(Light):
    """Omnidirectional light with constant radiance."""

    light_type = LightType.AMBIENT

    def get_direction(self) -> npt.NDArray[np.float64]:
        return np.zeros(3, dtype=np.float64)


@ti.func
def ambient_direction() -> vec3:
    """Direction of an ambient light: always the zero vector."""
    return vec3(0.0, 0.0, 0.0)
