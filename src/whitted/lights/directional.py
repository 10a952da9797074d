"""Directional light: parallel rays from an infinitely distant source.

The light reports the same unit direction for every shading point. The
direction points from the surface toward the light and is normalized when
it is set, so a light at (0, 0, 1024) and one at (0, 0, 1) are identical.
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.ray import vec3
from whitted.lights.light import Light, LightType


class DirectionalLight(Light):
    """Light arriving from a fixed direction.

    Attributes:
        direction: Unit vector from any shading point toward the light.
    """

    light_type = LightType.DIRECTIONAL

    def __init__(
        self,
        direction: tuple[float, float, float] = (0.0, 0.0, 1.0),
        color: tuple[float, float, float] = (1.0, 1.0, 1.0),
        radiance_scale: float = 1.0,
    ) -> None:
        super().__init__(color=color, radiance_scale=radiance_scale)
        self.set_direction(direction)

    def set_direction(self, direction: tuple[float, float, float]) -> None:
        """Store the normalized direction.

        Raises:
            ValueError: If the direction has zero length.
        """
        d = np.asarray(direction, dtype=np.float64)
        norm = np.linalg.norm(d)
        if norm == 0.0:
            raise ValueError("Directional light direction must be non-zero")
        self.direction = d / norm

    def get_direction(self) -> npt.NDArray[np.float64]:
        return self.direction.copy()

    def __repr__(self) -> str:
        return (
            f"DirectionalLight(direction={tuple(self.direction)}, color={self.color}, "
            f"radiance_scale={self.radiance_scale})"
        )


@ti.func
def directional_direction(direction: vec3) -> vec3:
    """Direction of a directional light: the stored unit vector."""
    return direction
