"""Orthographic camera: parallel primary rays.

Each ray starts on the view plane through the eye and travels along -w:

    origin = eye + p.x * u + p.y * v
    direction = -w

With the default placement (eye at the origin, looking down -z) a sample
at view-plane point p gives the ray origin (p.x, p.y, 0), direction
(0, 0, -1).
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.camera.camera import (
    Camera,
    CameraKind,
    get_camera_eye,
    get_camera_u,
    get_camera_v,
    get_camera_w,
)
from whitted.core.ray import Ray, make_ray, vec2


class Orthographic(Camera):
    """Camera with parallel projection."""

    kind = CameraKind.ORTHOGRAPHIC

    def __init__(
        self,
        eye: tuple[float, float, float] = (0.0, 0.0, 0.0),
        look_at: tuple[float, float, float] = (0.0, 0.0, -1.0),
        up: tuple[float, float, float] = (0.0, 1.0, 0.0),
        zoom: float = 1.0,
    ) -> None:
        super().__init__(eye=eye, look_at=look_at, up=up, zoom=zoom)

    def ray_origin(self, p: tuple[float, float]) -> npt.NDArray[np.float64]:
        """Origin of the ray through view-plane point p."""
        return self.eye + p[0] * self.u + p[1] * self.v

    def ray_direction(self, p: tuple[float, float]) -> npt.NDArray[np.float64]:
        """Direction of every ray: -w."""
        return -self.w


@ti.func
def get_orthographic_ray(p: vec2) -> Ray:
    """Primary ray through view-plane point p of the uploaded camera."""
    origin = get_camera_eye() + p.x * get_camera_u() + p.y * get_camera_v()
    return make_ray(origin, -get_camera_w())
