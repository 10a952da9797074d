"""Pinhole camera model for perspective projection ray generation.

Every primary ray starts at the eye and passes through a point on an image
plane at distance d in front of the camera:

    direction = normalize(p.x * u + p.y * v - d * w)

where p is the view-plane point of a pixel sample (see
whitted.core.integrator) and (u, v, w) is the camera basis.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.camera.pinhole import Pinhole
    >>> camera = Pinhole(eye=(150.0, 150.0, 500.0), look_at=(0.0, 0.0, 0.0))
    >>> camera.compute_uvw()
    >>> camera.ray_direction((0.0, 0.0))  # Ray through the image center
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.camera.camera import (
    Camera,
    CameraKind,
    _camera_distance,
    get_camera_distance,
    get_camera_eye,
    get_camera_u,
    get_camera_v,
    get_camera_w,
)
from whitted.core.ray import Ray, make_ray, normalize, vec2, vec3


class Pinhole(Camera):
    """Perspective camera with zero aperture.

    Attributes:
        distance: Distance from the eye to the image plane, along -w.
    """

    kind = CameraKind.PINHOLE

    def __init__(
        self,
        eye: tuple[float, float, float] = (0.0, 0.0, 500.0),
        look_at: tuple[float, float, float] = (0.0, 0.0, 0.0),
        up: tuple[float, float, float] = (0.0, 1.0, 0.0),
        distance: float = 500.0,
        zoom: float = 1.0,
    ) -> None:
        super().__init__(eye=eye, look_at=look_at, up=up, zoom=zoom)
        self.set_distance(distance)

    def set_distance(self, distance: float) -> None:
        self.distance = float(distance)

    def ray_direction(self, p: tuple[float, float]) -> npt.NDArray[np.float64]:
        """Unit direction of the ray through view-plane point p.

        Uses the basis from the last compute_uvw() call.
        """
        d = p[0] * self.u + p[1] * self.v - self.distance * self.w
        return d / np.linalg.norm(d)

    def upload(self) -> None:
        super().upload()
        _camera_distance[None] = self.distance

    def __repr__(self) -> str:
        return (
            f"Pinhole(eye={tuple(self.eye)}, look_at={tuple(self.look_at)}, "
            f"up={tuple(self.up)}, distance={self.distance}, zoom={self.zoom})"
        )


@ti.func
def pinhole_ray_direction(p: vec2) -> vec3:
    """Device counterpart of Pinhole.ray_direction for the uploaded camera."""
    d = p.x * get_camera_u() + p.y * get_camera_v() - get_camera_distance() * get_camera_w()
    return normalize(d)


@ti.func
def get_pinhole_ray(p: vec2) -> Ray:
    """Primary ray from the eye through view-plane point p."""
    return make_ray(get_camera_eye(), pinhole_ray_direction(p))
