"""Camera base class and device-side camera state.

A camera is placed with an eye point, a look-at point and an up vector.
compute_uvw() derives the orthonormal basis used to build primary rays:

- w points from look_at toward the eye (opposite the view direction)
- u points right in the image plane
- v points up in the image plane

When the view direction is parallel to up the cross product is undefined,
so the two vertical cases use fixed bases:

- looking straight down: u = (0, 0, 1), v = (1, 0, 0), w = (0, 1, 0)
- looking straight up:   u = (1, 0, 0), v = (0, 0, 1), w = (0, -1, 0)

The basis is computed on the host with NumPy and written into Taichi fields
by setup_camera(); the ray functions of the concrete cameras read them.
"""

from enum import IntEnum
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.ray import vec3

if TYPE_CHECKING:
    from whitted.scene.world import World


class CameraKind(IntEnum):
    """Projection used by the render kernel."""

    PINHOLE = 0
    ORTHOGRAPHIC = 1


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_eye = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_u = ti.Vector.field(3, dtype=ti.f32, shape=())  # Right
_camera_v = ti.Vector.field(3, dtype=ti.f32, shape=())  # Up
_camera_w = ti.Vector.field(3, dtype=ti.f32, shape=())  # Backward (opposite view)
_camera_distance = ti.field(dtype=ti.f32, shape=())
_pixel_size = ti.field(dtype=ti.f32, shape=())


class Camera:
    """Base class for cameras.

    Attributes:
        eye: Camera position in world space.
        look_at: Point the camera looks at.
        up: Reference up direction.
        u: Right basis vector (valid after compute_uvw()).
        v: Up basis vector.
        w: Backward basis vector.
        zoom: Magnification; the pixel size is 1 / zoom.
    """

    kind: CameraKind

    def __init__(
        self,
        eye: tuple[float, float, float] = (0.0, 0.0, 500.0),
        look_at: tuple[float, float, float] = (0.0, 0.0, 0.0),
        up: tuple[float, float, float] = (0.0, 1.0, 0.0),
        zoom: float = 1.0,
    ) -> None:
        self.set_eye(eye)
        self.set_look_at(look_at)
        self.set_up(up)
        self.set_zoom(zoom)
        self.u = np.array([1.0, 0.0, 0.0])
        self.v = np.array([0.0, 1.0, 0.0])
        self.w = np.array([0.0, 0.0, 1.0])

    def set_eye(self, eye: tuple[float, float, float]) -> None:
        self.eye = np.asarray(eye, dtype=np.float64)

    def set_look_at(self, look_at: tuple[float, float, float]) -> None:
        self.look_at = np.asarray(look_at, dtype=np.float64)

    def set_up(self, up: tuple[float, float, float]) -> None:
        self.up = np.asarray(up, dtype=np.float64)

    def set_zoom(self, zoom: float) -> None:
        """Set the magnification.

        Raises:
            ValueError: If zoom is not positive.
        """
        if zoom <= 0.0:
            raise ValueError(f"zoom must be positive, got {zoom}")
        self.zoom = float(zoom)

    @property
    def pixel_size(self) -> float:
        return 1.0 / self.zoom

    def compute_uvw(self) -> tuple[npt.NDArray[np.float64], ...]:
        """Compute the orthonormal basis from eye, look_at and up.

        Returns:
            The basis (u, v, w), also stored on the camera.
        """
        vertical = np.isclose(self.eye[0], self.look_at[0]) and np.isclose(
            self.eye[2], self.look_at[2]
        )

        if vertical and self.eye[1] > self.look_at[1]:
            # Looking straight down
            self.u = np.array([0.0, 0.0, 1.0])
            self.v = np.array([1.0, 0.0, 0.0])
            self.w = np.array([0.0, 1.0, 0.0])
        elif vertical and self.eye[1] < self.look_at[1]:
            # Looking straight up
            self.u = np.array([1.0, 0.0, 0.0])
            self.v = np.array([0.0, 0.0, 1.0])
            self.w = np.array([0.0, -1.0, 0.0])
        else:
            w = self.eye - self.look_at
            self.w = w / np.linalg.norm(w)
            u = np.cross(self.up, self.w)
            self.u = u / np.linalg.norm(u)
            self.v = np.cross(self.w, self.u)

        return self.u, self.v, self.w

    def upload(self) -> None:
        """Compute the basis and write the camera state into the device fields."""
        self.compute_uvw()
        _camera_eye[None] = self.eye.tolist()
        _camera_u[None] = self.u.tolist()
        _camera_v[None] = self.v.tolist()
        _camera_w[None] = self.w.tolist()
        _camera_distance[None] = 0.0
        _pixel_size[None] = self.pixel_size

    def render_scene(self, world: "World") -> None:
        """Render world through this camera, appending to world.image."""
        from whitted.core.integrator import render_world

        render_world(world, self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(eye={tuple(self.eye)}, look_at={tuple(self.look_at)}, "
            f"up={tuple(self.up)}, zoom={self.zoom})"
        )


def setup_camera(camera: Camera) -> None:
    """Initialize the device camera state from a camera configuration.

    Must be called from Python (not from within a Taichi kernel) before
    rendering.
    """
    camera.upload()


@ti.func
def get_camera_eye() -> vec3:
    return _camera_eye[None]


@ti.func
def get_camera_u() -> vec3:
    return _camera_u[None]


@ti.func
def get_camera_v() -> vec3:
    return _camera_v[None]


@ti.func
def get_camera_w() -> vec3:
    return _camera_w[None]


@ti.func
def get_camera_distance() -> ti.f32:
    return _camera_distance[None]


@ti.func
def get_pixel_size() -> ti.f32:
    return _pixel_size[None]


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the uploaded camera state for debugging.

    Returns:
        Dictionary with eye, u, v, w.
    """
    return {
        "eye": tuple(float(c) for c in _camera_eye[None]),
        "u": tuple(float(c) for c in _camera_u[None]),
        "v": tuple(float(c) for c in _camera_v[None]),
        "w": tuple(float(c) for c in _camera_w[None]),
    }
