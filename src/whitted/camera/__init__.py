"""Camera module for view and ray generation.

Components:
    camera: Camera base class, basis computation and device camera state
    pinhole: Perspective camera with an image plane at a fixed distance
    orthographic: Parallel-projection camera

A camera turns a view-plane point (pixel coordinates centered on the image,
scaled by the pixel size) into a primary ray. Cameras also drive rendering:
camera.render_scene(world) runs the render kernel and appends the result
to world.image.
"""

from .camera import Camera, CameraKind, get_camera_info, setup_camera
from .orthographic import Orthographic, get_orthographic_ray
from .pinhole import Pinhole, get_pinhole_ray, pinhole_ray_direction

__all__ = [
    "Camera",
    "CameraKind",
    "setup_camera",
    "get_camera_info",
    "Pinhole",
    "get_pinhole_ray",
    "pinhole_ray_direction",
    "Orthographic",
    "get_orthographic_ray",
]
