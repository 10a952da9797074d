"""Whitted-style render loop: primary rays, nearest hit, local shading.

For every pixel (row r, column c) the render kernel draws num_samples
points from the bound sampler, maps each to the view-plane point

    p = ((c - 0.5 * width + s.x) * pixel_size, (r - 0.5 * height + s.y) * pixel_size)

asks the camera for the ray through p, resolves the nearest hit against
every sphere and shades it with the hit material (or reports the
background on a miss). The pixel colour is the mean over its samples.

The outer loop is serialized so that samples are drawn in exactly row-major
order: the sampler cursor is shared, unsynchronized state and draw order
decides which sample set every pixel receives.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.demo_scenes import create_shading_scene
    >>> from whitted.core.integrator import render_world
    >>> world, camera = create_shading_scene()
    >>> render_world(world, camera)
    >>> world.image.shape
    (360000, 3)
"""

import logging
import time
from typing import TYPE_CHECKING

import taichi as ti

from whitted.camera.camera import CameraKind, get_pixel_size, setup_camera
from whitted.camera.orthographic import get_orthographic_ray
from whitted.camera.pinhole import get_pinhole_ray
from whitted.core.ray import Ray, make_ray, vec2, vec3
from whitted.core.sampler import get_num_samples, sample_unit_square
from whitted.core.shade_rec import ShadeRec
from whitted.materials.matte import shade_matte
from whitted.scene.intersection import intersect_world
from whitted.scene.world import (
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    MaterialType,
    get_background,
    get_material_type,
    get_material_type_index,
)

if TYPE_CHECKING:
    from whitted.camera.camera import Camera
    from whitted.scene.world import World

logger = logging.getLogger(__name__)

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Scan-order colours of the current render (preallocated to the maximum size)
_image_buffer = ti.Vector.field(3, dtype=ti.f32, shape=MAX_IMAGE_WIDTH * MAX_IMAGE_HEIGHT)


# =============================================================================
# Material Dispatch
# =============================================================================


@ti.func
def _shade_material(rec: ShadeRec) -> vec3:
    """Dispatch to the shade function of the hit material.

    A hit without a material (material_id == -1) reports the flat colour of
    the shape.
    """
    color = rec.color
    mat_type = get_material_type(rec.material_id)
    type_index = get_material_type_index(rec.material_id)

    if mat_type == int(MaterialType.MATTE):
        color = shade_matte(type_index, rec)

    return color


# =============================================================================
# Ray Tracing Core
# =============================================================================


@ti.func
def primary_ray(p: vec2, camera_kind: ti.i32) -> Ray:
    """Ray of the uploaded camera through view-plane point p."""
    origin = vec3(0.0, 0.0, 0.0)
    direction = vec3(0.0, 0.0, 0.0)

    if camera_kind == int(CameraKind.ORTHOGRAPHIC):
        ortho = get_orthographic_ray(p)
        origin = ortho.origin
        direction = ortho.direction
    else:
        pinhole = get_pinhole_ray(p)
        origin = pinhole.origin
        direction = pinhole.direction

    return make_ray(origin, direction)


@ti.func
def trace_ray(ray: Ray) -> vec3:
    """Radiance carried back along ray: shaded nearest hit, or background."""
    rec = intersect_world(ray)
    color = get_background()

    if rec.hit == 1:
        color = _shade_material(rec)

    return color


@ti.func
def view_plane_point(
    row: ti.i32, col: ti.i32, width: ti.i32, height: ti.i32, sample_point: vec2
) -> vec2:
    """View-plane point of a sample inside pixel (row, col)."""
    pixel_size = get_pixel_size()
    x = (ti.cast(col, ti.f32) - 0.5 * ti.cast(width, ti.f32) + sample_point.x) * pixel_size
    y = (ti.cast(row, ti.f32) - 0.5 * ti.cast(height, ti.f32) + sample_point.y) * pixel_size
    return vec2(x, y)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_scene(width: ti.i32, height: ti.i32, camera_kind: ti.i32):
    """Render every pixel into the image buffer in scan order."""
    ti.loop_config(serialize=True)
    for row in range(height):
        for col in range(width):
            num_samples = get_num_samples()
            pixel_color = vec3(0.0, 0.0, 0.0)

            for _ in range(num_samples):
                sample_point = sample_unit_square()
                p = view_plane_point(row, col, width, height, sample_point)
                pixel_color += trace_ray(primary_ray(p, camera_kind))

            _image_buffer[row * width + col] = pixel_color / ti.cast(num_samples, ti.f32)


@ti.kernel
def _trace_point(px: ti.f32, py: ti.f32, camera_kind: ti.i32) -> vec3:
    """Trace the single ray through view-plane point (px, py)."""
    return trace_ray(primary_ray(vec2(px, py), camera_kind))


# =============================================================================
# Public Rendering API
# =============================================================================


def render_world(world: "World", camera: "Camera") -> None:
    """Render world through camera and append the image to world.image.

    Uploads the world (binding its sampler) and the camera, runs the render
    kernel and appends width * height colours in scan order.

    Raises:
        RuntimeError: If the world has no sampler or a registry overflows.
    """
    world.upload()
    setup_camera(camera)

    logger.info(
        "Rendering %dx%d, %d samples per pixel, %r",
        world.width,
        world.height,
        world.sampler.num_samples,
        camera,
    )
    start = time.perf_counter()

    _render_scene(world.width, world.height, int(camera.kind))
    colors = _image_buffer.to_numpy()[: world.num_pixels]
    world.append_image(colors)

    logger.info("Render finished in %.2fs", time.perf_counter() - start)


def render_point(
    world: "World", camera: "Camera", p: tuple[float, float]
) -> tuple[float, float, float]:
    """Trace the one ray through view-plane point p.

    Useful for testing and debugging single rays; the sampler is not used.

    Returns:
        Tuple of (R, G, B) color values.
    """
    world.upload()
    setup_camera(camera)
    color = _trace_point(float(p[0]), float(p[1]), int(camera.kind))
    return (float(color[0]), float(color[1]), float(color[2]))
