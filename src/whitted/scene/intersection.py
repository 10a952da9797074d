"""Scene-level primitive storage and nearest-hit intersection.

Spheres are stored in Taichi fields (structure of arrays) and addressed by
index. Each sphere carries its flat colour and the unified id of its
material; several spheres may share one material id.

intersect_world() walks every sphere against a single ShadeRec, letting
each one claim the record only when it is nearer than the current hit.
A new primitive type is added as another storage block plus another loop
over it in intersect_world().

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.intersection import add_sphere, clear_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -600.0), 128.0, color=(1.0, 0.0, 0.0), material_id=0)
    >>> # Use intersect_world within a Taichi kernel
"""

import taichi as ti

from whitted.core.ray import Ray
from whitted.core.shade_rec import ShadeRec, make_shade_rec
from whitted.geometry.sphere import Sphere, hit_sphere

# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all primitives from the scene.

    Only the count is reset; stale entries are overwritten by later adds.
    """
    num_spheres[None] = 0


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    color: tuple[float, float, float] = (0.0, 0.0, 0.0),
    material_id: int = -1,
) -> int:
    """Add a sphere to the scene.

    The radius is stored as given; zero or negative radii are not rejected.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        color: Flat colour reported in the hit record.
        material_id: Unified material id, or -1 for no material.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = center
    sphere_radii[idx] = radius
    sphere_colors[idx] = color
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def get_sphere(index: ti.i32) -> Sphere:
    """Assemble the Sphere struct stored at index."""
    radius = sphere_radii[index]
    return Sphere(
        center=sphere_centers[index],
        radius=radius,
        radius_sqr=radius * radius,
        color=sphere_colors[index],
        material_id=sphere_material_ids[index],
    )


@ti.func
def intersect_world(ray: Ray) -> ShadeRec:
    """Test a ray against every primitive and keep the nearest hit.

    Args:
        ray: The primary ray of the current sample.

    Returns:
        A fresh ShadeRec updated by every primitive in turn. rec.hit is 0
        when nothing was hit (always the case for an empty scene).
    """
    rec = make_shade_rec()

    for i in range(num_spheres[None]):
        rec = hit_sphere(get_sphere(i), ray, rec)

    return rec

