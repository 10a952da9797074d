"""Sphere primitive with ray-sphere intersection and nearest-hit update.

The intersection solves |o + t*d - c|^2 = r^2 with the textbook quadratic:

    a = dot(d, d)
    b = 2 * dot(d, o - c)
    c' = dot(o - c, o - c) - r^2
    disc = b^2 - 4 * a * c'

The near root (-b - sqrt(disc)) / (2a) is tried first. If it lies closer
than the bias epsilon the far root is tried, computed as -b + sqrt(disc)
without the division by 2a. That asymmetry is the established behaviour
of this tracer and is kept as-is: for a ray that starts inside a sphere
the reported distance is 2a times the geometric one.

Nothing is validated: a zero direction makes a = 0 and yields NaN roots
(reported as a miss), and zero or negative radii are accepted.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.geometry.sphere import Sphere, hit_sphere
    >>> # Use hit_sphere within a Taichi kernel:
    >>> # rec = hit_sphere(sphere, ray, rec)
"""

import taichi as ti

from whitted.core.ray import Ray, dot, length_squared, ray_at, vec3
from whitted.core.shade_rec import ShadeRec

# Minimum accepted hit distance; rejects self-intersections at the origin
K_EPSILON = 0.01


@ti.dataclass
class Sphere:
    """A sphere with a flat colour and a material handle.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere.
        radius_sqr: radius * radius, cached for the intersection test.
        color: Flat colour copied into the hit record.
        material_id: Unified material id, or -1 for no material.
    """

    center: vec3
    radius: ti.f32
    radius_sqr: ti.f32
    color: vec3
    material_id: ti.i32


@ti.func
def make_sphere(center: vec3, radius: ti.f32, color: vec3, material_id: ti.i32) -> Sphere:
    """Create a sphere, filling in the cached squared radius."""
    return Sphere(
        center=center,
        radius=radius,
        radius_sqr=radius * radius,
        color=color,
        material_id=material_id,
    )


@ti.func
def intersect_ray(sphere: Sphere, ray: Ray):
    """Test a ray against a sphere.

    Args:
        sphere: The sphere to test.
        ray: The ray (direction need not be normalized).

    Returns:
        A tuple (hit, t): hit is 1 when a root at or beyond K_EPSILON was
        found and t is that root; otherwise hit is 0 and t is 0.
    """
    temp = ray.origin - sphere.center
    a = length_squared(ray.direction)
    b = 2.0 * dot(ray.direction, temp)
    c = length_squared(temp) - sphere.radius_sqr
    disc = b * b - 4.0 * a * c

    did_hit = 0
    t_hit = 0.0

    if disc >= 0.0:
        e = ti.sqrt(disc)
        denom = 2.0 * a

        # Near root first
        t = (-b - e) / denom
        if t >= K_EPSILON:
            did_hit = 1
            t_hit = t
        else:
            # Far root, not divided by 2a
            t = -b + e
            if t >= K_EPSILON:
                did_hit = 1
                t_hit = t

    return did_hit, t_hit


@ti.func
def hit_sphere(sphere: Sphere, ray: Ray, rec: ShadeRec) -> ShadeRec:
    """Intersect a ray with a sphere and update the record if it is nearer.

    The sphere only claims the record when it is hit closer than the hit
    already stored, so calling this for every shape against one record
    leaves the globally nearest intersection in it.

    Args:
        sphere: The sphere to test.
        ray: The primary ray of the current sample.
        rec: The shared record of the current sample.

    Returns:
        The record, replaced by this sphere's hit data (normal, ray, colour,
        t, material id, hit = 1) when it won, or unchanged otherwise.
    """
    result = rec
    did_hit, t = intersect_ray(sphere, ray)

    if did_hit == 1 and t < rec.t:
        result = ShadeRec(
            hit=1,
            t=t,
            color=sphere.color,
            normal=(ray_at(ray, t) - sphere.center) / sphere.radius,
            ray_origin=ray.origin,
            ray_direction=ray.direction,
            material_id=sphere.material_id,
        )

    return result
