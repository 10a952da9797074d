"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Intersection routines are Taichi functions (@ti.func) called from the
render kernel. A shape test takes the shared hit record and returns it,
updated when the shape is hit closer than anything recorded so far.
"""

from .sphere import K_EPSILON, Sphere, hit_sphere, intersect_ray, make_sphere

__all__ = [
    "K_EPSILON",
    "Sphere",
    "hit_sphere",
    "intersect_ray",
    "make_sphere",
]
