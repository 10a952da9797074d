"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure and vector utilities
    shade_rec: Hit record shared by the shapes tested against one ray
    sampler: Multi-set sample patterns (regular and random)
    config: Taichi initialization, seeding and logging setup
    integrator: The render loop and material dispatch

Samplers and the integrator declare Taichi fields, so they are imported
directly (whitted.core.sampler, whitted.core.integrator) once Taichi has
been initialized.
"""

from .config import RenderConfig, configure_logging, init_taichi, resolve_seed
from .ray import Ray, dot, length_squared, make_ray, normalize, ray_at, vec2, vec3
from .shade_rec import ShadeRec, make_shade_rec

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec2",
    "vec3",
    "length_squared",
    "normalize",
    "dot",
    "ShadeRec",
    "make_shade_rec",
    "RenderConfig",
    "configure_logging",
    "init_taichi",
    "resolve_seed",
]
