"""Materials module for local reflectance models.

This module implements the BRDFs and materials used to shade a hit:

Components:
    lambertian: Ideal diffuse (Lambertian) BRDF
    matte: Matte material (ambient lobe + diffuse lobe) and its registry

Each BRDF provides:
    - f(): Evaluate the BRDF for a pair of directions
    - rho(): Hemispherical reflectance, used for the ambient term

Each material provides a shade function that turns a hit record into the
radiance reflected toward the viewer, using the world's ambient light and
light list. Materials are shared by reference among shapes and are never
modified while rendering.
"""

from .lambertian import Lambertian, lambertian_f, lambertian_rho
from .matte import (
    Matte,
    add_matte_material,
    clear_matte_materials,
    get_matte_material_count,
    shade_matte,
)

__all__ = [
    # Lambertian BRDF
    "Lambertian",
    "lambertian_f",
    "lambertian_rho",
    # Matte material
    "Matte",
    "add_matte_material",
    "clear_matte_materials",
    "get_matte_material_count",
    "shade_matte",
]
