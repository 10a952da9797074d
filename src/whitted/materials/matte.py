"""Matte material: ambient plus Lambertian diffuse shading.

A Matte surface owns two Lambertian lobes sharing the surface colour: an
ambient lobe with coefficient ka and a diffuse lobe with coefficient kd.
Shading a hit sums the ambient term and one diffuse term per light:

    L = rho_ambient(wo) * L_ambient
      + sum over lights with n . wi > 0 of f_diffuse(wo, wi) * L_light * (n . wi)

Lights facing away from the surface contribute nothing. No shadow rays are
cast, so nothing between the hit and a light blocks it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.materials.matte import Matte, add_matte_material
    >>> red = Matte(kd=0.5, ka=0.05, color=(1.0, 0.0, 0.0))
    >>> index = add_matte_material(red)
    >>> # Use shade_matte(index, rec) within a Taichi kernel
"""

import taichi as ti

from whitted.core.ray import dot, vec3
from whitted.core.shade_rec import ShadeRec
from whitted.lights.registry import (
    get_ambient_radiance,
    get_light_direction,
    get_light_radiance,
    get_num_lights,
)
from whitted.materials.lambertian import Lambertian, lambertian_f, lambertian_rho


def _check_coefficient(name: str, value: float) -> float:
    if value < 0.0 or value > 1.0:
        raise ValueError(f"{name} = {value} is outside [0, 1]")
    return float(value)


class Matte:
    """Matte material configuration.

    One instance may be shared by any number of shapes; it is registered
    once per upload no matter how many shapes reference it.

    Attributes:
        kd: Diffuse reflection coefficient in [0, 1].
        ka: Ambient reflection coefficient in [0, 1].
        color: Surface colour shared by both lobes.
    """

    def __init__(
        self,
        kd: float = 0.0,
        ka: float = 0.0,
        color: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ) -> None:
        """Create a matte material.

        Raises:
            ValueError: If kd or ka is outside [0, 1].
        """
        self.set_diffuse_reflection(kd)
        self.set_ambient_reflection(ka)
        self.set_diffuse_color(color)

    def set_diffuse_reflection(self, k: float) -> None:
        """Set the diffuse lobe coefficient."""
        self.kd = _check_coefficient("kd", k)

    def set_ambient_reflection(self, k: float) -> None:
        """Set the ambient lobe coefficient."""
        self.ka = _check_coefficient("ka", k)

    def set_diffuse_color(self, color: tuple[float, float, float]) -> None:
        """Set the colour of both lobes."""
        self.color = tuple(float(c) for c in color)

    def __repr__(self) -> str:
        return f"Matte(kd={self.kd}, ka={self.ka}, color={self.color})"


# =============================================================================
# Material Field Storage
# =============================================================================

# Maximum number of Matte materials in the scene
MAX_MATTE_MATERIALS = 256

matte_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATTE_MATERIALS)
matte_kd = ti.field(dtype=ti.f32, shape=MAX_MATTE_MATERIALS)
matte_ka = ti.field(dtype=ti.f32, shape=MAX_MATTE_MATERIALS)
num_matte_materials = ti.field(dtype=ti.i32, shape=())


def clear_matte_materials() -> None:
    """Clear all Matte materials."""
    num_matte_materials[None] = 0


def add_matte_material(material: Matte) -> int:
    """Add a Matte material to the registry.

    Args:
        material: The material to store.

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_matte_materials[None]
    if idx >= MAX_MATTE_MATERIALS:
        raise RuntimeError(f"Maximum number of Matte materials ({MAX_MATTE_MATERIALS}) exceeded")

    matte_colors[idx] = material.color
    matte_kd[idx] = material.kd
    matte_ka[idx] = material.ka
    num_matte_materials[None] = idx + 1
    return idx


def get_matte_material_count() -> int:
    """Get the number of Matte materials in the registry."""
    return int(num_matte_materials[None])


@ti.func
def get_ambient_brdf(index: ti.i32) -> Lambertian:
    """Ambient lobe of material index."""
    return Lambertian(color=matte_colors[index], kd=matte_ka[index])


@ti.func
def get_diffuse_brdf(index: ti.i32) -> Lambertian:
    """Diffuse lobe of material index."""
    return Lambertian(color=matte_colors[index], kd=matte_kd[index])


@ti.func
def shade_matte(index: ti.i32, rec: ShadeRec) -> vec3:
    """Shade a hit on a Matte surface.

    Args:
        index: Index of the material in the Matte registry.
        rec: The record of the nearest hit.

    Returns:
        The reflected radiance toward the viewer.
    """
    ambient_brdf = get_ambient_brdf(index)
    diffuse_brdf = get_diffuse_brdf(index)

    # Toward the viewer
    wo = -rec.ray_direction
    radiance = lambertian_rho(ambient_brdf, wo) * get_ambient_radiance(rec)

    for i in range(get_num_lights()):
        wi = get_light_direction(i, rec)
        n_dot_wi = dot(rec.normal, wi)

        if n_dot_wi > 0.0:
            radiance += lambertian_f(diffuse_brdf, wo, wi) * get_light_radiance(i, rec) * n_dot_wi

    return radiance
