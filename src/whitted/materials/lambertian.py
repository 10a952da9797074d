"""Lambertian (ideal diffuse) BRDF.

An ideal diffuse surface reflects incident light equally in every
direction, so the BRDF is a constant:

    f(wo, wi) = Cd * kd / pi

and its hemispherical reflectance (albedo), used for the ambient term, is:

    rho(wo) = Cd * kd

where Cd is the diffuse colour and kd in [0, 1] the reflection coefficient.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.materials.lambertian import Lambertian, lambertian_f
    >>> # Use within a Taichi kernel:
    >>> # brdf = Lambertian(color=vec3(1.0, 0.0, 0.0), kd=0.5)
    >>> # value = lambertian_f(brdf, wo, wi)
"""

import taichi as ti
import taichi.math as tm

from whitted.core.ray import vec3


@ti.dataclass
class Lambertian:
    """Lambertian BRDF parameters.

    Attributes:
        color: The diffuse colour Cd (RGB, each component in [0, 1]).
        kd: The reflection coefficient in [0, 1].
    """

    color: vec3
    kd: ti.f32


@ti.func
def lambertian_f(brdf: Lambertian, wo: vec3, wi: vec3) -> vec3:
    """Evaluate the BRDF for a pair of directions.

    The value does not depend on wo or wi; they are part of the signature
    so every BRDF can be evaluated the same way.

    Args:
        brdf: The BRDF parameters.
        wo: Outgoing direction (toward the viewer).
        wi: Incoming direction (toward the light).

    Returns:
        Cd * kd / pi.
    """
    return brdf.color * brdf.kd / tm.pi


@ti.func
def lambertian_rho(brdf: Lambertian, wo: vec3) -> vec3:
    """Hemispherical reflectance Cd * kd, independent of wo."""
    return brdf.color * brdf.kd
