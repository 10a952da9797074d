"""Device-side light storage and dispatch.

The world's lights live in Taichi fields: one optional ambient slot and an
ordered list of up to MAX_LIGHTS lights of any type. Every list entry is
tagged with its LightType; get_light_direction() dispatches on it.

An ambient light may also appear in the list. Its direction is zero, so it
never passes the n . wi > 0 test of the diffuse loop and contributes
nothing there.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.lights import AmbientLight, DirectionalLight
    >>> from whitted.lights.registry import add_light, clear_lights, set_ambient_light
    >>> clear_lights()
    >>> set_ambient_light(AmbientLight(color=(1.0, 1.0, 1.0), radiance_scale=0.05))
    >>> add_light(DirectionalLight(direction=(0.0, 0.0, 1.0), radiance_scale=4.0))
"""

import taichi as ti

from whitted.core.ray import vec3
from whitted.core.shade_rec import ShadeRec
from whitted.lights.ambient import ambient_direction
from whitted.lights.directional import directional_direction
from whitted.lights.light import Light, LightType

# Maximum number of lights in the list (ambient slot excluded)
MAX_LIGHTS = 64

# Light list: Structure of Arrays layout
light_types = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_radiance_scales = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
light_directions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# Ambient slot
_ambient_enabled = ti.field(dtype=ti.i32, shape=())
_ambient_color = ti.Vector.field(3, dtype=ti.f32, shape=())
_ambient_radiance_scale = ti.field(dtype=ti.f32, shape=())


def clear_lights() -> None:
    """Empty the light list and the ambient slot."""
    num_lights[None] = 0
    clear_ambient_light()


def clear_ambient_light() -> None:
    """Empty the ambient slot; the ambient term then shades to black."""
    _ambient_enabled[None] = 0


def set_ambient_light(light: Light) -> None:
    """Store a light's colour and radiance scale in the ambient slot."""
    _ambient_enabled[None] = 1
    _ambient_color[None] = light.color
    _ambient_radiance_scale[None] = light.radiance_scale


def add_light(light: Light) -> int:
    """Append a light to the list.

    Args:
        light: Any Light; its direction is sampled once, at upload time.

    Returns:
        The index of the light in the list.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    light_types[idx] = int(light.light_type)
    light_colors[idx] = light.color
    light_radiance_scales[idx] = light.radiance_scale
    light_directions[idx] = [float(c) for c in light.get_direction()]
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of lights in the list."""
    return int(num_lights[None])


def is_ambient_enabled() -> bool:
    """Check whether the ambient slot holds a light."""
    return bool(_ambient_enabled[None])


@ti.func
def get_num_lights() -> ti.i32:
    """Number of lights in the list (device side)."""
    return num_lights[None]


@ti.func
def get_light_direction(index: ti.i32, rec: ShadeRec) -> vec3:
    """Direction toward light index as seen from the hit in rec."""
    direction = vec3(0.0, 0.0, 0.0)
    light_type = light_types[index]

    if light_type == int(LightType.DIRECTIONAL):
        direction = directional_direction(light_directions[index])
    elif light_type == int(LightType.AMBIENT):
        direction = ambient_direction()

    return direction


@ti.func
def get_light_radiance(index: ti.i32, rec: ShadeRec) -> vec3:
    """Radiance of light index: radiance scale times colour."""
    return light_radiance_scales[index] * light_colors[index]


@ti.func
def get_ambient_radiance(rec: ShadeRec) -> vec3:
    """Radiance of the ambient slot, black when the slot is empty."""
    radiance = vec3(0.0, 0.0, 0.0)
    if _ambient_enabled[None] == 1:
        radiance = _ambient_radiance_scale[None] * _ambient_color[None]
    return radiance
