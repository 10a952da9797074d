"""Shading record threaded through the intersection tests of one sample.

A ShadeRec is created fresh for every sample, handed to each shape's hit
test in turn and finally passed to the winning shape's material. Shapes
only overwrite it when they are closer than the hit it already holds, so
after every shape has been tested it describes the nearest intersection.

The record has no pointer back to the World: lights, the ambient term and
the material tables are global Taichi fields, reachable from any shading
function.
"""

import taichi as ti
import taichi.math as tm

from whitted.core.ray import vec3


@ti.dataclass
class ShadeRec:
    """Mutable hit record for one primary-ray sample.

    Attributes:
        hit: 1 once any shape has claimed the record, 0 otherwise.
        t: Distance along the ray of the closest hit so far
            (+infinity until a shape claims the record).
        color: Flat colour of the closest shape.
        normal: Surface normal at the closest hit.
        ray_origin: Origin of the ray that produced the closest hit.
        ray_direction: Direction of the ray that produced the closest hit.
        material_id: Unified material id of the closest shape, or -1.
    """

    hit: ti.i32
    t: ti.f32
    color: vec3
    normal: vec3
    ray_origin: vec3
    ray_direction: vec3
    material_id: ti.i32


@ti.func
def make_shade_rec() -> ShadeRec:
    """Create an empty record with t = +infinity and no material."""
    return ShadeRec(
        hit=0,
        t=tm.inf,
        color=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        ray_origin=vec3(0.0, 0.0, 0.0),
        ray_direction=vec3(0.0, 0.0, 0.0),
        material_id=-1,
    )
