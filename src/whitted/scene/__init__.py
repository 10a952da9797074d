"""Scene module: the World container and device-side scene registry.

Components:
    intersection: Sphere registry and nearest-hit resolution
    world: World container, unified material table and background colour
    demo_scenes: Ready-made scenes with their cameras

Scene data is organized for device access as Structure-of-Arrays Taichi
fields, filled by World.upload() right before rendering.
"""

from .demo_scenes import create_camera_scene, create_shading_scene
from .intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
    intersect_world,
)
from .world import (
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    MAX_MATERIALS,
    MaterialType,
    SphereInfo,
    World,
    get_material_count,
    get_material_type,
    get_material_type_index,
    register_material,
)

__all__ = [
    # Intersection module
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "intersect_world",
    "MAX_SPHERES",
    # World module
    "World",
    "SphereInfo",
    "MaterialType",
    "MAX_MATERIALS",
    "MAX_IMAGE_WIDTH",
    "MAX_IMAGE_HEIGHT",
    "register_material",
    "get_material_count",
    "get_material_type",
    "get_material_type_index",
    # Demo scenes
    "create_camera_scene",
    "create_shading_scene",
]
