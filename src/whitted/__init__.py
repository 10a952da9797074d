"""Whitted-style ray tracer built on Taichi.

This package renders scenes of spheres lit by ambient and directional
lights, with multi-set anti-aliasing samplers and Matte (Lambertian)
shading:

Subpackages:
    core: Ray and hit record types, samplers, configuration, render loop
    geometry: Sphere primitive and ray-sphere intersection
    lights: Ambient and directional lights and their device registry
    materials: Lambertian BRDF and the Matte material
    scene: World container, scene registry and demo scenes
    camera: Pinhole and orthographic cameras
    preview: Image export and preview utilities
"""

__version__ = "0.1.0"
