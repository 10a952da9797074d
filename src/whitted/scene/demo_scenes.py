"""Ready-made demo scenes.

Each factory returns a populated World together with the camera that
frames it:

- create_camera_scene(): two overlapping flat-coloured spheres seen through
  a pinhole camera placed off-axis. The spheres have no material, so every
  hit shows the sphere's own colour.
- create_shading_scene(): three Matte spheres lit by a dim ambient light
  and a strong directional light from the viewer, seen through an
  orthographic camera.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.demo_scenes import create_shading_scene
    >>> world, camera = create_shading_scene()
    >>> camera.render_scene(world)
"""

from __future__ import annotations

from whitted.camera.orthographic import Orthographic
from whitted.camera.pinhole import Pinhole
from whitted.core.sampler import RandomSampler
from whitted.lights.ambient import AmbientLight
from whitted.lights.directional import DirectionalLight
from whitted.materials.matte import Matte
from whitted.scene.world import World

# =============================================================================
# Demo Scene Constants
# =============================================================================

IMAGE_SIZE = 600

RED = (1.0, 0.0, 0.0)
GREEN = (0.0, 1.0, 0.0)
BLUE = (0.0, 0.0, 1.0)
WHITE = (1.0, 1.0, 1.0)

SAMPLER_SETS = 83

# Matte coefficients shared by all shading scene spheres
MATTE_KD = 0.5
MATTE_KA = 0.05


def create_camera_scene(
    width: int = IMAGE_SIZE,
    height: int = IMAGE_SIZE,
    num_samples: int = 16,
    seed: int | None = None,
) -> tuple[World, Pinhole]:
    """Create the two-sphere pinhole camera scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        num_samples: Samples per pixel of the random sampler.
        seed: Seed for the sampler patterns (None for entropy).

    Returns:
        A tuple of (World, Pinhole).
    """
    world = World(
        width=width,
        height=height,
        background=(0.0, 0.0, 0.0),
        sampler=RandomSampler(num_samples, SAMPLER_SETS, seed=seed),
    )

    world.add_sphere(center=(64.0, 64.0, 0.0), radius=128.0, color=RED)
    world.add_sphere(center=(128.0, 128.0, 64.0), radius=64.0, color=BLUE)

    camera = Pinhole(eye=(150.0, 150.0, 500.0), look_at=(0.0, 0.0, 0.0))
    camera.compute_uvw()

    return world, camera


def create_shading_scene(
    width: int = IMAGE_SIZE,
    height: int = IMAGE_SIZE,
    num_samples: int = 4,
    seed: int | None = None,
) -> tuple[World, Orthographic]:
    """Create the three-sphere Matte shading scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        num_samples: Samples per pixel of the random sampler.
        seed: Seed for the sampler patterns (None for entropy).

    Returns:
        A tuple of (World, Orthographic).
    """
    world = World(
        width=width,
        height=height,
        background=(0.0, 0.0, 0.0),
        sampler=RandomSampler(num_samples, SAMPLER_SETS, seed=seed),
    )

    red = Matte(kd=MATTE_KD, ka=MATTE_KA, color=RED)
    blue = Matte(kd=MATTE_KD, ka=MATTE_KA, color=BLUE)
    green = Matte(kd=MATTE_KD, ka=MATTE_KA, color=GREEN)

    world.add_sphere(center=(0.0, 0.0, -600.0), radius=128.0, color=RED, material=red)
    world.add_sphere(center=(128.0, 32.0, -700.0), radius=64.0, color=BLUE, material=blue)
    world.add_sphere(center=(-128.0, 32.0, -700.0), radius=64.0, color=GREEN, material=green)

    world.set_ambient(AmbientLight(color=WHITE, radiance_scale=0.05))
    world.add_light(
        DirectionalLight(direction=(0.0, 0.0, 1024.0), color=WHITE, radiance_scale=4.0)
    )

    camera = Orthographic()
    camera.compute_uvw()

    return world, camera
