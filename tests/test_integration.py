"""Integration tests for the end-to-end rendering pipeline.

Tests are designed to be fast (tiny images, few samples) while still
exercising the full pipeline: sampler, camera, nearest hit, shading and
the World image buffer.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

RED = (1.0, 0.0, 0.0)
BACKGROUND = (0.1, 0.2, 0.3)


def _one_sphere_world(width=4, height=4, background=(0.0, 0.0, 0.0)):
    """A unit red sphere at the origin without a material, Regular(1, 1) sampler."""
    from whitted.core.sampler import RegularSampler
    from whitted.scene.world import World

    world = World(width=width, height=height, background=background, sampler=RegularSampler(1, 1))
    world.add_sphere((0.0, 0.0, 0.0), 1.0, color=RED)
    return world


class TestRenderLoop:
    """Tests for render_world and Camera.render_scene."""

    def test_one_sphere_image(self):
        """Only the four centre pixels see the unit sphere."""
        from whitted.camera import Pinhole

        world = _one_sphere_world(background=BACKGROUND)
        camera = Pinhole()
        camera.render_scene(world)

        image = world.image_array()
        assert image.shape == (4, 4, 3)

        hit_mask = np.zeros((4, 4), dtype=bool)
        hit_mask[1:3, 1:3] = True
        assert np.allclose(image[hit_mask], RED)
        assert np.allclose(image[~hit_mask], BACKGROUND)

    def test_repeated_renders_are_identical(self):
        from whitted.camera import Pinhole

        world = _one_sphere_world()
        camera = Pinhole()
        camera.render_scene(world)
        camera.render_scene(world)

        assert world.image.shape == (32, 3)
        assert np.array_equal(world.image[:16], world.image[16:])

    def test_empty_scene_is_background(self):
        from whitted.camera import Pinhole
        from whitted.core.sampler import RandomSampler
        from whitted.scene.world import World

        world = World(width=3, height=2, background=BACKGROUND, sampler=RandomSampler(4, 3, seed=0))
        Pinhole().render_scene(world)

        assert world.image.shape == (6, 3)
        assert np.allclose(world.image, BACKGROUND)

    def test_samples_are_drawn_per_pixel(self):
        from whitted.camera import Pinhole
        from whitted.core.sampler import RegularSampler

        world = _one_sphere_world()
        world.sampler = RegularSampler(4, 2, seed=0)
        Pinhole().render_scene(world)

        assert world.sampler.count == 4 * 16

    def test_sample_average(self):
        """A pixel half inside a sphere averages hit and miss samples."""
        from whitted.camera import Orthographic
        from whitted.core.sampler import RegularSampler
        from whitted.scene.world import World

        # One pixel whose 2x2 samples sit at x = -0.25 and x = 0.25
        world = World(width=1, height=1, sampler=RegularSampler(4, 1, seed=0))
        # Huge sphere whose left edge is at x = 0: covers only the right samples
        world.add_sphere((1000.0, 0.0, -2000.0), 1000.0, color=(1.0, 1.0, 1.0))
        Orthographic().render_scene(world)

        assert np.allclose(world.image[0], 0.5, atol=1e-6)

    def test_zoom_magnifies(self):
        """With zoom 4 the unit sphere covers the whole 4x4 image."""
        from whitted.camera import Orthographic

        world = _one_sphere_world(background=BACKGROUND)
        Orthographic(eye=(0.0, 0.0, 10.0), look_at=(0.0, 0.0, 0.0), zoom=4.0).render_scene(world)

        assert np.allclose(world.image, RED)


class TestShadingPipeline:
    """Tests for Matte shading through the full pipeline."""

    def test_render_point_on_matte_sphere(self):
        from whitted.camera import Orthographic
        from whitted.core.integrator import render_point
        from whitted.core.sampler import RegularSampler
        from whitted.lights import AmbientLight, DirectionalLight
        from whitted.materials import Matte
        from whitted.scene.world import World

        world = World(width=4, height=4, sampler=RegularSampler(1, 1))
        world.add_sphere(
            (0.0, 0.0, -600.0), 128.0, color=RED, material=Matte(kd=0.5, ka=0.05, color=RED)
        )
        world.set_ambient(AmbientLight(radiance_scale=0.05))
        world.add_light(DirectionalLight(direction=(0.0, 0.0, 1024.0), radiance_scale=4.0))

        color = render_point(world, Orthographic(), (0.0, 0.0))

        expected_red = 0.05 * 0.05 + (0.5 / math.pi) * 4.0
        assert color[0] == pytest.approx(expected_red, abs=1e-5)
        assert color[1] == pytest.approx(0.0, abs=1e-7)
        assert color[2] == pytest.approx(0.0, abs=1e-7)

    def test_shading_scene_center_pixel(self):
        from whitted.scene.demo_scenes import create_shading_scene

        world, camera = create_shading_scene(width=32, height=32, seed=0)
        camera.render_scene(world)

        image = world.image_array()
        expected_red = 0.05 * 0.05 + (0.5 / math.pi) * 4.0
        center = image[16, 16]
        assert center[0] == pytest.approx(expected_red, abs=1e-3)
        assert center[1] == pytest.approx(0.0, abs=1e-7)
        assert center[2] == pytest.approx(0.0, abs=1e-7)

    def test_unshaded_sphere_shows_flat_color(self):
        from whitted.camera import Pinhole
        from whitted.core.integrator import render_point

        world = _one_sphere_world()
        color = render_point(world, Pinhole(), (0.0, 0.0))

        assert color == pytest.approx(RED)
