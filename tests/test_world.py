"""Unit tests for the World container and its device upload."""

import numpy as np
import pytest


class TestWorldConstruction:
    """Tests for World configuration."""

    def test_defaults(self):
        from whitted.scene.world import World

        world = World()
        assert (world.width, world.height) == (600, 600)
        assert world.background == (0.0, 0.0, 0.0)
        assert world.sampler is None
        assert world.scene == []
        assert world.lights == []
        assert world.ambient is None
        assert world.image.shape == (0, 3)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, -1), (4096, 10), (10, 4096)])
    def test_invalid_dimensions_raise(self, width, height):
        from whitted.scene.world import World

        with pytest.raises(ValueError, match="Image dimensions"):
            World(width=width, height=height)

    def test_add_sphere_keeps_order(self):
        from whitted.scene.world import World

        world = World()
        first = world.add_sphere((0.0, 0.0, 0.0), 1.0, color=(1.0, 0.0, 0.0))
        second = world.add_sphere((1.0, 0.0, 0.0), 2.0)

        assert world.scene == [first, second]
        assert second.color == (0.0, 0.0, 0.0)
        assert second.material is None

    def test_set_ambient_and_add_light(self):
        from whitted.lights import AmbientLight, DirectionalLight
        from whitted.scene.world import World

        world = World()
        ambient = AmbientLight(radiance_scale=0.05)
        light = DirectionalLight()
        world.set_ambient(ambient)
        world.add_light(light)

        assert world.ambient is ambient
        assert world.lights == [light]

        world.set_ambient(None)
        assert world.ambient is None


class TestWorldUpload:
    """Tests for writing a World into the device registries."""

    def test_upload_without_sampler_raises(self):
        from whitted.scene.world import World

        with pytest.raises(RuntimeError, match="no sampler"):
            World().upload()

    def test_upload_fills_registries(self):
        from whitted.core.sampler import RegularSampler
        from whitted.lights import AmbientLight, DirectionalLight
        from whitted.lights.registry import get_light_count, is_ambient_enabled
        from whitted.materials import Matte, get_matte_material_count
        from whitted.scene.intersection import get_sphere_count
        from whitted.scene.world import World, get_material_count

        world = World(sampler=RegularSampler(1, 1))
        shared = Matte(kd=0.5, ka=0.05, color=(1.0, 0.0, 0.0))
        world.add_sphere((0.0, 0.0, 0.0), 1.0, material=shared)
        world.add_sphere((3.0, 0.0, 0.0), 1.0, material=shared)
        world.add_sphere((6.0, 0.0, 0.0), 1.0, material=Matte(kd=0.2))
        world.add_sphere((9.0, 0.0, 0.0), 1.0)
        world.set_ambient(AmbientLight())
        world.add_light(DirectionalLight())

        world.upload()

        assert get_sphere_count() == 4
        # The shared material is registered once
        assert get_material_count() == 2
        assert get_matte_material_count() == 2
        assert get_light_count() == 1
        assert is_ambient_enabled()
        assert world.sampler.is_bound

    def test_upload_replaces_previous_world(self):
        from whitted.core.sampler import RegularSampler
        from whitted.scene.intersection import get_sphere_count
        from whitted.scene.world import World

        big = World(sampler=RegularSampler(1, 1))
        for i in range(5):
            big.add_sphere((float(i), 0.0, 0.0), 1.0)
        big.upload()

        small = World(sampler=RegularSampler(1, 1))
        small.add_sphere((0.0, 0.0, 0.0), 1.0)
        small.upload()

        assert get_sphere_count() == 1

    def test_unsupported_material_raises(self):
        from whitted.scene.world import register_material

        with pytest.raises(ValueError, match="Unsupported material"):
            register_material(object())


class TestWorldImage:
    """Tests for the image buffer."""

    def test_append_and_image_array(self):
        from whitted.scene.world import World

        world = World(width=2, height=2)
        world.append_image(np.zeros((4, 3), dtype=np.float32))
        latest = np.arange(12, dtype=np.float32).reshape(4, 3)
        world.append_image(latest)

        assert world.image.shape == (8, 3)
        image = world.image_array()
        assert image.shape == (2, 2, 3)
        assert np.array_equal(image.reshape(4, 3), latest)

    def test_image_array_before_render_raises(self):
        from whitted.scene.world import World

        with pytest.raises(RuntimeError, match="Image buffer"):
            World(width=2, height=2).image_array()

    def test_clear_image(self):
        from whitted.scene.world import World

        world = World(width=2, height=2)
        world.append_image(np.ones((4, 3), dtype=np.float32))
        world.clear_image()
        assert world.image.shape == (0, 3)
