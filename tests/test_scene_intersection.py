"""Unit tests for the sphere registry and nearest-hit resolution."""

import pytest
import taichi as ti


def _trace(origin, direction):
    """Intersect one ray with the registered scene; return (hit, t, color, material_id)."""
    from whitted.core.ray import make_ray, vec3
    from whitted.scene.intersection import intersect_world

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    color = ti.field(dtype=ti.math.vec3, shape=())
    material_id = ti.field(dtype=ti.i32, shape=())
    ox, oy, oz = origin
    dx, dy, dz = direction

    @ti.kernel
    def test_kernel():
        rec = intersect_world(make_ray(vec3(ox, oy, oz), vec3(dx, dy, dz)))
        hit[None] = rec.hit
        t_val[None] = rec.t
        color[None] = rec.color
        material_id[None] = rec.material_id

    test_kernel()
    return hit[None], t_val[None], color[None], material_id[None]


class TestSphereRegistry:
    """Tests for adding and clearing spheres."""

    def test_add_sphere_returns_index(self):
        from whitted.scene.intersection import add_sphere, get_sphere_count

        assert add_sphere((0.0, 0.0, 0.0), 1.0) == 0
        assert add_sphere((0.0, 0.0, -5.0), 2.0, color=(0.0, 1.0, 0.0)) == 1
        assert get_sphere_count() == 2

    def test_clear_scene(self):
        from whitted.scene.intersection import add_sphere, clear_scene, get_sphere_count

        add_sphere((0.0, 0.0, 0.0), 1.0)
        clear_scene()
        assert get_sphere_count() == 0

    def test_registry_overflow_raises(self, monkeypatch):
        from whitted.scene import intersection

        monkeypatch.setattr(intersection, "MAX_SPHERES", 2)
        intersection.add_sphere((0.0, 0.0, 0.0), 1.0)
        intersection.add_sphere((0.0, 0.0, 0.0), 1.0)
        with pytest.raises(RuntimeError, match="Maximum number of spheres"):
            intersection.add_sphere((0.0, 0.0, 0.0), 1.0)


class TestNearestHit:
    """Tests for nearest-hit resolution across the scene."""

    def test_empty_scene_reports_no_hit(self):
        hit, _, _, material_id = _trace((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))

        assert hit == 0
        assert material_id == -1

    def test_nearer_sphere_wins_far_first(self):
        """Registering the far sphere first still reports the near one."""
        from whitted.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -10.0), 1.0, color=(0.0, 0.0, 1.0), material_id=1)
        add_sphere((0.0, 0.0, 0.0), 1.0, color=(1.0, 0.0, 0.0), material_id=0)

        hit, t, color, material_id = _trace((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert abs(color[0] - 1.0) < 1e-6
        assert abs(color[2]) < 1e-6
        assert material_id == 0

    def test_nearer_sphere_wins_near_first(self):
        from whitted.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, 0.0), 1.0, color=(1.0, 0.0, 0.0), material_id=0)
        add_sphere((0.0, 0.0, -10.0), 1.0, color=(0.0, 0.0, 1.0), material_id=1)

        hit, t, color, material_id = _trace((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert abs(color[0] - 1.0) < 1e-6
        assert material_id == 0

    def test_ray_between_spheres_misses(self):
        from whitted.scene.intersection import add_sphere

        add_sphere((-5.0, 0.0, 0.0), 1.0)
        add_sphere((5.0, 0.0, 0.0), 1.0)

        hit, _, _, _ = _trace((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert hit == 0
