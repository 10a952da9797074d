"""Unit tests for the Lambertian BRDF."""

import math

import taichi as ti


class TestLambertian:
    """Tests for lambertian_f and lambertian_rho."""

    def test_f_is_color_times_kd_over_pi(self):
        from whitted.core.ray import vec3
        from whitted.materials.lambertian import Lambertian, lambertian_f

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            brdf = Lambertian(color=vec3(1.0, 0.5, 0.0), kd=0.5)
            result[None] = lambertian_f(brdf, vec3(0.0, 0.0, 1.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 0.5 / math.pi) < 1e-6
        assert abs(r[1] - 0.25 / math.pi) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_f_independent_of_directions(self):
        from whitted.core.ray import vec3
        from whitted.materials.lambertian import Lambertian, lambertian_f

        a = ti.field(dtype=ti.math.vec3, shape=())
        b = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            brdf = Lambertian(color=vec3(0.2, 0.4, 0.6), kd=0.8)
            a[None] = lambertian_f(brdf, vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, 1.0))
            b[None] = lambertian_f(brdf, vec3(1.0, 0.0, 0.0), vec3(0.0, -1.0, 0.0))

        test_kernel()
        for c in range(3):
            assert abs(a[None][c] - b[None][c]) < 1e-7

    def test_rho_is_color_times_kd(self):
        from whitted.core.ray import vec3
        from whitted.materials.lambertian import Lambertian, lambertian_rho

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            brdf = Lambertian(color=vec3(1.0, 1.0, 0.0), kd=0.05)
            result[None] = lambertian_rho(brdf, vec3(0.0, 0.0, 1.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 0.05) < 1e-7
        assert abs(r[1] - 0.05) < 1e-7
        assert abs(r[2]) < 1e-7
