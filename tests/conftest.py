"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene, material and light registries around each test.

    This ensures tests are isolated from each other.
    """
    # Import here to avoid circular imports and ensure Taichi is initialized
    from whitted.lights.registry import clear_lights
    from whitted.materials.matte import clear_matte_materials
    from whitted.scene.intersection import clear_scene
    from whitted.scene.world import _clear_material_tracking

    def _clear_all():
        clear_scene()
        clear_matte_materials()
        _clear_material_tracking()
        clear_lights()

    # Clear everything before test
    _clear_all()

    yield

    # Clear everything after test
    _clear_all()
