"""Pytest configuration for ray tracer tests.

Provides the shared fixtures: Taichi initialization for the preview window
tests, which must happen once per session, and the two-sphere default world
used by the shading tests.
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


@pytest.fixture
def default_world():
    """A fresh default world: two concentric spheres and a white light."""
    from src.whitted.scene.world import default_world

    return default_world()
