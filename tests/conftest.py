"""Pytest configuration for spheretrace tests.

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


@pytest.fixture(autouse=True)
def clear_render_state():
    """Clear the world and the sample offset table around each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the fields are created after ti.init()
    from spheretrace.core.shading import clear_sample_offsets
    from spheretrace.scene.world import clear_world

    clear_world()
    clear_sample_offsets()

    yield

    clear_world()
    clear_sample_offsets()


@pytest.fixture
def classic_viewport():
    """Camera at the origin looking down -z through a 4x2 viewport at z = -1."""
    from spheretrace.camera.pinhole import set_viewport

    set_viewport(
        origin=(0.0, 0.0, 0.0),
        lower_left_corner=(-2.0, -1.0, -1.0),
        horizontal=(4.0, 0.0, 0.0),
        vertical=(0.0, 2.0, 0.0),
    )
