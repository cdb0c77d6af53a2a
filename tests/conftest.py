"""Pytest configuration for raycaster tests.

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


@pytest.fixture
def clear_kernel_scene():
    """Clear the uploaded kernel scene before and after a test.

    Only kernel tests request this fixture, so pure-Python tests never
    allocate Taichi fields.
    """
    # Import here so the fields are allocated after ti.init()
    from src.raycaster.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def default_world():
    """The standard two-sphere test world."""
    from src.raycaster.scene.world import default_world as build_default_world

    return build_default_world()
