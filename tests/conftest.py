"""
Pytest fixtures and configuration for beamy tests.

This module provides shared scenes and rays to reduce test code duplication.
"""

import numpy as np
import pytest
from beamy.primitives import Light, Plane, Sphere
from beamy.scene import Scene


@pytest.fixture
def origin():
    """Standard ray origin at the default camera position."""
    return np.array([0.0, 0.0, 0.0])


@pytest.fixture
def standard_rays():
    """Common ray directions used in multiple tests."""
    return {
        'forward': np.array([0.0, 0.0, -1.0]),  # Default camera view axis
        'back': np.array([0.0, 0.0, 1.0]),
        'down': np.array([0.0, -1.0, 0.0]),
        'up': np.array([0.0, 1.0, 0.0]),
        'right': np.array([1.0, 0.0, 0.0]),
    }


@pytest.fixture
def empty_scene():
    """Small scene with nothing in it."""
    return Scene(width=8, height=6)


@pytest.fixture
def lit_scene():
    """Floor plane, two spheres and a light, small enough to render quickly."""
    scene = Scene(width=40, height=30, ambient=[0.05, 0.05, 0.05])
    scene.add(Plane(position=[0.0, -1.0, 0.0], norm=[0.0, -1.0, 0.0], color=[0.8, 0.8, 0.8]))
    scene.add(Sphere(position=[0.0, 0.0, -4.0], radius=1.0, color=[0.9, 0.2, 0.2]))
    scene.add(Sphere(position=[1.5, -0.5, -3.0], radius=0.5, color=[0.2, 0.4, 0.9]))
    scene.add(Light(position=[3.0, 3.0, -6.0], intensity=12.0))
    return scene
