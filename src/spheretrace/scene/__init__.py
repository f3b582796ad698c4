"""Scene module for world storage and scene building.

Components:
    world: Sphere storage in Taichi fields and the nearest-hit query
    manager: Python-side scene manager with (de)serialization
    presets: Ready-made scenes with matching cameras

Scene data is organized for kernel access:
    - Structure-of-Arrays layout for sphere centers and radii
    - A scalar field holding the live sphere count
"""

from .manager import SceneConfig, SceneManager, SphereInfo
from .presets import create_showcase_scene, create_single_sphere_scene
from .world import (
    MAX_SPHERES,
    WorldHit,
    add_sphere,
    clear_world,
    closest_hit,
    get_sphere,
    get_sphere_count,
)

__all__ = [
    # World module
    "WorldHit",
    "add_sphere",
    "clear_world",
    "closest_hit",
    "get_sphere",
    "get_sphere_count",
    "MAX_SPHERES",
    # Manager module
    "SceneManager",
    "SceneConfig",
    "SphereInfo",
    # Presets
    "create_single_sphere_scene",
    "create_showcase_scene",
]
