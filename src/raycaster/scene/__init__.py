"""Scene module for world composition and scene configuration.

Components:
    light: Point light source
    world: Light plus spheres, with the shading pipeline
    config: Dict/JSON serialization of worlds and cameras
    showcase: The three-sphere demo room
    intersection: Taichi fields and scene queries for the render kernel

The intersection module allocates Taichi fields at import time, so it is not
imported here; import it directly after ti.init().
"""

from .config import (
    CameraConfig,
    SceneConfig,
    load_scene,
    load_world,
    save_world,
    world_from_config,
    world_from_dict,
    world_to_config,
    world_to_dict,
)
from .light import PointLight
from .showcase import ShowcaseParams, create_showcase_scene
from .world import World, default_world

__all__ = [
    "PointLight",
    "World",
    "default_world",
    "SceneConfig",
    "CameraConfig",
    "world_to_config",
    "world_from_config",
    "world_to_dict",
    "world_from_dict",
    "load_scene",
    "load_world",
    "save_world",
    "ShowcaseParams",
    "create_showcase_scene",
]
