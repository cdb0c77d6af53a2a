"""Scene and camera configuration for serialization.

Worlds round-trip through a plain-dict form that maps directly onto JSON:

    {
        "light": {"position": [x, y, z], "intensity": [r, g, b]},
        "spheres": [
            {
                "transform": [[...], [...], [...], [...]],
                "material": {"color": [r, g, b], "ambient": 0.1, ...}
            }
        ],
        "camera": {"hsize": 100, "vsize": 50, "field_of_view": 1.047, ...}
    }

Missing material keys fall back to the Material defaults and a missing
transform means the identity. Unknown top-level keys are ignored. Malformed
values raise ValueError.

Example:
    >>> from src.raycaster.scene.config import world_from_dict, world_to_dict
    >>> from src.raycaster.scene.world import default_world
    >>> data = world_to_dict(default_world())
    >>> len(world_from_dict(data).objects)
    2
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from src.raycaster.camera.pinhole import Camera
from src.raycaster.core.color import Color
from src.raycaster.core.matrix import IDENTITY, Matrix
from src.raycaster.core.transforms import view_transform
from src.raycaster.core.tuple import point, vector
from src.raycaster.geometry.sphere import Sphere
from src.raycaster.materials.phong import (
    DEFAULT_AMBIENT,
    DEFAULT_DIFFUSE,
    DEFAULT_SHININESS,
    DEFAULT_SPECULAR,
    Material,
)
from src.raycaster.scene.light import PointLight
from src.raycaster.scene.world import World


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        light: Light configuration, or None for an unlit world.
        spheres: List of sphere configurations.
        camera: Optional camera configuration.
    """

    light: dict[str, Any] | None = None
    spheres: list[dict[str, Any]] = field(default_factory=list)
    camera: dict[str, Any] | None = None


@dataclass
class CameraConfig:
    """Camera placement and image size.

    Attributes:
        hsize: Image width in pixels.
        vsize: Image height in pixels.
        field_of_view: View angle in radians.
        from_point: Eye position.
        to_point: Point the camera looks at.
        up: Approximate up direction.
    """

    hsize: int = 100
    vsize: int = 50
    field_of_view: float = math.pi / 3
    from_point: tuple[float, float, float] = (0.0, 1.5, -5.0)
    to_point: tuple[float, float, float] = (0.0, 1.0, 0.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)

    def build(self) -> Camera:
        """Create the camera described by this configuration.

        Raises:
            ValueError: If the size or field of view is out of range, or the
                view direction is degenerate.
        """
        transform = view_transform(
            point(*self.from_point),
            point(*self.to_point),
            vector(*self.up),
        )
        return Camera(self.hsize, self.vsize, self.field_of_view, transform)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hsize": self.hsize,
            "vsize": self.vsize,
            "field_of_view": self.field_of_view,
            "from": list(self.from_point),
            "to": list(self.to_point),
            "up": list(self.up),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CameraConfig:
        """Load a camera configuration; missing keys keep their defaults.

        Raises:
            ValueError: If data is not a dict or holds malformed values.
        """
        if not isinstance(data, dict):
            raise ValueError(f"'camera' must be an object, got {data!r}")
        defaults = cls()
        try:
            hsize = int(data.get("hsize", defaults.hsize))
            vsize = int(data.get("vsize", defaults.vsize))
            field_of_view = float(data.get("field_of_view", defaults.field_of_view))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid camera configuration: {e}") from e
        return cls(
            hsize=hsize,
            vsize=vsize,
            field_of_view=field_of_view,
            from_point=_parse_triple(data.get("from", defaults.from_point), "camera.from"),
            to_point=_parse_triple(data.get("to", defaults.to_point), "camera.to"),
            up=_parse_triple(data.get("up", defaults.up), "camera.up"),
        )


# =============================================================================
# Value Parsing
# =============================================================================


def _parse_triple(value: Any, name: str) -> tuple[float, float, float]:
    try:
        items = [float(v) for v in value]
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a list of 3 numbers, got {value!r}") from e
    if len(items) != 3:
        raise ValueError(f"{name} must be a list of 3 numbers, got {value!r}")
    return items[0], items[1], items[2]


def _parse_transform(value: Any) -> Matrix:
    try:
        rows = [[float(v) for v in row] for row in value]
    except (TypeError, ValueError) as e:
        raise ValueError(f"transform must be a 4x4 list of numbers, got {value!r}") from e
    if len(rows) != 4 or any(len(row) != 4 for row in rows):
        raise ValueError(f"transform must be a 4x4 list of numbers, got {value!r}")
    return Matrix(rows)


def _material_to_dict(material: Material) -> dict[str, Any]:
    return {
        "color": list(material.color.to_tuple()),
        "ambient": material.ambient,
        "diffuse": material.diffuse,
        "specular": material.specular,
        "shininess": material.shininess,
    }


def _material_from_dict(data: dict[str, Any]) -> Material:
    try:
        return Material(
            color=Color(*_parse_triple(data.get("color", (1.0, 1.0, 1.0)), "material.color")),
            ambient=float(data.get("ambient", DEFAULT_AMBIENT)),
            diffuse=float(data.get("diffuse", DEFAULT_DIFFUSE)),
            specular=float(data.get("specular", DEFAULT_SPECULAR)),
            shininess=float(data.get("shininess", DEFAULT_SHININESS)),
        )
    except TypeError as e:
        raise ValueError(f"Invalid material configuration: {e}") from e


# =============================================================================
# World <-> Config
# =============================================================================


def world_to_config(world: World, camera: CameraConfig | None = None) -> SceneConfig:
    """Export a world (and optionally a camera) to a configuration object."""
    config = SceneConfig()

    if world.light is not None:
        position = world.light.position
        config.light = {
            "position": [position.x, position.y, position.z],
            "intensity": list(world.light.intensity.to_tuple()),
        }

    for sphere in world.objects:
        config.spheres.append(
            {
                "transform": sphere.transform.tolist(),
                "material": _material_to_dict(sphere.material),
            }
        )

    if camera is not None:
        config.camera = camera.to_dict()

    return config


def world_from_config(config: SceneConfig) -> World:
    """Build a world from a configuration object.

    Raises:
        ValueError: If the configuration contains invalid data.
        NonInvertibleMatrixError: If a sphere transform is singular.
    """
    world = World()

    if config.light is not None:
        if not isinstance(config.light, dict):
            raise ValueError(f"'light' must be an object, got {config.light!r}")
        world.light = PointLight(
            point(*_parse_triple(config.light.get("position"), "light.position")),
            Color(*_parse_triple(config.light.get("intensity", (1.0, 1.0, 1.0)), "light.intensity")),
        )

    for i, sphere_config in enumerate(config.spheres):
        if not isinstance(sphere_config, dict):
            raise ValueError(f"Sphere {i} must be an object, got {sphere_config!r}")
        transform_data = sphere_config.get("transform")
        transform = IDENTITY if transform_data is None else _parse_transform(transform_data)
        material_data = sphere_config.get("material", {})
        if not isinstance(material_data, dict):
            raise ValueError(f"Sphere {i} material must be an object, got {material_data!r}")
        material = _material_from_dict(material_data)
        world.add(Sphere(transform, material))

    return world


def world_to_dict(world: World, camera: CameraConfig | None = None) -> dict[str, Any]:
    """Export a world to a dictionary (for JSON serialization)."""
    config = world_to_config(world, camera)
    data: dict[str, Any] = {"light": config.light, "spheres": config.spheres}
    if config.camera is not None:
        data["camera"] = config.camera
    return data


def world_from_dict(data: dict[str, Any]) -> World:
    """Build a world from a dictionary with 'light' and 'spheres' keys."""
    return world_from_config(config_from_dict(data))


def config_from_dict(data: dict[str, Any]) -> SceneConfig:
    """Wrap a dictionary in a SceneConfig, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ValueError(f"Scene configuration must be an object, got {type(data).__name__}")
    spheres = data.get("spheres", [])
    if not isinstance(spheres, list):
        raise ValueError("'spheres' must be a list")
    return SceneConfig(
        light=data.get("light"),
        spheres=spheres,
        camera=data.get("camera"),
    )


# =============================================================================
# JSON Files
# =============================================================================


def save_world(world: World, filepath: str | Path, camera: CameraConfig | None = None) -> None:
    """Write a world (and optionally a camera) to a JSON file."""
    Path(filepath).write_text(json.dumps(world_to_dict(world, camera), indent=2), encoding="utf-8")
    logger.debug("Saved scene with {} spheres to {}", len(world.objects), filepath)


def load_scene(filepath: str | Path) -> tuple[World, CameraConfig | None]:
    """Load a world and its optional camera configuration from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or describes an invalid scene.
    """
    try:
        data = json.loads(Path(filepath).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid scene file {filepath}: {e}") from e

    config = config_from_dict(data)
    world = world_from_config(config)
    camera = CameraConfig.from_dict(config.camera) if config.camera is not None else None
    logger.debug("Loaded scene with {} spheres from {}", len(world.objects), filepath)
    return world, camera


def load_world(filepath: str | Path) -> World:
    """Load a world from a JSON file, ignoring any camera entry."""
    world, _ = load_scene(filepath)
    return world
