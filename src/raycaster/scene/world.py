"""World composition: one point light and a list of spheres.

The world answers the question "what color does this ray see?":

1. ``intersect_world`` intersects the ray with every object and sorts the
   combined records by t.
2. ``color_at`` selects the hit; a miss is black.
3. ``shade_hit`` runs the Phong model at the hit's over point, gated by
   ``is_shadowed``, which casts a ray from the point toward the light and
   re-enters ``intersect_world``.

The world is built once per render. Objects may be edited (transforms,
materials) before rendering but not during it.

Example:
    >>> from src.raycaster.scene.world import default_world
    >>> from src.raycaster.core.ray import Ray
    >>> from src.raycaster.core.tuple import point, vector
    >>> world = default_world()
    >>> world.color_at(Ray(point(0, 0, -5), vector(0, 0, 1)))
    Color(0.380661, 0.475826, 0.285496)
"""

from __future__ import annotations

from collections.abc import Iterable

from src.raycaster.core.color import Color
from src.raycaster.core.ray import Ray
from src.raycaster.core.transforms import scaling
from src.raycaster.core.tuple import Tuple, point
from src.raycaster.geometry.intersections import Computations, Intersections
from src.raycaster.geometry.sphere import Sphere
from src.raycaster.scene.light import PointLight


class World:
    """A light and an ordered list of spheres.

    Attributes:
        light: The scene's point light, or None for an unlit world.
        objects: The spheres in the scene. Order only matters for identity
            comparisons, never for the rendered image.
    """

    def __init__(
        self,
        light: PointLight | None = None,
        objects: Iterable[Sphere] = (),
    ) -> None:
        self.light = light
        self.objects: list[Sphere] = list(objects)

    def add(self, obj: Sphere) -> None:
        self.objects.append(obj)

    def __contains__(self, obj: object) -> bool:
        return any(obj == existing for existing in self.objects)

    def __len__(self) -> int:
        return len(self.objects)

    def _require_light(self) -> PointLight:
        if self.light is None:
            raise RuntimeError("World has no light source; assign world.light before shading")
        return self.light

    def intersect_world(self, ray: Ray) -> Intersections:
        """Intersect a ray with every object, sorted by ascending t."""
        xs = Intersections()
        for obj in self.objects:
            xs.extend(obj.intersect(ray))
        xs.sort()
        return xs

    def is_shadowed(self, position: Tuple) -> bool:
        """Check whether anything blocks the path from a point to the light.

        Only hits strictly closer than the light occlude it.

        Raises:
            RuntimeError: If the world has no light.
        """
        light = self._require_light()
        to_light = light.position - position
        distance = to_light.magnitude()
        shadow_ray = Ray(position, to_light.normalize())
        hit = self.intersect_world(shadow_ray).hit()
        return hit is not None and hit.t < distance

    def shade_hit(self, comps: Computations) -> Color:
        """Shade precomputed hit data, including the shadow test.

        Both the shadow test and the lighting use the over point, not the
        raw hit point.
        """
        light = self._require_light()
        shadowed = self.is_shadowed(comps.over_point)
        return comps.object.material.lighting(
            light,
            comps.over_point,
            comps.eye,
            comps.normal,
            shadowed,
        )

    def color_at(self, ray: Ray) -> Color:
        """Color seen along a ray; black if it hits nothing."""
        hit = self.intersect_world(ray).hit()
        if hit is None:
            return Color.black()
        return self.shade_hit(hit.prepare_computations(ray))

    def __repr__(self) -> str:
        return f"World(light={self.light!r}, objects={len(self.objects)})"


def default_world() -> World:
    """The standard two-sphere test world.

    A white light at (-10, 10, -10); an outer unit sphere with color
    (0.8, 1.0, 0.6), diffuse 0.7 and specular 0.2; and an inner sphere with
    default material scaled by 0.5.
    """
    light = PointLight(point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0))

    outer = Sphere()
    outer.material.color = Color(0.8, 1.0, 0.6)
    outer.material.diffuse = 0.7
    outer.material.specular = 0.2

    inner = Sphere(scaling(0.5, 0.5, 0.5))

    return World(light, [outer, inner])
