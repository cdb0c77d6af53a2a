"""Unit tests for the Phong material and lighting model.

Tests cover:
- Material defaults and equality
- Python lighting for the standard eye/light configurations
- Shadowed surfaces receive only ambient light
- Kernel phong_lighting agrees with the Python model
"""

import math

import pytest
import taichi as ti


@pytest.fixture
def lit_scene():
    """Default material and a surface point at the origin."""
    from src.raycaster.core.tuple import point
    from src.raycaster.materials.phong import Material

    return Material(), point(0, 0, 0)


class TestMaterial:
    """Tests for Material defaults."""

    def test_default_material(self):
        from src.raycaster.core.color import Color
        from src.raycaster.materials.phong import Material

        m = Material()
        assert m.color == Color(1, 1, 1)
        assert m.ambient == 0.1
        assert m.diffuse == 0.9
        assert m.specular == 0.9
        assert m.shininess == 200.0

    def test_fields_are_writable(self):
        from src.raycaster.materials.phong import Material

        m = Material()
        m.ambient = 1.0
        assert m.ambient == 1.0
        assert m != Material()

    def test_point_light(self):
        from src.raycaster.core.color import Color
        from src.raycaster.core.tuple import point
        from src.raycaster.scene.light import PointLight

        light = PointLight(point(0, 0, 0), Color(1, 1, 1))
        assert light.position == point(0, 0, 0)
        assert light.intensity == Color(1, 1, 1)


class TestLighting:
    """Tests for the Python lighting function."""

    def test_eye_between_light_and_surface(self, lit_scene):
        from src.raycaster.core.color import Color
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.materials.phong import lighting
        from src.raycaster.scene.light import PointLight

        m, position = lit_scene
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = lighting(m, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert result == Color(1.9, 1.9, 1.9)

    def test_eye_offset_45_degrees(self, lit_scene):
        from src.raycaster.core.color import Color
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.materials.phong import lighting
        from src.raycaster.scene.light import PointLight

        m, position = lit_scene
        half = math.sqrt(2) / 2
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = lighting(m, light, position, vector(0, half, -half), vector(0, 0, -1))
        assert result == Color(1.0, 1.0, 1.0)

    def test_light_offset_45_degrees(self, lit_scene):
        from src.raycaster.core.color import Color
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.materials.phong import lighting
        from src.raycaster.scene.light import PointLight

        m, position = lit_scene
        light = PointLight(point(0, 10, -10), Color(1, 1, 1))
        result = lighting(m, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert result == Color(0.7364, 0.7364, 0.7364)

    def test_eye_in_reflection_path(self, lit_scene):
        from src.raycaster.core.color import Color
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.materials.phong import lighting
        from src.raycaster.scene.light import PointLight

        m, position = lit_scene
        half = math.sqrt(2) / 2
        light = PointLight(point(0, 10, -10), Color(1, 1, 1))
        result = lighting(m, light, position, vector(0, -half, -half), vector(0, 0, -1))
        assert result == Color(1.6363961, 1.6363961, 1.6363961)

    def test_light_behind_surface(self, lit_scene):
        from src.raycaster.core.color import Color
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.materials.phong import lighting
        from src.raycaster.scene.light import PointLight

        m, position = lit_scene
        light = PointLight(point(0, 0, 10), Color(1, 1, 1))
        result = lighting(m, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert result == Color(0.1, 0.1, 0.1)

    def test_surface_in_shadow(self, lit_scene):
        from src.raycaster.core.color import Color
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.scene.light import PointLight

        m, position = lit_scene
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = m.lighting(light, position, vector(0, 0, -1), vector(0, 0, -1), True)
        assert result == Color(0.1, 0.1, 0.1)

    def test_result_is_not_clamped(self, lit_scene):
        from src.raycaster.core.color import Color
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.materials.phong import lighting
        from src.raycaster.scene.light import PointLight

        m, position = lit_scene
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = lighting(m, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert result.red > 1.0


class TestKernelLighting:
    """Tests for the Taichi phong_lighting function."""

    @pytest.mark.parametrize(
        "light_position, eye, in_shadow",
        [
            ((0.0, 0.0, -10.0), (0.0, 0.0, -1.0), 0),
            ((0.0, 0.0, -10.0), (0.0, math.sqrt(2) / 2, -math.sqrt(2) / 2), 0),
            ((0.0, 10.0, -10.0), (0.0, 0.0, -1.0), 0),
            ((0.0, 10.0, -10.0), (0.0, -math.sqrt(2) / 2, -math.sqrt(2) / 2), 0),
            ((0.0, 0.0, 10.0), (0.0, 0.0, -1.0), 0),
            ((0.0, 0.0, -10.0), (0.0, 0.0, -1.0), 1),
        ],
    )
    def test_matches_python_lighting(self, light_position, eye, in_shadow):
        from src.raycaster.core.color import Color
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.materials.phong import Material, lighting, phong_lighting, vec3
        from src.raycaster.scene.light import PointLight

        m = Material()
        expected = lighting(
            m,
            PointLight(point(*light_position), Color(1, 1, 1)),
            point(0, 0, 0),
            vector(*eye),
            vector(0, 0, -1),
            bool(in_shadow),
        )

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        lx, ly, lz = light_position
        ex, ey, ez = eye

        @ti.kernel
        def test_kernel(shadow: ti.i32):
            result[None] = phong_lighting(
                vec3(1.0, 1.0, 1.0),
                0.1,
                0.9,
                0.9,
                200.0,
                vec3(lx, ly, lz),
                vec3(1.0, 1.0, 1.0),
                vec3(0.0, 0.0, 0.0),
                vec3(ex, ey, ez),
                vec3(0.0, 0.0, -1.0),
                shadow,
            )

        test_kernel(in_shadow)
        r = result[None]
        assert abs(r[0] - expected.red) < 1e-3
        assert abs(r[1] - expected.green) < 1e-3
        assert abs(r[2] - expected.blue) < 1e-3
