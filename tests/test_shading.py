import numpy as np
import pytest
from beamy.primitives import Light, Plane, Sphere
from beamy.scene import HitResult, Scene
from beamy.shading import quantize, shade


def floor_hit():
    """A single hit on the floor plane at the origin, normal facing +Y."""
    return HitResult(
        distance=np.array([1.0]),
        index=np.array([0]),
        hit_point=np.array([[0.0, 0.0, 0.0]]),
        normal=np.array([[0.0, 1.0, 0.0]]),
    )


def floor_scene(*lights, ambient=(0.0, 0.0, 0.0)):
    scene = Scene(width=4, height=4, ambient=ambient)
    scene.add(Plane(position=[0.0, 0.0, 0.0], norm=[0.0, -1.0, 0.0]))
    for light in lights:
        scene.add(light)
    return scene


def test_light_directly_above_uses_inverse_square():
    scene = floor_scene(Light(position=[0.0, 2.0, 0.0], intensity=2.0))
    colors = shade(scene, floor_hit())
    # N.L = 1, intensity / dist^2 = 2 / 4
    np.testing.assert_allclose(colors[0], [0.5, 0.5, 0.5])


def test_oblique_light_scaled_by_cosine():
    scene = floor_scene(Light(position=[1.0, 1.0, 0.0], intensity=4.0))
    colors = shade(scene, floor_hit())
    expected = (1.0 / np.sqrt(2.0)) * 4.0 / 2.0
    np.testing.assert_allclose(colors[0], [expected] * 3)


def test_coplanar_light_contributes_nothing():
    scene = floor_scene(Light(position=[3.0, 0.0, 0.0], intensity=100.0))
    np.testing.assert_allclose(shade(scene, floor_hit())[0], [0.0, 0.0, 0.0])


def test_light_below_surface_clamped_to_zero():
    scene = floor_scene(Light(position=[0.0, -2.0, 0.0], intensity=100.0))
    np.testing.assert_allclose(shade(scene, floor_hit())[0], [0.0, 0.0, 0.0])


def test_light_at_hit_point_contributes_nothing():
    scene = floor_scene(Light(position=[0.0, 0.0, 0.0], intensity=100.0))
    colors = shade(scene, floor_hit())
    assert np.all(np.isfinite(colors))
    np.testing.assert_allclose(colors[0], [0.0, 0.0, 0.0])


def test_lights_accumulate_with_color_and_albedo():
    scene = Scene(width=4, height=4, ambient=[0.1, 0.1, 0.1])
    scene.add(Plane(position=[0.0, 0.0, 0.0], norm=[0.0, -1.0, 0.0], color=[0.5, 1.0, 0.0]))
    scene.add(Light(position=[0.0, 1.0, 0.0], intensity=1.0, color=[1.0, 0.0, 0.0]))
    scene.add(Light(position=[0.0, 2.0, 0.0], intensity=4.0, color=[0.0, 1.0, 0.0]))

    colors = shade(scene, floor_hit())

    lighting = np.array([0.1 + 1.0, 0.1 + 1.0, 0.1])
    np.testing.assert_allclose(colors[0], np.array([0.5, 1.0, 0.0]) * lighting)


def test_ambient_only_reproduces_albedo():
    scene = Scene(width=4, height=4, ambient=[1.0, 1.0, 1.0])
    scene.add(Plane(position=[0.0, 0.0, 0.0], norm=[0.0, -1.0, 0.0], color=[0.3, 0.6, 0.9]))
    np.testing.assert_allclose(shade(scene, floor_hit())[0], [0.3, 0.6, 0.9])


def test_misses_stay_black_even_with_ambient():
    scene = floor_scene(Light(position=[0.0, 2.0, 0.0]), ambient=(1.0, 1.0, 1.0))
    misses = HitResult(
        distance=np.array([np.inf, np.inf]),
        index=np.array([-1, -1]),
        hit_point=np.full((2, 3), np.nan),
        normal=np.full((2, 3), np.nan),
    )
    np.testing.assert_allclose(shade(scene, misses), np.zeros((2, 3)))


def test_shadow_rays_block_occluded_light():
    scene = floor_scene(Light(position=[0.0, 3.0, 0.0], intensity=9.0))
    scene.add(Sphere(position=[0.0, 1.0, 0.0], radius=0.5))

    lit = shade(scene, floor_hit(), shadows=False)
    shadowed = shade(scene, floor_hit(), shadows=True)

    np.testing.assert_allclose(lit[0], [1.0, 1.0, 1.0])
    np.testing.assert_allclose(shadowed[0], [0.0, 0.0, 0.0])


def test_shadow_rays_ignore_occluders_beyond_light():
    scene = floor_scene(Light(position=[0.0, 3.0, 0.0], intensity=9.0))
    scene.add(Sphere(position=[0.0, 5.0, 0.0], radius=0.5))
    np.testing.assert_allclose(shade(scene, floor_hit(), shadows=True)[0], [1.0, 1.0, 1.0])


def test_quantize_truncates_and_clamps():
    colors = np.array([[1.0, 0.5, 0.2], [2.0, -1.0, np.nan]])
    pixels = quantize(colors)

    assert pixels.dtype == np.uint8
    assert pixels.tolist() == [[255, 127, 51], [255, 0, 0]]
