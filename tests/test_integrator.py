import jax.numpy as jnp
import pytest
import sys
import os

# Add the repo root to path to allow package imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sphere_rt.types import Ray, ShadingConfig, DirectionalLight
from sphere_rt.geometry import Sphere
from sphere_rt.scene import SceneData, make_scene
from sphere_rt.integrator import shade
from sphere_rt.utils import normalize, checker_factor

# Target sphere hit head-on at (0, 0, -4), outward normal (0, 0, 1)
TARGET = Sphere(radius=1.0, center=jnp.array([0.0, 0.0, -5.0]))
FRONT_NORMAL = jnp.array([0.0, 0.0, 1.0])

@pytest.fixture
def center_ray():
    return Ray(origin=jnp.zeros(3), direction=jnp.array([0.0, 0.0, -1.0]))

@pytest.fixture
def blocker():
    """Small sphere sitting between the target's front point and the default light."""
    to_light = normalize(jnp.array([-1.0, 1.0, 1.0]))
    hit_point = jnp.array([0.0, 0.0, -4.0])
    return Sphere(radius=0.5, center=hit_point + 2.0 * to_light)

def test_miss_returns_background(center_ray):
    up_ray = Ray(origin=jnp.zeros(3), direction=jnp.array([0.0, 1.0, 0.0]))
    color = shade(up_ray, [TARGET])
    assert jnp.allclose(color, jnp.zeros(3))

def test_empty_scene_returns_background(center_ray):
    assert jnp.allclose(shade(center_ray, []), jnp.zeros(3))

def test_miss_uses_scene_background_color():
    base = make_scene([TARGET])
    scene = SceneData(
        sphere_centers=base.sphere_centers,
        sphere_radii=base.sphere_radii,
        background_color=jnp.array([0.2, 0.3, 0.4]),
    )
    up_ray = Ray(origin=jnp.zeros(3), direction=jnp.array([0.0, 1.0, 0.0]))
    assert jnp.allclose(shade(up_ray, scene), jnp.array([0.2, 0.3, 0.4]))

def test_front_facing_hit_is_lit_above_ambient(center_ray):
    color = shade(center_ray, [TARGET])
    assert color.shape == (3,)
    # Ambient alone is at most 0.1 per channel
    assert jnp.all(color > 0.1)

def test_shadowed_point_gets_ambient_only(center_ray, blocker):
    config = ShadingConfig()
    shadowed = shade(center_ray, [TARGET, blocker], config)
    lit = shade(center_ray, [TARGET], config)

    pattern = checker_factor(FRONT_NORMAL, config.checker_tiles, config.pattern_dim)
    assert jnp.allclose(shadowed, config.ambient * pattern, atol=1e-6)
    assert jnp.all(lit > shadowed)

def test_blocker_order_does_not_matter(center_ray, blocker):
    # The camera ray still picks the target; the blocker only casts the shadow
    a = shade(center_ray, [TARGET, blocker])
    b = shade(center_ray, [blocker, TARGET])
    assert jnp.allclose(a, b, atol=1e-6)

def test_specular_is_added_after_pattern(center_ray):
    """Light straight from the camera: diffuse 1 * k_d and a full-strength highlight."""
    config = ShadingConfig(light=DirectionalLight(direction=jnp.array([0.0, 0.0, -1.0])))
    color = shade(center_ray, [TARGET], config)

    pattern = checker_factor(FRONT_NORMAL, config.checker_tiles, config.pattern_dim)
    expected = (config.ambient + config.diffuse) * pattern + config.specular
    assert jnp.allclose(color, expected, atol=1e-5)

def test_back_lit_point_has_no_diffuse(center_ray):
    # Light travelling toward the camera: the visible side faces away from it
    config = ShadingConfig(light=DirectionalLight(direction=jnp.array([0.0, 0.0, 1.0])))
    color = shade(center_ray, [TARGET], config)
    pattern = checker_factor(FRONT_NORMAL, config.checker_tiles, config.pattern_dim)
    # The far side of the sphere itself blocks the shadow ray
    assert jnp.allclose(color, config.ambient * pattern, atol=1e-6)
