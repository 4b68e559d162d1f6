import jax
import jax.numpy as jnp
from functools import partial
from typing import Optional, Sequence, Union

from .types import Ray, ShadingConfig, Color, FrameBuffer
from .geometry import Sphere, intersect_spheres
from .scene import SceneData, as_scene
from .camera import Camera
from .utils import dot, normalize, reflect, checker_factor

@jax.jit
def shade_ray(scene: SceneData, config: ShadingConfig, ray: Ray) -> Color:
    """Color seen along a single ray: local lighting at the nearest sphere hit.

    Ambient + diffuse are scaled by the checker factor; the specular highlight
    is added afterwards and is not tinted by the pattern. A shadowed point gets
    the ambient term only. Misses return the scene background.
    """
    # Shapes are static under jit, so an empty scene is decided at trace time
    if scene.num_spheres == 0:
        return scene.background_color

    index, distance = intersect_spheres(scene.sphere_centers, scene.sphere_radii, ray)
    hit = index >= 0

    # Keep the miss lanes finite; their result is replaced by the background below
    safe_index = jnp.maximum(index, 0)
    safe_distance = jnp.where(hit, distance, 0.0)
    center = scene.sphere_centers[safe_index]

    point = ray.origin + ray.direction * safe_distance
    normal = normalize(point - center)

    light_dir = normalize(config.light.direction)
    to_light = -light_dir

    pattern = checker_factor(normal, config.checker_tiles, config.pattern_dim)
    ambient = config.ambient

    # --- Shadow test ---
    # Any hit toward the light occludes; there is no max distance for a directional light
    shadow_ray = Ray(origin=point + normal * config.shadow_bias, direction=to_light)
    shadow_index, _ = intersect_spheres(scene.sphere_centers, scene.sphere_radii, shadow_ray)
    in_shadow = shadow_index >= 0

    # --- Direct lighting ---
    diffuse = jnp.maximum(0.0, dot(normal, to_light)) * config.diffuse
    reflection = reflect(ray.direction, normal)
    specular = jnp.power(jnp.maximum(0.0, dot(reflection, to_light)), config.shininess) * config.specular

    lit_color = (ambient + diffuse) * pattern + specular
    shadow_color = ambient * pattern

    color = jnp.where(in_shadow, shadow_color, lit_color)
    return jnp.where(hit, color, scene.background_color)

def shade(
    ray: Ray,
    spheres: Union[Sequence[Sphere], SceneData],
    config: Optional[ShadingConfig] = None,
) -> Color:
    """Shade one ray against a list of spheres (or a stacked SceneData)."""
    if config is None:
        config = ShadingConfig()
    return shade_ray(as_scene(spheres), config, ray)

# --- Vmap Definitions ---
ray_in_axes = Ray(origin=0, direction=0)

# Scene and config are broadcast; rays are mapped one pixel at a time
shade_row = jax.vmap(shade_ray, in_axes=(None, None, ray_in_axes))
shade_pixels = jax.vmap(shade_row, in_axes=(None, None, ray_in_axes))

@partial(jax.jit, static_argnames=('width', 'height'))
def render_pixels(scene: SceneData, config: ShadingConfig, camera: Camera, width: int, height: int) -> FrameBuffer:
    rays = camera.generate_rays(width, height)      # (height, width, 3)
    image = shade_pixels(scene, config, rays)       # (height, width, 3)
    return image.reshape(width * height, 3)

def render_image(
    spheres: Union[Sequence[Sphere], SceneData],
    width: int,
    height: int,
    camera: Optional[Camera] = None,
    config: Optional[ShadingConfig] = None,
) -> FrameBuffer:
    """Render the whole frame as a flat row-major buffer of width * height colors.

    Every pixel is shaded independently through a vmapped map over rows and
    columns; pixel (x, y) lands at index y * width + x.
    """
    if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive integers, got {width}x{height}")
    if camera is None:
        camera = Camera()
    if config is None:
        config = ShadingConfig()

    return render_pixels(as_scene(spheres), config, camera, width, height)
