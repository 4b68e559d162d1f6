import jax
import jax.numpy as jnp
from flax import struct
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

from .types import Ray, Intersection
from .utils import dot

if TYPE_CHECKING:
    from .scene import SceneData

# Sphere is the convenient per-object definition; the scene stacks them into arrays
@struct.dataclass
class Sphere:
    radius: float        # Expected > 0, not validated
    center: jnp.ndarray  # Shape (3,)

# JIT-compilable function to intersect multiple spheres using scan
@jax.jit
def intersect_spheres(sphere_centers, sphere_radii, ray: Ray) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """Finds the nearest sphere hit along a single ray by scanning the sphere arrays in order.

    Uses the projection form of the sphere test: project the center onto the
    ray, compare the squared perpendicular distance with radius^2 and step back
    from the projection to the near surface. A center that projects behind the
    origin is skipped outright, which assumes the origin lies outside every
    sphere.

    Returns (index, distance). A miss is reported as index -1, distance inf.
    Ties keep the earlier sphere because only a strictly smaller distance
    replaces the running best.
    """

    def scan_body(carry, sphere_params):
        best_index, best_distance = carry
        center, radius, index = sphere_params

        oc = center - ray.origin
        proj = dot(ray.direction, oc)
        d2 = dot(oc, oc) - proj * proj
        r2 = radius * radius
        # Clamp keeps sqrt finite on rejected spheres; `valid` masks them out
        distance = proj - jnp.sqrt(jnp.maximum(r2 - d2, 0.0))
        valid = (proj >= 0) & (d2 <= r2)

        is_closer = valid & (distance < best_distance)
        next_carry = (
            jnp.where(is_closer, index, best_index),
            jnp.where(is_closer, distance.astype(best_distance.dtype), best_distance),
        )
        return next_carry, None

    init_carry = (jnp.array(-1, dtype=jnp.int32), jnp.array(jnp.inf, dtype=jnp.float32))
    indices = jnp.arange(sphere_radii.shape[0], dtype=jnp.int32)

    (nearest_index, nearest_distance), _ = jax.lax.scan(
        scan_body,
        init_carry,
        (sphere_centers, sphere_radii, indices)
    )
    return nearest_index, nearest_distance

def trace(ray: Ray, spheres: Union[Sequence[Sphere], "SceneData"]) -> Optional[Intersection]:
    """Nearest intersection of a single ray with the scene, or None on a miss.

    `spheres` may be a list of Sphere or an already stacked SceneData. An empty
    scene is a miss for every ray.
    """
    # Local import: scene.py builds on Sphere from this module
    from .scene import as_scene

    scene = as_scene(spheres)
    if scene.num_spheres == 0:
        return None
    index, distance = intersect_spheres(scene.sphere_centers, scene.sphere_radii, ray)
    index = int(index)
    if index < 0:
        return None
    return Intersection(sphere_index=index, distance=float(distance))
