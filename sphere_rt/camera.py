import jax
import jax.numpy as jnp
from flax import struct
from dataclasses import field
from functools import partial

from .types import Ray
from .utils import normalize

@struct.dataclass
class Camera:
    """Pinhole camera looking down -Z with +Y up."""
    fov: float = jnp.pi / 3  # Vertical field of view (radians)
    origin: jnp.ndarray = field(default_factory=lambda: jnp.zeros(3))

    @partial(jax.jit, static_argnames=['width', 'height'])
    def generate_rays(self, width: int, height: int) -> Ray:
        """Generate one ray through the center of each pixel.

        Pixel (x, y) has y = 0 on the top row. The returned arrays have shape
        (height, width, 3), so flattening them is row-major.
        """
        # Create pixel grid coordinates (image plane, origin at top-left)
        x, y = jnp.meshgrid(jnp.arange(width), jnp.arange(height))
        aspect_ratio = width / height

        dir_x = (2.0 * (x + 0.5) / width - 1.0) * aspect_ratio
        dir_y = 1.0 - 2.0 * (y + 0.5) / height
        # Negative z because camera looks down -z axis
        dir_z = jnp.full(dir_x.shape, -1.0 / jnp.tan(self.fov / 2.0))

        directions = normalize(jnp.stack([dir_x, dir_y, dir_z], axis=-1))
        origins = jnp.broadcast_to(self.origin, directions.shape)

        return Ray(origin=origins, direction=directions)
