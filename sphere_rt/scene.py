import jax.numpy as jnp
from flax import struct
from dataclasses import field
from typing import Sequence, Union

from .geometry import Sphere

# Scene is a container of stacked arrays so the intersector can scan over it
# inside jit/vmap without Python-level loops.

@struct.dataclass
class SceneData:
    # Geometry represented as arrays, in scene order
    sphere_centers: jnp.ndarray     # Shape (num_spheres, 3)
    sphere_radii: jnp.ndarray       # Shape (num_spheres,)

    # Other scene properties
    background_color: jnp.ndarray = field(default_factory=lambda: jnp.zeros(3))  # Shape (3,)

    @property
    def num_spheres(self) -> int:
        # Static under jit: array shapes are known at trace time
        return self.sphere_radii.shape[0]

# Two-sphere scene from the reference render
REFERENCE_SPHERES = (
    Sphere(radius=1.0, center=jnp.array([0.0, 1.0, -4.0])),
    Sphere(radius=2.0, center=jnp.array([2.0, -1.0, -8.5])),
)

def make_scene(spheres: Sequence[Sphere]) -> SceneData:
    """Stack an ordered list of spheres into SceneData. An empty list gives an empty scene."""
    if len(spheres) == 0:
        return SceneData(
            sphere_centers=jnp.zeros((0, 3), dtype=jnp.float32),
            sphere_radii=jnp.zeros((0,), dtype=jnp.float32),
        )

    centers = jnp.stack([jnp.asarray(s.center, dtype=jnp.float32) for s in spheres])
    radii = jnp.array([s.radius for s in spheres], dtype=jnp.float32)
    if centers.shape != (len(spheres), 3):
        raise ValueError(f"Sphere centers must be 3-vectors, got stacked shape {centers.shape}")
    return SceneData(sphere_centers=centers, sphere_radii=radii)

def as_scene(spheres: Union[Sequence[Sphere], SceneData]) -> SceneData:
    if isinstance(spheres, SceneData):
        return spheres
    return make_scene(spheres)
