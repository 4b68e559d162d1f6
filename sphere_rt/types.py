import jax.numpy as jnp
from flax import struct
# Import field from dataclasses
from dataclasses import field

# --- Type Aliases for Clarity ---
Vector3 = jnp.ndarray # Shape (..., 3)
Color = jnp.ndarray # Linear RGB, unclamped, shape (..., 3)
FrameBuffer = jnp.ndarray # Row-major pixel colors, shape (width * height, 3)

@struct.dataclass
class Ray:
    origin: jnp.ndarray          # Shape (..., 3)
    direction: jnp.ndarray       # Shape (..., 3), unit length by convention

@struct.dataclass
class Intersection:
    sphere_index: int   # Index into the scene's sphere list
    distance: float     # Parametric distance to the near surface hit

# --- Light Data Structures ---

@struct.dataclass
class DirectionalLight:
    direction: jnp.ndarray # Direction the light travels *along*; light arrives from -direction

@struct.dataclass
class ShadingConfig:
    """Constants of the local lighting model.

    The defaults reproduce the reference look: one light along (1, -1, -1),
    dim grey ambient, a 10x10 checker over each sphere's UV range that halves
    the ambient and diffuse terms, and a tight white highlight.
    """
    light: DirectionalLight = field(
        default_factory=lambda: DirectionalLight(direction=jnp.array([1.0, -1.0, -1.0]))
    )
    ambient: jnp.ndarray = field(default_factory=lambda: jnp.array([0.1, 0.1, 0.1]))
    diffuse: float = 0.8
    specular: float = 0.5
    shininess: float = 32.0
    checker_tiles: int = 10
    pattern_dim: float = 0.5    # Multiplier applied where the checker is "on"
    shadow_bias: float = 1e-4   # Shadow ray origin offset along the surface normal
