import jax
import jax.numpy as jnp

# Small epsilon for safe math operations
EPSILON = 1e-6

# --- Vector Utilities ---
def dot(v1, v2):
    return jnp.sum(v1 * v2, axis=-1)

def normalize(v):
    """Normalize a vector.

    Callers must pass a non-zero vector. The norm is floored at EPSILON so a
    zero vector comes back as zeros rather than NaN, which is still not a
    meaningful direction.
    """
    norm = jnp.linalg.norm(v, axis=-1, keepdims=True)
    return v / jnp.maximum(norm, EPSILON)

def reflect(v, n):
    """Reflect vector v around normal n."""
    return v - 2 * dot(v, n)[..., None] * n

# --- Texture Coordinates & Checker Pattern ---

@jax.jit
def sphere_uv(normal):
    """
    Spherical texture coordinates of a unit surface normal.

    Longitude comes from the XZ plane and latitude from Y:
        u = 0.5 * (1 + atan2(n.z, n.x) / pi)   in [0, 1]
        v = acos(n.y) / pi                     in [0, 1], 0 at the +Y pole

    Args:
        normal: (..., 3) array, unit surface normal.

    Returns:
        (u, v): tuple of arrays with the leading shape of `normal`.
    """
    x, y, z = normal[..., 0], normal[..., 1], normal[..., 2]
    u = 0.5 * (1.0 + jnp.arctan2(z, x) / jnp.pi)
    # acos is undefined past +-1, which rounding can reach at the poles
    v = jnp.arccos(jnp.clip(y, -1.0, 1.0)) / jnp.pi
    return u, v

def checker_pattern(u, v, tiles):
    """True where the tile band indices floor(u*tiles) + floor(v*tiles) sum to an even number."""
    band_sum = jnp.floor(u * tiles).astype(jnp.int32) + jnp.floor(v * tiles).astype(jnp.int32)
    return jnp.mod(band_sum, 2) == 0

def checker_factor(normal, tiles, pattern_dim):
    """Multiplier for the ambient and diffuse terms: pattern_dim on "on" tiles, 1.0 elsewhere."""
    u, v = sphere_uv(normal)
    return jnp.where(checker_pattern(u, v, tiles), pattern_dim, 1.0)
