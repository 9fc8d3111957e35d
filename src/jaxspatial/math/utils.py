import jax
import jax.numpy as jnp

import jaxspatial.typing as jtp


@jax.custom_jvp
def safe_norm(array: jtp.ArrayLike) -> jtp.Array:
    """
    Compute the Euclidean norm of an array with a gradient defined at zero.

    Args:
        array: The array for which to compute the norm.

    Returns:
        The norm of the array.
    """

    return jnp.linalg.norm(jnp.asarray(array).ravel())


@safe_norm.defjvp
def _safe_norm_jvp(primals, tangents):
    (x,), (x_dot,) = primals, tangents

    # Replace zeros with ones to avoid dividing by a zero norm.
    is_zero = jnp.all(x == 0.0)
    array = jnp.where(is_zero, jnp.ones_like(x), x)

    norm = jnp.linalg.norm(array.ravel())
    tangent = jnp.where(is_zero, 0.0, jnp.sum(array * x_dot) / norm)

    return jnp.where(is_zero, 0.0, norm), tangent


def normalize(vector: jtp.VectorLike) -> jtp.Vector:
    """
    Scale a vector to unit norm, leaving the zero vector untouched.

    Args:
        vector: The vector to normalize.

    Returns:
        The unit vector, or a zero vector if the input is zero.
    """

    v = jnp.array(vector, dtype=float)
    norm = safe_norm(v)

    return jnp.where(norm > 0.0, v / jnp.where(norm > 0.0, norm, 1.0), v)
