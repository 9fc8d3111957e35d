import jax
import jax.numpy as jnp

import jaxspatial.typing as jtp
from jaxspatial.math import Rotation


@jax.jit
def chained_rotations(axes: jtp.Matrix, angles: jtp.Vector) -> jtp.Array:
    """
    Compute the cumulative products of the elementary rotations of a joint.

    Args:
        axes: The (k, 3) matrix of static unit axes, one per row.
        angles: The k rotation angles, tare offsets included.

    Returns:
        The (k+1, 3, 3) array ``C`` with ``C[0] = I`` and
        ``C[i+1] = C[i] @ AxisAngle(axes[i], angles[i])``.
    """

    C = [jnp.eye(3)]

    for i in range(axes.shape[0]):
        C.append(C[-1] @ Rotation.about_axis(axis=axes[i], angle=angles[i]))

    return jnp.stack(C)


@jax.jit
def effective_axes(axes: jtp.Matrix, angles: jtp.Vector) -> jtp.Matrix:
    """
    Compute the axes of a chain of rotations in the current configuration.

    The i-th effective axis is the static axis rotated by the elementary
    rotations of all the preceding axes, ``e_i = R_0 ... R_{i-1} u_i``.

    Args:
        axes: The (k, 3) matrix of static unit axes, one per row.
        angles: The k rotation angles, tare offsets included.

    Returns:
        The (k, 3) matrix of effective axes.
    """

    C = chained_rotations(axes, angles)

    return jnp.einsum("kij,kj->ki", C[:-1], axes)


@jax.jit
def effective_axes_dot(
    axes: jtp.Matrix, angles: jtp.Vector, rates: jtp.Vector
) -> jtp.Matrix:
    """
    Compute the time derivative of the effective axes of a chain of rotations.

    Each preceding coordinate j spins the i-th axis with angular velocity
    ``qd_j e_j``, therefore ``d/dt e_i = (sum_{j<i} qd_j e_j) x e_i``.

    Args:
        axes: The (k, 3) matrix of static unit axes, one per row.
        angles: The k rotation angles, tare offsets included.
        rates: The k angular rates.

    Returns:
        The (k, 3) matrix of effective axes derivatives.
    """

    e = effective_axes(axes, angles)

    # Angular velocity of the frame carrying each axis (exclusive prefix sum).
    ω = jnp.cumsum(rates[:, None] * e, axis=0) - rates[:, None] * e

    return jnp.cross(ω, e)
