import jax.numpy as jnp

import jaxspatial.typing as jtp

from .utils import normalize


class Basis:
    """
    A utility class for completing and checking orthonormal bases.
    """

    @staticmethod
    def orthonormal_completion(axis: jtp.VectorLike) -> tuple[jtp.Vector, jtp.Vector]:
        """
        Complete a single direction into a right-handed orthonormal basis.

        Args:
            axis: A non-zero 3D vector, normalized by this function.

        Returns:
            The pair (b, c) such that (a, b, c) is right-handed and orthonormal,
            that is ``a x b == c`` and ``b x c == a``.
        """

        a = normalize(axis)

        # Cross with the canonical axis least aligned with a.
        e = jnp.eye(3)[jnp.argmin(jnp.abs(a))]
        b = normalize(jnp.cross(e, a))
        c = jnp.cross(a, b)

        return b, c

    @staticmethod
    def is_orthonormal(axes: jtp.MatrixLike, tol: float) -> bool:
        """
        Check whether the rows of a matrix are mutually orthonormal.

        Args:
            axes: A (k, 3) matrix whose rows are the axes to check.
            tol: The tolerance of the check.

        Returns:
            True if ``axes @ axes.T`` equals the identity within ``tol``.
        """

        U = jnp.atleast_2d(jnp.array(axes, dtype=float))

        return bool(jnp.max(jnp.abs(U @ U.T - jnp.eye(U.shape[0]))) < tol)
