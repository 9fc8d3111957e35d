import jax.numpy as jnp

import jaxspatial.typing as jtp

from .skew import Skew


class Cross:
    """
    A utility class for the spatial cross product operators.

    Motion vectors are stored as ``[angular; linear]`` and force vectors as
    ``[linear; angular]``.
    """

    @staticmethod
    def _swap_halves(matrix: jtp.Matrix) -> jtp.Matrix:

        P = jnp.block(
            [
                [jnp.zeros((3, 3)), jnp.eye(3)],
                [jnp.eye(3), jnp.zeros((3, 3))],
            ]
        )

        return P @ matrix @ P

    @staticmethod
    def crm(motion: jtp.VectorLike) -> jtp.Matrix:
        """
        Compute the cross product matrix of a motion vector acting on motions.

        Args:
            motion: A 6D motion vector ``[angular; linear]``.

        Returns:
            The 6x6 matrix ``m x`` acting on motion vectors.
        """

        m = jnp.array(motion, dtype=float).reshape(6)
        ω, v = m[0:3], m[3:6]

        return jnp.block(
            [
                [Skew.wedge(ω), jnp.zeros((3, 3))],
                [Skew.wedge(v), Skew.wedge(ω)],
            ]
        )

    @staticmethod
    def crf(motion: jtp.VectorLike) -> jtp.Matrix:
        """
        Compute the dual cross product matrix of a motion vector acting on forces.

        Args:
            motion: A 6D motion vector ``[angular; linear]``.

        Returns:
            The 6x6 matrix ``m x*`` acting on force vectors ``[linear; angular]``.
        """

        # The dual operator is -crm^T in [angular; linear] coordinates.
        return Cross._swap_halves(-Cross.crm(motion).T)
