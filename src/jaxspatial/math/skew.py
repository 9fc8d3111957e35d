import jax.numpy as jnp

import jaxspatial.typing as jtp


class Skew:
    """
    A utility class for skew-symmetric matrix operations.
    """

    @staticmethod
    def wedge(vector: jtp.VectorLike) -> jtp.Matrix:
        """
        Compute the skew-symmetric matrix (wedge operator) of a 3D vector.

        Args:
            vector: A 3D vector.

        Returns:
            The 3x3 matrix such that ``wedge(a) @ b == cross(a, b)``.
        """

        x, y, z = jnp.array(vector, dtype=float).reshape(3)

        return jnp.array(
            [
                [0.0, -z, y],
                [z, 0.0, -x],
                [-y, x, 0.0],
            ]
        )

    @staticmethod
    def vee(matrix: jtp.MatrixLike) -> jtp.Vector:
        """
        Extract the 3D vector from a skew-symmetric matrix (vee operator).

        Args:
            matrix: A 3x3 skew-symmetric matrix.

        Returns:
            The 3D vector extracted from the input matrix.
        """

        M = jnp.array(matrix, dtype=float)

        return 0.5 * jnp.array(
            [
                M[2, 1] - M[1, 2],
                M[0, 2] - M[2, 0],
                M[1, 0] - M[0, 1],
            ]
        )
