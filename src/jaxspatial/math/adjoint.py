import jax.numpy as jnp

import jaxspatial.typing as jtp

from .skew import Skew


class Adjoint:
    """
    A utility class for the 6x6 matrices changing the frame of spatial vectors.

    With motion vectors stored as ``[angular; linear]`` and force vectors as
    ``[linear; angular]``, the same matrix

    .. math::
        {}^B X_A = \\begin{bmatrix} R & 0 \\\\ [p]_\\times R & R \\end{bmatrix}

    transforms both kinds from frame A to frame B, where ``(R, p)`` is the pose
    of A expressed in B.
    """

    @staticmethod
    def from_rotation_and_translation(
        rotation: jtp.MatrixLike | None = None,
        translation: jtp.VectorLike | None = None,
        inverse: bool = False,
    ) -> jtp.Matrix:
        """
        Create an adjoint matrix from a rotation matrix and a translation vector.

        Args:
            rotation: The 3x3 rotation of frame A expressed in frame B.
            translation: The origin of frame A expressed in frame B.
            inverse: Whether to compute the inverse adjoint, from B to A.

        Returns:
            The 6x6 adjoint matrix.
        """

        R = jnp.eye(3) if rotation is None else jnp.array(rotation, dtype=float)
        p = jnp.zeros(3) if translation is None else jnp.array(translation, dtype=float)

        assert R.shape == (3, 3)
        assert p.size == 3

        if not inverse:
            return jnp.block(
                [
                    [R, jnp.zeros((3, 3))],
                    [Skew.wedge(p) @ R, R],
                ]
            )

        return jnp.block(
            [
                [R.T, jnp.zeros((3, 3))],
                [-R.T @ Skew.wedge(p), R.T],
            ]
        )
