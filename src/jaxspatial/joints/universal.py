import jax.numpy as jnp

import jaxspatial.typing as jtp
from jaxspatial.math import Basis
from jaxspatial.pose import Pose

from .common import JointType, RotationalJoint


class UniversalJoint(RotationalJoint):
    """
    A joint rotating about two orthogonal axes.

    The second axis is carried by the rotation about the first one.
    """

    joint_type = JointType.Universal
    dofs = 2
    default_singular_tol = 1e-2

    def _complete_axes(self) -> jtp.Matrix | None:

        u0, u1 = self._axes

        match self._given:
            case [True, True]:
                return self._axes
            case [True, False]:
                u1, _ = Basis.orthonormal_completion(u0)
            case [False, True]:
                _, u0 = Basis.orthonormal_completion(u1)
            case _:
                return None

        return jnp.stack([u0, u1])

    def _basis(self) -> jtp.Matrix:

        u0, u1 = self._axes
        return jnp.column_stack([u0, u1, jnp.cross(u0, u1)])

    def _determine_q(self, pose: Pose | jtp.MatrixLike) -> jtp.Vector:

        # R' = Rx(q0) Ry(q1)
        R = self._relative_rotation(pose)

        return jnp.array(
            [
                jnp.arctan2(R[2, 1], R[1, 1]),
                jnp.arctan2(R[0, 2], R[0, 0]),
            ]
        )
