import jax.numpy as jnp

import jaxspatial.typing as jtp
from jaxspatial.math import Basis
from jaxspatial.pose import Pose

from .common import JointType, RotationalJoint


class RevoluteJoint(RotationalJoint):
    """
    A joint rotating about a single axis.
    """

    joint_type = JointType.Revolute
    dofs = 1

    def _complete_axes(self) -> jtp.Matrix | None:

        return self._axes if self._given[0] else None

    def _basis(self) -> jtp.Matrix:

        u = self._axes[0]
        return jnp.column_stack([u, *Basis.orthonormal_completion(u)])

    def _determine_q(self, pose: Pose | jtp.MatrixLike) -> jtp.Vector:

        R = self._relative_rotation(pose)
        return jnp.array([jnp.arctan2(R[2, 1], R[1, 1])])
