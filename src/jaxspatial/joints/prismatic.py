import jax.numpy as jnp

import jaxspatial.typing as jtp
from jaxspatial import exceptions
from jaxspatial.pose import Pose

from .common import Joint, JointType


class PrismaticJoint(Joint):
    """
    A joint translating along a single axis.
    """

    joint_type = JointType.Prismatic
    dofs = 1

    def _complete_axes(self) -> jtp.Matrix | None:

        return self._axes if self._given[0] else None

    def _effective_axes(self) -> jtp.Matrix:

        return self._axes

    def _spatial_axes_array(self) -> jtp.Matrix:

        return jnp.hstack([jnp.zeros_like(self._axes), self._axes])

    def _spatial_axes_dot_array(self) -> jtp.Matrix:

        return jnp.zeros((1, 6))

    def _rotation(self) -> jtp.Matrix:

        return jnp.eye(3)

    def _translation(self) -> jtp.Vector:

        return self._axes[0] * (self._q[0] + self._q_tare[0])

    def _determine_q(self, pose: Pose | jtp.VectorLike) -> jtp.Vector:

        x = (
            pose.translation
            if isinstance(pose, Pose)
            else jnp.array(pose, dtype=float).reshape(-1)
        )

        if x.shape != (3,):
            raise exceptions.SizeMismatchError(expected=3, got=x.size, what="translation")

        return jnp.array([jnp.dot(self._axes[0], x)])
