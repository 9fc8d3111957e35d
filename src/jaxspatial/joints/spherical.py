import jax.numpy as jnp

import jaxspatial.typing as jtp
from jaxspatial import exceptions
from jaxspatial.logging import jaxspatial_warn
from jaxspatial.math import Basis
from jaxspatial.pose import Pose

from .common import JointType, RotationalJoint


class SphericalJoint(RotationalJoint):
    """
    A ball joint rotating about three mutually orthogonal axes.

    The orientation is parametrized by three successive rotations, so that the
    joint becomes singular when the first and the last effective axes align.
    """

    joint_type = JointType.Spherical
    dofs = 3
    default_singular_tol = 1e-2

    def _complete_axes(self) -> jtp.Matrix | None:

        given = [i for i, g in enumerate(self._given) if g]
        u = list(self._axes)

        match len(given):
            case 3:
                return self._axes

            case 2:
                # Cyclic completion: u0 = u1 x u2, u1 = u2 x u0, u2 = u0 x u1.
                (i,) = set(range(3)) - set(given)
                u[i] = jnp.cross(u[(i + 1) % 3], u[(i + 2) % 3])

            case 1:
                (i,) = given
                u[(i + 1) % 3], u[(i + 2) % 3] = Basis.orthonormal_completion(u[i])

            case _:
                return None

        return jnp.stack(u)

    def _basis(self) -> jtp.Matrix:

        B = self._axes.T

        if not jnp.linalg.det(B) > 0:
            raise exceptions.PreconditionViolationError(
                f"The axes of joint '{self.name}' are not right-handed"
            )

        return B

    def _determine_q(self, pose: Pose | jtp.MatrixLike) -> jtp.Vector:

        # R' = Rx(q0) Ry(q1) Rz(q2)
        R = self._relative_rotation(pose)

        if jnp.hypot(R[0, 0], R[0, 1]) < self.singular_tol:
            jaxspatial_warn(
                f"Joint '{self.name}' is close to a singular configuration, "
                "the first and last coordinates are not unique"
            )

        return jnp.array(
            [
                jnp.arctan2(-R[1, 2], R[2, 2]),
                jnp.arctan2(R[0, 2], jnp.sqrt(R[0, 0] ** 2 + R[0, 1] ** 2)),
                jnp.arctan2(-R[0, 1], R[0, 0]),
            ]
        )
