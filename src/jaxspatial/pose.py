from __future__ import annotations

import jax.numpy as jnp
import jax_dataclasses
import jaxlie
from jax_dataclasses import Static

import jaxspatial.typing as jtp
from jaxspatial import exceptions
from jaxspatial.math import DEFAULT_TOLERANCE, Rotation
from jaxspatial.utils import JaxSpatialDataclass, not_tracing

# Handle of the global (world) frame.
GLOBAL_FRAME: jtp.FrameHandle = -1


def _check_dim(rotation: jtp.Matrix, translation: jtp.Vector) -> None:

    if rotation.shape not in {(2, 2), (3, 3)}:
        raise exceptions.SizeMismatchError(
            expected=3, got=rotation.shape[0], what="rotation matrix"
        )

    if translation.shape != (rotation.shape[0],):
        raise exceptions.SizeMismatchError(
            expected=rotation.shape[0], got=translation.size, what="translation"
        )


def validate_rotation(rotation: jtp.Matrix, tol: float = DEFAULT_TOLERANCE) -> None:
    """
    Check that a matrix is a proper rotation.

    Args:
        rotation: The 2x2 or 3x3 matrix to check.
        tol: The tolerance on the orthonormality error.

    Raises:
        ValueError: If the matrix is not orthonormal with positive determinant.
    """

    error = Rotation.orthonormality_error(rotation)

    if not_tracing(error):
        if float(error) > tol:
            raise ValueError(f"Rotation matrix is not orthonormal (error={error})")
        return

    exceptions.raise_value_error_if(
        condition=error > tol,
        msg="Rotation matrix is not orthonormal (error={error})",
        error=error,
    )


@jax_dataclasses.pytree_dataclass
class Pose(JaxSpatialDataclass):
    """
    A rigid position and orientation expressed relative to another frame.

    Attributes:
        rotation: The 3x3 (or 2x2 for planar poses) orientation of the frame.
        translation: The origin of the frame.
        relative_to: The handle of the frame this pose is expressed in.
    """

    rotation: jtp.Matrix
    translation: jtp.Vector
    relative_to: Static[jtp.FrameHandle]

    @staticmethod
    def build(
        rotation: jtp.MatrixLike | None = None,
        translation: jtp.VectorLike | None = None,
        *,
        relative_to: jtp.FrameHandle,
        validate: bool = True,
    ) -> Pose:
        """
        Build a pose.

        Args:
            rotation: The orientation, identity if omitted.
            translation: The origin, zero if omitted.
            relative_to: The handle of the frame the pose is expressed in.
            validate: Whether to check the orthonormality of the rotation.

        Returns:
            The pose.
        """

        if rotation is None:
            dim = 3 if translation is None else jnp.array(translation).size
            rotation = jnp.eye(dim)

        R = jnp.array(rotation, dtype=float)
        x = (
            jnp.zeros(R.shape[0])
            if translation is None
            else jnp.array(translation, dtype=float).reshape(-1)
        )

        _check_dim(rotation=R, translation=x)

        if validate:
            validate_rotation(R)

        return Pose(rotation=R, translation=x, relative_to=relative_to)

    @staticmethod
    def identity(relative_to: jtp.FrameHandle, dim: int = 3) -> Pose:

        return Pose.build(
            rotation=jnp.eye(dim),
            translation=jnp.zeros(dim),
            relative_to=relative_to,
            validate=False,
        )

    @staticmethod
    def from_quaternion_and_translation(
        quaternion: jtp.VectorLike | None = None,
        translation: jtp.VectorLike | None = None,
        *,
        relative_to: jtp.FrameHandle,
    ) -> Pose:
        """
        Build a 3D pose from a quaternion and a translation.

        Args:
            quaternion: The orientation as a wxyz quaternion, normalized here.
            translation: The origin.
            relative_to: The handle of the frame the pose is expressed in.

        Returns:
            The pose.
        """

        quaternion = (
            jnp.array([1.0, 0, 0, 0])
            if quaternion is None
            else jnp.array(quaternion, dtype=float)
        )

        R = jaxlie.SO3(wxyz=quaternion).normalize().as_matrix()

        return Pose.build(
            rotation=R, translation=translation, relative_to=relative_to, validate=False
        )

    @property
    def dim(self) -> int:
        return self.rotation.shape[0]

    def as_matrix(self) -> jtp.Matrix:
        """Return the homogeneous matrix of the pose."""

        n = self.dim

        return (
            jnp.eye(n + 1)
            .at[0:n, 0:n]
            .set(self.rotation)
            .at[0:n, n]
            .set(self.translation)
        )

    def quaternion(self) -> jtp.Vector:
        """Return the orientation of a 3D pose as a wxyz quaternion."""

        return jaxlie.SO3.from_matrix(self.rotation).wxyz

    @staticmethod
    def rel_equal(p1: Pose, p2: Pose, tol: float = DEFAULT_TOLERANCE) -> bool:
        """
        Approximately compare two poses.

        Args:
            p1: The first pose.
            p2: The second pose.
            tol: The tolerance on both the angular and the translational distance.

        Returns:
            True if the poses are expressed in the same frame and their relative
            rotation angle and translation distance are both within ``tol``.
        """

        if p1.relative_to != p2.relative_to or p1.dim != p2.dim:
            return False

        angle = Rotation.angular_distance(p1.rotation, p2.rotation)
        distance = jnp.linalg.norm(p1.translation - p2.translation)

        return bool(angle <= tol) and bool(distance <= tol)


@jax_dataclasses.pytree_dataclass
class Point(JaxSpatialDataclass):
    """
    A point with coordinates expressed in a frame.

    Transforms apply both rotation and translation to points.
    """

    coordinates: jtp.Vector
    frame: Static[jtp.FrameHandle]

    @staticmethod
    def build(coordinates: jtp.VectorLike, *, frame: jtp.FrameHandle) -> Point:

        return Point(coordinates=jnp.array(coordinates, dtype=float), frame=frame)


@jax_dataclasses.pytree_dataclass
class Vector(JaxSpatialDataclass):
    """
    A free vector with components expressed in a frame.

    Transforms apply only their rotation to free vectors.
    """

    coordinates: jtp.Vector
    frame: Static[jtp.FrameHandle]

    @staticmethod
    def build(coordinates: jtp.VectorLike, *, frame: jtp.FrameHandle) -> Vector:

        return Vector(coordinates=jnp.array(coordinates, dtype=float), frame=frame)
