from __future__ import annotations

from typing import TYPE_CHECKING

import jax.numpy as jnp
import jax_dataclasses
from jax_dataclasses import Static

import jaxspatial.typing as jtp
from jaxspatial import exceptions
from jaxspatial.math import DEFAULT_TOLERANCE, Adjoint, Rotation
from jaxspatial.utils import JaxSpatialDataclass

from .pose import Point, Pose, Vector, validate_rotation

if TYPE_CHECKING:
    from jaxspatial.spatial import SpatialVector


@jax_dataclasses.pytree_dataclass
class Transform(JaxSpatialDataclass):
    """
    A rigid transformation mapping quantities expressed in ``source`` into ``target``.

    Attributes:
        rotation: The orientation of the source frame expressed in the target frame.
        translation: The origin of the source frame expressed in the target frame.
        source: The handle of the frame the transform maps from.
        target: The handle of the frame the transform maps to.
    """

    rotation: jtp.Matrix
    translation: jtp.Vector
    source: Static[jtp.FrameHandle]
    target: Static[jtp.FrameHandle]

    @staticmethod
    def build(
        rotation: jtp.MatrixLike | None = None,
        translation: jtp.VectorLike | None = None,
        *,
        source: jtp.FrameHandle,
        target: jtp.FrameHandle,
        validate: bool = True,
    ) -> Transform:
        """
        Build a transform.

        Args:
            rotation: The rotation, identity if omitted.
            translation: The translation, zero if omitted.
            source: The handle of the source frame.
            target: The handle of the target frame.
            validate: Whether to check the orthonormality of the rotation.

        Returns:
            The transform from ``source`` to ``target``.
        """

        pose = Pose.build(
            rotation=rotation,
            translation=translation,
            relative_to=target,
            validate=validate,
        )

        return Transform.from_pose(pose=pose, source=source)

    @staticmethod
    def identity(frame: jtp.FrameHandle, dim: int = 3) -> Transform:
        """Return the identity transform from a frame onto itself."""

        return Transform(
            rotation=jnp.eye(dim),
            translation=jnp.zeros(dim),
            source=frame,
            target=frame,
        )

    @staticmethod
    def from_pose(pose: Pose, source: jtp.FrameHandle) -> Transform:
        """
        Create the transform from the frame described by a pose to its reference.

        Args:
            pose: The pose of the ``source`` frame, expressed relative to the target.
            source: The handle of the frame described by the pose.

        Returns:
            The transform from ``source`` to ``pose.relative_to``.
        """

        return Transform(
            rotation=pose.rotation,
            translation=pose.translation,
            source=source,
            target=pose.relative_to,
        )

    @property
    def dim(self) -> int:
        return self.rotation.shape[0]

    def as_matrix(self) -> jtp.Matrix:
        """Return the homogeneous matrix of the transform."""

        return Pose(
            rotation=self.rotation,
            translation=self.translation,
            relative_to=self.target,
        ).as_matrix()

    def as_pose(self) -> Pose:
        """Return the pose of the source frame relative to the target frame."""

        return Pose(
            rotation=self.rotation,
            translation=self.translation,
            relative_to=self.target,
        )

    def adjoint(self, inverse: bool = False) -> jtp.Matrix:
        """
        Return the 6x6 matrix changing the frame of spatial vectors.

        Args:
            inverse: Whether to return the matrix mapping from ``target`` to ``source``.
        """

        if self.dim != 3:
            raise exceptions.SizeMismatchError(
                expected=3, got=self.dim, what="transform"
            )

        return Adjoint.from_rotation_and_translation(
            rotation=self.rotation, translation=self.translation, inverse=inverse
        )

    # ===========
    # Composition
    # ===========

    @staticmethod
    def compose(T1: Transform, T2: Transform) -> Transform:
        """
        Compose two transforms, applying ``T1`` first and ``T2`` second.

        Args:
            T1: The transform from frame A to frame B.
            T2: The transform from frame B to frame C.

        Returns:
            The transform from frame A to frame C.

        Raises:
            FrameMismatchError: If the target of T1 is not the source of T2.
        """

        if T1.target != T2.source:
            raise exceptions.FrameMismatchError(
                expected=T2.source, got=T1.target, what="composed transform"
            )

        if T1.dim != T2.dim:
            raise exceptions.SizeMismatchError(
                expected=T2.dim, got=T1.dim, what="composed transform"
            )

        return Transform(
            rotation=T2.rotation @ T1.rotation,
            translation=T2.rotation @ T1.translation + T2.translation,
            source=T1.source,
            target=T2.target,
        )

    def __matmul__(self, other: Transform) -> Transform:
        # Matrix-like notation: (C_T_B @ B_T_A) == A -> C.
        return Transform.compose(other, self)

    def inverse(self) -> Transform:
        """Return the transform from ``target`` back to ``source``."""

        R_T = self.rotation.T

        return Transform(
            rotation=R_T,
            translation=-R_T @ self.translation,
            source=self.target,
            target=self.source,
        )

    # ===============
    # Transformations
    # ===============

    def _check_frame(self, frame: jtp.FrameHandle, expected: jtp.FrameHandle) -> None:

        if frame != expected:
            raise exceptions.FrameMismatchError(expected=expected, got=frame)

    def transform_point(self, point: Point) -> Point:
        """Map a point expressed in ``source`` into ``target``."""

        self._check_frame(point.frame, self.source)

        return Point(
            coordinates=self.rotation @ point.coordinates + self.translation,
            frame=self.target,
        )

    def transform_vector(self, vector: Vector) -> Vector:
        """Map a free vector expressed in ``source`` into ``target``."""

        self._check_frame(vector.frame, self.source)

        return Vector(coordinates=self.rotation @ vector.coordinates, frame=self.target)

    def transform_pose(self, pose: Pose) -> Pose:
        """Re-express a pose given relative to ``source`` relative to ``target``."""

        self._check_frame(pose.relative_to, self.source)

        return Pose(
            rotation=self.rotation @ pose.rotation,
            translation=self.rotation @ pose.translation + self.translation,
            relative_to=self.target,
        )

    def transform_spatial(self, vector: SpatialVector) -> SpatialVector:
        """Change the frame of a spatial vector from ``source`` to ``target``."""

        self._check_frame(vector.frame, self.source)

        return vector.replace(
            validate=False,
            vector=self.adjoint() @ vector.vector,
            frame=self.target,
        )

    def inverse_transform_point(self, point: Point) -> Point:
        """Map a point expressed in ``target`` back into ``source``."""

        self._check_frame(point.frame, self.target)

        return Point(
            coordinates=self.rotation.T @ (point.coordinates - self.translation),
            frame=self.source,
        )

    def inverse_transform_vector(self, vector: Vector) -> Vector:
        """Map a free vector expressed in ``target`` back into ``source``."""

        self._check_frame(vector.frame, self.target)

        return Vector(
            coordinates=self.rotation.T @ vector.coordinates, frame=self.source
        )

    def inverse_transform_pose(self, pose: Pose) -> Pose:
        """Re-express a pose given relative to ``target`` relative to ``source``."""

        return self.inverse().transform_pose(pose)

    def inverse_transform_spatial(self, vector: SpatialVector) -> SpatialVector:
        """Change the frame of a spatial vector from ``target`` back to ``source``."""

        self._check_frame(vector.frame, self.target)

        return vector.replace(
            validate=False,
            vector=self.adjoint(inverse=True) @ vector.vector,
            frame=self.source,
        )

    # ==========
    # Comparison
    # ==========

    @staticmethod
    def rel_equal(T1: Transform, T2: Transform, tol: float = DEFAULT_TOLERANCE) -> bool:
        """
        Approximately compare two transforms.

        Args:
            T1: The first transform.
            T2: The second transform.
            tol: The tolerance on both the angular and the translational distance.

        Returns:
            True if both transforms connect the same frames and differ by less
            than ``tol`` in rotation angle and translation.
        """

        if (T1.source, T1.target) != (T2.source, T2.target):
            return False

        return Pose.rel_equal(T1.as_pose(), T2.as_pose(), tol=tol)

    def validate(self, tol: float = DEFAULT_TOLERANCE) -> None:
        """Check that the rotation of the transform is orthonormal."""

        validate_rotation(self.rotation, tol=tol)

    def is_identity(self, tol: float = DEFAULT_TOLERANCE) -> bool:

        return bool(
            Rotation.angular_distance(self.rotation, jnp.eye(self.dim)) <= tol
        ) and bool(jnp.linalg.norm(self.translation) <= tol)
