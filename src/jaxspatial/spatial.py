"""
Six-dimensional motion and force vectors tagged with the frame they are expressed in.

Motion vectors (axes, velocities, accelerations) are stored as
``[angular; linear]``, force vectors (forces, momenta) as ``[linear; angular]``.
With this layout the reciprocal product of a motion and a force vector pairs
the upper half of one operand with the lower half of the other, and the same
6x6 matrix changes the frame of both kinds.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, ClassVar, Self

import jax.numpy as jnp
import jax_dataclasses
from jax_dataclasses import Static

import jaxspatial.typing as jtp
from jaxspatial import exceptions
from jaxspatial.math import Cross
from jaxspatial.utils import JaxSpatialDataclass

if TYPE_CHECKING:
    from jaxspatial.transform import Transform


@enum.unique
class SpatialKind(enum.IntEnum):
    """
    Enumeration of the semantic kinds of spatial vectors.
    """

    Axis = enum.auto()
    Velocity = enum.auto()
    Acceleration = enum.auto()
    Force = enum.auto()
    Momentum = enum.auto()

    @property
    def is_motion(self) -> bool:
        return self in {SpatialKind.Axis, SpatialKind.Velocity, SpatialKind.Acceleration}

    @property
    def is_force(self) -> bool:
        return not self.is_motion


@jax_dataclasses.pytree_dataclass
class SpatialVector(JaxSpatialDataclass):
    """
    Base class of the frame-tagged 6D vectors.

    Attributes:
        vector: The six components, in the layout of the kind of the vector.
        frame: The handle of the frame the vector is expressed in.
    """

    vector: jtp.Vector
    frame: Static[jtp.FrameHandle]

    kind: ClassVar[SpatialKind]

    @classmethod
    def build(
        cls,
        angular: jtp.VectorLike | None = None,
        linear: jtp.VectorLike | None = None,
        *,
        frame: jtp.FrameHandle,
    ) -> Self:
        """
        Build a spatial vector from its angular and linear parts.

        Args:
            angular: The angular part, zero if omitted.
            linear: The linear part, zero if omitted.
            frame: The handle of the frame the vector is expressed in.

        Returns:
            The spatial vector.
        """

        angular = jnp.zeros(3) if angular is None else jnp.array(angular, dtype=float)
        linear = jnp.zeros(3) if linear is None else jnp.array(linear, dtype=float)

        for part in (angular, linear):
            if part.shape != (3,):
                raise exceptions.SizeMismatchError(
                    expected=3, got=part.size, what=f"{cls.__name__} part"
                )

        if cls.kind.is_motion:
            return cls(vector=jnp.hstack([angular, linear]), frame=frame)

        return cls(vector=jnp.hstack([linear, angular]), frame=frame)

    @classmethod
    def from_array(cls, array: jtp.VectorLike, *, frame: jtp.FrameHandle) -> Self:
        """Build a spatial vector from its six components in storage layout."""

        array = jnp.array(array, dtype=float)

        if array.shape != (6,):
            raise exceptions.SizeMismatchError(expected=6, got=array.size)

        return cls(vector=array, frame=frame)

    @classmethod
    def zero(cls, frame: jtp.FrameHandle) -> Self:

        return cls(vector=jnp.zeros(6), frame=frame)

    # =========
    # Accessors
    # =========

    @property
    def upper(self) -> jtp.Vector:
        return self.vector[0:3]

    @property
    def lower(self) -> jtp.Vector:
        return self.vector[3:6]

    @property
    def angular(self) -> jtp.Vector:
        return self.upper if self.kind.is_motion else self.lower

    @property
    def linear(self) -> jtp.Vector:
        return self.lower if self.kind.is_motion else self.upper

    def to_array(self) -> jtp.Vector:
        return self.vector

    # ==========
    # Arithmetic
    # ==========

    def _check_operand(self, other: SpatialVector) -> None:

        if type(other) is not type(self):
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )

        if other.frame != self.frame:
            raise exceptions.FrameMismatchError(expected=self.frame, got=other.frame)

    def __add__(self, other: SpatialVector) -> Self:

        self._check_operand(other)
        return self.replace(vector=self.vector + other.vector)

    def __sub__(self, other: SpatialVector) -> Self:

        self._check_operand(other)
        return self.replace(vector=self.vector - other.vector)

    def __neg__(self) -> Self:

        return self.replace(vector=-self.vector)

    def __mul__(self, scalar: jtp.FloatLike) -> Self:

        return self.replace(vector=self.vector * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: jtp.FloatLike) -> Self:

        return self.replace(vector=self.vector / scalar)

    def transform(self, transform: Transform) -> Self:
        """
        Change the frame of the vector.

        Args:
            transform: A Transform whose source is the frame of the vector.

        Returns:
            The same quantity expressed in the target frame of the transform.
        """

        return transform.transform_spatial(self)


@jax_dataclasses.pytree_dataclass
class SAxis(SpatialVector):
    """A unit motion direction associated with one joint degree of freedom."""

    kind: ClassVar[SpatialKind] = SpatialKind.Axis


@jax_dataclasses.pytree_dataclass
class SVelocity(SpatialVector):
    """A spatial velocity (twist)."""

    kind: ClassVar[SpatialKind] = SpatialKind.Velocity


@jax_dataclasses.pytree_dataclass
class SAcceleration(SpatialVector):
    """A spatial acceleration."""

    kind: ClassVar[SpatialKind] = SpatialKind.Acceleration


@jax_dataclasses.pytree_dataclass
class SForce(SpatialVector):
    """A spatial force (wrench)."""

    kind: ClassVar[SpatialKind] = SpatialKind.Force


@jax_dataclasses.pytree_dataclass
class SMomentum(SpatialVector):
    """A spatial momentum."""

    kind: ClassVar[SpatialKind] = SpatialKind.Momentum


Twist = SVelocity
Wrench = SForce


def dot(a: SpatialVector, b: SpatialVector) -> jtp.Float:
    """
    Compute the reciprocal product of a motion vector and a force vector.

    The product is symmetric and gives the power of a force acting along a
    velocity: ``angular(m) . angular(f) + linear(m) . linear(f)``, computed
    from the storage layouts as ``upper(a) . lower(b) + lower(a) . upper(b)``.

    Args:
        a: A motion or force vector.
        b: A vector of the dual family, expressed in the same frame.

    Returns:
        The scalar reciprocal product.

    Raises:
        TypeError: If both operands are motion vectors or both are forces.
        FrameMismatchError: If the operands are expressed in different frames.
    """

    if a.kind.is_motion == b.kind.is_motion:
        raise TypeError(
            "The reciprocal product pairs a motion vector with a force vector, "
            f"got {type(a).__name__} and {type(b).__name__}"
        )

    if a.frame != b.frame:
        raise exceptions.FrameMismatchError(expected=a.frame, got=b.frame)

    return jnp.dot(a.upper, b.lower) + jnp.dot(a.lower, b.upper)


def cross(m: SpatialVector, x: SpatialVector) -> SpatialVector:
    """
    Compute the spatial cross product of a motion vector with another vector.

    Args:
        m: The motion vector.
        x: A motion vector, or a force vector for the dual product.

    Returns:
        A SAcceleration if ``x`` is a motion vector, otherwise a force vector of
        the same kind as ``x``.

    Raises:
        TypeError: If ``m`` is not a motion vector.
        FrameMismatchError: If the operands are expressed in different frames.
    """

    if not m.kind.is_motion:
        raise TypeError(f"Expected a motion vector, got {type(m).__name__}")

    if m.frame != x.frame:
        raise exceptions.FrameMismatchError(expected=m.frame, got=x.frame)

    if x.kind.is_motion:
        return SAcceleration(vector=Cross.crm(m.vector) @ x.vector, frame=m.frame)

    return x.replace(vector=Cross.crf(m.vector) @ x.vector)
