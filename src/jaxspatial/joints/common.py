from __future__ import annotations

import abc
import enum
from typing import ClassVar

import jax.numpy as jnp

import jaxspatial.typing as jtp
from jaxspatial import exceptions, logging
from jaxspatial.math import AXIS_EPSILON, DEFAULT_TOLERANCE, Basis
from jaxspatial.pose import Pose, Vector
from jaxspatial.pose_tree import PoseTree
from jaxspatial.spatial import SAxis

from . import kinematics


class JointType:
    """
    Enumeration of joint types.
    """

    Revolute: ClassVar[int] = 1
    Prismatic: ClassVar[int] = 2
    Universal: ClassVar[int] = 3
    Spherical: ClassVar[int] = 4


@enum.unique
class JointState(enum.IntEnum):
    """
    Enumeration of the states of the derived quantities of a joint.

    Unassigned: the axes do not yet form a complete orthonormal basis.
    Assigned: the axes are complete, the spatial axes were never computed.
    Current: the cached spatial axes match the current coordinates.
    Stale: the cached spatial axes were invalidated by a mutation.
    """

    Unassigned = enum.auto()
    Assigned = enum.auto()
    Current = enum.auto()
    Stale = enum.auto()


class Joint(abc.ABC):
    """
    Base class of the joints connecting an inboard and an outboard body.

    A joint owns two frames of the pose tree: the joint frame ``F``, fixed to
    the inboard body, and the induced frame ``F'``, whose pose relative to ``F``
    is the motion produced by the joint coordinates. Axes are stored expressed
    in ``F``. The spatial axes and their derivatives are caches recomputed on
    demand after every change of the coordinates or of the axes.

    Attributes:
        tree: The pose tree holding the frames of the joint.
        name: The name of the joint, also the name of its frame.
        frame: The handle of the joint frame ``F``.
        induced_frame: The handle of the induced frame ``F'``.
        inboard: The handle of the inboard body frame, None until connected.
        outboard: The handle of the outboard body frame, None until connected.
        singular_tol: The conditioning below which the joint is singular.
    """

    joint_type: ClassVar[int]
    dofs: ClassVar[int]
    default_singular_tol: ClassVar[float] = DEFAULT_TOLERANCE

    def __init__(
        self,
        tree: PoseTree,
        pose: Pose | None = None,
        *,
        name: str | None = None,
        singular_tol: float | None = None,
    ) -> None:
        """
        Create a joint and add its frames to a pose tree.

        Args:
            tree: The pose tree of the bodies connected by the joint.
            pose: The pose of the joint frame, identity in the global frame if omitted.
            name: The unique name of the joint frame.
            singular_tol: Override of the default singularity tolerance.
        """

        if tree.dim != 3:
            raise exceptions.SizeMismatchError(
                expected=3, got=tree.dim, what="pose tree"
            )

        self.tree = tree
        self.frame = tree.add(pose, name=name)
        self.name = tree.name(self.frame)
        self.induced_frame = tree.add(
            Pose.identity(relative_to=self.frame, dim=tree.dim),
            name=f"{self.name}_induced",
        )

        self.inboard: jtp.FrameHandle | None = None
        self.outboard: jtp.FrameHandle | None = None

        self.singular_tol = (
            singular_tol if singular_tol is not None else self.default_singular_tol
        )

        k = self.num_dof()
        self._q = jnp.zeros(k)
        self._qd = jnp.zeros(k)
        self._q_tare = jnp.zeros(k)

        self._axes = jnp.zeros((k, 3))
        self._given = [False] * k
        self._assigned = False
        self._computed = False

        self._spatial_axes: tuple[SAxis, ...] | None = None
        self._spatial_axes_dot: tuple[SAxis, ...] | None = None
        self._induced_pose: Pose | None = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, frame={self.frame}, "
            f"inboard={self.inboard}, outboard={self.outboard}, "
            f"state={self.state.name})"
        )

    def num_dof(self) -> int:
        return self.dofs

    @property
    def state(self) -> JointState:

        if self._spatial_axes is not None:
            return JointState.Current

        if not self._assigned and self._complete_axes() is None:
            return JointState.Unassigned

        if self._computed:
            return JointState.Stale

        return JointState.Assigned if self._assigned else JointState.Unassigned

    def _invalidate(self) -> None:

        self._spatial_axes = None
        self._spatial_axes_dot = None
        self._induced_pose = None

    def _sync_induced_frame(self) -> None:

        # Keep the induced frame of the pose tree at the current coordinates.
        if self._assigned:
            _ = self.get_induced_pose()

    # ===========
    # Coordinates
    # ===========

    def _check_coordinates(self, value: jtp.VectorLike, what: str) -> jtp.Vector:

        value = jnp.atleast_1d(jnp.array(value, dtype=float))

        if value.shape != (self.num_dof(),):
            raise exceptions.SizeMismatchError(
                expected=self.num_dof(), got=value.size, what=what
            )

        return value

    @property
    def q(self) -> jtp.Vector:
        return self._q

    @q.setter
    def q(self, q: jtp.VectorLike) -> None:
        self._q = self._check_coordinates(q, what="q")
        self._invalidate()
        self._sync_induced_frame()

    @property
    def qd(self) -> jtp.Vector:
        return self._qd

    @qd.setter
    def qd(self, qd: jtp.VectorLike) -> None:
        self._qd = self._check_coordinates(qd, what="qd")
        self._invalidate()

    @property
    def q_tare(self) -> jtp.Vector:
        return self._q_tare

    @q_tare.setter
    def q_tare(self, q_tare: jtp.VectorLike) -> None:
        self._q_tare = self._check_coordinates(q_tare, what="q_tare")
        self._invalidate()
        self._sync_induced_frame()

    # ==========
    # Connection
    # ==========

    def connect(self, inboard: jtp.FrameHandle, outboard: jtp.FrameHandle) -> None:
        """
        Connect the joint to its inboard and outboard bodies.

        The joint frame is re-expressed relative to the inboard body and the
        outboard body relative to the induced frame, both keeping their current
        global pose. Afterwards, moving the joint moves the outboard body.

        Args:
            inboard: The handle of the frame of the inboard body.
            outboard: The handle of the frame of the outboard body.
        """

        for body in (inboard, outboard):
            if body not in self.tree:
                raise exceptions.InvalidIndexError(f"Invalid body frame '{body}'")

        if inboard == outboard:
            raise ValueError("The inboard and outboard bodies must differ")

        if outboard in self.tree.chain(inboard) or outboard in (
            self.frame,
            self.induced_frame,
        ):
            raise ValueError(
                f"Connecting '{self.tree.name(outboard)}' as outboard body "
                f"of joint '{self.name}' creates a cycle"
            )

        # Write the current motion of the joint in the tree, when known.
        if self._complete_axes() is not None:
            _ = self.get_induced_pose()

        tree = self.tree
        tree.update(self.frame, tree.express(tree.get(self.frame), inboard))
        tree.update(outboard, tree.express(tree.get(outboard), self.induced_frame))

        self.inboard = inboard
        self.outboard = outboard
        self._invalidate()

        logging.debug(
            msg=f"Connected joint '{self.name}': "
            f"'{tree.name(inboard)}' -> '{tree.name(outboard)}'"
        )

    def _check_connected(self) -> None:

        if self.inboard is None or self.outboard is None:
            raise exceptions.PreconditionViolationError(
                f"Joint '{self.name}' is not connected to its bodies"
            )

    # ====
    # Axes
    # ====

    def _check_index(self, index: int) -> None:

        if not 0 <= index < self.num_dof():
            raise exceptions.InvalidIndexError(
                f"Axis index {index} out of range for a joint with "
                f"{self.num_dof()} degrees of freedom"
            )

    def set_axis(self, index: int, direction: Vector | jtp.VectorLike) -> None:
        """
        Set one of the axes of the joint.

        Args:
            index: The index of the axis.
            direction: The direction of the axis, normalized here. A Vector is
                rotated into the joint frame, plain coordinates are taken as
                expressed in the joint frame. A zero direction clears the axis.
        """

        self._check_index(index)

        if isinstance(direction, Vector):
            direction = self.tree.transform_vector(direction, self.frame).coordinates

        u = jnp.array(direction, dtype=float).reshape(-1)

        if u.shape != (3,):
            raise exceptions.SizeMismatchError(expected=3, got=u.size, what="axis")

        norm = jnp.linalg.norm(u)
        given = bool(norm > AXIS_EPSILON)

        self._axes = self._axes.at[index].set(u / norm if given else jnp.zeros(3))
        self._given[index] = given
        self._assigned = False
        self._invalidate()

    @abc.abstractmethod
    def _complete_axes(self) -> jtp.Matrix | None:
        """
        Complete the given axes.

        Returns:
            The (k, 3) matrix of axes, or None if the given axes are not enough.
        """
        pass

    def assign_axes(self) -> bool:
        """
        Complete the axes that were not set into a right-handed orthonormal basis.

        Returns:
            False if the axes that were set do not determine the missing ones.

        Raises:
            ValueError: If the completed axes are not orthonormal.
        """

        if self._assigned:
            return True

        axes = self._complete_axes()

        if axes is None:
            logging.warning(
                msg=f"Cannot assign the axes of joint '{self.name}', set at least one axis"
            )
            return False

        if not Basis.is_orthonormal(axes, tol=DEFAULT_TOLERANCE):
            raise ValueError(f"The axes of joint '{self.name}' are not orthonormal")

        self._axes = axes
        self._assigned = True

        logging.debug(msg=f"Assigned axes of joint '{self.name}':\n{axes}")

        return True

    def _require_axes(self) -> None:

        if not self.assign_axes():
            raise exceptions.PreconditionViolationError(
                f"The axes of joint '{self.name}' cannot be assigned"
            )

    @property
    def axes(self) -> jtp.Matrix:
        """The (k, 3) matrix of the axes in the zero configuration, one per row."""

        return self._axes

    @abc.abstractmethod
    def _effective_axes(self) -> jtp.Matrix:
        pass

    @abc.abstractmethod
    def _spatial_axes_array(self) -> jtp.Matrix:
        pass

    @abc.abstractmethod
    def _spatial_axes_dot_array(self) -> jtp.Matrix:
        pass

    def get_axis(self, index: int) -> Vector:
        """
        Return an axis of the joint in the current configuration.

        Args:
            index: The index of the axis.

        Returns:
            The axis, rotated by the motion of the preceding axes and expressed
            in the joint frame.
        """

        self._check_index(index)
        self._require_axes()

        return Vector(coordinates=self._effective_axes()[index], frame=self.frame)

    # ============
    # Spatial axes
    # ============

    def update_spatial_axes(self) -> bool:
        """
        Recompute the spatial axes of the joint from the current coordinates.

        Returns:
            False if the axes of the joint cannot be assigned.
        """

        if not self.assign_axes():
            return False

        self._spatial_axes = tuple(
            SAxis(vector=s, frame=self.frame) for s in self._spatial_axes_array()
        )
        self._computed = True

        return True

    def _express(
        self, axes: tuple[SAxis, ...], frame: jtp.FrameHandle | None
    ) -> tuple[SAxis, ...]:

        if frame is None or frame == self.frame:
            return axes

        _ = self.get_induced_pose()
        T = self.tree.transform(self.frame, frame)
        return tuple(T.transform_spatial(s) for s in axes)

    def get_spatial_axes(
        self, frame: jtp.FrameHandle | None = None
    ) -> tuple[SAxis, ...]:
        """
        Return the spatial axes of the joint.

        Args:
            frame: The frame to express the axes in, the joint frame if omitted.

        Returns:
            One spatial axis per degree of freedom.
        """

        self._check_connected()

        if self._spatial_axes is None and not self.update_spatial_axes():
            raise exceptions.PreconditionViolationError(
                f"The axes of joint '{self.name}' cannot be assigned"
            )

        return self._express(self._spatial_axes, frame=frame)

    def get_spatial_axes_dot(
        self, frame: jtp.FrameHandle | None = None
    ) -> tuple[SAxis, ...]:
        """
        Return the time derivative of the spatial axes of the joint.

        Args:
            frame: The frame to express the derivatives in, the joint frame if omitted.

        Returns:
            One derivative per degree of freedom, given the current ``qd``.
        """

        self._check_connected()
        self._require_axes()

        if self._spatial_axes_dot is None:
            self._spatial_axes_dot = tuple(
                SAxis(vector=s, frame=self.frame)
                for s in self._spatial_axes_dot_array()
            )

        return self._express(self._spatial_axes_dot, frame=frame)

    # ============
    # Induced pose
    # ============

    @abc.abstractmethod
    def _rotation(self) -> jtp.Matrix:
        pass

    @abc.abstractmethod
    def _translation(self) -> jtp.Vector:
        pass

    def get_rotation(self) -> jtp.Matrix:
        """Return the rotation of the induced frame relative to the joint frame."""

        self._require_axes()
        return self._rotation()

    def get_induced_pose(self) -> Pose:
        """
        Return the pose of the induced frame relative to the joint frame.

        The pose is also written in the pose tree node of the induced frame.
        """

        self._require_axes()

        if self._induced_pose is None:
            self._induced_pose = Pose(
                rotation=self._rotation(),
                translation=self._translation(),
                relative_to=self.frame,
            )
            self.tree.update(self.induced_frame, self._induced_pose)

        return self._induced_pose

    @abc.abstractmethod
    def _determine_q(self, pose: Pose) -> jtp.Vector:
        pass

    def determine_q(self, pose: Pose | jtp.ArrayLike) -> jtp.Vector:
        """
        Compute the joint coordinates producing a given induced pose.

        Args:
            pose: The pose of the induced frame relative to the joint frame, or
                its rotation matrix (its translation vector for prismatic joints).

        Returns:
            The coordinates net of ``q_tare``. The joint is not modified.
        """

        self._require_axes()

        if isinstance(pose, Pose) and pose.relative_to != self.frame:
            raise exceptions.FrameMismatchError(
                expected=self.frame, got=pose.relative_to, what="induced pose"
            )

        return self._determine_q(pose) - self._q_tare

    # =============
    # Singularities
    # =============

    def conditioning(self) -> jtp.Float:
        """
        Measure the distance of the joint from a singular configuration.

        Returns:
            The smallest singular value of the stacked spatial axes. For joints
            producing only rotations, these are the stacked angular parts.
        """

        self._require_axes()

        S = self._spatial_axes_array()
        return jnp.linalg.svd(S, compute_uv=False).min()

    def is_singular(self) -> bool:

        return bool(self.conditioning() < self.singular_tol)

    def evaluate_constraints(self) -> jtp.Vector:
        """Evaluate the loop-closure constraints of the joint."""

        raise NotImplementedError(
            f"Loop-closure constraints are not supported by {type(self).__name__}"
        )


class RotationalJoint(Joint):
    """
    A joint whose motion is a chain of rotations about its axes.

    Each coordinate rotates about its axis after being carried by the rotations
    of the preceding ones, ``R = R_0 R_1 ... R_{k-1}`` with
    ``R_j = AxisAngle(u_j, q_j + q_tare_j)``.
    """

    def _angles(self) -> jtp.Vector:
        return self._q + self._q_tare

    def _effective_axes(self) -> jtp.Matrix:

        return kinematics.effective_axes(self._axes, self._angles())

    def _spatial_axes_array(self) -> jtp.Matrix:

        e = self._effective_axes()
        return jnp.hstack([e, jnp.zeros_like(e)])

    def _spatial_axes_dot_array(self) -> jtp.Matrix:

        e_dot = kinematics.effective_axes_dot(self._axes, self._angles(), self._qd)
        return jnp.hstack([e_dot, jnp.zeros_like(e_dot)])

    def _rotation(self) -> jtp.Matrix:

        return kinematics.chained_rotations(self._axes, self._angles())[-1]

    def _translation(self) -> jtp.Vector:

        return jnp.zeros(3)

    @abc.abstractmethod
    def _basis(self) -> jtp.Matrix:
        """Return the right-handed basis whose first columns are the joint axes."""
        pass

    def _relative_rotation(self, pose: Pose | jtp.MatrixLike) -> jtp.Matrix:

        R = pose.rotation if isinstance(pose, Pose) else jnp.array(pose, dtype=float)

        if R.shape != (3, 3):
            raise exceptions.SizeMismatchError(
                expected=3, got=R.shape[0], what="rotation matrix"
            )

        B = self._basis()

        # The elementary rotations become rotations about the canonical axes.
        return B.T @ R @ B

    def determine_q(self, pose: Pose | jtp.MatrixLike) -> jtp.Vector:

        q = super().determine_q(pose)
        return jnp.arctan2(jnp.sin(q), jnp.cos(q))
