from __future__ import annotations

import dataclasses
from collections.abc import Iterator

from jaxspatial import exceptions, logging
from jaxspatial.typing import FrameHandle

from .pose import GLOBAL_FRAME, Point, Pose, Vector
from .spatial import SpatialVector
from .transform import Transform


@dataclasses.dataclass(eq=False)
class PoseNode:
    """
    A node of the pose tree.

    Attributes:
        name: The unique name of the frame.
        pose: The pose of the frame, relative to its parent frame.
    """

    name: str
    pose: Pose

    @property
    def parent(self) -> FrameHandle:
        return self.pose.relative_to


class PoseTree:
    """
    Arena of frames connected by relative poses.

    Frames are referenced by integer handles. Each frame stores its pose relative
    to a parent frame, or to the global frame, so that the frames form a forest
    whose roots are expressed in ``GLOBAL_FRAME``. Handles of removed frames are
    never reused.
    """

    def __init__(self, dim: int = 3) -> None:

        self.dim = dim
        self._nodes: list[PoseNode | None] = []
        self._names: dict[str, FrameHandle] = {}

    # ==============
    # Arena handling
    # ==============

    def _node(self, frame: FrameHandle) -> PoseNode:

        if not isinstance(frame, int) or not 0 <= frame < len(self._nodes):
            raise exceptions.InvalidIndexError(f"Invalid frame handle '{frame}'")

        node = self._nodes[frame]

        if node is None:
            raise exceptions.InvalidIndexError(f"Frame '{frame}' was removed")

        return node

    def _check_parent(self, parent: FrameHandle) -> None:

        if parent != GLOBAL_FRAME:
            _ = self._node(parent)

    def add(self, pose: Pose | None = None, *, name: str | None = None) -> FrameHandle:
        """
        Add a frame to the tree.

        Args:
            pose: The pose of the new frame relative to an existing frame. If
                omitted, the frame coincides with the global frame.
            name: The unique name of the frame, generated if omitted.

        Returns:
            The handle of the new frame.
        """

        pose = pose if pose is not None else Pose.identity(GLOBAL_FRAME, dim=self.dim)
        self._check_parent(pose.relative_to)

        if pose.dim != self.dim:
            raise exceptions.SizeMismatchError(
                expected=self.dim, got=pose.dim, what="pose"
            )

        frame = len(self._nodes)
        name = name if name is not None else f"frame_{frame}"

        if name in self._names:
            raise ValueError(f"Frame '{name}' already exists")

        self._nodes.append(PoseNode(name=name, pose=pose))
        self._names[name] = frame

        logging.debug(msg=f"Added frame '{name}' ({frame}) to parent {pose.relative_to}")

        return frame

    def update(self, frame: FrameHandle, pose: Pose) -> None:
        """
        Replace the pose of a frame, possibly moving it under another parent.

        Args:
            frame: The handle of the frame.
            pose: The new pose, relative to the new parent frame.
        """

        node = self._node(frame)
        self._check_parent(pose.relative_to)

        if pose.relative_to != GLOBAL_FRAME and frame in self.chain(pose.relative_to):
            raise ValueError(f"Moving frame {frame} under {pose.relative_to} creates a cycle")

        node.pose = pose

    def remove(self, frame: FrameHandle) -> None:
        """
        Remove a frame from the tree.

        The children of the removed frame are re-expressed relative to its parent
        so that their global pose does not change.

        Args:
            frame: The handle of the frame to remove.
        """

        node = self._node(frame)
        parent_T_frame = Transform.from_pose(pose=node.pose, source=frame)

        for child in self.children(frame):
            child_node = self._node(child)
            child_node.pose = parent_T_frame.transform_pose(child_node.pose)
            logging.debug(
                msg=f"Reparented frame '{child_node.name}' to {node.parent}"
            )

        self._nodes[frame] = None
        del self._names[node.name]

        logging.debug(msg=f"Removed frame '{node.name}' ({frame})")

    def __contains__(self, frame: FrameHandle) -> bool:
        return (
            isinstance(frame, int)
            and 0 <= frame < len(self._nodes)
            and self._nodes[frame] is not None
        )

    def __len__(self) -> int:
        return sum(1 for node in self._nodes if node is not None)

    def __iter__(self) -> Iterator[FrameHandle]:
        return (i for i, node in enumerate(self._nodes) if node is not None)

    # =======
    # Queries
    # =======

    def get(self, frame: FrameHandle) -> Pose:
        """Return the pose of a frame relative to its parent."""

        return self._node(frame).pose

    def name(self, frame: FrameHandle) -> str:

        if frame == GLOBAL_FRAME:
            return "world"

        return self._node(frame).name

    def find(self, name: str) -> FrameHandle:
        """Return the handle of the frame with the given name."""

        try:
            return self._names[name]
        except KeyError as e:
            raise ValueError(f"Frame '{name}' not found in the pose tree") from e

    def parent(self, frame: FrameHandle) -> FrameHandle:

        return self._node(frame).parent

    def children(self, frame: FrameHandle) -> list[FrameHandle]:

        return [i for i in self if self._nodes[i].parent == frame]

    def chain(self, frame: FrameHandle) -> list[FrameHandle]:
        """
        Return the frames from ``frame`` up to its root, global frame excluded.

        Args:
            frame: The handle of the first frame of the chain.

        Returns:
            The list ``[frame, parent(frame), ...]`` ending with a frame whose
            pose is expressed in the global frame.
        """

        chain = []

        while frame != GLOBAL_FRAME:
            chain.append(frame)
            frame = self.parent(frame)

        return chain

    def common_ancestor(self, a: FrameHandle, b: FrameHandle) -> FrameHandle:
        """
        Return the closest frame that is an ancestor of both frames.

        A frame is considered an ancestor of itself, and the global frame is an
        ancestor of every frame.
        """

        ancestors_of_a = set(self.chain(a))

        for frame in self.chain(b):
            if frame in ancestors_of_a:
                return frame

        return GLOBAL_FRAME

    # ===============
    # Transformations
    # ===============

    def _transform_to_ancestor(
        self, frame: FrameHandle, ancestor: FrameHandle
    ) -> Transform:

        T = Transform.identity(frame, dim=self.dim)

        while frame != ancestor:
            pose = self.get(frame)
            T = Transform.compose(T, Transform.from_pose(pose=pose, source=frame))
            frame = pose.relative_to

        return T

    def transform(self, source: FrameHandle, target: FrameHandle) -> Transform:
        """
        Compute the transform between two arbitrary frames of the tree.

        Args:
            source: The handle of the frame to map from.
            target: The handle of the frame to map to.

        Returns:
            The transform from ``source`` to ``target``, composed through the
            closest common ancestor of the two frames.
        """

        ancestor = self.common_ancestor(source, target)

        source_T_ancestor = self._transform_to_ancestor(source, ancestor)
        target_T_ancestor = self._transform_to_ancestor(target, ancestor)

        return Transform.compose(source_T_ancestor, target_T_ancestor.inverse())

    def global_pose(self, frame: FrameHandle) -> Pose:
        """Return the pose of a frame expressed in the global frame."""

        return self.transform(frame, GLOBAL_FRAME).as_pose()

    def relative_pose(self, frame: FrameHandle, relative_to: FrameHandle) -> Pose:
        """Return the pose of a frame expressed relative to another frame."""

        return self.transform(frame, relative_to).as_pose()

    def express(self, pose: Pose, target: FrameHandle) -> Pose:
        """Re-express a pose relative to another frame."""

        return self.transform(pose.relative_to, target).transform_pose(pose)

    def transform_point(self, point: Point, target: FrameHandle) -> Point:

        return self.transform(point.frame, target).transform_point(point)

    def transform_vector(self, vector: Vector, target: FrameHandle) -> Vector:

        return self.transform(vector.frame, target).transform_vector(vector)

    def transform_spatial(
        self, vector: SpatialVector, target: FrameHandle
    ) -> SpatialVector:
        """Re-express a spatial vector in another frame of the tree."""

        return self.transform(vector.frame, target).transform_spatial(vector)

    def print_tree(self) -> None:
        """
        Print the structure of the pose tree.
        """

        import pptree

        def _attach(frame: FrameHandle, parent: pptree.Node) -> None:
            for child in self.children(frame):
                _attach(child, pptree.Node(f"{self.name(child)}:{child}", parent))

        root = pptree.Node(f"{self.name(GLOBAL_FRAME)}:{GLOBAL_FRAME}")
        _attach(GLOBAL_FRAME, root)

        pptree.print_tree(root, childattr="children", nameattr="name", horizontal=True)
