import abc
import dataclasses
from typing import ClassVar, Self

import jax
import jax_dataclasses

import jaxspatial.typing as jtp

from . import Mutability


@jax_dataclasses.pytree_dataclass
class JaxSpatialDataclass(abc.ABC):
    """Base of the frame-tagged value types, adding pytree utilities."""

    # This attribute is set by jax_dataclasses
    __mutability__: ClassVar[Mutability] = Mutability.FROZEN

    @staticmethod
    def get_leaf_shapes(tree: jtp.PyTree) -> tuple[tuple[int, ...] | None]:
        """
        Get the leaf shapes of a PyTree.

        Args:
            tree: The PyTree to consider.

        Returns:
            A tuple containing the leaf shapes of the PyTree or `None` is the leaf is
            not a numpy-like array.
        """

        return tuple(
            map(
                lambda leaf: getattr(leaf, "shape", None),
                jax.tree_util.tree_leaves(tree),
            )
        )

    @staticmethod
    def check_compatibility(*trees: jtp.PyTree) -> None:
        """
        Check whether the PyTrees are compatible in structure and shape.

        Static fields are part of the structure, therefore two objects expressed
        in different frames are not compatible.

        Args:
            *trees: The PyTrees to compare.

        Raises:
            ValueError: If the PyTrees have incompatible structures or shapes.
        """

        target_structure = jax.tree_util.tree_structure(trees[0])
        target_shapes = JaxSpatialDataclass.get_leaf_shapes(trees[0])

        for tree in trees[1:]:

            if jax.tree_util.tree_structure(tree) != target_structure:
                raise ValueError(
                    f"Pytrees have incompatible structures.\n"
                    f"Original: {jax.tree_util.tree_structure(tree)}\n"
                    f"Target: {target_structure}"
                )

            if JaxSpatialDataclass.get_leaf_shapes(tree) != target_shapes:
                raise ValueError("Pytrees have incompatible shapes.")

    def mutability(self) -> Mutability:
        """
        Get the mutability type of the object.

        Returns:
            The mutability type of the object.
        """

        return self.__mutability__

    def set_mutability(self, mutability: Mutability) -> None:
        """
        Set the mutability of the object in-place.

        Args:
            mutability: The desired mutability type.
        """

        jax_dataclasses._copy_and_mutate._mark_mutable(
            self, mutable=mutability, visited=set()
        )

    def replace(self: Self, validate: bool = True, **kwargs) -> Self:
        """
        Return a new object with the specified fields replaced.

        Args:
            validate:
                Whether to validate that the new fields do not alter the PyTree.
                Must be disabled when replacing a frame.
            **kwargs: The fields to replace.

        Returns:
            A new object with the specified fields replaced.
        """

        obj = dataclasses.replace(self, **kwargs)

        if validate:
            JaxSpatialDataclass.check_compatibility(self, obj)

        obj.set_mutability(mutability=self.mutability())

        return obj
