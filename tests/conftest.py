import os

os.environ["JAXSPATIAL_ENABLE_EXCEPTIONS"] = "1"

import jax
import pytest

import jaxspatial
from jaxspatial import GLOBAL_FRAME, Pose, PoseTree


def pytest_configure(config) -> None:
    """Pytest configuration hook."""

    # This is a global variable that is updated by the `prng_key` fixture.
    pytest.prng_key = jax.random.PRNGKey(
        seed=int(os.environ.get("JAXSPATIAL_TEST_SEED", 0))
    )


# ================
# Generic fixtures
# ================


@pytest.fixture(scope="function")
def prng_key() -> jax.Array:
    """
    Fixture to generate a new PRNG key for each test function.

    Returns:
        The new PRNG key passed to the test.

    Note:
        This fixture operates on a global variable initialized in the
        `pytest_configure` hook.
    """

    pytest.prng_key, subkey = jax.random.split(pytest.prng_key, num=2)
    return subkey


@pytest.fixture(
    scope="function",
    params=[
        pytest.param(jaxspatial.JointType.Revolute, id="revolute"),
        pytest.param(jaxspatial.JointType.Prismatic, id="prismatic"),
        pytest.param(jaxspatial.JointType.Universal, id="universal"),
        pytest.param(jaxspatial.JointType.Spherical, id="spherical"),
    ],
)
def joint_type(request) -> int:
    """
    Parametrized fixture providing all supported joint types.

    Returns:
        A joint type.
    """

    return request.param


# ========================
# Fixtures providing trees
# ========================


@pytest.fixture(scope="function")
def tree() -> PoseTree:
    """
    Fixture providing an empty 3D pose tree.

    Returns:
        The pose tree.
    """

    return PoseTree()


@pytest.fixture(scope="function")
def two_bodies(tree: PoseTree) -> tuple[PoseTree, int, int]:
    """
    Fixture providing a tree with an inboard and an outboard body.

    Returns:
        The tree and the handles of the inboard and outboard body frames.
    """

    inboard = tree.add(
        Pose.build(translation=[0.0, 0.0, 1.0], relative_to=GLOBAL_FRAME),
        name="inboard",
    )

    outboard = tree.add(
        Pose.build(translation=[0.0, 0.0, 0.5], relative_to=inboard),
        name="outboard",
    )

    return tree, inboard, outboard
