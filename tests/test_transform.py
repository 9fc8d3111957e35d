import jax
import jax.numpy as jnp
import numpy as np
import pytest
from jax.errors import JaxRuntimeError

from jaxspatial import GLOBAL_FRAME, Point, Pose, Transform, Vector, exceptions
from jaxspatial.math import Rotation

from . import utils_rng


def test_pose_build():

    pose = Pose.build(relative_to=GLOBAL_FRAME)

    assert pose.dim == 3
    assert pose.rotation == pytest.approx(jnp.eye(3))
    assert pose.translation == pytest.approx(jnp.zeros(3))
    assert pose.as_matrix() == pytest.approx(jnp.eye(4))
    assert pose.quaternion() == pytest.approx(jnp.array([1.0, 0, 0, 0]))

    # Planar poses.
    pose = Pose.build(translation=[1.0, 2.0], relative_to=GLOBAL_FRAME)
    assert pose.dim == 2
    assert pose.as_matrix() == pytest.approx(
        jnp.array([[1.0, 0, 1.0], [0, 1.0, 2.0], [0, 0, 1.0]])
    )

    with pytest.raises(exceptions.SizeMismatchError):
        _ = Pose.build(
            rotation=jnp.eye(3), translation=jnp.zeros(2), relative_to=GLOBAL_FRAME
        )

    with pytest.raises(ValueError, match="not orthonormal"):
        _ = Pose.build(rotation=2 * jnp.eye(3), relative_to=GLOBAL_FRAME)


def test_pose_validation_in_jit():

    @jax.jit
    def build(rotation: jax.Array) -> Pose:
        return Pose.build(rotation=rotation, relative_to=GLOBAL_FRAME)

    _ = build(jnp.eye(3))

    with pytest.raises(JaxRuntimeError, match="ValueError: Rotation matrix"):
        _ = build(2 * jnp.eye(3))


def test_pose_from_quaternion(prng_key: jax.Array):

    R = utils_rng.random_rotation(prng_key)
    pose = Pose.build(rotation=R, translation=[1.0, 2, 3], relative_to=GLOBAL_FRAME)

    # A non-unit quaternion is normalized.
    other = Pose.from_quaternion_and_translation(
        quaternion=3.0 * pose.quaternion(),
        translation=[1.0, 2, 3],
        relative_to=GLOBAL_FRAME,
    )

    assert Pose.rel_equal(pose, other)
    assert not Pose.rel_equal(pose, other.replace(validate=False, relative_to=0))


def test_transform_identity_and_inverse(prng_key: jax.Array):

    T = utils_rng.random_transform(prng_key, source=0, target=1)

    I_0 = Transform.compose(T, T.inverse())
    I_1 = Transform.compose(T.inverse(), T)

    assert (I_0.source, I_0.target) == (0, 0)
    assert (I_1.source, I_1.target) == (1, 1)
    assert I_0.is_identity()
    assert I_1.is_identity()

    assert Transform.rel_equal(T.inverse().inverse(), T)
    assert T.as_matrix() @ T.inverse().as_matrix() == pytest.approx(jnp.eye(4))


@pytest.mark.parametrize("dim", [3, 2], ids=["spatial", "planar"])
def test_transform_composition(prng_key: jax.Array, dim: int):

    k1, k2, k3 = jax.random.split(prng_key, num=3)

    T_01 = utils_rng.random_transform(k1, source=0, target=1, dim=dim)
    T_12 = utils_rng.random_transform(k2, source=1, target=2, dim=dim)
    T_23 = utils_rng.random_transform(k3, source=2, target=3, dim=dim)

    T_02 = Transform.compose(T_01, T_12)
    assert (T_02.source, T_02.target) == (0, 2)

    # Composition matches the product of the homogeneous matrices.
    assert T_02.as_matrix() == pytest.approx(T_12.as_matrix() @ T_01.as_matrix())
    assert Transform.rel_equal(T_12 @ T_01, T_02)

    # Associativity.
    assert Transform.rel_equal(
        Transform.compose(Transform.compose(T_01, T_12), T_23),
        Transform.compose(T_01, Transform.compose(T_12, T_23)),
    )

    with pytest.raises(exceptions.FrameMismatchError):
        _ = Transform.compose(T_12, T_01)


def test_transform_points_and_vectors(prng_key: jax.Array):

    k1, k2 = jax.random.split(prng_key, num=2)

    T = utils_rng.random_transform(k1, source=0, target=1)
    coordinates = utils_rng.random_vector(k2)

    p = Point.build(coordinates, frame=0)
    v = Vector.build(coordinates, frame=0)

    p_1 = T.transform_point(p)
    v_1 = T.transform_vector(v)

    assert p_1.frame == v_1.frame == 1
    assert p_1.coordinates == pytest.approx(T.rotation @ coordinates + T.translation)
    assert v_1.coordinates == pytest.approx(T.rotation @ coordinates)

    # Round trips.
    assert T.inverse_transform_point(p_1).coordinates == pytest.approx(coordinates)
    assert T.inverse_transform_vector(v_1).coordinates == pytest.approx(coordinates)
    assert T.inverse().transform_point(p_1).coordinates == pytest.approx(coordinates)

    # Distances between points are preserved.
    q = Point.build(jnp.zeros(3), frame=0)
    assert jnp.linalg.norm(
        p_1.coordinates - T.transform_point(q).coordinates
    ) == pytest.approx(jnp.linalg.norm(coordinates))

    with pytest.raises(exceptions.FrameMismatchError):
        _ = T.transform_point(p_1)

    with pytest.raises(exceptions.FrameMismatchError):
        _ = T.inverse_transform_vector(v)


def test_transform_pose(prng_key: jax.Array):

    k1, k2 = jax.random.split(prng_key, num=2)

    T = utils_rng.random_transform(k1, source=0, target=1)
    pose = utils_rng.random_pose(k2, relative_to=0)

    pose_1 = T.transform_pose(pose)
    assert pose_1.relative_to == 1

    np.testing.assert_allclose(
        pose_1.as_matrix(), T.as_matrix() @ pose.as_matrix(), atol=1e-9
    )

    assert Pose.rel_equal(T.inverse_transform_pose(pose_1), pose)


def test_transform_validation():

    T = Transform.build(
        rotation=Rotation.z(0.5), translation=[1.0, 0, 0], source=0, target=1
    )
    T.validate()

    assert T.as_pose().relative_to == 1
    assert T.adjoint().shape == (6, 6)
    assert Transform.identity(frame=0).is_identity()
    assert not T.is_identity()

    with pytest.raises(ValueError):
        _ = Transform.build(rotation=-jnp.eye(3), source=0, target=1)

    with pytest.raises(exceptions.SizeMismatchError):
        _ = Transform.identity(frame=0, dim=2).adjoint()
