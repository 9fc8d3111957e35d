import jax
import jax.numpy as jnp
import jaxlie

from jaxspatial import Pose, Transform
from jaxspatial.typing import FrameHandle


def random_rotation(key: jax.Array) -> jax.Array:
    """
    Sample a 3D rotation matrix uniformly.

    Args:
        key: The PRNG key.

    Returns:
        The 3x3 rotation matrix.
    """

    return jaxlie.SO3.sample_uniform(key).as_matrix()


def random_planar_rotation(key: jax.Array) -> jax.Array:

    return jaxlie.SO2.sample_uniform(key).as_matrix()


def random_pose(key: jax.Array, relative_to: FrameHandle, dim: int = 3) -> Pose:
    """
    Sample a random pose.

    Args:
        key: The PRNG key.
        relative_to: The frame the pose is expressed in.
        dim: The dimension of the pose, 3 or 2.

    Returns:
        The pose, with a translation uniformly sampled in [-1, 1].
    """

    k1, k2 = jax.random.split(key, num=2)

    R = random_rotation(k1) if dim == 3 else random_planar_rotation(k1)
    x = jax.random.uniform(k2, shape=(dim,), minval=-1.0, maxval=1.0)

    return Pose.build(rotation=R, translation=x, relative_to=relative_to)


def random_transform(
    key: jax.Array, source: FrameHandle, target: FrameHandle, dim: int = 3
) -> Transform:

    return Transform.from_pose(
        pose=random_pose(key, relative_to=target, dim=dim), source=source
    )


def random_vector(key: jax.Array, size: int = 3) -> jax.Array:

    return jax.random.uniform(key, shape=(size,), minval=-1.0, maxval=1.0)


def random_unit_vector(key: jax.Array) -> jax.Array:

    v = jax.random.normal(key, shape=(3,))
    return v / jnp.linalg.norm(v)
