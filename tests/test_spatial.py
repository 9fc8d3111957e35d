import jax
import jax.numpy as jnp
import pytest

from jaxspatial import (
    SAcceleration,
    SAxis,
    SForce,
    SMomentum,
    SVelocity,
    cross,
    dot,
    exceptions,
)
from jaxspatial.spatial import SpatialKind

from . import utils_rng


def random_parts(key: jax.Array) -> tuple[jax.Array, jax.Array]:

    k1, k2 = jax.random.split(key, num=2)
    return utils_rng.random_vector(k1), utils_rng.random_vector(k2)


def test_layout(prng_key: jax.Array):

    angular, linear = random_parts(prng_key)

    v = SVelocity.build(angular=angular, linear=linear, frame=0)
    f = SForce.build(angular=angular, linear=linear, frame=0)

    # Motions are stored [angular; linear], forces [linear; angular].
    assert v.to_array() == pytest.approx(jnp.hstack([angular, linear]))
    assert f.to_array() == pytest.approx(jnp.hstack([linear, angular]))

    for x in (v, f):
        assert x.angular == pytest.approx(angular)
        assert x.linear == pytest.approx(linear)

    assert SVelocity.kind.is_motion and SAxis.kind.is_motion
    assert SMomentum.kind is SpatialKind.Momentum and SMomentum.kind.is_force

    assert SForce.zero(frame=2).to_array() == pytest.approx(jnp.zeros(6))
    assert SForce.from_array(f.to_array(), frame=0).angular == pytest.approx(angular)

    with pytest.raises(exceptions.SizeMismatchError):
        _ = SVelocity.from_array(jnp.zeros(3), frame=0)

    with pytest.raises(exceptions.SizeMismatchError):
        _ = SVelocity.build(angular=jnp.zeros(2), frame=0)


def test_arithmetic(prng_key: jax.Array):

    k1, k2 = jax.random.split(prng_key, num=2)

    a = SVelocity.build(*random_parts(k1), frame=0)
    b = SVelocity.build(*random_parts(k2), frame=0)

    assert (a + b).to_array() == pytest.approx(a.to_array() + b.to_array())
    assert (a - b).to_array() == pytest.approx(a.to_array() - b.to_array())
    assert (-a).to_array() == pytest.approx(-a.to_array())
    assert (2.0 * a).to_array() == pytest.approx((a * 2.0).to_array())
    assert (a / 2.0).to_array() == pytest.approx(0.5 * a.to_array())
    assert isinstance(a + b, SVelocity)

    with pytest.raises(exceptions.FrameMismatchError):
        _ = a + b.replace(validate=False, frame=1)

    with pytest.raises(TypeError):
        _ = a + SAcceleration.from_array(b.to_array(), frame=0)


def test_dot(prng_key: jax.Array):

    k1, k2, k3 = jax.random.split(prng_key, num=3)

    m = SVelocity.build(*random_parts(k1), frame=0)
    f = SForce.build(*random_parts(k2), frame=0)
    g = SForce.build(*random_parts(k3), frame=0)

    # The product is the power of the force along the velocity.
    power = jnp.dot(m.angular, f.angular) + jnp.dot(m.linear, f.linear)
    assert dot(m, f) == pytest.approx(power)

    # Symmetry and linearity.
    assert dot(f, m) == pytest.approx(dot(m, f))
    assert dot(m, 2.0 * f + g) == pytest.approx(2.0 * dot(m, f) + dot(m, g))

    # A unit angular axis picks the torque about it.
    s = SAxis.build(angular=[0, 0, 1.0], frame=0)
    tau = SForce.build(angular=[1.0, 2.0, 3.0], linear=[4.0, 5.0, 6.0], frame=0)
    assert dot(s, tau) == pytest.approx(3.0)

    with pytest.raises(exceptions.FrameMismatchError):
        _ = dot(m, f.replace(validate=False, frame=1))

    with pytest.raises(TypeError):
        _ = dot(f, g)

    with pytest.raises(TypeError):
        _ = dot(m, s)


def test_frame_change_preserves_dot(prng_key: jax.Array):

    k1, k2, k3 = jax.random.split(prng_key, num=3)

    T = utils_rng.random_transform(k1, source=0, target=1)
    m = SVelocity.build(*random_parts(k2), frame=0)
    f = SMomentum.build(*random_parts(k3), frame=0)

    m_1 = m.transform(T)
    f_1 = T.transform_spatial(f)

    assert isinstance(m_1, SVelocity) and isinstance(f_1, SMomentum)
    assert m_1.frame == f_1.frame == 1

    assert dot(m_1, f_1) == pytest.approx(dot(m, f))

    # A pure rotation rotates both parts.
    R = T.rotation
    T_rot = T.replace(translation=jnp.zeros(3))
    assert m.transform(T_rot).angular == pytest.approx(R @ m.angular)
    assert m.transform(T_rot).linear == pytest.approx(R @ m.linear)

    # A pure translation moves the linear velocity and the moment.
    p = jnp.array([1.0, 0, 0])
    T_tr = T.replace(rotation=jnp.eye(3), translation=p)
    assert m.transform(T_tr).linear == pytest.approx(
        m.linear + jnp.cross(p, m.angular)
    )
    assert f.transform(T_tr).angular == pytest.approx(
        f.angular + jnp.cross(p, f.linear)
    )

    # Round trip.
    assert T.inverse().transform_spatial(m_1).to_array() == pytest.approx(
        m.to_array()
    )
    assert T.inverse_transform_spatial(f_1).to_array() == pytest.approx(
        f.to_array()
    )
    assert T.inverse_transform_spatial(m_1).frame == m.frame

    with pytest.raises(exceptions.FrameMismatchError):
        _ = m_1.transform(T)

    with pytest.raises(exceptions.FrameMismatchError):
        _ = T.inverse_transform_spatial(m)


def test_cross(prng_key: jax.Array):

    k1, k2, k3 = jax.random.split(prng_key, num=3)

    m = SVelocity.build(*random_parts(k1), frame=0)
    n = SVelocity.build(*random_parts(k2), frame=0)
    f = SForce.build(*random_parts(k3), frame=0)

    mn = cross(m, n)
    assert isinstance(mn, SAcceleration)
    assert mn.angular == pytest.approx(jnp.cross(m.angular, n.angular))
    assert mn.linear == pytest.approx(
        jnp.cross(m.angular, n.linear) + jnp.cross(m.linear, n.angular)
    )

    mf = cross(m, f)
    assert isinstance(mf, SForce)
    assert mf.linear == pytest.approx(jnp.cross(m.angular, f.linear))
    assert mf.angular == pytest.approx(
        jnp.cross(m.angular, f.angular) + jnp.cross(m.linear, f.linear)
    )

    with pytest.raises(TypeError):
        _ = cross(f, m)


def test_pytree(prng_key: jax.Array):

    m = SVelocity.build(*random_parts(prng_key), frame=3)

    @jax.jit
    def double(v: SVelocity) -> SVelocity:
        return 2.0 * v

    out = double(m)

    assert isinstance(out, SVelocity)
    assert out.frame == 3
    assert out.to_array() == pytest.approx(2.0 * m.to_array())
