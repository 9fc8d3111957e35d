import jax.numpy as jnp
import jaxlie

import jaxspatial.typing as jtp

from .utils import safe_norm


class Rotation:
    """
    A utility class for rotation matrix operations.
    """

    @staticmethod
    def x(theta: jtp.FloatLike) -> jtp.Matrix:
        """
        Generate a 3D rotation matrix around the X-axis.

        Args:
            theta: Rotation angle in radians.

        Returns:
            The 3D rotation matrix.
        """

        return jaxlie.SO3.from_x_radians(theta=theta).as_matrix()

    @staticmethod
    def y(theta: jtp.FloatLike) -> jtp.Matrix:
        """
        Generate a 3D rotation matrix around the Y-axis.

        Args:
            theta: Rotation angle in radians.

        Returns:
            The 3D rotation matrix.
        """

        return jaxlie.SO3.from_y_radians(theta=theta).as_matrix()

    @staticmethod
    def z(theta: jtp.FloatLike) -> jtp.Matrix:
        """
        Generate a 3D rotation matrix around the Z-axis.

        Args:
            theta: Rotation angle in radians.

        Returns:
            The 3D rotation matrix.
        """

        return jaxlie.SO3.from_z_radians(theta=theta).as_matrix()

    @staticmethod
    def planar(theta: jtp.FloatLike) -> jtp.Matrix:
        """
        Generate a 2D rotation matrix.

        Args:
            theta: Rotation angle in radians.

        Returns:
            The 2x2 rotation matrix.
        """

        return jaxlie.SO2.from_radians(theta=theta).as_matrix()

    @staticmethod
    def from_axis_angle(vector: jtp.VectorLike) -> jtp.Matrix:
        """
        Generate a 3D rotation matrix from an axis-angle representation.

        Args:
            vector: The rotation axis scaled by the rotation angle.

        Returns:
            The SO(3) rotation matrix.
        """

        return jaxlie.SO3.exp(jnp.array(vector, dtype=float).reshape(3)).as_matrix()

    @staticmethod
    def about_axis(axis: jtp.VectorLike, angle: jtp.FloatLike) -> jtp.Matrix:
        """
        Generate the rotation of a given angle about a unit axis.

        Args:
            axis: The unit rotation axis.
            angle: The rotation angle in radians.

        Returns:
            The SO(3) rotation matrix.
        """

        return Rotation.from_axis_angle(vector=jnp.array(axis, dtype=float) * angle)

    @staticmethod
    def log_vee(R: jtp.MatrixLike) -> jtp.Vector:
        """
        Compute the logarithm map of a rotation matrix.

        Args:
            R: A SO(3) or SO(2) rotation matrix.

        Returns:
            The tangent vector: the axis-angle vector in 3D, the angle in 2D.
        """

        R = jnp.array(R, dtype=float)

        if R.shape == (2, 2):
            return jaxlie.SO2.from_matrix(R).log()

        return jaxlie.SO3.from_matrix(R).log()

    @staticmethod
    def angular_distance(R1: jtp.MatrixLike, R2: jtp.MatrixLike) -> jtp.Float:
        """
        Compute the angle of the relative rotation between two rotation matrices.

        Args:
            R1: The first rotation matrix.
            R2: The second rotation matrix.

        Returns:
            The angle of the rotation mapping R1 onto R2, in [0, pi].
        """

        R1 = jnp.array(R1, dtype=float)
        R2 = jnp.array(R2, dtype=float)

        return safe_norm(Rotation.log_vee(R1.T @ R2))

    @staticmethod
    def orthonormality_error(R: jtp.MatrixLike) -> jtp.Float:
        """
        Measure how far a matrix is from being a proper rotation.

        Args:
            R: The square matrix to check.

        Returns:
            The largest absolute entry of ``R^T R - I``, or 1 if the
            determinant is not positive.
        """

        R = jnp.array(R, dtype=float)
        error = jnp.max(jnp.abs(R.T @ R - jnp.eye(R.shape[0])))

        return jnp.where(jnp.linalg.det(R) > 0.0, error, jnp.maximum(error, 1.0))
