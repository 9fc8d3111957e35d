from . import logging
from ._version import __version__


def _jnp_options() -> None:
    import os

    import jax

    # Check if running on TPU or Metal.
    platform = jax.devices()[0].platform
    is_tpu_or_metal = platform in {"tpu", "METAL"}

    # Enable by default 64-bit precision to get accurate tolerances.
    # Users can enforce 32-bit precision by setting the following variable to 0.
    use_x64 = os.environ.get("JAX_ENABLE_X64", "1") != "0"

    # Notify the user if unsupported 64-bit precision was enforced.
    if is_tpu_or_metal and use_x64:
        logging.warning(
            f"64-bit precision is not allowed on {platform.upper()}. "
            "Enforcing 32bit precision."
        )
        use_x64 = False

    if use_x64:
        logging.info("Enabling JAX to use 64-bit precision")
        jax.config.update("jax_enable_x64", True)

    # The default tolerances are tight for 32-bit precision.
    else:
        logging.warning(
            "Using 32-bit precision, consider relaxing the comparison tolerances."
        )


def _np_options() -> None:
    import numpy as np

    np.set_printoptions(precision=5, suppress=True, linewidth=150, threshold=10_000)


def _get_default_logging_level() -> logging.LoggingLevel:
    """
    Get the default logging level.

    Returns:
        The logging level to set.
    """

    import os
    import sys

    # Allow to override the default logging level with an environment variable.
    if overriden_logging_level := os.environ.get("JAXSPATIAL_LOGGING_LEVEL"):
        try:
            return logging.LoggingLevel[overriden_logging_level.upper()]

        except KeyError as exc:
            msg = "Invalid logging level defined in JAXSPATIAL_LOGGING_LEVEL"
            raise RuntimeError(msg) from exc

    # If running under a debugger, set the logging level to DEBUG.
    if getattr(sys, "gettrace", lambda: None)():
        return logging.LoggingLevel.DEBUG

    return logging.LoggingLevel.WARNING


# Configure the logger with the default logging level.
logging.configure(level=_get_default_logging_level())

# Configure JAX.
_jnp_options()

# Initialize the numpy print options.
_np_options()

del _jnp_options
del _np_options
del _get_default_logging_level

from . import exceptions, math, typing, utils  # isort:skip
from .pose import GLOBAL_FRAME, Point, Pose, Vector
from .transform import Transform
from .spatial import (
    SAcceleration,
    SAxis,
    SForce,
    SMomentum,
    SpatialKind,
    SpatialVector,
    SVelocity,
    Twist,
    Wrench,
    cross,
    dot,
)
from .pose_tree import PoseTree
from . import joints
from .joints import (
    Joint,
    JointState,
    JointType,
    PrismaticJoint,
    RevoluteJoint,
    SphericalJoint,
    UniversalJoint,
    build_joint,
)
