from .adjoint import Adjoint
from .basis import Basis
from .cross import Cross
from .rotation import Rotation
from .skew import Skew
from .utils import normalize, safe_norm

# Tolerance of the approximate comparisons of poses, transforms and axes.
DEFAULT_TOLERANCE = 1e-6

# Axes whose norm is below this threshold are considered unset.
AXIS_EPSILON = 1e-8
