from jax_dataclasses._copy_and_mutate import _Mutability as Mutability

from .jaxspatial_dataclass import JaxSpatialDataclass
from .tracing import not_tracing, tracing
