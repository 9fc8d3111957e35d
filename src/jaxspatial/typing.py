from typing import Any

import jax

# =========
# JAX types
# =========

Array = jax.Array
Scalar = Array
Vector = Array
Matrix = Array

Int = Scalar
Bool = Scalar
Float = Scalar

PyTree = Any

# =======================
# Mixed JAX / NumPy types
# =======================

ArrayLike = jax.typing.ArrayLike | tuple | list
ScalarLike = int | float | Scalar | ArrayLike
VectorLike = Vector | ArrayLike
MatrixLike = Matrix | ArrayLike

IntLike = int | Int | jax.typing.ArrayLike
BoolLike = bool | Bool | jax.typing.ArrayLike
FloatLike = float | Float | jax.typing.ArrayLike

# ===============
# Frame handles
# ===============

# Index of a node in a PoseTree, or GLOBAL_FRAME.
FrameHandle = int
