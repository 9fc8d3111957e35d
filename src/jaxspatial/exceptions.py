import os

import jax


class JaxSpatialError(Exception):
    """Base class of the errors raised by jaxspatial."""


class FrameMismatchError(JaxSpatialError, ValueError):
    """The operands are expressed in different or incompatible frames."""

    def __init__(self, expected, got, what: str = "operand") -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"Expected {what} in frame '{expected}', got frame '{got}'")


class InvalidIndexError(JaxSpatialError, IndexError):
    """An axis, coordinate, or frame index is out of range."""


class SizeMismatchError(JaxSpatialError, ValueError):
    """A vector does not match the expected number of elements."""

    def __init__(self, expected: int, got: int, what: str = "vector") -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"Expected {what} of size {expected}, got size {got}")


class PreconditionViolationError(JaxSpatialError, RuntimeError):
    """A derived quantity was requested on an incompletely configured object."""


def raise_if(
    condition: bool | jax.Array, exception: type, msg: str, *args, **kwargs
) -> None:
    """
    Raise a host-side exception if a condition is met. Useful in jit-compiled functions.

    Args:
        condition:
            The boolean condition of the evaluated expression that triggers
            the exception during runtime.
        exception: The type of exception to raise.
        msg:
            The message to display when the exception is raised. The message can be a
            format string (fmt), whose fields are filled with the args and kwargs.
        *args: The arguments to fill the format string.
        **kwargs: The keyword arguments to fill the format string
    """

    # Host callbacks are opt-in, and not available on every backend.
    if jax.devices()[0].platform in {"tpu", "METAL"} or not os.environ.get(
        "JAXSPATIAL_ENABLE_EXCEPTIONS", 0
    ):
        return

    # Check early that the format string is well-formed.
    try:
        _ = msg.format(*args, **kwargs)
    except (IndexError, KeyError, ValueError) as e:
        msg = "Error in formatting exception message with args={} and kwargs={}"
        raise ValueError(msg.format(args, kwargs)) from e

    def _raise_exception(condition: bool, *args, **kwargs) -> None:

        if condition:
            raise exception(msg.format(*args, **kwargs))

    def _callback(args, kwargs) -> None:

        jax.debug.callback(_raise_exception, condition, *args, **kwargs)

    # The callback is expensive, run it only on the branch where it is needed.
    def _run_callback_only_if_condition_is_true(*args, **kwargs) -> None:
        return jax.lax.cond(
            condition,
            _callback,
            lambda args, kwargs: None,
            args,
            kwargs,
        )

    return _run_callback_only_if_condition_is_true(*args, **kwargs)


def raise_runtime_error_if(
    condition: bool | jax.Array, msg: str, *args, **kwargs
) -> None:
    """
    Raise a RuntimeError if a condition is met. Useful in jit-compiled functions.
    """

    return raise_if(condition, RuntimeError, msg, *args, **kwargs)


def raise_value_error_if(
    condition: bool | jax.Array, msg: str, *args, **kwargs
) -> None:
    """
    Raise a ValueError if a condition is met. Useful in jit-compiled functions.
    """

    return raise_if(condition, ValueError, msg, *args, **kwargs)
