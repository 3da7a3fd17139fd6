"""
lockstep.types - Core type definitions for lockstep

This module contains the small set of types shared by every other module:
- _MISSING: Sentinel for "no value yet" in cursors
- Callback: Typing alias for the callables the combinators accept
- LockstepError: Base class of every error raised by the library
- NullArgumentError: A required argument was None
- EmptyInputSetError: A variadic container list was empty
- UnsupportedContainerKindError: A kind descriptor has no known backing
- ContainerInstantiationError: Building a concrete container failed

All errors are raised synchronously to the caller of the combinator and
never recovered internally. Each one also derives from the builtin
exception a Python caller would naturally catch (TypeError, ValueError,
RuntimeError).
"""

from typing import Any, Callable, Optional

# Sentinel for missing values
_MISSING = object()

# A callable taking one positional argument per zipped container
Callback = Callable[..., Any]


class LockstepError(Exception):
    """Base class for all lockstep errors."""

    pass


class NullArgumentError(LockstepError, TypeError):
    """Raised when a required container or callback argument is None."""

    def __init__(self, name: str, operation: Optional[str] = None):
        self.name = name
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}{name} cannot be None")


class EmptyInputSetError(LockstepError, ValueError):
    """Raised when an operation that needs at least one container got none."""

    def __init__(self, operation: Optional[str] = None):
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}at least one container is required")


class UnsupportedContainerKindError(LockstepError, TypeError):
    """Raised when a kind descriptor does not map to any known backing."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Unsupported container kind: {_describe(kind)}")


class ContainerInstantiationError(LockstepError, RuntimeError):
    """
    Raised when constructing a concrete container type fails.

    The original exception is kept on ``cause`` and is also chained as
    ``__cause__`` by the resolver.
    """

    def __init__(self, kind: Any, cause: BaseException):
        self.kind = kind
        self.cause = cause
        super().__init__(
            f"Container type {_describe(kind)} could not be instantiated: "
            f"{type(cause).__name__}: {cause}"
        )


def _describe(kind: Any) -> str:
    """Render a kind descriptor for error messages."""
    if isinstance(kind, type):
        return f"{kind.__module__}.{kind.__qualname__}"
    return repr(kind)
