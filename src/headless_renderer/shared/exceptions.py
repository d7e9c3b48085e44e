"""Exception hierarchy for the headless renderer.

Every error raised by the renderer is a contract violation: the caller (or the
reconciliation engine) asked for something the instance tree cannot honour.
None of them are retried or recovered from inside the package.
"""

from typing import Any, Optional


class RendererError(Exception):
    """Base exception for all renderer errors."""


class ValidationError(RendererError, TypeError):
    """Raised when a public entry point receives an argument of the wrong shape.

    Raised before any part of the instance tree is touched.
    """

    def __init__(self, message: str, argument: Optional[str] = None,
                 value: Any = None) -> None:
        super().__init__(message)
        self.argument = argument
        self.value = value


class InvariantViolation(RendererError):
    """Raised when a structural tree invariant would be broken.

    Signals a programming error between the host operations and the engine
    driving them; it is never caught inside the package.
    """

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation


class SchedulingError(RendererError):
    """Raised when deferred work cannot be handed to an event loop."""
