"""Exception hierarchy for suspendable sequences."""

from typing import Optional


class GeneratorError(Exception):
    """Base class for all engine errors."""


class InvalidStateError(GeneratorError):
    """Raised when an operation is not valid in the current lifecycle phase.

    Typical causes are resuming a completed or disposed execution state,
    reading a yielded value before anything was produced, or adopting a
    state that already has an owner.
    """


class DoubleDisposeError(InvalidStateError):
    """Raised when an execution state is disposed a second time."""


class BodyFailure(GeneratorError):
    """Wraps an exception raised inside a generator body.

    Only raised when the policy asks for wrapped faults; by default the
    original exception is re-raised unchanged.
    """

    def __init__(self, cause: BaseException, resume_count: Optional[int] = None):
        self.cause = cause
        self.resume_count = resume_count
        message = f"generator body failed: {cause!r}"
        if resume_count is not None:
            message += f" (after {resume_count} resumptions)"
        super().__init__(message)
