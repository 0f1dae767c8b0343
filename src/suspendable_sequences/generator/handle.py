"""Caller-facing handle over an execution state."""

import logging
from typing import Any, Optional

from ..exceptions import BodyFailure, InvalidStateError
from .models import FaultMode, Phase
from .protocols import LoggerProtocol
from .state import ExecutionState


class GeneratorHandle:
    """
    Pull-style access to a generator's values, final value and failures.

    The handle owns its execution state: closing the handle, leaving a
    ``with`` block or garbage-collecting the handle disposes the state.
    A value produced by the body stays "fresh" until ``next_value()``
    consumes it, and ``advance_and_check()`` never resumes past a fresh
    value.
    """

    def __init__(self, state: ExecutionState, logger: Optional[LoggerProtocol] = None):
        """
        Adopt an execution state, starting it if needed.

        Args:
            state: Execution state to own
            logger: Logger instance

        Raises:
            InvalidStateError: If the state is disposed or already owned
        """
        if state.disposed:
            raise InvalidStateError(f"cannot adopt {state.name}: state was disposed")
        if state.owned:
            raise InvalidStateError(f"cannot adopt {state.name}: state already has an owner")

        self._logger = logger or logging.getLogger(__name__)
        self._state: Optional[ExecutionState] = state
        state.owned = True

        if state.phase is Phase.CREATED:
            state.start()
        # a value already sitting in the state has not been seen by this handle
        self._held = state.has_value
        self._fresh = self._held

    def __repr__(self) -> str:
        if self._state is None:
            return "<GeneratorHandle closed>"
        return f"<GeneratorHandle {self._state!r} fresh={self._fresh}>"

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and dispose the owned state."""
        self.close()

    def __del__(self):
        if getattr(self, "_state", None) is not None:
            self.close()

    def __iter__(self):
        return self

    def __next__(self) -> Any:
        if not self.advance_and_check():
            raise StopIteration
        return self.next_value()

    @property
    def state(self) -> ExecutionState:
        return self._attached()

    @property
    def closed(self) -> bool:
        return self._state is None

    @property
    def has_fresh_value(self) -> bool:
        """True while a produced value has not been consumed by next_value()."""
        return self._state is not None and self._fresh

    def is_exhausted(self) -> bool:
        """Return True once the underlying state has completed."""
        return self._attached().completed

    def advance_and_check(self) -> bool:
        """
        Make a fresh value available, resuming at most once.

        Returns:
            True if a value is ready for next_value(), False once exhausted

        Raises:
            Exception: Whatever the body raised, according to the fault mode
        """
        self._fill()
        return not self._attached().completed

    def next_value(self) -> Any:
        """
        Return the current value and mark it consumed.

        Resumes once first if no value is currently held. Reading again
        without advancing returns the same value.

        Raises:
            InvalidStateError: If the sequence is exhausted
        """
        if not self._held:
            self._fill()
        if not self._held:
            raise InvalidStateError(f"{self._attached().name} is exhausted")
        self._fresh = False
        return self._attached().read_yielded_value()

    def get_return_value(self) -> Any:
        """
        Return the final value of an exhausted generator.

        Raises:
            InvalidStateError: If not yet exhausted, or the state was disposed
                on completion and the value is gone
        """
        state = self._attached()
        self._raise_pending_fault(state)
        if not state.completed:
            raise InvalidStateError(f"{state.name} has not completed yet")
        if state.disposed:
            raise InvalidStateError(
                f"{state.name}: return value unavailable, state was disposed on completion"
            )
        return state.read_final_value()

    def detach(self) -> ExecutionState:
        """
        Give up ownership and return the raw execution state.

        The caller becomes responsible for disposing it.
        """
        state = self._attached()
        state.owned = False
        self._state = None
        return state

    def close(self) -> None:
        """
        Dispose the owned state. Safe to call more than once.

        Raises:
            InvalidStateError: If called from inside the running body; the
                handle keeps ownership and stays open
        """
        state = self._state
        if state is None:
            return
        if state.phase is Phase.RUNNING:
            raise InvalidStateError(f"cannot close {state.name} while its body is running")
        if not state.disposed:
            state.dispose()
        state.owned = False
        self._state = None

    dispose = close

    def _attached(self) -> ExecutionState:
        if self._state is None:
            raise InvalidStateError("generator handle is closed")
        return self._state

    def _fill(self) -> None:
        state = self._attached()
        if self._fresh:
            return
        self._raise_pending_fault(state)
        if state.completed:
            return

        self._held = False
        state.resume()
        self._raise_pending_fault(state)
        if state.has_value:
            self._held = self._fresh = True

    def _raise_pending_fault(self, state: ExecutionState) -> None:
        fault = state.take_fault()
        if fault is None:
            return

        mode = state.policy.faults
        if mode is FaultMode.SUPPRESS:
            self._logger.warning(
                f"{state.name}: suppressed failure from generator body: {fault!r}",
                exc_info=fault,
            )
            return
        if mode is FaultMode.WRAP:
            raise BodyFailure(fault, state.resume_count) from fault
        raise fault
