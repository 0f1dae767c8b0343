"""Execution state: one in-flight or completed generator invocation."""

import logging
from collections.abc import Generator
from typing import Any, Dict, Optional, Tuple

from ..exceptions import DoubleDisposeError, InvalidStateError
from .models import Phase, ResumeResult, SuspensionPolicy
from .protocols import BodyFactory, LoggerProtocol

_NOTHING = object()


class ExecutionState:
    """
    Holds a suspended computation and its two output channels.

    The body's locals and resume point live inside the body object (a native
    generator frame or a StateMachineBody instance). This class owns that
    object together with the most recent yielded value, the final value and
    any captured fault.
    """

    def __init__(
        self,
        body_factory: BodyFactory,
        args: Tuple = (),
        kwargs: Optional[Dict[str, Any]] = None,
        policy: SuspensionPolicy = SuspensionPolicy.GENERIC,
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize execution state.

        Args:
            body_factory: Callable returning the generator body
            args: Positional invocation arguments for the body
            kwargs: Keyword invocation arguments for the body
            policy: Suspension policy of the generator type
            logger: Logger instance
        """
        self._factory = body_factory
        self._args = tuple(args)
        self._kwargs = dict(kwargs or {})
        self.policy = policy
        self._logger = logger or logging.getLogger(__name__)

        self._body: Optional[Generator] = None
        self._phase = Phase.CREATED
        self._yielded = _NOTHING
        self._final_value: Any = None
        self._fault: Optional[Exception] = None
        self._completed = False
        self._disposed = False
        self._resume_count = 0
        self.owned = False

    def __repr__(self) -> str:
        name = getattr(self._factory, "__qualname__", repr(self._factory))
        return f"<ExecutionState {name} phase={self._phase.value} resumes={self._resume_count}>"

    @property
    def name(self) -> str:
        return getattr(self._factory, "__qualname__", type(self._factory).__name__)

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def faulted(self) -> bool:
        return self._fault is not None

    @property
    def resume_count(self) -> int:
        return self._resume_count

    @property
    def has_value(self) -> bool:
        """True while a yielded value is readable."""
        return self._yielded is not _NOTHING and not self._completed and not self._disposed

    def start(self) -> ResumeResult:
        """
        Begin the invocation according to the start behavior of the policy.

        Returns:
            SUSPENDED for lazy starts, otherwise the result of the first resumption

        Raises:
            InvalidStateError: If the state was already started or disposed
            TypeError: If the body factory does not return a generator
        """
        if self._phase is not Phase.CREATED:
            raise InvalidStateError(f"{self.name} already started (phase {self._phase.value})")

        body = self._factory(*self._args, **self._kwargs)
        if not isinstance(body, Generator):
            raise TypeError(
                f"{self.name} must return a generator, got {type(body).__name__}"
            )
        self._body = body

        if self.policy.is_lazy:
            self._phase = Phase.SUSPENDED_INITIAL
            self._logger.debug(f"{self.name}: created lazily, body not entered")
            return ResumeResult.SUSPENDED

        self._logger.debug(f"{self.name}: eager start, running to first suspension point")
        return self._run()

    def resume(self) -> ResumeResult:
        """
        Continue execution from the resume point.

        Returns:
            SUSPENDED if a new value was yielded, COMPLETED on normal
            termination, FAULTED if the body raised

        Raises:
            InvalidStateError: If the state is not resumable
        """
        if self._disposed:
            raise InvalidStateError(f"cannot resume {self.name}: state was disposed")
        if self._completed:
            raise InvalidStateError(f"cannot resume {self.name}: generator already completed")
        if self._phase is Phase.CREATED:
            raise InvalidStateError(f"cannot resume {self.name}: call start() first")
        if self._phase is Phase.RUNNING:
            raise InvalidStateError(f"cannot resume {self.name}: body is already running")
        return self._run()

    def _run(self) -> ResumeResult:
        self._phase = Phase.RUNNING
        self._resume_count += 1
        try:
            value = self._body.send(None)
        except StopIteration as stop:
            self._yielded = _NOTHING
            self._final_value = stop.value
            self._completed = True
            self._phase = Phase.COMPLETED
            self._logger.debug(
                f"{self.name}: completed after {self._resume_count} resumptions "
                f"with final value {stop.value!r}"
            )
            result = ResumeResult.COMPLETED
        except Exception as exc:
            self._yielded = _NOTHING
            self._fault = exc
            self._completed = True
            self._phase = Phase.FAULTED
            self._logger.debug(f"{self.name}: body raised {exc!r}, fault captured")
            result = ResumeResult.FAULTED
        except BaseException:
            # KeyboardInterrupt and friends are not captured as faults
            self._yielded = _NOTHING
            self._completed = True
            self._phase = Phase.FAULTED
            try:
                raise
            finally:
                if self.policy.auto_dispose:
                    self._release()
        else:
            self._yielded = value
            self._phase = Phase.SUSPENDED
            return ResumeResult.SUSPENDED

        if self.policy.auto_dispose:
            self._release()
        return result

    def read_yielded_value(self) -> Any:
        """
        Return the most recently yielded value without advancing.

        Raises:
            InvalidStateError: If completed, disposed, or nothing was yielded yet
        """
        if self._disposed:
            raise InvalidStateError(f"{self.name}: state was disposed")
        if self._completed:
            raise InvalidStateError(f"{self.name}: no yielded value after completion")
        if self._yielded is _NOTHING:
            raise InvalidStateError(f"{self.name}: nothing has been yielded yet")
        return self._yielded

    def read_final_value(self) -> Any:
        """
        Return the final value of a normally completed body, None otherwise.

        Raises:
            InvalidStateError: If the state was disposed
        """
        if self._disposed:
            raise InvalidStateError(f"{self.name}: final value unavailable, state was disposed")
        if not self._completed or self._phase is Phase.FAULTED:
            return None
        return self._final_value

    def take_fault(self) -> Optional[Exception]:
        """Return and clear the captured fault, if any."""
        fault, self._fault = self._fault, None
        return fault

    def dispose(self) -> None:
        """
        Release the body and both value slots.

        A body suspended mid-execution is closed without being resumed to its
        end; native generators run their ``finally`` blocks on close.

        Raises:
            DoubleDisposeError: If the state was already disposed
            InvalidStateError: If called from inside the running body
        """
        if self._disposed:
            raise DoubleDisposeError(f"{self.name}: dispose() called twice")
        if self._phase is Phase.RUNNING:
            raise InvalidStateError(f"{self.name}: cannot dispose while the body is running")
        if self._phase in (Phase.SUSPENDED, Phase.SUSPENDED_INITIAL):
            self._logger.debug(
                f"{self.name}: disposing mid-body after {self._resume_count} resumptions"
            )
        self._release()

    def _release(self) -> None:
        body, self._body = self._body, None
        self._yielded = _NOTHING
        self._final_value = None
        self._disposed = True
        self._phase = Phase.DISPOSED
        if body is not None:
            body.close()
