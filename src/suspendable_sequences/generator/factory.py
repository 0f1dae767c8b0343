"""Decorator that turns a generator function into a resumable generator type."""

import functools
from typing import Callable, Optional

from ..config import get_engine_config
from .handle import GeneratorHandle
from .models import SuspensionPolicy
from .protocols import LoggerProtocol
from .state import ExecutionState


def resumable(
    policy: Optional[SuspensionPolicy] = None,
    logger: Optional[LoggerProtocol] = None,
) -> Callable:
    """Bind a suspension policy to a generator function or body class.

    Calling the decorated callable creates an execution state, starts it
    according to the policy and returns an owning GeneratorHandle::

        @resumable(SuspensionPolicy.GENERIC)
        def counter(maximum):
            for i in range(maximum):
                yield i
            return "maximum value reached"

        with counter(3) as gen:
            while gen.advance_and_check():
                gen.next_value()

    Without an explicit policy, the one described by the environment
    configuration is used. It is resolved once, at decoration time.
    """
    if policy is not None and not isinstance(policy, SuspensionPolicy):
        raise TypeError(
            f"resumable() expects a SuspensionPolicy, got {type(policy).__name__}; "
            "use @resumable() or @resumable(policy)"
        )
    chosen = policy if policy is not None else SuspensionPolicy.from_config(get_engine_config())

    def decorator(body_factory: Callable) -> Callable:
        @functools.wraps(body_factory, updated=())
        def wrapper(*args, **kwargs) -> GeneratorHandle:
            state = ExecutionState(body_factory, args, kwargs, chosen, logger)
            return GeneratorHandle(state, logger)

        def make_state(*args, **kwargs) -> ExecutionState:
            """Create an unstarted execution state for manual driving."""
            return ExecutionState(body_factory, args, kwargs, chosen, logger)

        wrapper.policy = chosen
        wrapper.state = make_state
        return wrapper

    return decorator
