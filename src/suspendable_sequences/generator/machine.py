"""Generator bodies written as explicit state machines.

A ``StateMachineBody`` keeps its locals as instance attributes and its resume
point as an integer. Each resumption calls ``step(point)``, which behaves like
one arm of a ``switch`` over resume points and reports where to continue next.
Instances implement the ``collections.abc.Generator`` protocol, so the engine
drives them exactly like native generator objects.
"""

import logging
from abc import abstractmethod
from collections.abc import Generator
from typing import Any, Union

from .models import Finish, Suspend

logger = logging.getLogger(__name__)


class StateMachineBody(Generator):
    """Base class for hand-written resumable bodies."""

    START = 0
    TERMINAL = -1

    def __init__(self):
        self.resume_point = self.START

    @property
    def terminated(self) -> bool:
        return self.resume_point == self.TERMINAL

    @abstractmethod
    def step(self, point: int) -> Union[Suspend, Finish]:
        """Run from resume point ``point`` up to the next suspension or the end.

        Args:
            point: Resume point recorded by the previous step (START at first)

        Returns:
            Suspend to produce a value, or Finish to terminate
        """
        raise NotImplementedError

    def release(self) -> None:
        """Hook called when the body is closed; override to free resources."""

    def send(self, value: Any) -> Any:
        if self.terminated:
            raise StopIteration
        try:
            outcome = self.step(self.resume_point)
        except StopIteration as exc:
            # same conversion native generators get
            self.resume_point = self.TERMINAL
            raise RuntimeError("step() raised StopIteration") from exc
        except BaseException:
            self.resume_point = self.TERMINAL
            raise

        if isinstance(outcome, Suspend):
            if outcome.resume_at == self.TERMINAL:
                self.resume_point = self.TERMINAL
                raise ValueError("cannot suspend at the terminal resume point")
            self.resume_point = outcome.resume_at
            return outcome.value
        if isinstance(outcome, Finish):
            self.resume_point = self.TERMINAL
            raise StopIteration(outcome.value)

        self.resume_point = self.TERMINAL
        raise TypeError(
            f"step() must return Suspend or Finish, got {type(outcome).__name__}"
        )

    def throw(self, typ, val=None, tb=None):
        self.resume_point = self.TERMINAL
        if val is None:
            val = typ() if isinstance(typ, type) else typ
        if tb is not None:
            val = val.with_traceback(tb)
        raise val

    def close(self) -> None:
        if self.terminated:
            return
        logger.debug(f"Closing {type(self).__name__} at resume point {self.resume_point}")
        self.resume_point = self.TERMINAL
        self.release()
