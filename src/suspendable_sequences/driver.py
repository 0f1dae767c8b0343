"""Pull loops that consume generator handles."""

import logging
from typing import Any, Iterator, List, Optional

from .generator.handle import GeneratorHandle
from .generator.models import DriveResult
from .generator.protocols import LoggerProtocol


class Driver:
    """
    Drives a generator handle from the caller's side.

    The driver only ever talks to the handle; it never touches the
    execution state directly.
    """

    def __init__(self, handle: GeneratorHandle, logger: Optional[LoggerProtocol] = None):
        """
        Initialize driver.

        Args:
            handle: Handle to pull from
            logger: Logger instance
        """
        self.handle = handle
        self._logger = logger or logging.getLogger(__name__)

    def pull(self) -> Iterator[Any]:
        """
        Pull values until the handle is exhausted.

        Yields:
            Values in yield order
        """
        while self.handle.advance_and_check():
            yield self.handle.next_value()

    def take(self, count: int) -> List[Any]:
        """
        Pull at most ``count`` values, leaving the generator suspended.

        Args:
            count: Maximum number of values to pull

        Returns:
            The values pulled, fewer if the generator ran out
        """
        if count < 0:
            raise ValueError("count must not be negative")
        values = []
        while len(values) < count and self.handle.advance_and_check():
            values.append(self.handle.next_value())
        return values

    def step(self, count: int) -> int:
        """
        Resume the generator ``count`` times, discarding what it yields.

        Used for bodies run for their side effects.

        Returns:
            Number of resumptions actually performed
        """
        if count < 0:
            raise ValueError("count must not be negative")
        performed = 0
        while performed < count and not self.handle.is_exhausted():
            if self.handle.has_fresh_value:
                self.handle.next_value()
            self.handle.advance_and_check()
            performed += 1
        self._logger.debug(f"Stepped {performed} of {count} requested resumptions")
        return performed

    def run(self) -> DriveResult:
        """
        Drain the generator and collect its final value.

        Returns:
            DriveResult with every value, the final value (None when the
            policy disposes state on completion) and the resumption count
        """
        result = DriveResult()
        for value in self.pull():
            result.values.append(value)

        state = self.handle.state
        result.resumptions = state.resume_count
        if not state.disposed:
            result.final_value = self.handle.get_return_value()

        self._logger.info(
            f"Drained {len(result.values)} values from {state.name} "
            f"in {result.resumptions} resumptions"
        )
        return result
