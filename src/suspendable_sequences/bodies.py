"""Sample generator bodies.

These are plain generator functions and body classes; bind them to a
policy with ``resumable(policy)(body)``.
"""

import logging
from typing import Dict, Iterator, Type

from faker import Faker

from .generator.machine import StateMachineBody
from .generator.models import Finish, Suspend

logger = logging.getLogger(__name__)

MAXIMUM_REACHED = "maximum value reached"


def counter(maximum: int):
    """Yield 0 .. maximum-1, then finish with a fixed message."""
    for i in range(maximum):
        logger.debug(f"counter: generated {i}")
        yield i
    logger.debug("counter: ending")
    return MAXIMUM_REACHED


def infinite_counter(start: int = 0) -> Iterator[int]:
    """Count upwards forever."""
    i = start
    while True:
        logger.debug(f"infinite_counter: {i}")
        yield i
        i += 1


def failing_after(count: int, error: Type[Exception] = RuntimeError):
    """Yield ``count`` values, then raise ``error``."""
    for i in range(count):
        yield i
    raise error(f"failed after {count} values")


class CountingMachine(StateMachineBody):
    """``counter`` written as an explicit switch over resume points."""

    LOOP = 1

    def __init__(self, maximum: int):
        super().__init__()
        self.maximum = maximum
        self.i = 0

    def step(self, point):
        if point == self.START:
            self.i = 0
        elif point == self.LOOP:
            self.i += 1

        if self.i < self.maximum:
            return Suspend(self.i, self.LOOP)
        return Finish(MAXIMUM_REACHED)


def fake_records(count: int, seed: int = 42) -> Iterator[Dict]:
    """Yield ``count`` fake person records, then finish with the count.

    Args:
        count: Number of records to produce
        seed: Random seed for reproducibility
    """
    faker = Faker()
    faker.seed_instance(seed)
    for i in range(count):
        yield {
            "id": i,
            "name": faker.name(),
            "email": faker.email(),
            "city": faker.city(),
            "job": faker.job(),
        }
    logger.info(f"Generated {count:,} fake records")
    return count
