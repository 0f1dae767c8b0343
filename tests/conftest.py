"""Shared fixtures: the demo variants as policy configurations."""

import pytest

from suspendable_sequences.bodies import counter, infinite_counter
from suspendable_sequences.generator import SuspensionPolicy, resumable


@pytest.fixture
def generic_counter():
    """Lazy start, state preserved after completion."""
    return resumable(SuspensionPolicy.GENERIC)(counter)


@pytest.fixture
def final_value_counter():
    """Eager start, state preserved after completion."""
    return resumable(SuspensionPolicy.FINAL_VALUE)(counter)


@pytest.fixture
def simple_counter():
    """Eager start, state disposed on completion."""
    return resumable(SuspensionPolicy.SIMPLE)(counter)


@pytest.fixture
def simple_infinite_counter():
    """Fire-and-forget counter that never terminates."""
    return resumable(SuspensionPolicy.SIMPLE)(infinite_counter)


def drain(handle):
    """Pull every value through the advance/next pull loop."""
    values = []
    while handle.advance_and_check():
        values.append(handle.next_value())
    return values
