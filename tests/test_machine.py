"""Tests for hand-written state machine bodies."""

import pytest

from conftest import drain
from suspendable_sequences.bodies import MAXIMUM_REACHED, CountingMachine
from suspendable_sequences.generator import (
    Finish,
    StateMachineBody,
    Suspend,
    SuspensionPolicy,
    resumable,
)


class Exploding(StateMachineBody):
    def step(self, point):
        if point == self.START:
            return Suspend("ok", 1)
        raise ValueError("boom")


class Closable(StateMachineBody):
    def __init__(self):
        super().__init__()
        self.released = False

    def step(self, point):
        return Suspend(point, point + 1)

    def release(self):
        self.released = True


class Confused(StateMachineBody):
    def step(self, point):
        return point


def test_counting_machine_protocol():
    """Test driving a machine with the plain generator protocol."""
    machine = CountingMachine(2)

    assert next(machine) == 0
    assert machine.send(None) == 1
    with pytest.raises(StopIteration) as excinfo:
        next(machine)
    assert excinfo.value.value == MAXIMUM_REACHED
    assert machine.terminated

    with pytest.raises(StopIteration):
        next(machine)


def test_counting_machine_in_for_loop():
    """Test that machines are iterable."""
    assert list(CountingMachine(3)) == [0, 1, 2]


@pytest.mark.parametrize(
    "policy",
    [SuspensionPolicy.GENERIC, SuspensionPolicy.FINAL_VALUE],
)
def test_counting_machine_through_handle(policy):
    """Test that the engine drives machines like native generators."""
    with resumable(policy)(CountingMachine)(3) as gen:
        assert drain(gen) == [0, 1, 2]
        assert gen.get_return_value() == MAXIMUM_REACHED


def test_step_failure_terminates_machine():
    """Test that a failing step is propagated as a body failure."""
    gen = resumable(SuspensionPolicy.GENERIC)(Exploding)()

    assert gen.next_value() == "ok"
    with pytest.raises(ValueError, match="boom"):
        gen.advance_and_check()
    assert gen.is_exhausted()
    gen.close()


def test_dispose_calls_release_hook():
    """Test that disposing mid-body releases the machine."""
    machine = Closable()
    gen = resumable(SuspensionPolicy.GENERIC)(lambda: machine)()

    assert gen.next_value() == 0
    assert gen.advance_and_check()
    assert gen.next_value() == 1

    gen.close()
    assert machine.released
    assert machine.terminated


def test_step_must_return_suspend_or_finish():
    """Test that unexpected step results are rejected."""
    machine = Confused()

    with pytest.raises(TypeError, match="Suspend or Finish"):
        machine.send(None)
    assert machine.terminated


def test_throw_terminates_machine():
    """Test throwing an exception into a machine."""
    machine = CountingMachine(3)
    next(machine)

    with pytest.raises(KeyError):
        machine.throw(KeyError)
    assert machine.terminated


def test_finish_without_value():
    """Test a machine that ends without a final value."""

    class Empty(StateMachineBody):
        def step(self, point):
            return Finish()

    with resumable(SuspensionPolicy.GENERIC)(Empty)() as gen:
        assert drain(gen) == []
        assert gen.get_return_value() is None


def test_stray_stop_iteration_becomes_failure():
    """Test that StopIteration leaking out of step() is reported, not treated as completion."""

    class Leaky(StateMachineBody):
        def step(self, point):
            if point == self.START:
                return Suspend("first", 1)
            return Suspend(next(iter([])), 2)

    gen = resumable(SuspensionPolicy.GENERIC)(Leaky)()
    assert gen.next_value() == "first"

    with pytest.raises(RuntimeError, match="raised StopIteration") as excinfo:
        gen.advance_and_check()
    assert isinstance(excinfo.value.__cause__, StopIteration)
    assert gen.is_exhausted()
    assert gen.get_return_value() is None
    gen.close()


def test_stray_stop_iteration_terminates_machine():
    """Test the conversion on the raw generator protocol."""

    class Leaky(StateMachineBody):
        def step(self, point):
            raise StopIteration("leaked")

    machine = Leaky()
    with pytest.raises(RuntimeError):
        machine.send(None)
    assert machine.terminated
