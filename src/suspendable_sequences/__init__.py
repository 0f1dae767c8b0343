"""Suspendable Sequences - resumable generators with explicit lifecycle control."""

__version__ = "0.1.0"

from .driver import Driver
from .exceptions import BodyFailure, DoubleDisposeError, GeneratorError, InvalidStateError
from .generator import (
    EndBehavior,
    ExecutionState,
    FaultMode,
    GeneratorHandle,
    StartBehavior,
    StateMachineBody,
    SuspensionPolicy,
    resumable,
)

__all__ = [
    "Driver",
    "ExecutionState",
    "GeneratorHandle",
    "StateMachineBody",
    "SuspensionPolicy",
    "StartBehavior",
    "EndBehavior",
    "FaultMode",
    "resumable",
    "GeneratorError",
    "InvalidStateError",
    "DoubleDisposeError",
    "BodyFailure",
]
