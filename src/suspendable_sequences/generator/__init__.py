"""Suspendable generator engine: execution state, policies and handles."""

from .factory import resumable
from .handle import GeneratorHandle
from .machine import StateMachineBody
from .models import (
    DriveResult,
    EndBehavior,
    FaultMode,
    Finish,
    Phase,
    ResumeResult,
    SinkStatistics,
    StartBehavior,
    Suspend,
    SuspensionPolicy,
)
from .protocols import BodyFactory, LoggerProtocol
from .state import ExecutionState

__all__ = [
    # Models
    "SuspensionPolicy",
    "StartBehavior",
    "EndBehavior",
    "FaultMode",
    "Phase",
    "ResumeResult",
    "Suspend",
    "Finish",
    "DriveResult",
    "SinkStatistics",
    # Protocols
    "BodyFactory",
    "LoggerProtocol",
    # Engine
    "ExecutionState",
    "GeneratorHandle",
    "StateMachineBody",
    "resumable",
]
