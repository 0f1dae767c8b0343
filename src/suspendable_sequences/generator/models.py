"""Data models and policy classes."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, List, Optional


class StartBehavior(str, Enum):
    """What happens right after a generator is created."""

    LAZY = "lazy"
    EAGER = "eager"


class EndBehavior(str, Enum):
    """What happens to the execution state once the body finishes."""

    PRESERVE = "preserve"
    AUTO_DISPOSE = "auto_dispose"


class FaultMode(str, Enum):
    """How a handle surfaces exceptions raised by the body."""

    PROPAGATE = "propagate"
    WRAP = "wrap"
    SUPPRESS = "suppress"


class Phase(str, Enum):
    """Lifecycle phase of an execution state."""

    CREATED = "created"
    SUSPENDED_INITIAL = "suspended_initial"
    RUNNING = "running"
    SUSPENDED = "suspended"
    COMPLETED = "completed"
    FAULTED = "faulted"
    DISPOSED = "disposed"


class ResumeResult(str, Enum):
    """Outcome of a single resumption."""

    SUSPENDED = "suspended"
    COMPLETED = "completed"
    FAULTED = "faulted"


@dataclass(frozen=True)
class SuspensionPolicy:
    """Start, end and fault behavior of a generator type.

    A policy is chosen when the generator is defined and applies to every
    invocation of it.
    """

    start: StartBehavior = StartBehavior.LAZY
    end: EndBehavior = EndBehavior.PRESERVE
    faults: FaultMode = FaultMode.PROPAGATE

    GENERIC: ClassVar["SuspensionPolicy"]
    SIMPLE: ClassVar["SuspensionPolicy"]
    FINAL_VALUE: ClassVar["SuspensionPolicy"]

    @property
    def is_lazy(self) -> bool:
        return self.start is StartBehavior.LAZY

    @property
    def auto_dispose(self) -> bool:
        return self.end is EndBehavior.AUTO_DISPOSE

    def with_faults(self, faults: FaultMode) -> "SuspensionPolicy":
        """Return a copy of this policy using a different fault mode."""
        return replace(self, faults=FaultMode(faults))

    @classmethod
    def from_config(cls, config) -> "SuspensionPolicy":
        """Build a policy from an EngineConfig."""
        return cls(
            start=StartBehavior(config.start),
            end=EndBehavior(config.end),
            faults=FaultMode(config.faults),
        )


SuspensionPolicy.GENERIC = SuspensionPolicy(StartBehavior.LAZY, EndBehavior.PRESERVE)
SuspensionPolicy.SIMPLE = SuspensionPolicy(StartBehavior.EAGER, EndBehavior.AUTO_DISPOSE)
SuspensionPolicy.FINAL_VALUE = SuspensionPolicy(StartBehavior.EAGER, EndBehavior.PRESERVE)


@dataclass(frozen=True)
class Suspend:
    """Step outcome: produce ``value`` and continue at ``resume_at`` next time."""

    value: Any
    resume_at: int


@dataclass(frozen=True)
class Finish:
    """Step outcome: terminate, optionally with a final value."""

    value: Any = None


@dataclass
class DriveResult:
    """Everything a driver observed while draining a handle."""

    values: List[Any] = field(default_factory=list)
    final_value: Optional[Any] = None
    resumptions: int = 0


@dataclass
class SinkStatistics:
    """Statistics for sink write operations."""

    total_rows: int = 0
    total_batches: int = 0
    file_size_bytes: int = 0
    elapsed_time: float = 0.0
    final_value: Optional[Any] = None
