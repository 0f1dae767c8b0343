"""Configuration management for the engine."""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_START_CHOICES = ("lazy", "eager")
_END_CHOICES = ("preserve", "auto_dispose")
_FAULT_CHOICES = ("propagate", "wrap", "suppress")


@dataclass
class EngineConfig:
    """Engine configuration parameters."""

    start: str = "lazy"
    end: str = "preserve"
    faults: str = "propagate"
    batch_size: int = 1000
    compression: str = "snappy"
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.start not in _START_CHOICES:
            raise ValueError(f"start must be one of {_START_CHOICES}, got {self.start!r}")
        if self.end not in _END_CHOICES:
            raise ValueError(f"end must be one of {_END_CHOICES}, got {self.end!r}")
        if self.faults not in _FAULT_CHOICES:
            raise ValueError(f"faults must be one of {_FAULT_CHOICES}, got {self.faults!r}")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Load engine configuration from environment variables.

        Reads SUSPENDABLE_START, SUSPENDABLE_END, SUSPENDABLE_FAULTS,
        SUSPENDABLE_BATCH_SIZE, SUSPENDABLE_COMPRESSION and
        SUSPENDABLE_LOG_LEVEL. Choice values are case-insensitive.
        """
        return cls(
            start=os.getenv("SUSPENDABLE_START", "lazy").lower(),
            end=os.getenv("SUSPENDABLE_END", "preserve").lower(),
            faults=os.getenv("SUSPENDABLE_FAULTS", "propagate").lower(),
            batch_size=int(os.getenv("SUSPENDABLE_BATCH_SIZE", "1000")),
            compression=os.getenv("SUSPENDABLE_COMPRESSION", "snappy"),
            log_level=os.getenv("SUSPENDABLE_LOG_LEVEL", "INFO").upper(),
        )


def get_engine_config() -> EngineConfig:
    """Get engine configuration."""
    return EngineConfig.from_env()


def setup_logging(verbose: bool = False, config: Optional[EngineConfig] = None):
    """Configure root logging.

    Args:
        verbose: Enable verbose (DEBUG) logging regardless of configuration
        config: Engine configuration providing the default log level
    """
    config = config or get_engine_config()
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(level)
