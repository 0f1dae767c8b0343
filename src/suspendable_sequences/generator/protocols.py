"""Protocol definitions for dependency inversion."""

from typing import Any, Generator, Protocol


class BodyFactory(Protocol):
    """Anything that, when called, returns a generator body."""

    def __call__(self, *args: Any, **kwargs: Any) -> Generator:
        """Create a fresh body."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging."""

    def info(self, message: str, *args, **kwargs) -> None:
        """Log info message."""
        ...

    def debug(self, message: str, *args, **kwargs) -> None:
        """Log debug message."""
        ...

    def warning(self, message: str, *args, **kwargs) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, *args, **kwargs) -> None:
        """Log error message."""
        ...
