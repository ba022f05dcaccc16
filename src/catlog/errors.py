"""
Exception taxonomy for catlog.

Argument errors are raised synchronously to the caller of the offending
operation. Sink failures are collected during fanout and raised once the
remaining sinks and listeners have been attempted.
"""

from typing import List, Sequence, Tuple


class CatlogError(Exception):
    """Base class for all catlog errors."""


class InvalidArgumentError(CatlogError, ValueError):
    """A required input was missing, empty, or malformed."""


class UnknownKeyError(InvalidArgumentError, LookupError):
    """A timer was ended for a key that was never started."""

    def __init__(self, key):
        super().__init__(f"Never started logging time with key: {key!r}")
        self.key = key


class UnsupportedUnitError(CatlogError, ValueError):
    """A time unit outside the closed TimeUnit enumeration."""

    def __init__(self, unit):
        super().__init__(f"Time unit {unit!r} not supported.")
        self.unit = unit


class CyclicHierarchyError(CatlogError):
    """The parent chain of a category loops back on itself."""

    def __init__(self, cycle: Sequence[str]):
        self.cycle = list(cycle)
        super().__init__(
            "Category hierarchy contains a cycle: " + " -> ".join(self.cycle))


class SinkWriteError(CatlogError, OSError):
    """One or more file sinks could not be written during a dispatch.

    Raised after the whole fanout has run, so every other sink and
    listener has already received the line.

    Attributes:
        failures: (path, exception) pairs in dispatch order. The exception
            is usually an OSError; a path the OS cannot accept or a line
            the file encoding cannot hold shows up as a ValueError.
        line: The log line that could not be written
    """

    def __init__(self, failures: List[Tuple[str, Exception]], line: str):
        self.failures = list(failures)
        self.line = line
        paths = ", ".join(str(path) for path, _ in self.failures)
        super().__init__(f"Couldn't write log file(s): {paths}")
