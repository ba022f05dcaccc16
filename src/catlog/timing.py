"""
TimeTracker - start/stop bookkeeping for timed intervals.

A key is any hashable token chosen by the caller. start() records the
unit and a monotonic start instant; stop() consumes the entry and
returns the elapsed time converted to that unit. Starting a key twice
overwrites the first start.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Tuple

from .errors import InvalidArgumentError, UnknownKeyError, UnsupportedUnitError
from .units import TimeUnit, convert


@dataclass(frozen=True)
class TimerEntry:
    """A started interval: declared unit and start instant in ns."""
    unit: TimeUnit
    start_ns: int


class TimeTracker:
    """Thread-safe map of key -> TimerEntry.

    Args:
        clock: Monotonic nanosecond clock (default: time.monotonic_ns)
    """

    def __init__(self, clock: Callable[[], int] = None):
        self.clock = clock if clock is not None else time.monotonic_ns
        self._entries: Dict[Hashable, TimerEntry] = {}
        self._lock = threading.Lock()

    def start(self, key: Hashable, unit: TimeUnit) -> None:
        """Begin timing `key` in `unit`."""
        if key is None:
            raise InvalidArgumentError("key is null.")
        if unit is None:
            raise InvalidArgumentError("timeUnits is null.")
        if not isinstance(unit, TimeUnit):
            raise UnsupportedUnitError(unit)
        entry = TimerEntry(unit, self.clock())
        with self._lock:
            self._entries[key] = entry

    def stop(self, key: Hashable) -> Tuple[float, TimeUnit]:
        """End timing `key`.

        Returns:
            (elapsed, unit): elapsed time converted to the unit given at start

        Raises:
            UnknownKeyError: the key was never started (or already stopped)
        """
        if key is None:
            raise InvalidArgumentError("key is null.")
        now_ns = self.clock()
        with self._lock:
            entry = self._entries.pop(key, None)
        if entry is None:
            raise UnknownKeyError(key)
        elapsed_ns = now_ns - entry.start_ns
        return convert(float(elapsed_ns), TimeUnit.NANOSECONDS, entry.unit), entry.unit

    def is_tracking(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def pending(self) -> List[Hashable]:
        """Keys started but not yet stopped."""
        with self._lock:
            return list(self._entries)

    def discard(self, key: Hashable) -> bool:
        """Drop a started interval without logging it."""
        with self._lock:
            return self._entries.pop(key, None) is not None
