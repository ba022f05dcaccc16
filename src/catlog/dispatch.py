"""
FanoutDispatcher - delivers one log line to every destination.

For a resolved category the dispatcher:
    1. computes the ancestor closure and returns early if it is gated
    2. stamps the line and writes it once to the primary stream
    3. appends it to every file sink on the closure (root-most first)
    4. notifies every listener on the closure (root-most first)

Steps 2-4 run under one lock, so concurrent dispatches never interleave
partial lines. A failing file sink does not stop the fanout; failures are
collected and raised as SinkWriteError at the end. A failing listener is
reported on the diagnostic stream and never reaches the caller.
"""

import sys
import threading
from typing import Callable, List, Optional, Protocol, TextIO, Tuple, runtime_checkable

from .errors import InvalidArgumentError, SinkWriteError
from .registry import CategoryRegistry


@runtime_checkable
class Listener(Protocol):
    """Receives every line dispatched on the category it is registered to."""

    def on_log(self, category: str, line: str) -> None:
        """Called with the resolved category name and the full rendered line."""
        ...


class CallbackListener:
    """Adapts a plain function ``fn(category, line)`` to the Listener protocol."""

    __slots__ = ("fn",)

    def __init__(self, fn: Callable[[str, str], None]):
        self.fn = fn

    def on_log(self, category: str, line: str) -> None:
        self.fn(category, line)

    def __repr__(self):
        name = getattr(self.fn, "__qualname__", None) or repr(self.fn)
        return f"CallbackListener({name})"


def as_listener(obj) -> Listener:
    """Return `obj` as a Listener, wrapping bare callables."""
    if obj is None:
        raise InvalidArgumentError("listener is null.")
    if callable(getattr(obj, "on_log", None)):
        return obj
    if callable(obj):
        return CallbackListener(obj)
    raise InvalidArgumentError(
        f"listener must define on_log(category, line) or be callable, "
        f"got {type(obj).__name__}")


def append_line(path: str, line: str) -> None:
    """Open `path` for append, write `line`, close.

    The file is created if missing. newline='' keeps the CRLF terminator
    byte-exact on every platform.
    """
    with open(path, "a", encoding="utf-8", newline="") as f:
        f.write(line)


class FanoutDispatcher:
    """Gate, stamp and fan out rendered messages.

    Args:
        registry: Category state to resolve closures and sinks from
        out: Primary output stream; receives every non-gated line once
        stamp: Turns a rendered body into the final line (timestamp and
            terminator); called inside the critical section
        diagnostics: Stream for listener failure reports (default: stderr
            at report time)
    """

    def __init__(
        self,
        registry: CategoryRegistry,
        out: TextIO,
        stamp: Callable[[str], str],
        diagnostics: TextIO = None,
    ):
        if out is None:
            raise InvalidArgumentError("out is null.")
        self.registry = registry
        self.out = out
        self.stamp = stamp
        self.diagnostics = diagnostics
        self._lock = threading.Lock()

    def dispatch(self, category: Optional[str], body: str) -> Optional[str]:
        """Deliver `body` on `category`.

        Returns:
            The line as written, or None when the category is gated

        Raises:
            SinkWriteError: after the full fanout, if any file sink failed
            CyclicHierarchyError: if the category's parent chain loops
        """
        closure = self.registry.ancestor_closure(category)
        if self.registry.is_gated(closure):
            return None
        sinks, listeners = self.registry.fanout_targets(closure)

        failures: List[Tuple[str, Exception]] = []
        with self._lock:
            line = self.stamp(body)
            self.out.write(line)
            flush = getattr(self.out, "flush", None)
            if flush is not None:
                flush()

            for path in sinks:
                try:
                    append_line(path, line)
                except (OSError, ValueError) as e:
                    failures.append((path, e))

            for listener in listeners:
                try:
                    listener.on_log(category, line)
                except Exception as e:
                    self.report(
                        f"listener {listener!r} failed on category "
                        f"'{category}': {type(e).__name__}: {e}")

        if failures:
            raise SinkWriteError(failures, line)
        return line

    def report(self, message: str) -> None:
        """Write an internal error line to the diagnostic stream."""
        stream = self.diagnostics if self.diagnostics is not None else sys.stderr
        print(f"  ERROR: {message}", file=stream)
