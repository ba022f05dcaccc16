"""
CategoryLogger - the public logging surface.

Ties the category registry, renderer, dispatcher and time tracker
together behind the operations callers use::

    log = CategoryLogger(sys.stdout)
    log.add_category_children("app", ["db", "http"])
    log.add_file_log("app", "app.log")
    log.disable_categories("http")
    log.set_category_format("[%s] ")

    log.log("db", "connected to %s in %d tries", "primary", 3)
    log.log_time_start("query", TimeUnit.MILLISECONDS)
    ...
    log.log_time_end("query", "query took %f ms", category="db")

Every instance is independent. A module-level instance is available
through init_logger()/get_logger() for programs that want one shared
logger.
"""

import numbers
import sys
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Hashable, Iterable, Optional, TextIO

from .dispatch import FanoutDispatcher, as_listener
from .errors import InvalidArgumentError
from .registry import CategoryRegistry, _require_name, format_category_tree
from .render import MessageRenderer, format_template, validate_label_format
from .timing import TimeTracker
from .units import TimeUnit, convert


_UNSET = object()


class CategoryLogger:
    """Hierarchical multi-sink logger.

    Args:
        out: Primary output stream (required)
        diagnostics: Stream for internal error reports such as failing
            listeners (default: stderr)
        clock: Monotonic nanosecond clock for timers
        now: Local date-time source for timestamps
    """

    def __init__(
        self,
        out: TextIO,
        *,
        diagnostics: TextIO = None,
        clock: Callable[[], int] = None,
        now: Callable[[], datetime] = None,
    ):
        if out is None:
            raise InvalidArgumentError("out is null.")
        self.registry = CategoryRegistry()
        self.renderer = MessageRenderer(now=now)
        self.tracker = TimeTracker(clock=clock)
        self.dispatcher = FanoutDispatcher(
            self.registry, out, self.renderer.stamp, diagnostics=diagnostics)
        self.default_category: Optional[str] = None

    @property
    def out(self) -> TextIO:
        return self.dispatcher.out

    @property
    def category_format(self) -> Optional[str]:
        return self.renderer.label_format

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def add_listener(self, category: str, listener) -> None:
        """Register a listener (on_log object or callable) on `category`."""
        self.registry.add_listener(category, as_listener(listener))

    def remove_listener(self, category: str, listener) -> bool:
        return self.registry.remove_listener(category, listener)

    def add_file_log(self, category: str, out_file) -> None:
        """Append every line dispatched on `category` (or below) to `out_file`."""
        self.registry.add_file_sink(category, out_file)

    def add_category_children(self, category: str, children: Iterable[str]) -> None:
        """Declare `children` as children of `category`."""
        self.registry.add_children(category, children)

    def enable_categories(self, *categories: str) -> None:
        self._update_categories(True, categories)

    def disable_categories(self, *categories: str) -> None:
        self._update_categories(False, categories)

    def _update_categories(self, value: bool, categories) -> None:
        if not categories:
            raise InvalidArgumentError("categories is empty.")
        self.registry.set_enabled(categories, value)

    def set_default_category(self, default_category: str) -> "CategoryLogger":
        """Category used by calls that pass none."""
        self.default_category = _require_name(default_category, "defaultCategory")
        return self

    def clear_default_category(self) -> "CategoryLogger":
        self.default_category = None
        return self

    def set_category_format(self, fmt: str) -> "CategoryLogger":
        """Set the label format, e.g. '[%s] '. Must take exactly one %s-style parameter."""
        self.renderer.label_format = validate_label_format(fmt)
        return self

    def clear_category_format(self) -> "CategoryLogger":
        self.renderer.label_format = None
        return self

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def resolve_category(self, category: Optional[str]) -> Optional[str]:
        """The explicit category, else the default category (may be None)."""
        return category if category is not None else self.default_category

    def log(self, *args: Any, category: Optional[str] = _UNSET) -> Optional[str]:
        """Log a message.

        Call forms::

            log(message)
            log(category, message, *params)
            log(message, *params, category=...)

        With the keyword form every positional argument after the message
        is a parameter. Without it a single positional argument is the
        message; with two or more the first is the category (None selects
        the default category).

        Returns:
            The written line, or None when the category is disabled

        Raises:
            InvalidArgumentError: missing message or bad template/params
            SinkWriteError: one or more file sinks failed
        """
        if category is _UNSET:
            if not args:
                raise InvalidArgumentError("log() needs a message.")
            if len(args) == 1:
                category, message, params = None, args[0], ()
            else:
                category, message, params = args[0], args[1], args[2:]
        else:
            if not args:
                raise InvalidArgumentError("log() needs a message.")
            message, params = args[0], args[1:]
        return self._log(category, message, params)

    def _log(self, category: Optional[str], message, params) -> Optional[str]:
        if message is None:
            raise InvalidArgumentError("message is null.")
        if category is not None and not isinstance(category, str):
            raise InvalidArgumentError(
                f"category must be a string, got {type(category).__name__}.")
        resolved = self.resolve_category(category)
        body = self.renderer.render_body(resolved, message, params)
        return self.dispatcher.dispatch(resolved, body)

    def log_time_start(self, key: Hashable, unit: TimeUnit) -> None:
        """Start timing `key`; the duration will be reported in `unit`."""
        self.tracker.start(key, unit)

    def log_time_end(self, key: Hashable, message: str,
                     category: Optional[str] = None) -> Optional[str]:
        """Stop timing `key` and log `message` with the elapsed time.

        `message` takes exactly one numeric placeholder, e.g. "took %f ms".

        Raises:
            UnknownKeyError: `key` was never started
        """
        if key is None:
            raise InvalidArgumentError("key is null.")
        if message is None:
            raise InvalidArgumentError("message is null.")
        # Validate before consuming the timer
        format_template(message, (0.0,))
        elapsed, _ = self.tracker.stop(key)
        return self._log(category, message, (elapsed,))

    def log_time(self, category: Optional[str], message: str, time,
                 src_unit: TimeUnit, dst_unit: TimeUnit) -> Optional[str]:
        """Log a precomputed duration converted from `src_unit` to `dst_unit`."""
        if message is None:
            raise InvalidArgumentError("message is null.")
        if src_unit is None:
            raise InvalidArgumentError("srcUnits is null.")
        if dst_unit is None:
            raise InvalidArgumentError("dstUnits is null.")
        if time is None:
            raise InvalidArgumentError("time is null.")
        if not isinstance(time, numbers.Real) or isinstance(time, bool):
            raise InvalidArgumentError(f"time must be a number, got {time!r}.")
        value = convert(float(time), src_unit, dst_unit)
        return self._log(category, message, (value,))

    @contextmanager
    def timer(self, message: str, unit: TimeUnit = TimeUnit.MILLISECONDS,
              category: Optional[str] = None):
        """Context manager that logs the elapsed time of its block.

        The duration is logged even if the block raises, and the block's
        exception is the one that propagates. If logging fails at that
        point the logging error is reported on the diagnostic stream.
        """
        format_template(message, (0.0,))
        start_ns = self.tracker.clock()
        try:
            yield
        except BaseException:
            elapsed_ns = self.tracker.clock() - start_ns
            try:
                self.log_time(category, message, elapsed_ns,
                              TimeUnit.NANOSECONDS, unit)
            except Exception as e:
                self.dispatcher.report(
                    f"couldn't log duration of failed block: "
                    f"{type(e).__name__}: {e}")
            raise
        else:
            elapsed_ns = self.tracker.clock() - start_ns
            self.log_time(category, message, elapsed_ns,
                          TimeUnit.NANOSECONDS, unit)

    def format_tree(self) -> str:
        """Indented view of the declared category hierarchy."""
        return format_category_tree(self.registry)


# =============================================================================
# Module-level singleton
# =============================================================================

_logger: Optional[CategoryLogger] = None


def init_logger(out: TextIO = None, config: dict = None,
                base_dir=None) -> CategoryLogger:
    """Initialize the module-level CategoryLogger.

    Args:
        out: Primary stream (default: stdout)
        config: Optional config dict, applied with catlog.config.apply_config
        base_dir: Directory relative file sinks in `config` resolve against

    Returns:
        The new logger
    """
    global _logger
    logger = CategoryLogger(out if out is not None else sys.stdout)
    if config:
        from .config import apply_config
        apply_config(logger, config, base_dir=base_dir)
    _logger = logger
    return _logger


def get_logger() -> CategoryLogger:
    """Get the module-level CategoryLogger, creating a stdout one if needed."""
    global _logger
    if _logger is None:
        _logger = CategoryLogger(sys.stdout)
    return _logger
