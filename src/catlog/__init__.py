"""
catlog - hierarchical category logger with multi-sink fanout.

Messages are tagged with a category. Categories form a tree through
explicit parent/child declarations; disabling any category on the chain
silences everything below it. Each category may add file sinks and
listeners, which receive every line logged on it or its descendants,
alongside the logger's primary output stream.

Public API:
    CategoryLogger     - the logger
    init_logger        - module-level singleton initialization
    get_logger         - access singleton
    TimeUnit           - duration units
    convert            - unit conversion
    Listener           - listener protocol (on_log(category, line))
    timed              - function timing decorator
    CategoryRegistry   - category tree store
    MessageRenderer    - line rendering
    CatlogError and subclasses
"""

from catlog._version import __version__, __app_name__
from .dispatch import CallbackListener, FanoutDispatcher, Listener
from .errors import (
    CatlogError, CyclicHierarchyError, InvalidArgumentError, SinkWriteError,
    UnknownKeyError, UnsupportedUnitError,
)
from .logger import CategoryLogger, get_logger, init_logger
from .registry import CategoryRegistry, format_category_tree
from .render import MessageRenderer, format_template, format_timestamp
from .timed import timed
from .timing import TimeTracker
from .units import TimeUnit, convert, parse_unit

__all__ = [
    '__version__', '__app_name__',
    'CategoryLogger', 'init_logger', 'get_logger',
    'TimeUnit', 'convert', 'parse_unit',
    'Listener', 'CallbackListener', 'FanoutDispatcher',
    'CategoryRegistry', 'format_category_tree',
    'MessageRenderer', 'format_template', 'format_timestamp',
    'TimeTracker', 'timed',
    'CatlogError', 'InvalidArgumentError', 'UnknownKeyError',
    'UnsupportedUnitError', 'CyclicHierarchyError', 'SinkWriteError',
]
