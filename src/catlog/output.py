"""Output helpers for the catlog command-line tool.

Consistent message formatting for the CLI, gated by a single verbosity
integer set from -v/-Q:

    -4 silent, -3 errors only, -2 and above warnings and status, 1+ info

Error lines share their shape with the logger's diagnostic reports.
"""

import sys

_verbosity = 0


def set_verbosity(level):
    """Set the CLI verbosity (verbose count minus quiet count)."""
    global _verbosity
    _verbosity = level


def get_verbosity():
    return _verbosity


def _should_print(level=-2):
    if _verbosity <= -4:
        return False
    return level <= _verbosity


def print_info(msg):
    """Print an informational message (shown with -v)."""
    if _should_print(1):
        print(f"  {msg}", file=sys.stderr)


def print_warn(msg):
    """Print a warning message."""
    if _should_print():
        print(f"  [WARN] {msg}", file=sys.stderr)


def print_error(msg):
    """Print an error message to stderr.

    Shown at all verbosity levels except hard wall (-QQQQ / -4).
    """
    if _should_print(-3):
        print(f"  ERROR: {msg}", file=sys.stderr)
