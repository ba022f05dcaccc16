"""catlog time - run a command and log how long it took.

Usage:
    catlog time -c build -u s -- make all

The command's exit code becomes catlog's exit code. The duration is
logged whether the command succeeds or fails.
"""

import argparse
import subprocess

from catlog.errors import InvalidArgumentError
from catlog.output import print_error, print_warn
from catlog.units import UNIT_SYMBOLS, parse_unit


def register(subparsers, parents):
    """Register the 'time' subcommand."""
    p = subparsers.add_parser(
        "time",
        parents=parents,
        help="Run a command and log its duration",
        description=(
            "Run COMMAND and log its wall-clock duration on a category.\n"
            "Everything after '--' is the command:\n"
            "\n"
            "  catlog time -c build -u s -- make all"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-u", "--unit", default="ms",
                   help="Unit for the duration: ns, ms, s, min, h (default: ms)")
    p.add_argument("-m", "--message", default=None,
                   help="Template with one %%f placeholder "
                        "(default: '<command> took %%f <unit>')")
    p.set_defaults(func=run)


def run(args):
    """Execute the time command."""
    cmd = list(getattr(args, "passthrough", None) or [])
    if not cmd:
        raise InvalidArgumentError("no command given to time.")

    unit = parse_unit(args.unit)
    message = args.message
    if message is None:
        shown = " ".join(cmd).replace("%", "%%")
        message = f"{shown} took %f {UNIT_SYMBOLS[unit]}"

    logger = args.logger
    key = object()
    logger.log_time_start(key, unit)
    try:
        result = subprocess.run(cmd)
    except OSError as e:
        logger.tracker.discard(key)
        print_error(f"Couldn't run {cmd[0]}: {e}")
        return 127
    logger.log_time_end(key, message, category=args.category)
    if result.returncode != 0:
        print_warn(f"{cmd[0]} exited with code {result.returncode}")
    return result.returncode
