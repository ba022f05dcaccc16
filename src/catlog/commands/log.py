"""catlog log - write one log line through the configured category tree.

The line goes to stdout and to every file sink and listener on the
category's ancestor chain, unless a category on that chain is disabled.
Parameters are matched to the message's %-placeholders by position;
numeric-looking parameters are passed as int or float.
"""

import argparse

from catlog.output import print_info


def register(subparsers, parents):
    """Register the 'log' subcommand."""
    p = subparsers.add_parser(
        "log",
        parents=parents,
        help="Log a message on a category",
        description=(
            "Log a message on a category. The message is a printf-style\n"
            "template; PARAMs fill its placeholders in order:\n"
            "\n"
            "  catlog log -c db 'connected to %s after %d tries' primary 3"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("message", help="Message template")
    p.add_argument("params", nargs="*", metavar="PARAM",
                   help="Template parameters")
    p.set_defaults(func=run)


def coerce_param(text):
    """Turn a command-line string into int, float, or leave it as str."""
    for kind in (int, float):
        try:
            return kind(text)
        except ValueError:
            continue
    return text


def run(args):
    """Execute the log command."""
    logger = args.logger
    raw = list(args.params) + list(getattr(args, "passthrough", None) or [])
    params = [coerce_param(p) for p in raw]
    line = logger.log(args.message, *params, category=args.category)
    if line is None:
        category = logger.resolve_category(args.category)
        print_info(f"Category '{category}' is disabled; nothing written.")
    return 0
