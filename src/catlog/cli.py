"""Main CLI entry point for catlog.

Implements a Docker-style two-pass argument parser:
  1. First pass: extract global flags (--config, --category, --format, ...)
  2. Second pass: dispatch to subcommand with shared parent args

Global flags can appear before OR after the subcommand:
  catlog --category db:off log -c db "hello"     # works
  catlog log -c db "hello" --category db:off     # also works

Subcommands self-register via register(subparsers, parents) convention.
"""

import argparse
import sys
from pathlib import Path

from catlog._version import BASE_VERSION, VERSION


# ---------------------------------------------------------------------------
# Global flags (Docker-style: can precede the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--verbose": {"aliases": ["-v"], "action": "count", "default": 0,
                  "help": "Increase verbosity (-v, -vv)"},
    "--quiet": {"aliases": ["-Q"], "action": "count", "default": 0,
                "help": "Decrease verbosity (-Q, -QQ, -QQQ, -QQQQ=silent)"},
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Path to config file (default: nearest .catlog.json)"},
    "--category": {"action": "append", "dest": "category_specs",
                   "metavar": "NAME[:STATE[:PARENT[:FILE]]]",
                   "help": "Configure a category (repeatable)"},
    "--format": {"metavar": "FMT", "default": None, "dest": "category_format",
                 "help": "Category label format, e.g. '[%%s] '"},
    "--default-category": {"metavar": "NAME", "default": None,
                           "help": "Category for messages logged without one"},
}


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Arguments after a bare '--' are never treated as global flags.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        global_parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    if "--" in argv:
        split = argv.index("--")
        head, tail = argv[:split], argv[split:]
    else:
        head, tail = argv, []
    global_args, remaining = global_parser.parse_known_args(head)
    return global_args, remaining + tail


# ---------------------------------------------------------------------------
# Shared parent parser (inherited by all subcommands via parents=[])
# ---------------------------------------------------------------------------
def _build_common_parser():
    """Build the shared argument parser for logging subcommands."""
    common = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    common.add_argument("-c", "--cat", dest="category", metavar="CATEGORY",
                        default=None,
                        help="Category to log on (default: the default category)")
    return common


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in catlog.commands must export:
      register(subparsers, parents) - add itself to the subparser
      run(args) - execute the command
    """
    from catlog.commands import convert, log, time_cmd, tree
    return [log, time_cmd, tree, convert]


def _build_parser(commands, common_parser):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="catlog",
        allow_abbrev=False,
        description="catlog - hierarchical category logger",
        epilog=(
            "Run 'catlog <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--config, --category, --format, ...) can appear\n"
            "before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"catlog {BASE_VERSION} ({VERSION})",
    )

    # Add global flags to main parser too (for --help display)
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[common_parser])

    return parser


# ---------------------------------------------------------------------------
# Logger construction
# ---------------------------------------------------------------------------
def build_logger(global_args, out=None):
    """Create a CategoryLogger from config file and global flags.

    Layers (later wins): config file, --category specs, --format,
    --default-category.
    """
    from catlog.category_spec import parse_category_spec
    from catlog.config import apply_config, load_config
    from catlog.logger import CategoryLogger
    from catlog.output import print_info

    logger = CategoryLogger(out if out is not None else sys.stdout)

    data, path = load_config(global_args.config)
    if path is not None:
        print_info(f"Using config {path}")
        apply_config(logger, data, base_dir=Path(path).parent)

    for spec in global_args.category_specs or []:
        parse_category_spec(spec).apply(logger)

    if global_args.category_format is not None:
        logger.set_category_format(global_args.category_format)
    if global_args.default_category is not None:
        logger.set_default_category(global_args.default_category)
    return logger


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for catlog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success).
    """
    from catlog.errors import CatlogError
    from catlog.output import print_error, set_verbosity

    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)
    set_verbosity((global_args.verbose or 0) - (global_args.quiet or 0))

    # Pass 2: parse subcommand + shared/specific args
    common_parser = _build_common_parser()
    commands = _discover_commands()
    parser = _build_parser(commands, common_parser)

    if not remaining:
        parser.print_help()
        return 0

    # Everything after a bare "--" is handed to the command untouched
    passthrough = []
    if "--" in remaining:
        split = remaining.index("--")
        remaining, passthrough = remaining[:split], remaining[split + 1:]

    args = parser.parse_args(remaining)
    args.passthrough = passthrough

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    # Merge global args into the namespace for convenience
    for key, value in vars(global_args).items():
        if key not in vars(args) or getattr(args, key) is None:
            setattr(args, key, value)

    try:
        args.logger = build_logger(global_args)
        return args.func(args) or 0
    except CatlogError as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
