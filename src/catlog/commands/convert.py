"""catlog convert - convert a duration between time units."""

from catlog.errors import InvalidArgumentError
from catlog.units import UNIT_SYMBOLS, convert, parse_unit


def register(subparsers, parents):
    """Register the 'convert' subcommand."""
    p = subparsers.add_parser(
        "convert",
        help="Convert a duration between units (ns, ms, s, min, h)",
    )
    p.add_argument("value", help="Duration to convert")
    p.add_argument("src", metavar="FROM", help="Unit of VALUE")
    p.add_argument("dst", metavar="TO", help="Target unit")
    p.set_defaults(func=run)


def run(args):
    """Execute the convert command."""
    try:
        value = float(args.value)
    except ValueError:
        raise InvalidArgumentError(f"not a number: {args.value!r}") from None
    dst = parse_unit(args.dst)
    result = convert(value, parse_unit(args.src), dst)
    print(f"{result:g} {UNIT_SYMBOLS[dst]}")
    return 0
