"""
Time units and exact duration conversion.

Every unit is an integer count of nanoseconds, so conversions multiply
into nanoseconds and divide back out. Converting a unit to itself
returns the input untouched.
"""

from enum import Enum

from .errors import UnsupportedUnitError


class TimeUnit(Enum):
    """Closed set of duration granularities.

    The value of each member is its length in nanoseconds.
    """
    NANOSECONDS = 1
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60 * 1_000_000_000
    HOURS = 3600 * 1_000_000_000


# Short names accepted by parse_unit (CLI, config files)
UNIT_ALIASES = {
    'ns': TimeUnit.NANOSECONDS,
    'nanoseconds': TimeUnit.NANOSECONDS,
    'ms': TimeUnit.MILLISECONDS,
    'milliseconds': TimeUnit.MILLISECONDS,
    's': TimeUnit.SECONDS,
    'sec': TimeUnit.SECONDS,
    'seconds': TimeUnit.SECONDS,
    'm': TimeUnit.MINUTES,
    'min': TimeUnit.MINUTES,
    'minutes': TimeUnit.MINUTES,
    'h': TimeUnit.HOURS,
    'hours': TimeUnit.HOURS,
}

UNIT_SYMBOLS = {
    TimeUnit.NANOSECONDS: 'ns',
    TimeUnit.MILLISECONDS: 'ms',
    TimeUnit.SECONDS: 's',
    TimeUnit.MINUTES: 'min',
    TimeUnit.HOURS: 'h',
}


def nanos_per_unit(unit: TimeUnit) -> int:
    """Return the number of nanoseconds in one `unit`."""
    if not isinstance(unit, TimeUnit):
        raise UnsupportedUnitError(unit)
    return unit.value


def convert(value: float, src: TimeUnit, dst: TimeUnit) -> float:
    """Convert a duration from `src` units to `dst` units.

    Args:
        value: Duration expressed in `src` units
        src: Unit of `value`
        dst: Desired unit

    Returns:
        The duration in `dst` units. Same-unit conversion returns `value`
        unchanged.
    """
    src_ns = nanos_per_unit(src)
    dst_ns = nanos_per_unit(dst)
    if src is dst:
        return value
    return value * src_ns / dst_ns


def parse_unit(text) -> TimeUnit:
    """Look up a TimeUnit by alias or member name (case-insensitive)."""
    if isinstance(text, TimeUnit):
        return text
    if not isinstance(text, str):
        raise UnsupportedUnitError(text)
    key = text.strip().lower()
    if key in UNIT_ALIASES:
        return UNIT_ALIASES[key]
    try:
        return TimeUnit[key.upper()]
    except KeyError:
        raise UnsupportedUnitError(text) from None
