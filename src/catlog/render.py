"""
Message rendering: printf-style templates, category labels, timestamps.

A rendered line has the shape::

    <ISO-local-date-time>: <label><formatted template>\r\n

The label is the category name passed through the label format (for
example "[%s] "), or empty when no format or no category is set. No
separator is added between label and message; it belongs in the format.

Templates use %-placeholders matched to parameters by position. Arity
and parameter types are checked before formatting, so a bad call fails
with InvalidArgumentError instead of truncating a float into %d or
silently dropping extra parameters.
"""

import numbers
import re
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence

from .errors import InvalidArgumentError


LINE_TERMINATOR = "\r\n"

# %[flags][width][.precision][length]conversion
_PLACEHOLDER_RE = re.compile(
    r"%(?P<flags>[#0\- +]*)(?P<width>\d+)?(?:\.(?P<precision>\d+))?"
    r"(?P<length>[hlL])?(?P<conv>[diouxXeEfFgGcrsa%])"
)

_INT_CONVERSIONS = set("diouxX")
_FLOAT_CONVERSIONS = set("eEfFgG")


def parse_placeholders(template: str) -> List[str]:
    """Return the conversion characters of every argument-consuming placeholder.

    '%%' is a literal percent sign and consumes nothing.

    Raises:
        InvalidArgumentError: on a '%' that does not start a supported
            placeholder (e.g. trailing '%', mapping keys, '*' widths)
    """
    conversions = []
    pos = 0
    while True:
        idx = template.find('%', pos)
        if idx == -1:
            return conversions
        match = _PLACEHOLDER_RE.match(template, idx)
        if match is None:
            raise InvalidArgumentError(
                f"Unsupported format specifier at index {idx}: {template[idx:idx + 4]!r}")
        conv = match.group('conv')
        if conv != '%':
            conversions.append(conv)
        pos = match.end()


def _check_param(index: int, conv: str, value: Any) -> None:
    if conv in _INT_CONVERSIONS:
        ok = isinstance(value, numbers.Integral) and not isinstance(value, bool)
        expected = "an integer"
    elif conv in _FLOAT_CONVERSIONS:
        ok = isinstance(value, numbers.Real) and not isinstance(value, bool)
        expected = "a number"
    elif conv == 'c':
        ok = ((isinstance(value, str) and len(value) == 1)
              or (isinstance(value, numbers.Integral) and not isinstance(value, bool)))
        expected = "a single character"
    else:
        return
    if not ok:
        raise InvalidArgumentError(
            f"Parameter {index} for %{conv} must be {expected}, "
            f"got {type(value).__name__}: {value!r}")


def format_template(template, params: Sequence[Any] = ()) -> str:
    """Substitute `params` into `template` positionally.

    Args:
        template: printf-style template; non-str objects are converted with str()
        params: Values for the placeholders, in order

    Returns:
        The formatted message

    Raises:
        InvalidArgumentError: empty template, arity mismatch, wrong type
    """
    if template is None:
        raise InvalidArgumentError("message is null.")
    if not isinstance(template, str):
        template = str(template)
    if template == '':
        raise InvalidArgumentError("message is empty.")
    params = tuple(params)
    conversions = parse_placeholders(template)
    if len(conversions) != len(params):
        raise InvalidArgumentError(
            f"Template expects {len(conversions)} parameter(s), "
            f"got {len(params)}: {template!r}")
    for i, (conv, value) in enumerate(zip(conversions, params)):
        _check_param(i, conv, value)
    try:
        return template % params
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidArgumentError(f"Couldn't format {template!r}: {e}") from e


def validate_label_format(label_format: str) -> str:
    """Check that a label format takes exactly one parameter."""
    if label_format is None:
        raise InvalidArgumentError("format is null.")
    format_template(label_format, ("category",))
    return label_format


def format_label(label_format: Optional[str], category: Optional[str]) -> str:
    """Render the category label, or '' when either part is unset."""
    if label_format is None or category is None:
        return ''
    return format_template(label_format, (category,))


def format_timestamp(moment: datetime) -> str:
    """Format a local date-time as YYYY-MM-DDTHH:MM:SS[.fraction].

    The fractional second drops trailing zeros and is omitted entirely
    when zero, e.g. ``2026-10-18T09:05:03.25``.
    """
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    return text


class MessageRenderer:
    """Turns (category, template, params) into complete log lines.

    Rendering is split in two so validation can run before any sink is
    touched while the timestamp is taken inside the dispatch critical
    section:

        body = renderer.render_body(category, template, params)
        line = renderer.stamp(body)
    """

    def __init__(self, label_format: Optional[str] = None,
                 now: Callable[[], datetime] = None):
        if label_format is not None:
            validate_label_format(label_format)
        self.label_format = label_format
        self.now = now if now is not None else datetime.now

    def render_body(self, category: Optional[str], template,
                    params: Sequence[Any] = ()) -> str:
        """Label plus formatted message, without timestamp or terminator."""
        message = format_template(template, params)
        return format_label(self.label_format, category) + message

    def stamp(self, body: str) -> str:
        """Prefix the current timestamp and append the line terminator."""
        return format_timestamp(self.now()) + ": " + body + LINE_TERMINATOR

    def render(self, category: Optional[str], template,
               params: Sequence[Any] = ()) -> str:
        """Render a complete line in one step."""
        return self.stamp(self.render_body(category, template, params))
