"""
Function timing decorator.

Routes the elapsed time of each call through a CategoryLogger, by
default the module-level one from get_logger().
"""

import functools
import inspect

from .render import format_template
from .units import UNIT_SYMBOLS, TimeUnit


def timed(message=None, unit=TimeUnit.MILLISECONDS, category=None, logger=None):
    """Decorator to log how long each call of a function takes.

    Args:
        message: Template with one numeric placeholder. Defaults to
            "<module>.<function> took %f <unit>".
        unit: Unit the duration is reported in
        category: Category to log on (None selects the default category)
        logger: CategoryLogger to use; resolved via get_logger() at call
            time when omitted

    Can be applied bare (``@timed``) or with arguments (``@timed("x %f")``).
    The duration is logged when the function raises too; the exception
    is re-raised afterwards.
    """
    if callable(message) and not isinstance(message, str):
        return timed()(message)

    def decorator(func):
        template = message
        if template is None:
            module = inspect.getmodule(func)
            module_name = module.__name__ if module else "unknown"
            template = f"{module_name}.{func.__qualname__} took %f {UNIT_SYMBOLS[unit]}"
        format_template(template, (0.0,))

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if logger is None:
                # Lazy import to avoid circular dependency
                from .logger import get_logger
                target = get_logger()
            else:
                target = logger
            with target.timer(template, unit=unit, category=category):
                return func(*args, **kwargs)

        return wrapper

    return decorator
