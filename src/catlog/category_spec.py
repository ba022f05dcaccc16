"""
Compact category spec strings for the command line.

Spec syntax (positional, empty slots allowed):
    NAME:STATE:PARENT:FILE

    Examples:
        db                  # Just make the category known
        db:off              # Disable db
        db::app             # Declare db as a child of app
        db:on:app:db.log    # Enabled child of app, appended to db.log
        db:::C:\\logs\\db.log   # Windows path in the FILE slot

STATE is on/off (also true/false, yes/no, 1/0) or empty for "unset".
"""

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidArgumentError


_STATE_WORDS = {
    'on': True, 'true': True, 'yes': True, '1': True, 'enable': True,
    'off': False, 'false': False, 'no': False, '0': False, 'disable': False,
}


@dataclass
class CategoryConfig:
    """Settings for one category parsed from a spec string."""
    name: str
    enabled: Optional[bool] = None
    parent: Optional[str] = None
    file: Optional[str] = None

    def apply(self, logger) -> None:
        """Apply these settings to a CategoryLogger."""
        if self.parent:
            logger.add_category_children(self.parent, [self.name])
        if self.enabled is True:
            logger.enable_categories(self.name)
        elif self.enabled is False:
            logger.disable_categories(self.name)
        if self.file:
            logger.add_file_log(self.name, self.file)


def parse_state(text: str) -> Optional[bool]:
    """Parse an on/off word; empty means unset."""
    if text is None or text == '':
        return None
    try:
        return _STATE_WORDS[text.strip().lower()]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown category state {text!r} (expected on/off)") from None


def parse_category_spec(spec: str) -> CategoryConfig:
    """Parse a category spec string into a CategoryConfig.

    Windows drive letters (e.g., C:\\path) in the FILE slot are detected
    and rejoined.

    Args:
        spec: Spec string like "db:off" or "db::app:C:\\logs\\db.log"

    Returns:
        CategoryConfig with parsed values
    """
    if not spec:
        raise InvalidArgumentError("category spec is empty.")
    parts = spec.split(':')

    # Everything from the FILE slot on belongs to the path
    if len(parts) > 4:
        parts = parts[:3] + [':'.join(parts[3:])]

    name = parts[0]
    if not name:
        raise InvalidArgumentError(f"category spec {spec!r} has no name.")
    enabled = parse_state(parts[1]) if len(parts) > 1 else None
    parent = parts[2] if len(parts) > 2 and parts[2] else None
    file = parts[3] if len(parts) > 3 and parts[3] else None

    return CategoryConfig(name=name, enabled=enabled, parent=parent, file=file)
