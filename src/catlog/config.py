"""Configuration files for catlog.

A config file is JSON describing a category tree and its sinks::

    {
      "default_category": "app",
      "category_format": "[%s] ",
      "categories": {
        "app":  {"children": ["db", "http"], "files": ["app.log"]},
        "db":   {"enabled": false}
      }
    }

The nearest .catlog.json is found by walking up from the working
directory. Relative file paths resolve against the directory holding the
config file.
"""

import json
import os
from pathlib import Path

from catlog.errors import InvalidArgumentError


CONFIG_FILENAME = ".catlog.json"

TOP_LEVEL_KEYS = {"default_category", "category_format", "categories"}
CATEGORY_KEYS = {"parent", "children", "enabled", "files"}


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def find_config(start_dir=None):
    """Walk up from start_dir looking for .catlog.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def load_config(path=None, start_dir=None):
    """Load an explicit config path, or the nearest .catlog.json.

    Returns:
        (config dict, path or None)
    """
    if path is None:
        path = find_config(start_dir)
        if path is None:
            return {}, None
    path = Path(path)
    return load_json(path), path


# ---------------------------------------------------------------------------
# Applying config
# ---------------------------------------------------------------------------
def _resolve_path(path, base_dir):
    p = Path(path)
    if base_dir is not None and not p.is_absolute():
        p = Path(base_dir) / p
    return str(p)


def apply_config(logger, data, base_dir=None):
    """Apply a config dict to a CategoryLogger.

    Parents are declared first, then enable flags, then file sinks, so
    the order of keys in the file does not matter.

    Raises:
        InvalidArgumentError: unknown keys or wrongly typed values
    """
    if not isinstance(data, dict):
        raise InvalidArgumentError("config must be a JSON object.")
    unknown = set(data) - TOP_LEVEL_KEYS
    if unknown:
        raise InvalidArgumentError(
            f"Unknown config key(s): {', '.join(sorted(unknown))}")

    categories = data.get("categories") or {}
    if not isinstance(categories, dict):
        raise InvalidArgumentError("'categories' must be an object.")

    for name, settings in categories.items():
        if not isinstance(settings, dict):
            raise InvalidArgumentError(f"categories.{name} must be an object.")
        bad = set(settings) - CATEGORY_KEYS
        if bad:
            raise InvalidArgumentError(
                f"Unknown key(s) in categories.{name}: {', '.join(sorted(bad))}")

    # Pass 1: hierarchy
    for name, settings in categories.items():
        parent = settings.get("parent")
        if parent is not None:
            logger.add_category_children(parent, [name])
        children = settings.get("children")
        if children:
            if not isinstance(children, list):
                raise InvalidArgumentError(f"categories.{name}.children must be a list.")
            logger.add_category_children(name, children)

    # Pass 2: flags
    for name, settings in categories.items():
        enabled = settings.get("enabled")
        if enabled is None:
            continue
        if not isinstance(enabled, bool):
            raise InvalidArgumentError(f"categories.{name}.enabled must be true/false.")
        if enabled:
            logger.enable_categories(name)
        else:
            logger.disable_categories(name)

    # Pass 3: file sinks
    for name, settings in categories.items():
        files = settings.get("files") or []
        if isinstance(files, str):
            files = [files]
        for path in files:
            logger.add_file_log(name, _resolve_path(path, base_dir))

    if data.get("default_category") is not None:
        logger.set_default_category(data["default_category"])
    if data.get("category_format") is not None:
        logger.set_category_format(data["category_format"])
    return logger


# ---------------------------------------------------------------------------
# Config writing
# ---------------------------------------------------------------------------
def save_config(data, path=None):
    """Write a config dict as JSON (default: ./.catlog.json)."""
    target = Path(path) if path is not None else Path(os.getcwd()) / CONFIG_FILENAME
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return target
