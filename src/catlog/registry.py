"""
CategoryRegistry - the category tree and its per-category sinks.

A category is any string key. It comes into existence the first time it
is referenced (as a child, a sink owner, a listener owner, or in an
enable/disable call); there is no explicit create step.

Each category may carry:
    enabled    explicit True/False flag (unset = inherit)
    parent     declared parent category
    file sinks ordered list of file paths
    listeners  ordered list of listener objects

Gating rule: a message on category C is suppressed when any category in
C's ancestor closure has an explicit False flag. A True flag never
overrides a False one further up or down the chain.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .errors import CyclicHierarchyError, InvalidArgumentError


@dataclass
class CategoryEntry:
    """State held for a single category."""
    name: str
    enabled: Optional[bool] = None
    parent: Optional[str] = None
    file_sinks: List[str] = field(default_factory=list)
    listeners: List[Any] = field(default_factory=list)


def _require_name(name, what='category'):
    if name is None:
        raise InvalidArgumentError(f"{what} is null.")
    if not isinstance(name, str):
        raise InvalidArgumentError(
            f"{what} must be a string, got {type(name).__name__}.")
    return name


class CategoryRegistry:
    """Thread-safe store of categories, parents, sinks and listeners.

    All state sits behind one re-entrant lock. Reads return copies so
    callers never hold references into the live maps.
    """

    def __init__(self):
        self._entries: Dict[str, CategoryEntry] = {}
        self._lock = threading.RLock()

    def _entry(self, name: str) -> CategoryEntry:
        # Caller holds the lock
        entry = self._entries.get(name)
        if entry is None:
            entry = CategoryEntry(name=name)
            self._entries[name] = entry
        return entry

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_children(self, parent: str, children: Iterable[str]) -> None:
        """Declare `parent` as the parent of every category in `children`.

        Re-parenting an existing child overwrites its previous parent.
        Cycles are not rejected here; they surface from ancestor_closure().
        """
        _require_name(parent, 'category')
        if children is None:
            raise InvalidArgumentError("children is null.")
        if isinstance(children, str):
            children = [children]
        children = list(children)
        if not children:
            raise InvalidArgumentError("children is empty.")
        for child in children:
            _require_name(child, 'child category')
        with self._lock:
            self._entry(parent)
            for child in children:
                self._entry(child).parent = parent

    def set_enabled(self, categories: Iterable[str], value: bool) -> None:
        """Set the explicit enabled flag on each category."""
        if categories is None:
            raise InvalidArgumentError("categories is null.")
        if isinstance(categories, str):
            categories = [categories]
        categories = list(categories)
        if any(cat is None for cat in categories):
            raise InvalidArgumentError("A category is null.")
        for cat in categories:
            _require_name(cat)
        with self._lock:
            for cat in categories:
                self._entry(cat).enabled = bool(value)

    def add_file_sink(self, category: str, path) -> None:
        """Append a file path to the category's sinks."""
        _require_name(category)
        if path is None or str(path) == '':
            raise InvalidArgumentError("outFile is null or empty.")
        with self._lock:
            self._entry(category).file_sinks.append(str(path))

    def add_listener(self, category: str, listener) -> None:
        """Append a listener to the category's listeners."""
        _require_name(category)
        if listener is None:
            raise InvalidArgumentError("listener is null.")
        with self._lock:
            self._entry(category).listeners.append(listener)

    def remove_listener(self, category: str, listener) -> bool:
        """Remove the first registration of `listener` on `category`.

        Returns:
            True if a registration was removed
        """
        with self._lock:
            entry = self._entries.get(category)
            if entry is None:
                return False
            for i, registered in enumerate(entry.listeners):
                if registered is listener:
                    del entry.listeners[i]
                    return True
            return False

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def ancestor_closure(self, category: Optional[str]) -> List[str]:
        """Return the chain root-first, ending with `category` itself.

        A None category has an empty closure. Raises CyclicHierarchyError
        if following parents revisits a category.
        """
        if category is None:
            return []
        chain = [category]
        seen = {category}
        with self._lock:
            current = category
            while True:
                entry = self._entries.get(current)
                parent = entry.parent if entry is not None else None
                if parent is None:
                    break
                if parent in seen:
                    start = chain.index(parent)
                    raise CyclicHierarchyError(chain[start:] + [parent])
                chain.append(parent)
                seen.add(parent)
                current = parent
        chain.reverse()
        return chain

    def is_gated(self, closure: Iterable[str]) -> bool:
        """True if any category in `closure` is explicitly disabled."""
        with self._lock:
            for name in closure:
                entry = self._entries.get(name)
                if entry is not None and entry.enabled is False:
                    return True
        return False

    def fanout_targets(self, closure: Iterable[str]):
        """Snapshot file sinks and listeners for a closure, in dispatch order.

        Returns:
            (file_sinks, listeners) lists, root-most category first and
            registration order within each category
        """
        sinks: List[str] = []
        listeners: List[Any] = []
        with self._lock:
            for name in closure:
                entry = self._entries.get(name)
                if entry is None:
                    continue
                sinks.extend(entry.file_sinks)
                listeners.extend(entry.listeners)
        return sinks, listeners

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def categories(self) -> List[str]:
        """All known category names, sorted."""
        with self._lock:
            return sorted(self._entries)

    def parent_of(self, category: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(category)
            return entry.parent if entry is not None else None

    def children_of(self, category: str) -> List[str]:
        with self._lock:
            return sorted(name for name, entry in self._entries.items()
                          if entry.parent == category)

    def is_enabled(self, category: str) -> Optional[bool]:
        """Explicit flag for `category`, or None when unset."""
        with self._lock:
            entry = self._entries.get(category)
            return entry.enabled if entry is not None else None

    def file_sinks(self, category: str) -> List[str]:
        with self._lock:
            entry = self._entries.get(category)
            return list(entry.file_sinks) if entry is not None else []

    def listeners(self, category: str) -> List[Any]:
        with self._lock:
            entry = self._entries.get(category)
            return list(entry.listeners) if entry is not None else []

    def __contains__(self, category) -> bool:
        with self._lock:
            return category in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def format_category_tree(registry: CategoryRegistry) -> str:
    """Format the declared hierarchy as an indented tree.

    Roots are categories without a parent. Flags and sinks are shown
    after each name. Categories caught in a parent cycle have no root
    and are listed separately.
    """
    names = registry.categories()
    if not names:
        return "No categories defined."

    lines = ["Categories:"]
    placed = set()

    def describe(name):
        notes = []
        flag = registry.is_enabled(name)
        if flag is True:
            notes.append("enabled")
        elif flag is False:
            notes.append("disabled")
        sinks = registry.file_sinks(name)
        if sinks:
            notes.append("files: " + ", ".join(sinks))
        listener_count = len(registry.listeners(name))
        if listener_count:
            notes.append(f"listeners: {listener_count}")
        return f"{name} ({'; '.join(notes)})" if notes else name

    def walk(name, depth):
        placed.add(name)
        lines.append("  " * (depth + 1) + describe(name))
        for child in registry.children_of(name):
            if child not in placed:
                walk(child, depth + 1)

    for name in names:
        if registry.parent_of(name) is None:
            walk(name, 0)

    orphans = [name for name in names if name not in placed]
    if orphans:
        lines.append("Cyclic (no root):")
        for name in orphans:
            lines.append(f"  {describe(name)} -> {registry.parent_of(name)}")
    return "\n".join(lines)
