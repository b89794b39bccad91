"""Menu entries and the per-menu entry registry.

An Entry binds the key a user types to a hint and an action. Actions are
plain zero-argument callables; SubMenuAction is the one variant the menu
system creates itself, and starts another menu when invoked.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator

from .errors import FinalizeError

if TYPE_CHECKING:
    from .menu import Menu

logger = logging.getLogger(__name__)

Action = Callable[[], None]

EMPTY_HINT = "Menu hint not specified"


def clean(value: str | None) -> str:
    """Trim surrounding whitespace; None becomes an empty string."""
    if value is None:
        return ""
    return value.strip(" \t\r\n")


def do_nothing() -> None:
    return None


class SubMenuAction:
    """Action that starts a child menu.

    A child that fails to finalize has already alerted the user, so the
    error stops here and the calling menu keeps running.
    """

    def __init__(self, menu: Menu):
        self.menu = menu

    def __call__(self) -> None:
        try:
            self.menu.start()
        except FinalizeError:
            logger.debug("submenu %r failed to start", self.menu.title)

    def __repr__(self) -> str:
        return f"SubMenuAction({self.menu.title!r})"


@dataclass
class Entry:
    """A single selectable line of a menu.

    Attributes:
        key: What the user types to select the entry.
        hint: Help text shown beside the key.
        action: Callable run when the entry is selected.
        is_sub_menu_entry: True when the action starts another menu.
    """

    key: str
    hint: str
    action: Action
    is_sub_menu_entry: bool = False


class EntryRegistry:
    """Mapping of keys to entries, plus per-key registration counts.

    The counts survive overwrites so that duplicate registrations can be
    reported when the owning menu is validated.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Entry] = {}
        self._counts: Counter[str] = Counter()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries.values())

    def keys(self) -> list[str]:
        return list(self._entries)

    def get(self, key: str) -> Entry | None:
        return self._entries.get(key)

    def add(self, entry: Entry) -> None:
        """Store entry under its key. An existing entry with that key is replaced."""
        self._entries[entry.key] = entry
        self._counts[entry.key] += 1

    def remove(self, key: str) -> Entry:
        if self._counts[key] > 0:
            self._counts[key] -= 1
        return self._entries.pop(key)

    def registration_count(self, key: str) -> int:
        return self._counts[key]

    def duplicates(self) -> dict[str, int]:
        """Keys registered more than once since the last reset_counts()."""
        return {key: count for key, count in sorted(self._counts.items()) if count > 1}

    def reset_counts(self) -> None:
        self._counts.clear()
