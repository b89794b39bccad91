"""Structural validation and display ordering for menus.

Hard problems raise FinalizeError and leave the menu unusable until it is
reconfigured. Soft problems are returned as warning strings; the menu
still runs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import FinalizeError

if TYPE_CHECKING:
    from .menu import Menu

logger = logging.getLogger(__name__)


def validate_menu(menu: Menu, kill_phrase: str) -> list[str]:
    """Check a menu's entries against its break entry and the kill phrase.

    Registration counts are cleared afterwards so that a menu mutated while
    running is only warned about duplicates added since its last check.

    Args:
        menu: Menu to validate.
        kill_phrase: Current process-wide kill phrase ("" when disabled).

    Returns:
        Warning messages, empty when the menu is clean.

    Raises:
        FinalizeError: The menu has no break entry, or its break key or an
            entry key equals the kill phrase.
    """
    title = menu.title
    break_entry = menu.break_entry

    if break_entry is None:
        raise FinalizeError(f"Menu '{title}' has no break entry to quit the menu loop.", title)

    if kill_phrase:
        if break_entry.key == kill_phrase:
            raise FinalizeError(
                f"Menu '{title}' has a break entry '{break_entry.key}' which conflicts "
                f"with the kill phrase '{kill_phrase}'.",
                title,
            )
        if kill_phrase in menu.entries:
            raise FinalizeError(
                f"Menu '{title}' has a menu entry '{kill_phrase}' which conflicts "
                f"with the kill phrase '{kill_phrase}'.",
                title,
            )

    warnings: list[str] = []

    if break_entry.key in menu.entries:
        warnings.append(
            f">> Menu '{title}' has a key '{break_entry.key}' which conflicts with "
            f"the break key, entry ignored"
        )

    duplicates = menu.entries.duplicates()
    if duplicates:
        lines = [f">> Menu '{title}' was declared with duplicate keys:"]
        lines.extend(f"entry '{key}' was added {count} times" for key, count in duplicates.items())
        lines.append("The menu may not function as you intended.")
        warnings.append("\n".join(lines))

    menu.entries.reset_counts()

    for warning in warnings:
        logger.debug("validation warning for %r: %s", title, warning)
    return warnings


def build_display_order(keys: list[str], break_key: str, descending: bool = False) -> list[str]:
    """Sort entry keys for display with the break key last.

    Keys equal to the break key are dropped since they can never be
    dispatched. With descending=True the whole sequence is reversed, which
    puts the break key first.
    """
    order = sorted(key for key in keys if key != break_key)
    order.append(break_key)
    if descending:
        order.reverse()
    return order
