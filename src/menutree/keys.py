"""Keyboard helpers for the terminal pause prompt."""

from __future__ import annotations

import readchar


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_exit(key: str) -> bool:
    """Check if key is a quit key (q only)."""
    return key.lower() == "q"


def is_interrupt(key: str) -> bool:
    """Check if key is Ctrl+C."""
    return key in (readchar.key.CTRL_C, "\x03")


def is_continue(key: str) -> bool:
    """Check if key dismisses a pause (Enter, q, or Ctrl+C)."""
    return is_enter(key) or is_exit(key) or is_interrupt(key)
