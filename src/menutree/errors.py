"""Exceptions raised by menutree.

Every failing construction, mutation, or start call raises a subclass of
MenuError. Soft problems (duplicate keys, substituted defaults) are never
raised; they are reported through MenuSystem.alert() instead.
"""

from __future__ import annotations


class MenuError(RuntimeError):
    """Base error for menu operations."""

    def __init__(self, message: str, menu_title: str | None = None):
        self.menu_title = menu_title
        super().__init__(message)


class ValidationError(MenuError, ValueError):
    """Raised when a call is given arguments that would break the menu graph."""


class IdCollisionError(ValidationError):
    """Raised when a requested menu id already belongs to another menu."""

    def __init__(self, menu_title: str, requested_id: int, owner_title: str):
        self.requested_id = requested_id
        self.owner_title = owner_title
        super().__init__(
            f"Menu '{menu_title}' requested id {requested_id} but it is already "
            f"assigned to menu '{owner_title}', id not changed",
            menu_title,
        )


class InvalidStateError(MenuError):
    """Raised when an operation is not legal in the menu's current state."""


class FinalizeError(MenuError):
    """Raised when a menu fails hard validation and cannot run."""


class NoMainMenuError(MenuError):
    """Raised when the menu system is started without any main menu."""
