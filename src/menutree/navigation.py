"""Cross-menu navigation state.

Menus nest through ordinary recursive start() calls. When an action starts a
menu that is already running further up the call stack, the inner loops
must close without prompting until control is back in that menu's loop.
NavigationState records that request; every loop consults it after each
action returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class Bracket(str, Enum):
    """Markers printed around an action's output."""

    TOP = "top"
    BOTTOM = "bottom"
    PARTIAL = "partial"

    def __str__(self) -> str:
        return self.value


@dataclass
class DropDown:
    """A pending jump back to an already running menu."""

    active: bool = False
    target_id: int = 0
    is_last_exit: bool = False


@dataclass
class NavigationState:
    """Navigation flags shared by every menu of one MenuSystem."""

    drop_down: DropDown = field(default_factory=DropDown)
    kill_switch: bool = False

    def request_drop_down(self, target_id: int) -> None:
        """Ask every running menu above target_id to close."""
        logger.debug("drop-down requested to menu id %d", target_id)
        self.drop_down.active = True
        self.drop_down.target_id = target_id
        self.drop_down.is_last_exit = True

    def dropping_down(self, menu_id: int) -> bool:
        """Return True when the menu with menu_id must close for a drop-down.

        The target menu itself gets False, and the request is cleared so
        that it resumes prompting.
        """
        if not self.drop_down.active:
            return False
        if self.drop_down.target_id != menu_id:
            return True
        logger.debug("drop-down landed on menu id %d", menu_id)
        self.drop_down.active = False
        return False

    def closing_bracket(self) -> Bracket:
        """Pick the closing marker for an action that just returned.

        The first close after a drop-down lands is partial, so the user is
        not asked to confirm output from menus that already closed.
        """
        if self.drop_down.is_last_exit:
            self.drop_down.is_last_exit = False
            return Bracket.PARTIAL
        return Bracket.BOTTOM

    def reset(self) -> None:
        self.drop_down = DropDown()
        self.kill_switch = False
