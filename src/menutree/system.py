"""The menu system: registry, options, navigation state, and I/O.

A MenuSystem owns everything that menus share. Menus created by the same
system can be nested; the first one created is the main menu.

    system = MenuSystem(options=load_options())
    main = system.create_menu("Main")
    ...
    system.start_main_menu()
    if system.was_killed():
        ...

Hosts that only ever need one system can use get_default_system(). Tests
inject their own console and input:

    system = MenuSystem(
        console=Console(file=StringIO(), width=100),
        input_source=ScriptedInput(["1", "q"]),
    )
"""

from __future__ import annotations

import logging

from rich.console import Console

from .entries import clean
from .errors import NoMainMenuError
from .inputs import InputSource, TerminalInput
from .menu import Menu
from .navigation import NavigationState
from .options import MenuOptions
from .render import MenuRenderer
from .themes import Theme

logger = logging.getLogger(__name__)

IMPORTANT_INFO = "\n^^^ Important information above, please read..."


class MenuSystem:
    """Shared state and services for a tree of menus.

    Args:
        options: Behaviour options (defaults if None).
        console: Rich console for output (auto-created if None).
        input_source: Where lines are read from (the terminal if None).
        theme: Visual theme for the renderer.
    """

    def __init__(
        self,
        options: MenuOptions | None = None,
        console: Console | None = None,
        input_source: InputSource | None = None,
        theme: Theme | None = None,
    ):
        self.options = options or MenuOptions()
        self.console = console or Console(highlight=False)
        self.input = input_source or TerminalInput()
        self.renderer = MenuRenderer(self.console, self.options, theme)
        self.navigation = NavigationState()
        self.menus: list[Menu] = []
        self._last_id = 0

    def _next_id(self) -> int:
        self._last_id -= 1
        while self.find_menu(self._last_id) is not None:
            self._last_id -= 1
        return self._last_id

    def create_menu(self, title: str = "") -> Menu:
        """Create and register a menu. The first menu created is the main menu."""
        menu = Menu(self, title, self._next_id())
        logger.debug("created menu %r with id %d", menu.title, menu.id)
        return menu

    def find_menu(self, menu_id: int) -> Menu | None:
        for menu in self.menus:
            if menu.id == menu_id:
                return menu
        return None

    @property
    def main_menu(self) -> Menu | None:
        for menu in self.menus:
            if menu.is_main_menu:
                return menu
        return None

    def start_main_menu(self) -> None:
        """Start the main menu.

        Raises:
            NoMainMenuError: No menu has been created.
            FinalizeError: The main menu failed validation.
        """
        main = self.main_menu
        if main is None:
            raise NoMainMenuError("Can not start the menu system: no main menu was created.")
        main.start()

    def was_killed(self) -> bool:
        """True if the user left the menus with the kill phrase."""
        return self.navigation.kill_switch

    def unkill(self) -> None:
        """Clear the kill state, e.g. after the user declined to exit."""
        self.navigation.reset()

    def alert(self, message: str) -> None:
        """Report an error or warning to the log and, if enabled, the user."""
        logger.warning("%s", message)
        if not self.options.alerts_display:
            return
        self.renderer.alert(message)
        if self.options.alerts_pause:
            self.wait_for_input(IMPORTANT_INFO)

    def wait_for_input(self, additional: str = "") -> None:
        """Give the user a chance to read output before continuing."""
        self.renderer.message(f"{additional}\nPress <RET> to continue...")
        self.input.wait_for_continue()

    def prompt_line(self, prompt: str = "") -> str:
        """Ask for one line of free-form input.

        Returns:
            The trimmed line, or "" if the user cancelled with an empty line
            or input ended.
        """
        prompt = clean(prompt) or "Enter data: "
        self.renderer.message(f"{prompt}  [<RET> cancels]:")
        self.renderer.message("=> ", end="")
        value = clean(self.input.read_line())
        if not value:
            self.renderer.message("<canceled>")
        return value


_default_system: MenuSystem | None = None


def get_default_system() -> MenuSystem:
    """Get the process-wide default system, creating one if needed."""
    global _default_system
    if _default_system is None:
        _default_system = MenuSystem()
    return _default_system


def set_default_system(system: MenuSystem | None) -> None:
    """Replace the default system (None resets it)."""
    global _default_system
    _default_system = system


def create_menu(title: str = "") -> Menu:
    """Create a menu in the default system."""
    return get_default_system().create_menu(title)
