"""Nested text menus for terminal programs.

A host declares a tree of menus, each entry bound to an action, and the
menu system drives a read-evaluate-display loop over it.

Example:
    from menutree import MenuSystem

    system = MenuSystem()
    main = system.create_menu("Main")
    tools = system.create_menu("Tools")
    tools.add_entry("1", "Run checks", run_checks)
    tools.set_break_item("b", "Back", None)
    main.add_sub_menu(tools, "t", "Tools")
    main.set_break_item("q", "Quit", None)
    system.start_main_menu()
"""

__version__ = "0.1.0"

from .entries import Action, Entry, EntryRegistry, SubMenuAction
from .errors import (
    FinalizeError,
    IdCollisionError,
    InvalidStateError,
    MenuError,
    NoMainMenuError,
    ValidationError,
)
from .inputs import InputSource, ScriptedInput, TerminalInput
from .menu import DEFAULT_BREAK_HINT, DEFAULT_BREAK_KEY, Menu
from .navigation import Bracket, DropDown, NavigationState
from .options import Alignment, MenuOptions, load_options, save_options
from .system import MenuSystem, create_menu, get_default_system, set_default_system
from .themes import DEFAULT_THEME, Theme

__all__ = [
    # Main classes
    "MenuSystem",
    "Menu",
    "MenuOptions",
    # Entries
    "Action",
    "Entry",
    "EntryRegistry",
    "SubMenuAction",
    # Errors
    "MenuError",
    "ValidationError",
    "IdCollisionError",
    "InvalidStateError",
    "FinalizeError",
    "NoMainMenuError",
    # Input
    "InputSource",
    "ScriptedInput",
    "TerminalInput",
    # Navigation
    "Bracket",
    "DropDown",
    "NavigationState",
    # Options and theming
    "Alignment",
    "load_options",
    "save_options",
    "Theme",
    "DEFAULT_THEME",
    # Defaults
    "DEFAULT_BREAK_KEY",
    "DEFAULT_BREAK_HINT",
    # Default system
    "create_menu",
    "get_default_system",
    "set_default_system",
]
