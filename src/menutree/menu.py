"""Menu nodes and the blocking menu loop.

Menus are created through MenuSystem.create_menu() and wired together with
add_sub_menu(). Calling start() on a menu validates and sorts its entries,
then reads lines until its break key, the kill phrase, or the end of input
is reached:

    system = MenuSystem()
    root = system.create_menu("Root")
    settings = system.create_menu("Settings")
    settings.add_entry("1", "Toggle colour", toggle_colour)
    settings.set_break_item("b", "Back", None)
    root.add_sub_menu(settings, "s", "Settings")
    root.set_break_item("q", "Quit", None)
    system.start_main_menu()

An action that starts a menu which is already running further up the call
stack closes every menu in between, and the user lands back in that menu
without being prompted by the menus that closed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .entries import EMPTY_HINT, Action, Entry, EntryRegistry, SubMenuAction, clean, do_nothing
from .errors import FinalizeError, IdCollisionError, InvalidStateError, MenuError, ValidationError
from .navigation import Bracket
from .validation import build_display_order, validate_menu

if TYPE_CHECKING:
    from .system import MenuSystem

logger = logging.getLogger(__name__)

DEFAULT_BREAK_KEY = "QQ.QQ"
DEFAULT_BREAK_HINT = "Quit this Menu"
UNNAMED_MENU_TITLE = "UnNamedMenu"


class Menu:
    """A named set of entries driven by a blocking input loop.

    A menu registers itself with its system when constructed, so menus built
    directly and through MenuSystem.create_menu() are found and id-checked
    alike. The first menu registered in a system is its main menu unless
    is_main_menu says otherwise.

    Attributes:
        system: MenuSystem that owns this menu.
        title: Display title (change with change_title() to validate it).
        entries: Registry of the menu's selectable entries.
        break_entry: Entry whose key ends this menu's loop.
        display_order: Keys in the order they are rendered (set by finalize()).
        finalized: Display order has been computed.
        modified: Mutated since the last finalize().
        running: Currently inside its input loop.
        killed: Last finalize() failed; the menu refuses to run.
        choose_one: Any valid choice ends the loop after its action.
        reverse_sort: Render entries in descending order.
        skip_function_notification: One-shot bypass of the post-action pause.
    """

    def __init__(
        self, system: MenuSystem, title: str, menu_id: int, is_main_menu: bool | None = None
    ):
        self.system = system
        self.title = clean(title) or UNNAMED_MENU_TITLE
        owner = system.find_menu(menu_id)
        if owner is not None:
            raise IdCollisionError(self.title, menu_id, owner.title)
        self._id = menu_id
        self._parent: Menu | None = None
        if is_main_menu is None:
            is_main_menu = not system.menus
        self.is_main_menu = is_main_menu

        self.entries = EntryRegistry()
        self.break_entry: Entry | None = None
        self.display_order: list[str] = []

        self.finalized = False
        self.modified = False
        self.running = False
        self.killed = False
        self.choose_one = False
        self.reverse_sort = False
        self.skip_function_notification = False
        system.menus.append(self)

    def __repr__(self) -> str:
        return f"Menu({self.title!r}, id={self._id})"

    # ------------------------------------------------------------------
    # Identity and relationships
    # ------------------------------------------------------------------

    @property
    def id(self) -> int:
        return self._id

    def get_id(self) -> int:
        return self._id

    @property
    def parent(self) -> Menu | None:
        """Menu this one was added to as a submenu, if any."""
        return self._parent

    @property
    def quit_value(self) -> str:
        """Key that ends this menu's loop ("" until a break item is set)."""
        if self.break_entry is None:
            return ""
        return self.break_entry.key

    def ancestors(self) -> list[Menu]:
        """Parents from the nearest up to the root."""
        result = []
        parent = self._parent
        while parent is not None:
            result.append(parent)
            parent = parent._parent
        return result

    def lookup(self, key: str) -> Entry | None:
        """Entry the user reaches by typing key, the break entry included."""
        if self.break_entry is not None and key == self.break_entry.key:
            return self.break_entry
        return self.entries.get(key)

    def _reject(self, error: MenuError) -> MenuError:
        self.system.alert(str(error))
        return error

    def _invalid(self, message: str) -> MenuError:
        return self._reject(ValidationError(message, self.title))

    def _touch(self) -> None:
        # only a finalized menu has a display order that can go stale
        self.modified = self.finalized

    def set_id(self, menu_id: int) -> None:
        """Give this menu a host-chosen id.

        Raises:
            InvalidStateError: The menu is running.
            IdCollisionError: Another menu already has menu_id.
        """
        if self.running:
            raise self._reject(
                InvalidStateError(
                    f"Menu '{self.title}' (id {self._id}, requesting id {menu_id}) is "
                    f"running, not allowed to change its id.",
                    self.title,
                )
            )
        owner = self.system.find_menu(menu_id)
        if owner is not None and owner is not self:
            raise self._reject(IdCollisionError(self.title, menu_id, owner.title))
        self._id = menu_id

    def change_title(self, new_title: str) -> None:
        new_title = clean(new_title)
        if not new_title:
            raise self._invalid(f"Menu '{self.title}': empty title sent in, can't change title.")
        self.title = new_title

    def set_choose_one(self, value: bool) -> None:
        self.choose_one = bool(value)

    def set_sort_descending(self, value: bool) -> None:
        if self.reverse_sort != bool(value):
            self.reverse_sort = bool(value)
            self._touch()

    def sort_ascending(self) -> None:
        self.set_sort_descending(False)

    def sort_descending(self) -> None:
        self.set_sort_descending(True)

    def skip_next_pause(self) -> None:
        """Skip the pause after the current action.

        For actions that start another menu directly with start() instead of
        through add_sub_menu(), so that quitting that menu does not stop for
        acknowledgement. Cleared after use and whenever this menu exits.
        """
        self.skip_function_notification = True

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def add_entry(self, key: str, hint: str, action: Action | None) -> None:
        """Add an entry, replacing any entry already registered under key.

        Replacements are reported as duplicate keys the next time the menu
        is finalized.

        Raises:
            ValidationError: key is blank.
        """
        key = clean(key)
        if not key:
            raise self._invalid(
                f"Menu '{self.title}': empty entry key sent in (hint was '{hint}'), entry not added."
            )
        self.entries.add(Entry(key, clean(hint) or EMPTY_HINT, action or do_nothing))
        self._touch()

    def remove_entry(self, key: str) -> None:
        """Remove an entry.

        Raises:
            ValidationError: key is blank or the break key, the menu has only
                one other entry left, or key is not registered.
        """
        key = clean(key)
        if not key:
            raise self._invalid(f"Menu '{self.title}': empty key sent in, can't remove.")
        if key == self.quit_value:
            raise self._invalid(
                f"Menu '{self.title}': key '{key}' is the menu break key, removal not allowed."
            )
        if len(self.entries) < 2:
            raise self._invalid(
                f"Menu '{self.title}': only {len(self.entries)} entry left besides the "
                f"break entry, not allowed to empty the menu."
            )
        if key not in self.entries:
            raise self._invalid(f"Menu '{self.title}': key '{key}' does not exist, nothing to remove.")
        self.entries.remove(key)
        self._touch()

    def change_entry(self, new_hint: str, old_key: str, new_key: str) -> None:
        """Change an entry's hint, its key, or both.

        Valid patterns:
            change_entry("new hint", "old", "")      # hint only
            change_entry("", "old", "new")           # key only
            change_entry("new hint", "old", "new")   # both

        A rekeyed entry keeps its action and submenu flag.

        Raises:
            ValidationError: old_key is blank or unknown, the keys are equal,
                either key is the break key, or there is nothing to change.
        """
        old_key = clean(old_key)
        new_key = clean(new_key)
        new_hint = clean(new_hint)
        suffix = " Entry not changed."

        if not old_key:
            raise self._invalid(f"Menu '{self.title}': old key was blank." + suffix)
        entry = self.entries.get(old_key)
        if entry is None:
            raise self._invalid(f"Menu '{self.title}': entry '{old_key}' does not exist." + suffix)
        if old_key == new_key:
            raise self._invalid(
                f"Menu '{self.title}': old key and new key are the same value '{old_key}'." + suffix
            )
        if self.quit_value and self.quit_value in (old_key, new_key):
            raise self._invalid(
                f"Menu '{self.title}': old key '{old_key}' or new key '{new_key}' is the "
                f"break key, use set_break_item()." + suffix
            )

        if new_key:
            self.entries.add(
                Entry(new_key, new_hint or entry.hint, entry.action, entry.is_sub_menu_entry)
            )
            self.entries.remove(old_key)
            self._touch()
            return

        if not new_hint:
            raise self._invalid(f"Menu '{self.title}': new hint was blank." + suffix)
        entry.hint = new_hint
        self._touch()

    def change_entry_action(self, key: str, action: Action | None) -> None:
        """Bind a new action to an existing, non-submenu entry.

        Raises:
            ValidationError: key is blank, the break key, unknown, or a
                submenu entry.
        """
        key = clean(key)
        suffix = " Entry not changed."
        if not key:
            raise self._invalid(f"Menu '{self.title}': key was blank." + suffix)
        if key == self.quit_value:
            raise self._invalid(
                f"Menu '{self.title}': key '{key}' is the break key, use set_break_item()." + suffix
            )
        entry = self.entries.get(key)
        if entry is None:
            raise self._invalid(f"Menu '{self.title}': entry '{key}' does not exist." + suffix)
        if entry.is_sub_menu_entry:
            raise self._invalid(
                f"Menu '{self.title}', key '{key}': changing a submenu action is not allowed." + suffix
            )
        entry.action = action or do_nothing
        self._touch()

    def set_break_item(self, key: str, hint: str, action: Action | None) -> list[str]:
        """Set or replace the entry that ends this menu's loop.

        A blank key is replaced by DEFAULT_BREAK_KEY; the call still succeeds
        but the substitution is alerted and returned as a warning.

        Returns:
            Warning messages, empty when key was given.
        """
        warnings = []
        key = clean(key)
        if not key:
            key = DEFAULT_BREAK_KEY
            message = (
                f"Menu '{self.title}': empty break key sent in, break key set to '{DEFAULT_BREAK_KEY}'."
            )
            self.system.alert(message)
            warnings.append(message)
        hint = clean(hint) or DEFAULT_BREAK_HINT

        if self.break_entry is None:
            self.break_entry = Entry(key, hint, action or do_nothing)
        else:
            self.break_entry.key = key
            self.break_entry.hint = hint
            self.break_entry.action = action or do_nothing
        self._touch()
        return warnings

    def add_sub_menu(self, child: Menu | None, key: str, hint: str) -> None:
        """Add an entry that starts child, and make this menu its parent.

        Raises:
            ValidationError: child is missing, the main menu, this menu or
                one of its ancestors, already has a parent, or key is blank.
        """
        if child is None:
            raise self._invalid(
                f"Menu '{self.title}': submenu was None for key '{key}', hint '{hint}'. Submenu not added."
            )
        if child.system is not self.system:
            raise self._invalid(
                f"Menu '{self.title}': submenu '{child.title}' belongs to another menu system."
            )
        if child.is_main_menu:
            raise self._invalid(
                f"Menu '{self.title}' requested submenu '{child.title}' which is the main menu. Not allowed."
            )
        if child is self:
            raise self._invalid(
                f"Menu '{self.title}' and submenu '{child.title}' are the same, can't add a menu onto itself."
            )
        if child.parent is not None:
            raise self._invalid(
                f"Menu '{self.title}': submenu '{child.title}' is already assigned to menu "
                f"'{child.parent.title}', ignored."
            )
        if child in self.ancestors():
            raise self._invalid(
                f"Menu '{self.title}': submenu '{child.title}' is an ancestor of this menu, ignored."
            )
        key = clean(key)
        if not key:
            raise self._invalid(
                f"Menu '{self.title}': empty entry key sent in for submenu '{child.title}'. Submenu not added."
            )

        self.entries.add(Entry(key, clean(hint) or EMPTY_HINT, SubMenuAction(child), True))
        child._parent = self
        self._touch()

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------

    def finalize(self) -> list[str]:
        """Validate the menu and lock in its display order.

        Does nothing on an already finalized menu.

        Returns:
            Soft validation warnings (already alerted).

        Raises:
            FinalizeError: Hard validation failed; the menu is marked killed.
        """
        if self.finalized:
            return []
        try:
            warnings = validate_menu(self, self.system.options.kill_phrase)
        except FinalizeError as e:
            self.killed = True
            self.system.alert(str(e))
            raise
        for warning in warnings:
            self.system.alert(warning)

        self.display_order = build_display_order(
            self.entries.keys(), self.break_entry.key, self.reverse_sort
        )
        self.finalized = True
        self.modified = False
        self.killed = False
        logger.debug("finalized menu %r: %s", self.title, self.display_order)
        return warnings

    def reset(self) -> list[str]:
        """Recompute the display order of a previously finalized menu.

        Raises:
            InvalidStateError: The menu was never finalized.
            FinalizeError: Hard validation failed; the menu is marked killed.
        """
        if not self.finalized:
            raise self._reject(
                InvalidStateError(
                    f"Menu '{self.title}' cannot be reset, it has never been finalized.",
                    self.title,
                )
            )
        logger.debug("resetting menu %r", self.title)
        self.display_order = []
        self.finalized = False
        return self.finalize()

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def _set_running(self, value: bool) -> None:
        self.running = value
        self.skip_function_notification = False

    def start(self) -> None:
        """Run this menu's loop until it is quit, killed, or input ends.

        Starting a menu that is already running does not open it twice: it
        requests a drop-down and returns, and the menus between the caller
        and the running one close.

        Raises:
            FinalizeError: The menu failed validation; no loop was entered.
        """
        navigation = self.system.navigation
        if self.running:
            navigation.request_drop_down(self._id)
            return

        if self.finalized and self.modified:
            self.reset()
        if not self.finalized:
            self.finalize()

        self.system.renderer.render_menu(self)
        self._set_running(True)
        try:
            self._loop()
        finally:
            self._set_running(False)

    def _loop(self) -> None:
        system = self.system
        navigation = system.navigation
        renderer = system.renderer
        options = system.options

        while True:
            line = system.input.read_line()
            if line is None:
                return
            choice = line.strip()

            if options.kill_phrase and choice == options.kill_phrase:
                renderer.stopping()
                navigation.kill_switch = True
                logger.debug("kill phrase entered in menu %r", self.title)
                return

            if choice == self.quit_value:
                self.break_entry.action()
                return

            entry = self.entries.get(choice)
            if entry is None:
                renderer.invalid_choice(choice)
                continue

            if not entry.is_sub_menu_entry and not self.choose_one:
                renderer.bracket(Bracket.TOP, self.title, choice)

            entry.action()

            if self.modified:
                try:
                    self.reset()
                except FinalizeError:
                    # already alerted; the killed flag ends the loop below
                    logger.debug("menu %r failed to reset after an action", self.title)

            if self.killed or navigation.kill_switch or self.choose_one:
                return
            if navigation.dropping_down(self._id):
                return

            closing = navigation.closing_bracket()

            if self.skip_function_notification:
                self.skip_function_notification = False
                renderer.bracket(Bracket.PARTIAL, self.title, choice)
                if options.pause_on_output:
                    renderer.pause_bypassed(self.title)
                renderer.render_menu(self)
                continue

            if not entry.is_sub_menu_entry:
                renderer.bracket(closing, self.title, choice)
                if closing is Bracket.BOTTOM and options.pause_on_output:
                    system.wait_for_input()

            renderer.render_menu(self)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def describe(self) -> str:
        """Multi-line summary of the menu's settings and (unsorted) entries."""
        parent = "<no parent>"
        if self._parent is not None:
            parent = f"'{self._parent.title}', ID: {self._parent.id}"
        lines = [
            f"Menu '{self.title}':",
            f"  ID : {self._id}",
            f"  Break Value : '{self.quit_value}'",
            f"  ChooseOne Menu : {self.choose_one}",
            f"  Sort Descending : {self.reverse_sort}",
            f"  Parent Menu : {parent}",
            ">> menu entries (unsorted):",
        ]
        lines.extend(f"  '{entry.key}'={entry.hint}" for entry in self.entries)
        if self.break_entry is not None:
            lines.append(f"  '{self.break_entry.key}'={self.break_entry.hint} (break)")
        return "\n".join(lines)
