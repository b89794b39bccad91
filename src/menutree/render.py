"""Rendering of menu screens on a Rich console.

A menu screen is laid out as:

    Root : Settings : Display          <- breadcrumb, then title
    ------------------------------
    1 : Brightness                     <- one aligned row per entry
    2 : Contrast
    q : Back
    ===============  'Bye!' immediately exits all Menus  =========
    >>:                                <- prompt, no trailing newline

All user-supplied strings are printed as rich.text.Text so that square
brackets in titles, keys, and hints are never parsed as markup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .navigation import Bracket
from .options import MenuOptions
from .themes import DEFAULT_THEME, Theme

if TYPE_CHECKING:
    from .menu import Menu

ATTENTION = "--- Attention --------------------"
KILL_BANNER = "===============  '{}' immediately exits all Menus  ========="


class MenuRenderer:
    """Writes menu screens, action markers, and alerts to a console."""

    def __init__(self, console: Console, options: MenuOptions, theme: Theme | None = None):
        self.console = console
        self.options = options
        self.theme = theme or DEFAULT_THEME

    def _line(self, text: str = "", style: str = "", end: str = "\n") -> None:
        self.console.print(Text(text, style=style), end=end, soft_wrap=True)

    def breadcrumb(self, menu: Menu) -> str:
        """Ancestor titles and the menu's own title, joined by the separator."""
        titles = [menu.title]
        parent = menu.parent
        while parent is not None:
            titles.append(parent.title)
            parent = parent.parent
        return f" {self.options.menu_separator} ".join(reversed(titles))

    def entry_table(self, menu: Menu) -> Table:
        """Aligned key/hint rows in the menu's display order."""
        justify = self.options.alignment.value
        table = Table.grid(padding=(0, 1))
        table.add_column(justify=justify)
        table.add_column(justify=justify)
        table.add_column(justify=justify)
        for key in menu.display_order:
            entry = menu.lookup(key)
            if entry is None:
                continue
            is_break = entry is menu.break_entry
            key_style = self.theme.break_style if is_break else self.theme.key_style
            table.add_row(
                Text(entry.key, style=key_style),
                Text(":"),
                Text(entry.hint, style=self.theme.hint_style),
            )
        return table

    def kill_banner(self) -> str:
        if self.options.kill_phrase:
            return KILL_BANNER.format(self.options.kill_phrase)
        return "=" * self.theme.rule_width

    def render_menu(self, menu: Menu) -> None:
        self._line()
        self._line(self.breadcrumb(menu), self.theme.breadcrumb_style)
        self._line("-" * self.theme.rule_width, self.theme.rule_style)
        self.console.print(self.entry_table(menu))
        self._line(self.kill_banner(), self.theme.banner_style)
        self.prompt()

    def prompt(self) -> None:
        self._line(self.options.menu_prompt, end="")

    def invalid_choice(self, choice: str) -> None:
        self._line(
            f"???? {self.options.menu_prompt} '{choice}' is not a valid menu choice...",
            self.theme.invalid_style,
        )
        self.prompt()

    def bracket(self, kind: Bracket, menu_title: str, choice: str) -> None:
        """Print the marker before (TOP) or after (BOTTOM/PARTIAL) an action."""
        indicator = ">>" if kind is Bracket.TOP else "<<"
        runner = ""
        if self.options.id_func_runner:
            runner = f"  {indicator} Menu: '{menu_title}' - choice: '{choice}'"
        if kind is Bracket.TOP:
            self._line(f"\n\n\n{self.options.func_bracket_top}{runner}", self.theme.bracket_style)
        else:
            self._line(f"{self.options.func_bracket_bottom}{runner}", self.theme.bracket_style)

    def pause_bypassed(self, menu_title: str) -> None:
        self._line(f"< Function pause bypassed by {menu_title}.skip_next_pause >", self.theme.rule_style)

    def stopping(self) -> None:
        self._line("Stopping Menu system...")

    def alert(self, message: str) -> None:
        self._line()
        self._line(ATTENTION, self.theme.alert_style)
        self._line(message)

    def message(self, text: str, end: str = "\n") -> None:
        self._line(text, end=end)
