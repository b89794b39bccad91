"""Demonstration menu tree used by `menutree demo`.

Shows submenus with breadcrumbs, a choose-one confirmation, entries added
and removed while the menu runs, free-form input, and a drop-down jump from
a nested menu straight back to the main menu.
"""

from __future__ import annotations

from .menu import Menu
from .system import MenuSystem


def _note_key(number: int) -> str:
    """Zero-padded so that notes keep their order in the sorted menu."""
    return f"{number:02d}"


def build_demo(system: MenuSystem) -> Menu:
    """Create the demo menus in system and return the main menu."""
    say = system.renderer.message
    notes: list[str] = []

    main = system.create_menu("Main Menu")
    notes_menu = system.create_menu("Notes")
    confirm = system.create_menu("Clear all notes?")
    settings = system.create_menu("Settings")
    display = system.create_menu("Display")

    def add_note() -> None:
        text = system.prompt_line("Note text")
        if not text:
            return
        notes.append(text)
        notes_menu.add_entry(_note_key(len(notes)), f"Show: {text}", lambda t=text: say(t))

    def list_notes() -> None:
        if not notes:
            say("No notes yet.")
        for number, text in enumerate(notes, start=1):
            say(f"{number}. {text}")

    def clear_notes() -> None:
        for number in range(1, len(notes) + 1):
            notes_menu.remove_entry(_note_key(number))
        notes.clear()
        say("Notes cleared.")

    confirm.set_choose_one(True)
    confirm.add_entry("y", "Yes, clear them", clear_notes)
    confirm.set_break_item("n", "No, keep them", lambda: say("Kept."))

    notes_menu.add_entry("a", "Add a note", add_note)
    notes_menu.add_entry("l", "List notes", list_notes)
    notes_menu.add_sub_menu(confirm, "c", "Clear notes")
    notes_menu.set_break_item("b", "Back", None)

    def toggle_pause() -> None:
        system.options.set_pause_on_output(not system.options.pause_on_output)
        say(f"pause_on_output is now {system.options.pause_on_output}")

    def toggle_alignment() -> None:
        if system.options.alignment.value == "left":
            system.options.align_right()
        else:
            system.options.align_left()
        say(f"alignment is now {system.options.alignment}")

    display.add_entry("1", "Toggle row alignment", toggle_alignment)
    display.add_entry("2", "Sort descending", display.sort_descending)
    display.add_entry("3", "Sort ascending", display.sort_ascending)
    display.add_entry("m", "Jump to the main menu", main.start)
    display.set_break_item("b", "Back", None)

    settings.add_entry("1", "Toggle pause after actions", toggle_pause)
    settings.add_entry("2", "Show options", lambda: say(system.options.describe()))
    settings.add_sub_menu(display, "d", "Display")
    settings.set_break_item("b", "Back", None)

    main.add_entry("1", "Say hello", lambda: say("Hello!"))
    main.add_sub_menu(notes_menu, "n", "Notes")
    main.add_sub_menu(settings, "s", "Settings")
    main.set_break_item("q", "Quit", lambda: say("Goodbye."))
    return main
