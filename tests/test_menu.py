"""Tests for menu construction, mutation, and finalization."""

from __future__ import annotations

import pytest

from menutree import (
    DEFAULT_BREAK_HINT,
    DEFAULT_BREAK_KEY,
    FinalizeError,
    IdCollisionError,
    InvalidStateError,
    SubMenuAction,
    ValidationError,
)
from menutree.menu import UNNAMED_MENU_TITLE


def _ready_menu(system, title="Menu", keys=("1", "2")):
    menu = system.create_menu(title)
    for key in keys:
        menu.add_entry(key, f"Entry {key}", None)
    menu.set_break_item("q", "Quit", None)
    return menu


class TestCreateMenu:
    def test_ids_count_down_from_minus_one(self, system):
        first, second, third = (system.create_menu(t) for t in ("A", "B", "C"))
        assert [first.id, second.id, third.id] == [-1, -2, -3]
        assert first.get_id() == -1

    def test_first_menu_is_main_menu(self, system):
        first = system.create_menu("A")
        second = system.create_menu("B")
        assert first.is_main_menu
        assert not second.is_main_menu
        assert system.main_menu is first

    def test_blank_title_gets_placeholder(self, system):
        assert system.create_menu("   ").title == UNNAMED_MENU_TITLE
        assert system.create_menu("  Tools ").title == "Tools"

    def test_new_menu_flags(self, system):
        menu = system.create_menu("A")
        assert not menu.finalized
        assert not menu.modified
        assert not menu.running
        assert menu.parent is None
        assert menu.quit_value == ""


class TestSetId:
    def test_duplicate_id_rejected(self, system):
        first, second = system.create_menu("TmpMenu"), system.create_menu("TmpMenu2")
        first.set_id(7)
        with pytest.raises(IdCollisionError) as exc:
            second.set_id(7)
        assert exc.value.requested_id == 7
        assert exc.value.owner_title == "TmpMenu"
        assert second.id == -2
        assert first.id == 7

    def test_setting_own_id_again_is_allowed(self, system):
        menu = system.create_menu("A")
        menu.set_id(3)
        menu.set_id(3)
        assert menu.id == 3

    def test_running_menu_cannot_change_id(self, system):
        menu = system.create_menu("A")
        menu.running = True
        with pytest.raises(InvalidStateError):
            menu.set_id(5)
        assert menu.id == -1

    def test_auto_ids_skip_host_ids(self, system):
        first = system.create_menu("A")
        first.set_id(-2)
        second = system.create_menu("B")
        assert second.id == -3


class TestAddEntry:
    def test_blank_key_rejected(self, system):
        menu = system.create_menu("A")
        with pytest.raises(ValidationError):
            menu.add_entry("  ", "hint", None)
        assert len(menu.entries) == 0

    def test_blank_hint_gets_placeholder(self, system):
        menu = system.create_menu("A")
        menu.add_entry(" 1 ", "", None)
        assert menu.entries.get("1").hint == "Menu hint not specified"

    def test_readd_is_last_write_wins(self, system, calls):
        menu = system.create_menu("A")
        menu.add_entry("1", "first", calls.action("first"))
        menu.add_entry("1", "second", calls.action("second"))
        menu.entries.get("1").action()
        assert calls == ["second"]
        assert menu.entries.registration_count("1") == 2

    def test_marks_finalized_menu_modified(self, system):
        menu = _ready_menu(system)
        menu.finalize()
        assert not menu.modified
        menu.add_entry("3", "Three", None)
        assert menu.modified

    def test_unfinalized_menu_not_marked_modified(self, system):
        menu = system.create_menu("A")
        menu.add_entry("1", "One", None)
        assert not menu.modified


class TestRemoveEntry:
    def test_removes_entry(self, system):
        menu = _ready_menu(system, keys=("1", "2", "3"))
        menu.remove_entry("2")
        assert menu.entries.keys() == ["1", "3"]

    def test_blank_key_rejected(self, system):
        menu = _ready_menu(system)
        with pytest.raises(ValidationError):
            menu.remove_entry("")

    def test_break_key_rejected(self, system):
        menu = _ready_menu(system)
        with pytest.raises(ValidationError, match="break key"):
            menu.remove_entry("q")
        assert menu.break_entry is not None

    def test_never_below_break_plus_one(self, system):
        menu = _ready_menu(system, keys=("1", "2"))
        menu.remove_entry("1")
        with pytest.raises(ValidationError, match="not allowed to empty"):
            menu.remove_entry("2")
        assert menu.entries.keys() == ["2"]

    def test_missing_key_rejected(self, system):
        menu = _ready_menu(system)
        with pytest.raises(ValidationError, match="does not exist"):
            menu.remove_entry("9")

    def test_marks_modified(self, system):
        menu = _ready_menu(system, keys=("1", "2", "3"))
        menu.finalize()
        menu.remove_entry("3")
        assert menu.modified


class TestChangeEntry:
    def test_hint_only(self, system):
        menu = _ready_menu(system)
        menu.change_entry("New hint", "1", "")
        assert menu.entries.get("1").hint == "New hint"

    def test_rekey_keeps_action_and_submenu_flag(self, system):
        parent = _ready_menu(system, "Parent")
        child = _ready_menu(system, "Child")
        parent.add_sub_menu(child, "c", "Child menu")
        original = parent.entries.get("c")

        parent.change_entry("", "c", "k")

        moved = parent.entries.get("k")
        assert "c" not in parent.entries
        assert moved.action is original.action
        assert moved.is_sub_menu_entry
        assert moved.hint == "Child menu"

    def test_rekey_and_hint(self, system, calls):
        menu = system.create_menu("A")
        menu.add_entry("1", "One", calls.action("one"))
        menu.set_break_item("q", "Quit", None)
        menu.change_entry("Uno", "1", "u")
        entry = menu.entries.get("u")
        assert entry.hint == "Uno"
        entry.action()
        assert calls == ["one"]
        assert not entry.is_sub_menu_entry

    @pytest.mark.parametrize(
        "new_hint, old_key, new_key",
        [
            ("hint", "", "x"),      # blank old key
            ("hint", "9", "x"),     # unknown old key
            ("hint", "1", "1"),     # same key
            ("", "1", ""),          # nothing to change
            ("hint", "1", "q"),     # onto the break key
        ],
    )
    def test_invalid_changes_rejected(self, system, new_hint, old_key, new_key):
        menu = _ready_menu(system)
        with pytest.raises(ValidationError):
            menu.change_entry(new_hint, old_key, new_key)
        assert menu.entries.get("1").hint == "Entry 1"

    def test_marks_modified(self, system):
        menu = _ready_menu(system)
        menu.finalize()
        menu.change_entry("", "1", "one")
        assert menu.modified


class TestChangeEntryAction:
    def test_replaces_action(self, system, calls):
        menu = _ready_menu(system)
        menu.change_entry_action("1", calls.action("new"))
        menu.entries.get("1").action()
        assert calls == ["new"]

    def test_submenu_action_is_immutable(self, system):
        parent = _ready_menu(system, "Parent")
        child = _ready_menu(system, "Child")
        parent.add_sub_menu(child, "c", "Child")
        with pytest.raises(ValidationError, match="submenu"):
            parent.change_entry_action("c", lambda: None)
        assert isinstance(parent.entries.get("c").action, SubMenuAction)

    @pytest.mark.parametrize("key", ["", "q", "missing"])
    def test_invalid_keys_rejected(self, system, key):
        menu = _ready_menu(system)
        with pytest.raises(ValidationError):
            menu.change_entry_action(key, lambda: None)


class TestSetBreakItem:
    def test_sets_quit_value(self, system):
        menu = system.create_menu("A")
        assert menu.set_break_item("x", "Exit", None) == []
        assert menu.quit_value == "x"
        assert menu.break_entry.hint == "Exit"

    def test_blank_key_uses_default_and_warns(self, system, caplog):
        menu = system.create_menu("A")
        menu.add_entry("1", "One", None)
        with caplog.at_level("WARNING"):
            warnings = menu.set_break_item("", "", None)
        assert menu.quit_value == DEFAULT_BREAK_KEY
        assert menu.break_entry.hint == DEFAULT_BREAK_HINT
        assert len(warnings) == 1
        assert DEFAULT_BREAK_KEY in caplog.text
        menu.finalize()
        assert menu.finalized
        assert menu.display_order == ["1", DEFAULT_BREAK_KEY]

    def test_replacing_break_item_updates_in_place(self, system, calls):
        menu = _ready_menu(system)
        menu.finalize()
        menu.set_break_item("x", "Exit", calls.action("exit"))
        assert menu.quit_value == "x"
        assert menu.modified
        menu.break_entry.action()
        assert calls == ["exit"]


class TestAddSubMenu:
    def test_links_parent_and_creates_entry(self, system):
        parent = _ready_menu(system, "Parent")
        child = _ready_menu(system, "Child")
        parent.add_sub_menu(child, "c", "")
        entry = parent.entries.get("c")
        assert entry.is_sub_menu_entry
        assert entry.hint == "Menu hint not specified"
        assert child.parent is parent

    def test_none_child_rejected(self, system):
        parent = _ready_menu(system)
        with pytest.raises(ValidationError):
            parent.add_sub_menu(None, "c", "Child")

    def test_main_menu_cannot_be_submenu(self, system):
        main = _ready_menu(system, "Main")
        other = _ready_menu(system, "Other")
        with pytest.raises(ValidationError, match="main menu"):
            other.add_sub_menu(main, "m", "Main")

    def test_self_submenu_rejected(self, system):
        system.create_menu("Main")
        menu = _ready_menu(system, "Self")
        with pytest.raises(ValidationError):
            menu.add_sub_menu(menu, "s", "Self")

    def test_reparenting_rejected(self, system):
        system.create_menu("Main")
        first = _ready_menu(system, "First")
        second = _ready_menu(system, "Second")
        child = _ready_menu(system, "Child")
        first.add_sub_menu(child, "c", "Child")
        with pytest.raises(ValidationError, match="already assigned"):
            second.add_sub_menu(child, "c", "Child")
        assert child.parent is first
        assert "c" not in second.entries

    def test_cycle_rejected(self, system):
        system.create_menu("Main")
        upper = _ready_menu(system, "Upper")
        lower = _ready_menu(system, "Lower")
        upper.add_sub_menu(lower, "l", "Lower")
        with pytest.raises(ValidationError, match="ancestor"):
            lower.add_sub_menu(upper, "u", "Upper")

    def test_blank_key_rejected(self, system):
        system.create_menu("Main")
        parent = _ready_menu(system, "Parent")
        child = _ready_menu(system, "Child")
        with pytest.raises(ValidationError):
            parent.add_sub_menu(child, " ", "Child")
        assert child.parent is None

    def test_child_from_other_system_rejected(self, system, make_system):
        parent = _ready_menu(system, "Parent")
        stranger = make_system().create_menu("Elsewhere")
        stranger_child = stranger.system.create_menu("Child")
        with pytest.raises(ValidationError, match="another menu system"):
            parent.add_sub_menu(stranger_child, "c", "Child")


class TestChangeTitleAndFlags:
    def test_change_title(self, system):
        menu = system.create_menu("Old")
        menu.change_title("  New ")
        assert menu.title == "New"

    def test_blank_title_rejected(self, system):
        menu = system.create_menu("Old")
        with pytest.raises(ValidationError):
            menu.change_title("")
        assert menu.title == "Old"

    def test_skip_next_pause_and_choose_one(self, system):
        menu = system.create_menu("A")
        menu.skip_next_pause()
        menu.set_choose_one(True)
        assert menu.skip_function_notification
        assert menu.choose_one


class TestFinalize:
    def test_display_order_ascending(self, system):
        menu = _ready_menu(system, keys=("b", "c", "a"))
        assert menu.finalize() == []
        assert menu.display_order == ["a", "b", "c", "q"]
        assert menu.finalized and not menu.modified and not menu.killed

    def test_display_order_descending(self, system):
        menu = _ready_menu(system, keys=("b", "c", "a"))
        menu.sort_descending()
        menu.finalize()
        assert menu.display_order == ["q", "c", "b", "a"]

    def test_sort_change_after_finalize_marks_modified(self, system):
        menu = _ready_menu(system, keys=("a", "b"))
        menu.finalize()
        menu.set_sort_descending(True)
        assert menu.modified
        menu.reset()
        assert menu.display_order == ["q", "b", "a"]
        menu.sort_ascending()
        menu.reset()
        assert menu.display_order == ["a", "b", "q"]

    def test_finalize_is_idempotent(self, system):
        menu = _ready_menu(system, keys=("2", "1"))
        menu.finalize()
        first = list(menu.display_order)
        menu.finalize()
        assert menu.display_order == first

    def test_failed_finalize_kills_menu(self, system):
        menu = system.create_menu("Broken")
        menu.add_entry("1", "One", None)
        with pytest.raises(FinalizeError):
            menu.finalize()
        assert menu.killed
        assert not menu.finalized

    def test_reconfigured_menu_recovers(self, system):
        menu = system.create_menu("Broken")
        menu.add_entry("1", "One", None)
        with pytest.raises(FinalizeError):
            menu.finalize()
        menu.set_break_item("q", "Quit", None)
        menu.finalize()
        assert not menu.killed

    def test_reset_requires_finalized_menu(self, system):
        menu = _ready_menu(system)
        with pytest.raises(InvalidStateError):
            menu.reset()

    def test_reset_picks_up_new_entries(self, system):
        menu = _ready_menu(system, keys=("1",))
        menu.finalize()
        menu.add_entry("0", "Zero", None)
        menu.reset()
        assert menu.display_order == ["0", "1", "q"]
        assert not menu.modified

    def test_soft_warnings_are_alerted(self, system, output):
        menu = _ready_menu(system, keys=("1", "1"))
        warnings = menu.finalize()
        assert len(warnings) == 1
        assert "Attention" in output.getvalue()
        assert "duplicate keys" in output.getvalue()


def test_describe_lists_settings_and_entries(system):
    parent = _ready_menu(system, "Parent")
    child = _ready_menu(system, "Child", keys=("x",))
    parent.add_sub_menu(child, "c", "Child")
    text = child.describe()
    assert "Menu 'Child':" in text
    assert "ID : -2" in text
    assert "Break Value : 'q'" in text
    assert "Parent Menu : 'Parent', ID: -1" in text
    assert "'x'=Entry x" in text
    assert "'q'=Quit (break)" in text
