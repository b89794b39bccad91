"""Pytest fixtures for menutree tests."""

from io import StringIO

import pytest
from rich.console import Console

from menutree import MenuOptions, MenuSystem, ScriptedInput


@pytest.fixture
def output():
    """Buffer that captures everything the menu system prints."""
    return StringIO()


@pytest.fixture
def make_system(output):
    """Factory for a MenuSystem that prints to `output` and replays lines.

    Pauses are off by default so that scripted lines map one-to-one to menu
    choices; pass option overrides to turn them back on.
    """
    def _make(lines=(), **overrides):
        options = MenuOptions(pause_on_output=False, alerts_pause=False)
        for name, value in overrides.items():
            setattr(options, name, value)
        console = Console(file=output, width=100, color_system=None, highlight=False)
        return MenuSystem(options=options, console=console, input_source=ScriptedInput(lines))

    return _make


@pytest.fixture
def system(make_system):
    """MenuSystem with no scripted input."""
    return make_system()


@pytest.fixture
def calls():
    """Records action invocations by name."""
    class Calls(list):
        def action(self, name):
            return lambda: self.append(name)

    return Calls()
