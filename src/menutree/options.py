"""Behaviour options shared by every menu of a MenuSystem.

Options can be set in code through the setter methods, or loaded from a
YAML file:

    $XDG_CONFIG_HOME/menutree/config.yaml   (or $MENUTREE_CONFIG)

    kill_phrase: "Bye!"
    menu_prompt: ">>: "
    pause_on_output: false
    alignment: right
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .entries import clean

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MENUTREE_CONFIG"

DEFAULT_KILL_PHRASE = "Bye!"
DEFAULT_MENU_PROMPT = ">>: "
DEFAULT_MENU_SEPARATOR = ":"
DEFAULT_FUNC_BRACKET_TOP = "*.............."
DEFAULT_FUNC_BRACKET_BOTTOM = "..............*"


class Alignment(str, Enum):
    """Side that rendered entry rows are justified to."""

    LEFT = "left"
    RIGHT = "right"

    def __str__(self) -> str:
        return self.value


FIELD_INFO: dict[str, str] = {
    "id_func_runner": (
        "If true, an action's output is bracketed by the title of the menu that "
        "ran it and the key the user typed. Useful for debugging. Works with, but "
        "is separate from, func_bracket_top and func_bracket_bottom."
    ),
    "kill_phrase": (
        "Input at the prompt that exits the menu system no matter how deeply "
        'nested. An empty string ("") disables this ability.'
    ),
    "menu_prompt": (
        'Prompt for the menu user. This can be set even to " ", but an empty '
        "value resets it to the default prompt."
    ),
    "menu_separator": "Separator between menu title breadcrumbs.",
    "pause_on_output": (
        "If true, wait for the user to press <RET> after an action's output. "
        "Otherwise the menu is displayed again immediately."
    ),
    "alerts_display": (
        "If true, error and warning conditions are printed as they happen, in "
        "addition to being raised or logged. A false value implies a false "
        "value for alerts_pause."
    ),
    "alerts_pause": (
        "If true, printed alerts wait for the user to acknowledge them so they "
        "can be read."
    ),
    "func_bracket_top": "String printed before an action runs, to set its output apart.",
    "func_bracket_bottom": "String printed after an action returns.",
    "alignment": "Justification of the menu entry rows: left or right.",
}


@dataclass
class MenuOptions:
    """Behaviour toggles for a menu system.

    Attributes:
        kill_phrase: Input that unwinds every running menu ("" disables).
        menu_prompt: Prompt printed after the menu.
        menu_separator: Separator between breadcrumb titles.
        func_bracket_top: Marker printed before an action's output.
        func_bracket_bottom: Marker printed after an action's output.
        id_func_runner: Tag the markers with menu title and chosen key.
        pause_on_output: Wait for the user after each action.
        alerts_display: Print alerts on the console.
        alerts_pause: Wait for the user after each printed alert.
        alignment: Justification of the entry rows.
    """

    kill_phrase: str = DEFAULT_KILL_PHRASE
    menu_prompt: str = DEFAULT_MENU_PROMPT
    menu_separator: str = DEFAULT_MENU_SEPARATOR
    func_bracket_top: str = DEFAULT_FUNC_BRACKET_TOP
    func_bracket_bottom: str = DEFAULT_FUNC_BRACKET_BOTTOM
    id_func_runner: bool = True
    pause_on_output: bool = True
    alerts_display: bool = True
    alerts_pause: bool = True
    alignment: Alignment = Alignment.LEFT

    def set_kill_phrase(self, value: str) -> None:
        self.kill_phrase = clean(value)

    def set_menu_prompt(self, value: str) -> None:
        # spaces are kept so that " " is a usable prompt
        value = (value or "").strip("\t\r\n")
        self.menu_prompt = value or DEFAULT_MENU_PROMPT

    def set_menu_separator(self, value: str) -> None:
        self.menu_separator = clean(value) or DEFAULT_MENU_SEPARATOR

    def set_func_bracket_top(self, value: str) -> None:
        self.func_bracket_top = clean(value)

    def set_func_bracket_bottom(self, value: str) -> None:
        self.func_bracket_bottom = clean(value)

    def set_id_func_runner(self, value: bool) -> None:
        self.id_func_runner = bool(value)

    def set_pause_on_output(self, value: bool) -> None:
        self.pause_on_output = bool(value)

    def set_alerts_display(self, value: bool) -> None:
        self.alerts_display = bool(value)

    def set_alerts_pause(self, value: bool) -> None:
        self.alerts_pause = bool(value)

    def align_left(self) -> None:
        self.alignment = Alignment.LEFT

    def align_right(self) -> None:
        self.alignment = Alignment.RIGHT

    def describe(self) -> str:
        """Current value and default of every option, one block per field."""
        defaults = MenuOptions()
        lines = ["Menu Options"]
        for f in fields(self):
            lines.append(
                f"{f.name}:\n  current value = '{getattr(self, f.name)}' "
                f"(default is: '{getattr(defaults, f.name)}')"
            )
        return "\n".join(lines)

    @staticmethod
    def info() -> str:
        """Explanation of every option."""
        blocks = ["Menu option fields:"]
        blocks.extend(f"{name}: {text}" for name, text in FIELD_INFO.items())
        return "\n\n".join(blocks)

    def to_mapping(self) -> dict[str, Any]:
        data = asdict(self)
        data["alignment"] = self.alignment.value
        return data

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> MenuOptions:
        """Build options from a plain mapping, applying the setter rules.

        Unknown keys are logged and ignored.

        Raises:
            ValueError: alignment is neither "left" nor "right", or a flag
                option is not a boolean.
        """
        options = cls()
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown menu option: %s", key)
                continue
            if key == "alignment":
                options.alignment = Alignment(str(value).lower())
            elif isinstance(getattr(options, key), bool):
                if not isinstance(value, bool):
                    raise ValueError(f"Menu option {key} must be true or false, got {value!r}")
                getattr(options, f"set_{key}")(value)
            else:
                getattr(options, f"set_{key}")("" if value is None else str(value))
        return options


def get_config_dir() -> Path:
    """Get the menutree config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "menutree"


def get_config_path() -> Path:
    """Get the options file path, honouring $MENUTREE_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(os.path.expanduser(override))
    return get_config_dir() / "config.yaml"


def load_options(path: Path | None = None) -> MenuOptions:
    """Load options from YAML, falling back to defaults.

    A missing, unreadable, or malformed file yields default options.
    """
    config_path = path or get_config_path()
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return MenuOptions()
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Could not read menu options from %s: %s", config_path, e)
        return MenuOptions()

    if not isinstance(data, dict):
        return MenuOptions()
    try:
        return MenuOptions.from_mapping(data)
    except ValueError as e:
        logger.warning("Invalid menu options in %s: %s", config_path, e)
        return MenuOptions()


def save_options(options: MenuOptions, path: Path | None = None) -> Path:
    """Write options to YAML and return the path written."""
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(options.to_mapping(), f, default_flow_style=False, sort_keys=False)
    return config_path
