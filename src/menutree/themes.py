"""Configurable colours for rendered menus.

The Theme dataclass holds the Rich styles the renderer applies to each part
of a menu screen. Styles never change the text itself, so output captured
without a colour system is identical for every theme.
"""

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for menu screens.

    All styles use Rich style syntax (e.g., "green", "bold cyan", "dim").

    Attributes:
        breadcrumb_style: Style for the breadcrumb/title line.
        rule_style: Style for the rule under the title.
        key_style: Style for entry keys.
        hint_style: Style for entry hints.
        break_style: Style for the break entry's key.
        banner_style: Style for the kill-phrase banner.
        bracket_style: Style for the markers around action output.
        alert_style: Style for alert banners.
        invalid_style: Style for the invalid-choice message.

        rule_width: Width of the rule and of the banner without a kill phrase.
    """

    # Styles
    breadcrumb_style: str = "bold"
    rule_style: str = "dim"
    key_style: str = "cyan"
    hint_style: str = ""
    break_style: str = "yellow"
    banner_style: str = "dim"
    bracket_style: str = "dim"
    alert_style: str = "yellow"
    invalid_style: str = "red"

    # Layout
    rule_width: int = 30


# Default theme used when none is specified
DEFAULT_THEME = Theme()
