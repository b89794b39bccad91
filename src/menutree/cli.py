"""Command line interface for menutree.

    menutree demo                 # run the demonstration menus
    menutree demo --script FILE   # replay input lines from FILE
    menutree options [--info]     # show effective options
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from . import __version__
from .inputs import ScriptedInput
from .options import get_config_path, load_options

_console: Console | None = None


def _get_console() -> Console:
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def _print(msg: str = "") -> None:
    _get_console().print(msg, markup=False)


def cmd_demo(args):
    """Run the demonstration menu tree."""
    from .demo import build_demo
    from .errors import MenuError
    from .system import MenuSystem

    console = _get_console()
    options = load_options(Path(args.config) if args.config else None)
    input_source = None
    if args.script:
        script = Path(args.script)
        if not script.is_file():
            print(f"Error: Script not found: {script}")
            sys.exit(1)
        input_source = ScriptedInput(script.read_text().splitlines(), echo=console)

    system = MenuSystem(options=options, console=console, input_source=input_source)
    build_demo(system)
    try:
        system.start_main_menu()
    except MenuError as e:
        print(f"Error: {e}")
        sys.exit(1)

    _print()
    if system.was_killed():
        _print("Menu system stopped with the kill phrase.")


def cmd_options(args):
    """Show the effective options, or what each option means."""
    from .options import MenuOptions

    if args.info:
        _print(MenuOptions.info())
        return
    path = Path(args.config) if args.config else get_config_path()
    options = load_options(path)
    _print(f"Config file: {path}{'' if path.exists() else ' (not found, using defaults)'}")
    _print()
    _print(options.describe())


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="menutree",
        description="menutree: nested text menus for terminal programs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"menutree {__version__}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    # demo
    demo_p = subparsers.add_parser("demo", help="Run the demonstration menus")
    demo_p.add_argument("--script", help="Replay input lines from a file")
    demo_p.add_argument("--config", help="Options file (default: user config)")
    demo_p.set_defaults(func=cmd_demo)

    # options
    options_p = subparsers.add_parser("options", help="Show menu options")
    options_p.add_argument("--info", action="store_true", help="Explain each option")
    options_p.add_argument("--config", help="Options file (default: user config)")
    options_p.set_defaults(func=cmd_options)

    return parser


def main(argv: list[str] | None = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if hasattr(args, "func"):
            args.func(args)
        else:
            parser.print_help()
    except KeyboardInterrupt:
        print()
        sys.exit(130)
