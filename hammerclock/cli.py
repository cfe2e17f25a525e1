"""Command-line entry point: load options, build the model and run the interface."""

from __future__ import annotations

import argparse
import sys
from collections import deque
from collections.abc import Sequence

import urwid

from hammerclock import actionlog
from hammerclock.config import DEFAULT_LOG_FILE_NAME, DEFAULT_OPTIONS_FILENAME, VERSION
from hammerclock.messages import (
    ExitConfirmMsg,
    Key,
    KeyPressMsg,
    Message,
    RestoreMainUIMsg,
    ShowModalMsg,
    TickMsg,
)
from hammerclock.model import Model, make_players, new_model
from hammerclock.options import Options, load_options
from hammerclock.palette import color_palette_by_name
from hammerclock.update import is_captured_key, update
from hammerclock.view import View

_MODAL_KINDS = ("EndGameConfirm", "ExitConfirm")


def usage() -> str:
    """Return the help text shown for -h and for bad arguments."""
    return f"""
Hammerclock {VERSION}
Terminal-based chess clock and tracker for tabletop games

Usage:
  hammerclock [options]

options:
  -o <file>    Specify a custom options file (default: {DEFAULT_OPTIONS_FILENAME})
  -h, --help   Show this help message

Examples:
  hammerclock                     # Run with default options
  hammerclock -o myOptions.json   # Run with custom options
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        sys.stderr.write(f"{self.prog}: {message}\n{usage()}\n")
        self.exit(2)


def build_parser() -> argparse.ArgumentParser:
    """Return the parser of the command-line options."""
    parser = _Parser(prog="hammerclock", add_help=False, usage=usage())
    parser.add_argument("-h", "--help", action="store_true", dest="help")
    parser.add_argument(
        "-o",
        dest="options_file",
        metavar="<file>",
        default=DEFAULT_OPTIONS_FILENAME,
        help="Path to the options file",
    )
    return parser


def build_model(opts: Options) -> Model:
    """Return a fresh model set up from the loaded options.

    Raises IndexError when the selected ruleset does not exist.
    """
    if not 0 <= opts.default < len(opts.rules):
        raise IndexError(f"ruleset index {opts.default} out of range")
    model = new_model()
    model.options = opts
    model.phases = tuple(opts.rules[opts.default].phases)
    model.current_color_palette = color_palette_by_name(opts.color_palette)
    model.players = make_players(max(opts.player_count, 0), opts.player_names)
    return model


def _key_kind(key: str) -> Key:
    if key == "esc":
        return Key.ESCAPE
    if key == "ctrl c":
        return Key.CTRL_C
    if len(key) == 1:
        return Key.RUNE
    return Key.OTHER


class _Session:
    """Runs messages through the update loop and keeps the view in step."""

    def __init__(self, model: Model):
        self.model = model
        self._pending: deque[Message] = deque()
        self._draining = False
        self._exit = False
        self.view = View(model, self.send)
        self.loop: urwid.MainLoop | None = None

    def send(self, msg: Message) -> None:
        self._pending.append(msg)
        if self._draining:
            return
        self._draining = True
        try:
            while self._pending:
                self._dispatch(self._pending.popleft())
        finally:
            self._draining = False
        if self._exit:
            raise urwid.ExitMainLoop()

    def _dispatch(self, msg: Message) -> None:
        self.model, command = update(msg, self.model)
        self.view.render(self.model)
        if command is None:
            return
        result = command()
        if result is None:
            return
        if isinstance(result, ShowModalMsg):
            if result.kind in _MODAL_KINDS:
                self.view.show_confirmation(result.kind)
        elif isinstance(result, RestoreMainUIMsg):
            self.view.restore_main_view()
        elif isinstance(result, ExitConfirmMsg) and result.confirmed:
            self._exit = True
        else:
            self._pending.append(result)

    def _capture(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        kind = _key_kind(key)
        char = key if kind is Key.RUNE else ""
        captured = is_captured_key(kind, char)
        self.send(KeyPressMsg(key=kind, rune=char))
        return captured

    def input_filter(self, keys: list, _raw: list) -> list:
        return [key for key in keys if not self._capture(key)]

    def _tick(self, loop: urwid.MainLoop, _data: object = None) -> None:
        loop.set_alarm_in(1, self._tick)
        self.view.update_clock(self.model)
        self.send(TickMsg())

    def run(self) -> None:
        self.view.render(self.model)
        self.loop = urwid.MainLoop(
            self.view.root,
            palette=self.view.palette,
            input_filter=self.input_filter,
            handle_mouse=True,
        )
        self.loop.screen.set_terminal_properties(colors=256)
        self.loop.set_alarm_in(1, self._tick)
        self.loop.run()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the application; return the process exit status."""
    actionlog.initialise()
    try:
        print("Hammerclock", VERSION, "starting up...")
        print(f"Logs will be written to {DEFAULT_LOG_FILE_NAME} in the current directory")

        args = build_parser().parse_args(argv)
        if args.help:
            sys.stderr.write(usage() + "\n")
            return 0

        model = build_model(load_options(args.options_file))
        session = _Session(model)
        try:
            session.run()
        except KeyboardInterrupt:
            pass
        except Exception as exc:
            print(f"Error running application: {exc}")
            return 1
        return 0
    finally:
        actionlog.cleanup()


if __name__ == "__main__":
    sys.exit(main())