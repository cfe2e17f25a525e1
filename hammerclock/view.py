"""The main interface: top bar, player panels, status panel, menu and dialogs."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import urwid

from hammerclock.messages import EndGameConfirmMsg, ExitConfirmMsg, Message
from hammerclock.model import GameStatus, Model
from hammerclock.optionspanel import OptionsScreen
from hammerclock.palette import Color
from hammerclock.playerpanel import PlayerPanel
from hammerclock.textviews import (
    MenuOption,
    about_text,
    clock_text,
    format_menu_option,
    menu_bar_text,
    status_text,
)

_PANEL_COLORS = ("blue", "yellow", "green", "red")

_STATUS_BORDER = {
    GameStatus.NOT_STARTED: "cyan",
    GameStatus.IN_PROGRESS: "green",
    GameStatus.PAUSED: "yellow",
}

_MODAL_BUTTONS = ("Yes", "No")


def bottom_menu_text(status: GameStatus) -> list:
    """Return the markup of the bottom menu for the game status."""
    start = {
        GameStatus.IN_PROGRESS: "Pause Game",
        GameStatus.PAUSED: "Resume Game",
    }.get(status, "Start Game")
    instructions = [
        MenuOption("S", start),
        MenuOption("E", "End Game"),
        MenuOption("SPACE", "Switch Turns"),
        MenuOption("P", "Next Phase"),
        MenuOption("B", "Previous Phase"),
        MenuOption("Q", "Quit"),
    ]
    markup: list = []
    for index, option in enumerate(instructions):
        if index:
            markup.append("   ")
        if option.key == "E":
            if status == GameStatus.NOT_STARTED:
                continue
            markup.extend([("dim_white", option.key), f" {option.description}"])
        else:
            markup.extend(format_menu_option(option))
    return markup


def status_border_color(model: Model) -> Color:
    """Return the border colour of the status panel for the game status."""
    return getattr(model.current_color_palette, _STATUS_BORDER.get(model.game_status, "cyan"))


class _ConfirmationModal(urwid.WidgetWrap):
    """A yes/no dialog that reports the chosen button to a callback."""

    def __init__(self, text: str, title: str, on_done: Callable[[int, str], None]):
        self.text = text
        self.title = title
        self._on_done = on_done
        self.buttons = [
            urwid.Button(label, on_press=self._pressed, user_data=index)
            for index, label in enumerate(_MODAL_BUTTONS)
        ]
        pile = urwid.Pile(
            [
                urwid.Text(text, align="center"),
                urwid.Divider(),
                urwid.Columns(
                    [urwid.AttrMap(b, "primary", focus_map="contrast") for b in self.buttons],
                    dividechars=2,
                ),
            ]
        )
        box = urwid.LineBox(urwid.Filler(pile), title=title)
        super().__init__(urwid.AttrMap(box, "border"))

    def _pressed(self, _button: urwid.Button, index: int) -> None:
        self.press(index)

    def press(self, index: int) -> None:
        """Act as if the button at this index had been chosen."""
        self._on_done(index, _MODAL_BUTTONS[index])


def create_end_game_confirmation_modal(view: View) -> _ConfirmationModal:
    """Return a dialog asking whether to end the current game."""
    return _ConfirmationModal(
        "Would you like to end the current game?",
        "Confirm End Game",
        lambda index, _label: view.send(EndGameConfirmMsg(confirmed=index == 0)),
    )


def create_exit_confirmation_modal(view: View) -> _ConfirmationModal:
    """Return a dialog asking whether to leave the application."""
    return _ConfirmationModal(
        "Are you sure you want to exit?",
        "Confirm Exit",
        lambda index, _label: view.send(ExitConfirmMsg(confirmed=index == 0)),
    )


class View:
    """Widgets of the whole interface; `root` is the widget to display."""

    def __init__(self, model: Model, send: Callable[[Message], None]):
        self.send = send
        self.palette = model.current_color_palette.urwid_entries()
        self.current_screen = ""

        self.top_menu = urwid.Text(
            menu_bar_text([MenuOption("O", "Options"), MenuOption("A", "About")])
        )
        self.name_display = urwid.Text(("white", model.current_rules().name), align="center")
        self.clock_display = urwid.Text(clock_text(model.options.time_format), align="right")
        self.top_bar = urwid.Columns(
            [
                ("weight", 1, self.top_menu),
                ("weight", 1, urwid.Text("")),
                ("weight", 1, self.name_display),
                ("weight", 1, urwid.Text("")),
                (11, urwid.AttrMap(self.clock_display, "white")),
            ]
        )

        self.player_panels = [
            PlayerPanel(player, _PANEL_COLORS[index % len(_PANEL_COLORS)], model)
            for index, player in enumerate(model.players)
        ]
        self._players_columns = urwid.Columns(
            [("weight", 1, panel) for panel in self.player_panels]
        )
        self.player_panels_container = urwid.WidgetPlaceholder(self._players_columns)

        self.options_screen = OptionsScreen(model, send)
        about = urwid.Filler(
            urwid.Pile([urwid.Divider(), urwid.Text(about_text(), align="center")]),
            valign="top",
        )
        self.about_screen = urwid.AttrMap(urwid.LineBox(about, title="About"), "yellow")

        self.status_text = urwid.Text(str(model.game_status), align="center")
        self.status_panel = urwid.AttrMap(
            urwid.LineBox(urwid.AttrMap(self.status_text, "primary")),
            _STATUS_BORDER.get(model.game_status, "cyan"),
        )

        self.bottom_menu = urwid.Text(bottom_menu_text(model.game_status))

        self.main_view = urwid.Pile(
            [
                ("pack", self.top_bar),
                ("weight", 1, self.player_panels_container),
                ("pack", self.status_panel),
                ("pack", self.bottom_menu),
            ]
        )
        self.root = urwid.WidgetPlaceholder(self.main_view)

    def render(self, model: Model) -> None:
        """Bring every widget up to date with the model."""
        if model.current_screen != self.current_screen:
            self.current_screen = model.current_screen
            if model.current_screen == "options":
                body = self.options_screen
            elif model.current_screen == "about":
                body = self.about_screen
            else:
                body = self._players_columns
            self.player_panels_container.original_widget = body

        for panel, player in zip(self.player_panels, model.players):
            panel.update(player, model)
        self.options_screen.refresh(model)
        self.status_text.set_text(status_text(model.game_status, model.total_game_time))
        self.status_panel.set_attr_map({None: _STATUS_BORDER.get(model.game_status, "cyan")})
        self.bottom_menu.set_text(bottom_menu_text(model.game_status))

    def update_clock(self, model: Model, now: datetime | None = None) -> None:
        """Show the current time in the format chosen in the options."""
        current = clock_text(model.options.time_format, now)
        if self.clock_display.get_text()[0] != current:
            self.clock_display.set_text(current)

    def restore_main_view(self) -> None:
        """Show the main layout, removing any dialog."""
        self.root.original_widget = self.main_view

    def show_confirmation(self, kind: str) -> None:
        """Show the 'EndGameConfirm' or 'ExitConfirm' dialog over the main layout."""
        if kind == "EndGameConfirm":
            modal = create_end_game_confirmation_modal(self)
        elif kind == "ExitConfirm":
            modal = create_exit_confirmation_modal(self)
        else:
            raise ValueError(f"unknown dialog kind {kind!r}")
        self.root.original_widget = urwid.Overlay(
            modal, self.main_view, align="center", width=60, valign="middle", height=10
        )