"""The options screen: settings controls and a summary of the current setup."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import fields

import urwid

from hammerclock.messages import (
    Message,
    SetColorPaletteMsg,
    SetEnableLogMsg,
    SetOneTurnForAllPlayersMsg,
    SetPlayerCountMsg,
    SetPlayerNameMsg,
    SetRulesetMsg,
    SetTimeFormatMsg,
)
from hammerclock.model import Model
from hammerclock.palette import color_palette_index_by_name, color_palettes
from hammerclock.rules import ruleset_names
from hammerclock.textviews import time_format_to_index

TIME_FORMATS = ("AMPM", "24-hour")

_LABEL_ATTR = "title"
_INTEGER = re.compile(r"[+-]?\d+")


def _label(text: str) -> tuple[str, str]:
    return (_LABEL_ATTR, text)


def ruleset_summary(model: Model) -> tuple[list, list]:
    """Return markup for the two summary columns: settings and phases."""
    rules = model.current_rules()
    left: list = [
        " ", _label("Name of the ruleset:"), f" {rules.name}\n\n ",
        _label("Player Count:"), f" {model.options.player_count}\n\n ",
        _label("Players:"), "\n",
    ]
    left.extend(f" {i}. {player.name}\n" for i, player in enumerate(model.players, 1))
    left += [
        "\n ", _label("One Turn For All Players:"),
        f" {str(rules.one_turn_for_all_players).lower()}\n\n ",
        _label("Color Palette:"), f" {model.options.color_palette}\n",
        " ", _label("Palette:"), " ",
    ]
    left.extend((f.name, "\u2588") for f in fields(model.current_color_palette))
    left += ["\n\n ", _label("Time Format:"), f" {model.options.time_format}\n\n"]

    right: list = [" ", _label("Phases:"), "\n"]
    right.extend(f"  {i}. {phase}\n" for i, phase in enumerate(model.phases, 1))
    return left, right


class OptionsScreen(urwid.WidgetWrap):
    """Settings controls that send a message to `send` on every change."""

    def __init__(self, model: Model, send: Callable[[Message], None]):
        self._send = send
        opts = model.options

        self.ruleset_buttons = self._radio_group(
            ruleset_names(opts.rules),
            opts.default,
            lambda index, _name: send(SetRulesetMsg(index=index)),
        )

        self.player_count_edit = urwid.Edit(_label("Players: "), str(opts.player_count))
        urwid.connect_signal(self.player_count_edit, "postchange", self._on_count)

        names = list(opts.player_names)
        names += [""] * (opts.player_count - len(names))
        self.player_name_edits = []
        for index in range(opts.player_count):
            caption = _label("Player names: ") if index == 0 else ""
            edit = urwid.Edit(caption, names[index])
            urwid.connect_signal(edit, "postchange", self._on_name, user_args=[index])
            self.player_name_edits.append(edit)

        self.palette_buttons = self._radio_group(
            color_palettes(),
            color_palette_index_by_name(opts.color_palette),
            lambda _index, name: send(SetColorPaletteMsg(name=name)),
        )

        self.time_format_buttons = self._radio_group(
            TIME_FORMATS,
            time_format_to_index(opts.time_format),
            lambda _index, name: send(SetTimeFormatMsg(format=name)),
        )

        self.one_turn_box = urwid.CheckBox(
            "One Turn For All Players", state=model.current_rules().one_turn_for_all_players
        )
        urwid.connect_signal(
            self.one_turn_box,
            "change",
            lambda _box, state: send(SetOneTurnForAllPlayersMsg(value=state)),
        )

        self.logging_box = urwid.CheckBox("Enable CSV Logging", state=opts.logging_enabled)
        urwid.connect_signal(
            self.logging_box,
            "change",
            lambda _box, state: send(SetEnableLogMsg(value=state)),
        )

        self.summary_left = urwid.Text("")
        self.summary_right = urwid.Text("")
        self.refresh(model)

        help_text = urwid.Text(
            ["Use mouse to change setting\n Press ", ("white", "O"), " to return to the main screen"],
            align="center",
        )

        body = urwid.SimpleFocusListWalker(
            [
                urwid.Text(_label("Select rules: ")),
                *self.ruleset_buttons,
                urwid.Divider(),
                self.player_count_edit,
                *self.player_name_edits,
                urwid.Divider(),
                urwid.Text(_label("Select color palette: ")),
                *self.palette_buttons,
                urwid.Divider(),
                urwid.Text(_label("Select time format: ")),
                *self.time_format_buttons,
                urwid.Divider(),
                self.one_turn_box,
                self.logging_box,
                urwid.Divider("\u2500"),
                urwid.Columns([self.summary_left, self.summary_right]),
                urwid.Divider("\u2500"),
                help_text,
            ]
        )
        frame = urwid.LineBox(urwid.ListBox(body), title="options")
        super().__init__(urwid.AttrMap(frame, "primary"))

    def _radio_group(self, choices, selected: int, handler) -> list:
        group: list = []
        buttons = []
        for index, choice in enumerate(choices):
            button = urwid.RadioButton(group, choice, state=index == selected)
            urwid.connect_signal(
                button, "change", self._on_choice, user_args=[handler, index, choice]
            )
            buttons.append(button)
        return buttons

    @staticmethod
    def _on_choice(handler, index: int, choice: str, _button, new_state: bool) -> None:
        if new_state:
            handler(index, choice)

    def _on_count(self, edit: urwid.Edit, _old_text: str) -> None:
        text = edit.edit_text
        if _INTEGER.fullmatch(text) and int(text) > 0:
            self._send(SetPlayerCountMsg(count=int(text)))

    def _on_name(self, index: int, edit: urwid.Edit, _old_text: str) -> None:
        self._send(SetPlayerNameMsg(index=index, name=edit.edit_text.strip()))

    def refresh(self, model: Model) -> None:
        """Redraw the summary columns from the model."""
        left, right = ruleset_summary(model)
        self.summary_left.set_text(left)
        self.summary_right.set_text(right)