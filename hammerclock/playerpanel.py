"""A player's panel: name, clock, turn and phase, and the action log."""

from __future__ import annotations

import urwid

from hammerclock.model import Model, Player
from hammerclock.palette import Color, ColorPalette
from hammerclock.textviews import format_duration, log_text

ACTIVE_TITLE = " ACTIVE TURN "

_BORDER_SLOTS = ("blue", "yellow", "green", "red")
_DOUBLE_LINES = {
    "tlcorner": "\u2554",
    "tline": "\u2550",
    "lline": "\u2551",
    "trcorner": "\u2557",
    "blcorner": "\u255a",
    "rline": "\u2551",
    "bline": "\u2550",
    "brcorner": "\u255d",
}


def turn_and_phase_text(player: Player, model: Model) -> str:
    """Return the turn line, with the current phase unless all players share one turn.

    Raises IndexError when the player's phase is not among the model's phases.
    """
    if model.current_rules().one_turn_for_all_players:
        return f"Turn: {player.turn_count}"
    return f"Turn: {player.turn_count} | Phase: {model.phases[player.current_phase]}"


def border_color(color: str, palette: ColorPalette) -> Color:
    """Return the palette colour for a panel colour name; unknown names give black."""
    return getattr(palette, color) if color in _BORDER_SLOTS else palette.black


def _border_attr(color: str) -> str:
    return color if color in _BORDER_SLOTS else "black"


def _elapsed(player: Player) -> str:
    return f"Time Elapsed: {format_duration(player.time_elapsed)}"


class PlayerPanel(urwid.WidgetWrap):
    """The panel of one player; a left click on it gives that player the turn."""

    def __init__(self, player: Player, color: str, model: Model):
        self._player = player
        self._model = model
        self.color = color
        self.border_attr = _border_attr(color)
        self.title = ""
        self.text_attr = "white"
        self._active = False
        self._log_content = ""

        self.name_text = urwid.Text(f"\nPlayer: {player.name}", align="center")
        self.elapsed_text = urwid.Text(_elapsed(player), align="center")
        self.turn_text = urwid.Text(turn_and_phase_text(player, model), align="center")
        self.divider = urwid.Text("\u2500" * 30, align="center")

        self._text_maps = [
            urwid.AttrMap(self.name_text, self.text_attr),
            urwid.AttrMap(self.elapsed_text, self.text_attr),
            urwid.AttrMap(self.turn_text, self.text_attr),
        ]
        self._divider_map = urwid.AttrMap(self.divider, self.border_attr)

        self._log_walker = urwid.SimpleFocusListWalker([])
        self._log_box = urwid.ListBox(self._log_walker)
        self._set_log(player)

        name_map, elapsed_map, turn_map = self._text_maps
        self._body = urwid.Pile(
            [
                ("pack", name_map),
                ("pack", urwid.Divider()),
                ("pack", elapsed_map),
                ("pack", self._divider_map),
                ("pack", turn_map),
                ("pack", urwid.Divider()),
                ("pack", urwid.AttrMap(urwid.Text("\nAction Log:"), "white")),
                ("weight", 1, urwid.AttrMap(self._log_box, "primary")),
            ]
        )
        super().__init__(self._frame())

    @property
    def log_content(self) -> str:
        """The text currently shown in the action log."""
        return self._log_content

    def _frame(self) -> urwid.Widget:
        if self._active:
            box = urwid.LineBox(self._body, title=self.title.strip(), **_DOUBLE_LINES)
        else:
            box = urwid.LineBox(self._body)
        return urwid.AttrMap(box, self.border_attr)

    def _set_log(self, player: Player) -> None:
        content = log_text(player.action_log) if player.action_log else ""
        if content == self._log_content:
            return
        self._log_content = content
        self._log_walker[:] = [urwid.Text(line) for line in content.splitlines()]
        if self._log_walker:
            self._log_box.set_focus(len(self._log_walker) - 1)

    def update(self, player: Player, model: Model) -> None:
        """Show the current state of the player."""
        self._player = player
        self._model = model
        self.elapsed_text.set_text(_elapsed(player))
        self.turn_text.set_text(turn_and_phase_text(player, model))

        active = model.game_started and player.is_turn
        self.title = ACTIVE_TITLE if active else ""
        self.text_attr = "white" if active else "dim_white"
        for text_map in self._text_maps:
            text_map.set_attr_map({None: self.text_attr})
        self._divider_map.set_attr_map({None: self.border_attr})
        if active != self._active:
            self._active = active
            self._w = self._frame()

        self._set_log(player)

    def _select(self) -> None:
        player, players = self._player, self._model.players
        if player.is_turn or not any(p is player for p in players):
            return
        for other in players:
            other.is_turn = False
        player.is_turn = True

    def mouse_event(self, size, event, button, col, row, focus):
        if event == "mouse press" and button == 1:
            self._select()
            return True
        return super().mouse_event(size, event, button, col, row, focus)