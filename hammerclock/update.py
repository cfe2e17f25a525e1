"""The model update loop: apply a message to a model, get a new model and a command."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from datetime import timedelta
from typing import Optional

from hammerclock.actionlog import add_log_entry
from hammerclock.messages import (
    EndGameConfirmMsg,
    EndGameMsg,
    ExitConfirmMsg,
    Key,
    KeyPressMsg,
    Message,
    NextPhaseMsg,
    PrevPhaseMsg,
    RestoreMainUIMsg,
    SetColorPaletteMsg,
    SetEnableLogMsg,
    SetOneTurnForAllPlayersMsg,
    SetPlayerCountMsg,
    SetPlayerNameMsg,
    SetRulesetMsg,
    SetTimeFormatMsg,
    ShowAboutMsg,
    ShowEndGameConfirmMsg,
    ShowExitConfirmMsg,
    ShowMainScreenMsg,
    ShowModalMsg,
    ShowOptionsMsg,
    StartGameMsg,
    SwitchTurnsMsg,
    TickMsg,
)
from hammerclock.model import GameStatus, Model
from hammerclock.palette import color_palette_by_name

Command = Optional[Callable[[], Optional[Message]]]

_ONE_SECOND = timedelta(seconds=1)

_CAPTURED_RUNES = frozenset("oOaAsSeEpPbBqQ ")


def _copy(model: Model) -> Model:
    """Return a copy whose players and options can be changed independently."""
    return dataclasses.replace(
        model,
        players=[dataclasses.replace(player) for player in model.players],
        options=dataclasses.replace(
            model.options,
            rules=list(model.options.rules),
            player_names=list(model.options.player_names),
        ),
    )


def _log_active(model: Model, message: str) -> None:
    for player in model.active_players():
        add_log_entry(player, model, message)


def _start_game(model: Model) -> tuple[Model, Command]:
    new = _copy(model)
    if model.game_status == GameStatus.PAUSED:
        new.game_status = GameStatus.IN_PROGRESS
        _log_active(new, "Game resumed")
    elif model.game_status == GameStatus.IN_PROGRESS:
        new.game_status = GameStatus.PAUSED
        _log_active(new, "Game paused")
    else:
        new.game_status = GameStatus.IN_PROGRESS
        new.game_started = True
        if new.players and not new.active_players():
            for index, player in enumerate(new.players):
                player.is_turn = index == 0
        _log_active(new, "Game started")
    return new, None


def _end_game(model: Model) -> tuple[Model, Command]:
    if not model.game_started:
        return model, None
    new = _copy(model)
    new.game_status = GameStatus.NOT_STARTED
    new.game_started = False
    new.total_game_time = timedelta(0)
    for index, player in enumerate(new.players):
        player.time_elapsed = timedelta(0)
        player.turn_count = 0
        player.current_phase = 0
        player.action_log = []
        player.is_turn = index == 0
        message = "Game ended - reset to initial state" if index == 0 else "Game ended"
        add_log_entry(player, new, message)
    return new, None


def _show_main_screen_command() -> Message:
    return ShowMainScreenMsg()


def _end_game_confirm(msg: EndGameConfirmMsg, model: Model) -> tuple[Model, Command]:
    if msg.confirmed:
        model, _ = _end_game(model)
    return model, _show_main_screen_command


def _exit_confirm(msg: ExitConfirmMsg, model: Model) -> tuple[Model, Command]:
    if msg.confirmed:
        return model, lambda: ExitConfirmMsg(confirmed=True)
    return model, _show_main_screen_command


def _show_modal(model: Model, kind: str) -> tuple[Model, Command]:
    return model, lambda: ShowModalMsg(kind=kind)


def _switch_turns(model: Model) -> tuple[Model, Command]:
    new = _copy(model)
    for player in new.players:
        if player.is_turn:
            add_log_entry(player, new, f"Turn {player.turn_count} ended")
        player.is_turn = not player.is_turn
        if player.is_turn:
            player.turn_count += 1
            player.current_phase = 0
            add_log_entry(player, new, f"Turn {player.turn_count} started")
            if model.phases:
                add_log_entry(
                    player,
                    new,
                    f"Turn {player.turn_count} - Entered phase: {model.phases[0]}",
                )
    new.current_screen = "main"
    return new, None


def _change_phase(model: Model, step: int) -> tuple[Model, Command]:
    new = _copy(model)
    last = len(model.phases) - 1
    for player in new.players:
        target = player.current_phase + step
        if player.is_turn and 0 <= target <= last:
            player.current_phase = target
            add_log_entry(player, new, f"Started phase: {model.phases[target]}")
    new.current_screen = "main"
    return new, None


def _toggle_screen(model: Model, screen: str) -> tuple[Model, Command]:
    target = "main" if model.current_screen == screen else screen
    return dataclasses.replace(model, current_screen=target), None


def _show_main_screen(model: Model) -> tuple[Model, Command]:
    return dataclasses.replace(model, current_screen="main"), lambda: RestoreMainUIMsg()


def _tick(model: Model) -> tuple[Model, Command]:
    if not (model.game_started and model.game_status == GameStatus.IN_PROGRESS):
        return model, None
    new = _copy(model)
    new.total_game_time += _ONE_SECOND
    for player in new.active_players():
        player.time_elapsed += _ONE_SECOND
    return new, None


def _key_press(msg: KeyPressMsg, model: Model) -> tuple[Model, Command]:
    if msg.key is not Key.RUNE:
        return model, None
    rune = msg.rune.lower()
    if rune == "o":
        return _toggle_screen(model, "options")
    if rune == "a":
        return _toggle_screen(model, "about")
    if rune == "s":
        return _start_game(model)
    if rune == "e":
        if model.game_started:
            return model, lambda: ShowEndGameConfirmMsg()
        return model, None
    if rune == "p":
        return _change_phase(model, 1)
    if rune == "b":
        return _change_phase(model, -1)
    if rune == "q":
        return _show_modal(model, "ExitConfirm")
    if rune == " ":
        return _switch_turns(model)
    return model, None


def _set_ruleset(msg: SetRulesetMsg, model: Model) -> tuple[Model, Command]:
    if not 0 <= msg.index < len(model.options.rules):
        raise IndexError(f"ruleset index {msg.index} out of range")
    new = _copy(model)
    new.options.default = msg.index
    new.phases = tuple(model.options.rules[msg.index].phases)
    return new, None


def _set_player_count(msg: SetPlayerCountMsg, model: Model) -> tuple[Model, Command]:
    if msg.count <= 0:
        return model, None
    new = _copy(model)
    new.options.player_count = msg.count
    missing = msg.count - len(new.options.player_names)
    if missing > 0:
        new.options.player_names.extend([""] * missing)
    return new, None


def _set_player_name(msg: SetPlayerNameMsg, model: Model) -> tuple[Model, Command]:
    if not 0 <= msg.index < len(model.options.player_names):
        return model, None
    new = _copy(model)
    new.options.player_names[msg.index] = msg.name
    return new, None


def _set_color_palette(msg: SetColorPaletteMsg, model: Model) -> tuple[Model, Command]:
    new = _copy(model)
    new.options.color_palette = msg.name
    new.current_color_palette = color_palette_by_name(msg.name)
    return new, None


def _set_time_format(msg: SetTimeFormatMsg, model: Model) -> tuple[Model, Command]:
    new = _copy(model)
    new.options.time_format = msg.format
    return new, None


def _set_one_turn(msg: SetOneTurnForAllPlayersMsg, model: Model) -> tuple[Model, Command]:
    new = _copy(model)
    index = new.options.default
    new.options.rules[index] = dataclasses.replace(
        new.options.rules[index], one_turn_for_all_players=msg.value
    )
    return new, None


def _set_enable_log(msg: SetEnableLogMsg, model: Model) -> tuple[Model, Command]:
    new = _copy(model)
    new.options.logging_enabled = msg.value
    return new, None


def update(msg: Message | None, model: Model) -> tuple[Model, Command]:
    """Apply a message to the model.

    Returns the new model and a command to run afterwards, or None. The command,
    when called, returns the next message to feed back into the loop.
    """
    match msg:
        case StartGameMsg():
            return _start_game(model)
        case EndGameMsg():
            return _end_game(model)
        case EndGameConfirmMsg():
            return _end_game_confirm(msg, model)
        case ShowEndGameConfirmMsg():
            return _show_modal(model, "EndGameConfirm")
        case ExitConfirmMsg():
            return _exit_confirm(msg, model)
        case ShowExitConfirmMsg():
            return _show_modal(model, "ExitConfirm")
        case SwitchTurnsMsg():
            return _switch_turns(model)
        case NextPhaseMsg():
            return _change_phase(model, 1)
        case PrevPhaseMsg():
            return _change_phase(model, -1)
        case ShowOptionsMsg():
            return _toggle_screen(model, "options")
        case ShowAboutMsg():
            return _toggle_screen(model, "about")
        case ShowMainScreenMsg():
            return _show_main_screen(model)
        case RestoreMainUIMsg():
            return model, None
        case TickMsg():
            return _tick(model)
        case KeyPressMsg():
            return _key_press(msg, model)
        case SetRulesetMsg():
            return _set_ruleset(msg, model)
        case SetPlayerCountMsg():
            return _set_player_count(msg, model)
        case SetPlayerNameMsg():
            return _set_player_name(msg, model)
        case SetColorPaletteMsg():
            return _set_color_palette(msg, model)
        case SetTimeFormatMsg():
            return _set_time_format(msg, model)
        case SetOneTurnForAllPlayersMsg():
            return _set_one_turn(msg, model)
        case SetEnableLogMsg():
            return _set_enable_log(msg, model)
        case _:
            return model, None


def is_captured_key(key: Key, char: str = "") -> bool:
    """Whether the key is handled by the application and must not reach widgets."""
    if key in (Key.ESCAPE, Key.CTRL_C):
        return True
    return key is Key.RUNE and len(char) == 1 and char in _CAPTURED_RUNES