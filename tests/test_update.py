from datetime import timedelta

import pytest

from hammerclock import actionlog
from hammerclock.messages import (
    EndGameConfirmMsg,
    EndGameMsg,
    ExitConfirmMsg,
    Key,
    KeyPressMsg,
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
from hammerclock.model import GameStatus, new_model
from hammerclock.palette import K9S_PALETTE, color_palette_by_name
from hammerclock.update import is_captured_key, update


@pytest.fixture(autouse=True)
def _in_tmp_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    yield
    actionlog.cleanup()


def _active_index(model):
    return next(i for i, p in enumerate(model.players) if p.is_turn)


def test_start_pause_and_switch_turns():
    model = new_model()
    updated, _ = update(StartGameMsg(), model)
    assert updated.game_status == GameStatus.IN_PROGRESS
    updated, _ = update(StartGameMsg(), updated)
    assert updated.game_status == GameStatus.PAUSED
    before = _active_index(updated)
    updated, _ = update(SwitchTurnsMsg(), updated)
    assert _active_index(updated) != before


def test_resume_after_pause_logs():
    model, _ = update(StartGameMsg(), new_model())
    model, _ = update(StartGameMsg(), model)
    model, _ = update(StartGameMsg(), model)
    assert model.game_status == GameStatus.IN_PROGRESS
    messages = [e.message for e in model.players[0].action_log]
    assert messages == ["Game started", "Game paused", "Game resumed"]
    assert model.players[1].action_log == []


def test_start_does_not_change_original_model():
    model = new_model()
    update(StartGameMsg(), model)
    assert model.game_status == GameStatus.NOT_STARTED
    assert model.game_started is False
    assert model.players[0].action_log == []


def test_start_selects_first_player_when_none_active():
    model = new_model()
    for player in model.players:
        player.is_turn = False
    updated, _ = update(StartGameMsg(), model)
    assert [p.is_turn for p in updated.players] == [True, False]


def test_key_q_shows_exit_confirm():
    _, cmd = update(KeyPressMsg(key=Key.RUNE, rune="q"), new_model())
    assert cmd() == ShowModalMsg(kind="ExitConfirm")


def test_key_s_starts_game():
    updated, _ = update(KeyPressMsg(key=Key.RUNE, rune="s"), new_model())
    assert updated.game_status == GameStatus.IN_PROGRESS


def test_key_e_only_when_started():
    model = new_model()
    _, cmd = update(KeyPressMsg(key=Key.RUNE, rune="E"), model)
    assert cmd is None
    started, _ = update(StartGameMsg(), model)
    _, cmd = update(KeyPressMsg(key=Key.RUNE, rune="e"), started)
    assert cmd() == ShowEndGameConfirmMsg()


def test_escape_key_does_nothing():
    model = new_model()
    updated, cmd = update(KeyPressMsg(key=Key.ESCAPE), model)
    assert updated is model
    assert cmd is None


@pytest.mark.parametrize(
    "rune, screen", [("o", "options"), ("O", "options"), ("a", "about"), ("A", "about")]
)
def test_screen_keys(rune, screen):
    updated, _ = update(KeyPressMsg(key=Key.RUNE, rune=rune), new_model())
    assert updated.current_screen == screen


def test_phase_management():
    model = new_model()
    initial = model.players[0].current_phase
    updated, _ = update(NextPhaseMsg(), model)
    assert updated.players[0].current_phase > initial
    assert updated.players[0].action_log[-1].message == "Started phase: Movement Phase"
    assert updated.players[0].action_log[-1].phase == "Movement Phase"
    updated, _ = update(PrevPhaseMsg(), updated)
    assert updated.players[0].current_phase == initial


def test_phase_bounds():
    model = new_model()
    updated, _ = update(PrevPhaseMsg(), model)
    assert updated.players[0].current_phase == 0
    for _ in range(20):
        updated, _ = update(NextPhaseMsg(), updated)
    assert updated.players[0].current_phase == len(model.phases) - 1
    assert updated.players[1].current_phase == 0


def test_phase_keys_p_and_b():
    model, _ = update(KeyPressMsg(key=Key.RUNE, rune="p"), new_model())
    assert model.players[0].current_phase == 1
    model, _ = update(KeyPressMsg(key=Key.RUNE, rune="b"), model)
    assert model.players[0].current_phase == 0


def test_screen_navigation():
    model = new_model()
    assert model.current_screen == "main"
    updated, _ = update(ShowOptionsMsg(), model)
    assert updated.current_screen == "options"
    updated, _ = update(ShowAboutMsg(), updated)
    assert updated.current_screen == "about"
    updated, cmd = update(ShowMainScreenMsg(), updated)
    assert updated.current_screen == "main"
    assert cmd() == RestoreMainUIMsg()


def test_screens_toggle_back():
    updated, _ = update(ShowOptionsMsg(), new_model())
    updated, _ = update(ShowOptionsMsg(), updated)
    assert updated.current_screen == "main"
    updated, _ = update(ShowAboutMsg(), updated)
    updated, _ = update(ShowAboutMsg(), updated)
    assert updated.current_screen == "main"


def test_options_updates():
    model = new_model()
    updated, _ = update(SetPlayerCountMsg(count=4), model)
    assert updated.options.player_count == 4
    assert updated.options.player_names == ["Player 1", "Player 2", "", ""]
    assert model.options.player_names == ["Player 1", "Player 2"]

    updated, _ = update(SetPlayerNameMsg(index=0, name="Test Player"), updated)
    assert updated.options.player_names[0] == "Test Player"

    updated, _ = update(SetColorPaletteMsg(name="Solarized"), updated)
    assert updated.current_color_palette.white == color_palette_by_name("Solarized").white
    assert updated.current_color_palette == K9S_PALETTE
    assert updated.options.color_palette == "Solarized"

    updated, _ = update(SetTimeFormatMsg(format="24h"), updated)
    assert updated.options.time_format == "24h"


def test_color_palette_by_known_name():
    updated, _ = update(SetColorPaletteMsg(name="dracula"), new_model())
    assert updated.current_color_palette == color_palette_by_name("dracula")


def test_tick_handling():
    model, _ = update(StartGameMsg(), new_model())
    initial = model.players[0].time_elapsed
    updated, _ = update(TickMsg(), model)
    active = _active_index(updated)
    assert updated.players[active].time_elapsed > initial
    assert updated.total_game_time > model.total_game_time
    assert updated.total_game_time == timedelta(seconds=1)
    assert updated.players[1].time_elapsed == timedelta(0)


def test_tick_ignored_when_not_running():
    model = new_model()
    updated, _ = update(TickMsg(), model)
    assert updated.total_game_time == timedelta(0)
    paused, _ = update(StartGameMsg(), model)
    paused, _ = update(StartGameMsg(), paused)
    updated, _ = update(TickMsg(), paused)
    assert updated.total_game_time == timedelta(0)
    assert updated.players[0].time_elapsed == timedelta(0)


def test_end_game_flow():
    model, _ = update(StartGameMsg(), new_model())
    assert model.game_status == GameStatus.IN_PROGRESS
    _, cmd = update(EndGameMsg(), model)
    assert cmd is None
    updated, cmd = update(EndGameConfirmMsg(confirmed=True), model)
    assert updated.game_status == GameStatus.NOT_STARTED
    assert cmd() == ShowMainScreenMsg()


def test_end_game_resets_players():
    model, _ = update(StartGameMsg(), new_model())
    model, _ = update(TickMsg(), model)
    model, _ = update(SwitchTurnsMsg(), model)
    ended, _ = update(EndGameMsg(), model)
    assert ended.game_started is False
    assert ended.total_game_time == timedelta(0)
    assert [p.is_turn for p in ended.players] == [True, False]
    assert all(p.turn_count == 0 and p.time_elapsed == timedelta(0) for p in ended.players)
    assert [e.message for e in ended.players[0].action_log] == [
        "Game ended - reset to initial state"
    ]
    assert [e.message for e in ended.players[1].action_log] == ["Game ended"]


def test_end_game_ignored_when_not_started():
    model = new_model()
    updated, _ = update(EndGameMsg(), model)
    assert updated is model


def test_end_game_cancel_keeps_game():
    model, _ = update(StartGameMsg(), new_model())
    updated, cmd = update(EndGameConfirmMsg(confirmed=False), model)
    assert updated.game_status == GameStatus.IN_PROGRESS
    assert cmd() == ShowMainScreenMsg()


def test_show_confirm_dialogs():
    _, cmd = update(ShowEndGameConfirmMsg(), new_model())
    assert cmd() == ShowModalMsg(kind="EndGameConfirm")
    _, cmd = update(ShowExitConfirmMsg(), new_model())
    assert cmd() == ShowModalMsg(kind="ExitConfirm")


def test_exit_confirm():
    _, cmd = update(ExitConfirmMsg(confirmed=True), new_model())
    assert cmd() == ExitConfirmMsg(confirmed=True)
    _, cmd = update(ExitConfirmMsg(confirmed=False), new_model())
    assert cmd() == ShowMainScreenMsg()


def test_invalid_messages():
    model = new_model()
    updated, cmd = update(None, model)
    assert updated.game_status == model.game_status
    assert cmd is None
    updated, cmd = update(SetPlayerNameMsg(index=999, name="Invalid"), model)
    assert updated.options.player_names == model.options.player_names
    assert cmd is None
    updated, _ = update(SetPlayerCountMsg(count=-1), model)
    assert updated.options.player_count == model.options.player_count


def test_restore_main_ui_is_noop():
    model = new_model()
    updated, cmd = update(RestoreMainUIMsg(), model)
    assert updated is model
    assert cmd is None


def test_ruleset_change():
    model = new_model()
    updated, _ = update(SetRulesetMsg(index=1), model)
    assert updated.options.default == 1
    assert updated.phases == model.options.rules[1].phases
    assert model.options.default == 0


def test_ruleset_out_of_range():
    with pytest.raises(IndexError):
        update(SetRulesetMsg(index=99), new_model())


def test_logging_toggle():
    model = new_model()
    updated, _ = update(SetEnableLogMsg(value=not model.options.logging_enabled), model)
    assert updated.options.logging_enabled is not model.options.logging_enabled
    assert updated.options.logging_enabled is False


def test_one_turn_for_all_players():
    model = new_model()
    updated, _ = update(SetOneTurnForAllPlayersMsg(value=True), model)
    assert updated.current_rules().one_turn_for_all_players is True
    assert model.current_rules().one_turn_for_all_players is False


def test_switch_turns_logs_and_counts():
    model = new_model()
    model.current_screen = "options"
    updated, _ = update(SwitchTurnsMsg(), model)
    first, second = updated.players
    assert first.is_turn is False
    assert first.turn_count == 0
    assert [e.message for e in first.action_log] == ["Turn 0 ended"]
    assert second.is_turn is True
    assert second.turn_count == 1
    assert [e.message for e in second.action_log] == [
        "Turn 1 started",
        "Turn 1 - Entered phase: Command Phase",
    ]
    assert updated.current_screen == "main"


def test_switch_turns_resets_phase():
    model, _ = update(NextPhaseMsg(), new_model())
    model, _ = update(SwitchTurnsMsg(), model)
    model, _ = update(SwitchTurnsMsg(), model)
    assert model.players[0].current_phase == 0
    assert model.players[0].turn_count == 1


@pytest.mark.parametrize(
    "key, char, expected",
    [
        (Key.ESCAPE, "", True),
        (Key.CTRL_C, "", True),
        (Key.RUNE, "q", True),
        (Key.RUNE, " ", True),
        (Key.RUNE, "S", True),
        (Key.RUNE, "x", False),
        (Key.OTHER, "", False),
    ],
)
def test_is_captured_key(key, char, expected):
    assert is_captured_key(key, char) is expected