import json
from pathlib import Path

import pytest

from hammerclock.config import DEFAULT_OPTIONS_FILENAME
from hammerclock.options import Options, default_options, load_options, save_options
from hammerclock.rules import ALL_RULES, Rules


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_default_options_values():
    opts = default_options()
    assert opts.default == 0
    assert opts.player_count == 2
    assert opts.player_names == ["Player 1", "Player 2"]
    assert opts.color_palette == "warhammer"
    assert opts.time_format == "AMPM"
    assert opts.logging_enabled is True
    assert opts.rules == list(ALL_RULES)


def test_default_options_are_independent_copies():
    first = default_options()
    first.player_names.append("Player 3")
    assert default_options().player_names == ["Player 1", "Player 2"]


def test_load_options_from_nonexistent_file_uses_default_options(workdir):
    opts = load_options("nonexistent.json")
    assert opts.default == default_options().default
    assert opts == default_options()


def test_missing_default_file_is_created(workdir, capsys):
    opts = load_options(DEFAULT_OPTIONS_FILENAME)
    assert opts == default_options()
    written = json.loads((workdir / DEFAULT_OPTIONS_FILENAME).read_text())
    assert Options.from_dict(written) == default_options()
    assert "Default options file not found, creating it" in capsys.readouterr().out


def test_load_options_from_invalid_file_falls_back_to_default(workdir):
    (workdir / "invalid.json").write_text("invalid json")
    opts = load_options("invalid.json")
    assert opts.default == default_options().default
    assert opts == default_options()


def test_invalid_file_falls_back_to_existing_default_file(workdir):
    custom = default_options()
    custom.time_format = "24-hour"
    save_options(custom, DEFAULT_OPTIONS_FILENAME)
    (workdir / "invalid.json").write_text("invalid json")
    assert load_options("invalid.json").time_format == "24-hour"


def test_save_options_creates_file_with_correct_content(workdir):
    save_options(default_options(), "test_options.json", False)
    data = json.loads((workdir / "test_options.json").read_text())
    loaded = Options.from_dict(data)
    assert loaded.default == default_options().default
    assert loaded == default_options()


def test_save_options_handles_empty_filename_gracefully(workdir):
    save_options(default_options(), "", False)
    data = json.loads((workdir / DEFAULT_OPTIONS_FILENAME).read_text())
    assert Options.from_dict(data) == default_options()
    assert load_options(DEFAULT_OPTIONS_FILENAME) == default_options()


def test_load_options_handles_corrupted_default_file_gracefully(workdir):
    (workdir / DEFAULT_OPTIONS_FILENAME).write_text("corrupted json")
    opts = load_options(DEFAULT_OPTIONS_FILENAME)
    assert opts.default == default_options().default
    assert (workdir / DEFAULT_OPTIONS_FILENAME).read_text() == "corrupted json"


def test_load_options_reads_custom_file(workdir):
    custom = Options(
        default=1,
        rules=[Rules(name="Custom", phases=("One", "Two"))],
        player_count=3,
        player_names=["Ann", "Bob", "Cy"],
        color_palette="dracula",
        time_format="24-hour",
        logging_enabled=False,
    )
    save_options(custom, "custom.json")
    assert load_options("custom.json") == custom


def test_file_uses_camel_case_keys(workdir):
    opts = default_options()
    as_dict = opts.to_dict()
    assert list(as_dict) == [
        "default",
        "rules",
        "playerCount",
        "playerNames",
        "colorPalette",
        "timeFormat",
        "loggingEnabled",
    ]
    assert as_dict["rules"][-1]["oneTurnForAllPlayers"] is True
    save_options(opts, "keys.json")
    data = json.loads(Path("keys.json").read_text())
    assert data == as_dict


def test_partial_file_gives_zero_values(workdir):
    Path("partial.json").write_text('{"playerCount": 4}')
    opts = load_options("partial.json")
    assert opts.player_count == 4
    assert opts.rules == []
    assert opts.time_format == ""
    assert opts.logging_enabled is False


def test_wrong_field_type_falls_back(workdir):
    Path("typed.json").write_text('{"playerCount": "four"}')
    assert load_options("typed.json") == default_options()


def test_save_options_raises_when_unwritable(workdir, capsys):
    with pytest.raises(OSError):
        save_options(default_options(), str(workdir / "missing" / "x.json"))
    assert "Error writing options file" in capsys.readouterr().out


def test_save_options_silent_prints_nothing(workdir, capsys):
    with pytest.raises(OSError):
        save_options(default_options(), str(workdir / "missing" / "x.json"), True)
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("data", [{"default": "0"}, {"playerNames": [1]}, [1, 2]])
def test_from_dict_rejects_wrong_types(data):
    with pytest.raises(ValueError):
        Options.from_dict(data)


def test_round_trip_dict():
    opts = default_options()
    assert Options.from_dict(opts.to_dict()) == opts