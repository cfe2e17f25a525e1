"""Game options and their JSON options file."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hammerclock.config import (
    DEFAULT_COLOR_PALETTE,
    DEFAULT_OPTIONS_FILENAME,
    DEFAULT_PLAYER_COUNT,
    DEFAULT_PLAYER_PREFIX,
)
from hammerclock.rules import ALL_RULES, Rules


def _typed(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    ok = isinstance(value, kind)
    if kind is int and isinstance(value, bool):
        ok = False
    if not ok:
        raise ValueError(
            f"field {key!r}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _list(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"field {key!r}: expected a list")
    return value


@dataclass
class Options:
    """Game configuration: rulesets, players and display preferences."""

    default: int = 0
    rules: list[Rules] = field(default_factory=list)
    player_count: int = 0
    player_names: list[str] = field(default_factory=list)
    color_palette: str = ""
    time_format: str = ""
    logging_enabled: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form used in options files."""
        return {
            "default": self.default,
            "rules": [r.to_dict() for r in self.rules],
            "playerCount": self.player_count,
            "playerNames": list(self.player_names),
            "colorPalette": self.color_palette,
            "timeFormat": self.time_format,
            "loggingEnabled": self.logging_enabled,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Options:
        """Build options from their JSON form; missing fields take zero values."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError("options must be a JSON object")
        names = []
        for name in _list(data, "playerNames"):
            if name is None:
                name = ""
            if not isinstance(name, str):
                raise ValueError("field 'playerNames': expected a list of strings")
            names.append(name)
        return cls(
            default=_typed(data, "default", int, 0),
            rules=[Rules.from_dict(r) for r in _list(data, "rules")],
            player_count=_typed(data, "playerCount", int, 0),
            player_names=names,
            color_palette=_typed(data, "colorPalette", str, ""),
            time_format=_typed(data, "timeFormat", str, ""),
            logging_enabled=_typed(data, "loggingEnabled", bool, False),
        )


def default_options() -> Options:
    """Return a fresh copy of the built-in default options."""
    return Options(
        default=0,
        rules=list(ALL_RULES),
        player_count=DEFAULT_PLAYER_COUNT,
        player_names=[
            f"{DEFAULT_PLAYER_PREFIX} {i + 1}" for i in range(DEFAULT_PLAYER_COUNT)
        ],
        color_palette=DEFAULT_COLOR_PALETTE,
        time_format="AMPM",
        logging_enabled=True,
    )


def _to_json(opts: Options) -> str:
    return json.dumps(opts.to_dict(), indent=2, ensure_ascii=False)


def _fall_back(filename: str, problem: str) -> Options:
    print(problem)
    if filename != DEFAULT_OPTIONS_FILENAME:
        print("Falling back to default options")
        return load_options(DEFAULT_OPTIONS_FILENAME)
    return default_options()


def load_options(filename: str = DEFAULT_OPTIONS_FILENAME) -> Options:
    """Load options from a file, falling back to the default file and options.

    A missing default file is created from the built-in defaults.
    """
    try:
        os.stat(filename)
    except FileNotFoundError:
        if filename != DEFAULT_OPTIONS_FILENAME:
            print(f"options file '{filename}' not found, using default options file")
            return load_options(DEFAULT_OPTIONS_FILENAME)
        print("Default options file not found, creating it")
        opts = default_options()
        try:
            Path(DEFAULT_OPTIONS_FILENAME).write_text(_to_json(opts), encoding="utf-8")
        except OSError as exc:
            print("Error writing default options file:", exc)
        return opts
    except OSError as exc:
        return _fall_back(filename, f"Error checking options file '{filename}': {exc}")

    try:
        text = Path(filename).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return _fall_back(filename, f"Error reading options file '{filename}': {exc}")

    try:
        return Options.from_dict(json.loads(text))
    except ValueError as exc:
        return _fall_back(filename, f"Error parsing options file '{filename}': {exc}")


def save_options(opts: Options, filename: str = "", silent: bool = False) -> None:
    """Write options as JSON; an empty filename means the default file.

    Raises OSError when the file cannot be written.
    """
    if not filename:
        filename = DEFAULT_OPTIONS_FILENAME
    try:
        Path(filename).write_text(_to_json(opts), encoding="utf-8")
    except OSError as exc:
        if not silent:
            print(f"Error writing options file '{filename}': {exc}")
        raise