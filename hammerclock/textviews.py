"""Text shown by the interface: menu bar, action log, status line, clock and About screen.

Functions that return styled text return urwid text markup: a list whose items
are plain strings or (attribute, string) pairs.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from hammerclock.config import PROJECT_URL, VERSION
from hammerclock.model import GameStatus, LogEntry

_KEY_ATTR = "white"


@dataclass(frozen=True)
class MenuOption:
    """A menu entry: the key to press and what it does."""

    key: str
    description: str


def format_menu_option(option: MenuOption) -> list:
    """Return the markup for one menu option, with the key highlighted."""
    return [(_KEY_ATTR, option.key), f" {option.description}"]


def menu_bar_text(options: Iterable[MenuOption]) -> list:
    """Return the markup for a menu bar, options separated by three spaces."""
    markup: list = []
    for index, option in enumerate(options):
        if index:
            markup.append("   ")
        markup.extend(format_menu_option(option))
    return markup


def display_log_entry(entry: LogEntry) -> str:
    """Return '[time] message', dropping the date part of the timestamp."""
    date, sep, clock = entry.date_time.partition(" ")
    return f"[{clock if sep else date}] {entry.message}"


def _format_entry(entry: Any) -> str:
    if isinstance(entry, LogEntry):
        return display_log_entry(entry)
    return str(entry)


def log_text(entries: Any) -> str:
    """Return the text of an action log, one line per entry.

    Accepts a single entry or an iterable of them; log entries are shown in
    their short form, anything else as its string form.
    """
    if isinstance(entries, (str, bytes, LogEntry)) or not isinstance(entries, Iterable):
        return _format_entry(entries) + "\n"
    return "".join(_format_entry(entry) + "\n" for entry in entries)


def _fraction(value: int, digits: int) -> str:
    text = f"{value:0{digits}d}".rstrip("0")
    return f".{text}" if text else ""


def format_duration(duration: timedelta) -> str:
    """Format a duration the compact way: '0s', '1.5ms', '42s', '1m5s', '1h0m0s'."""
    micros = duration // timedelta(microseconds=1)
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros == 0:
        return "0s"
    if micros < 1000:
        return f"{sign}{micros}\u00b5s"
    if micros < 1_000_000:
        return f"{sign}{micros // 1000}{_fraction(micros % 1000, 3)}ms"
    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds, frac = divmod(rest, 1_000_000)
    text = f"{seconds}{_fraction(frac, 6)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return f"{sign}{text}"


def status_text(status: GameStatus | str, total_game_time: timedelta) -> str:
    """Return the status line with the total game time."""
    label = status.value if isinstance(status, GameStatus) else str(status)
    return f"{label} | Total Game Time: {format_duration(total_game_time)}"


def time_format(option: str) -> str:
    """Return the strftime layout for the 'AMPM' option, or 24-hour otherwise."""
    if option == "AMPM":
        return "%I:%M:%S %p"
    return "%H:%M:%S"


def time_format_to_index(fmt: str) -> int:
    """Return 0 for 'AMPM' and 1 for anything else (24-hour)."""
    return 0 if fmt == "AMPM" else 1


def clock_text(fmt: str, now: datetime | None = None) -> str:
    """Return the clock reading for the given time format option."""
    if now is None:
        now = datetime.now()
    return now.strftime(time_format(fmt))


def about_text() -> list:
    """Return the markup of the About screen."""
    return [
        f"v.{VERSION}\n\n"
        "A terminal-based timer and phase tracker for tabletop games\n\n"
        f"{PROJECT_URL}\n\n\n\n"
        "Press ",
        (_KEY_ATTR, "A"),
        " to return to the main screen",
    ]