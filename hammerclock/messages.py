"""Messages that drive the model update loop."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Key(Enum):
    """Kinds of key press the application distinguishes."""

    RUNE = "rune"
    ESCAPE = "escape"
    CTRL_C = "ctrl c"
    OTHER = "other"


@dataclass(frozen=True)
class StartGameMsg:
    """Start, pause or resume the game."""


@dataclass(frozen=True)
class EndGameMsg:
    """End the current game."""


@dataclass(frozen=True)
class EndGameConfirmMsg:
    """The user confirmed or cancelled ending the game."""

    confirmed: bool = False


@dataclass(frozen=True)
class ShowEndGameConfirmMsg:
    """Show the end-game confirmation dialog."""


@dataclass(frozen=True)
class ShowExitConfirmMsg:
    """Show the exit confirmation dialog."""


@dataclass(frozen=True)
class ExitConfirmMsg:
    """The user confirmed or cancelled leaving the application."""

    confirmed: bool = False


@dataclass(frozen=True)
class SwitchTurnsMsg:
    """Pass the turn on."""


@dataclass(frozen=True)
class NextPhaseMsg:
    """Move the active player to the next phase."""


@dataclass(frozen=True)
class PrevPhaseMsg:
    """Move the active player to the previous phase."""


@dataclass(frozen=True)
class ShowOptionsMsg:
    """Toggle the options screen."""


@dataclass(frozen=True)
class ShowAboutMsg:
    """Toggle the about screen."""


@dataclass(frozen=True)
class ShowMainScreenMsg:
    """Return to the main screen."""


@dataclass(frozen=True)
class TickMsg:
    """One second has passed."""


@dataclass(frozen=True)
class KeyPressMsg:
    """A key was pressed; rune holds the character for Key.RUNE."""

    key: Key
    rune: str = ""


@dataclass(frozen=True)
class ShowModalMsg:
    """Show a modal dialog of the given kind."""

    kind: str


@dataclass(frozen=True)
class RestoreMainUIMsg:
    """Restore the main interface after a modal dialog."""


@dataclass(frozen=True)
class SetRulesetMsg:
    """Select the ruleset at this index."""

    index: int


@dataclass(frozen=True)
class SetPlayerCountMsg:
    """Change the number of players."""

    count: int


@dataclass(frozen=True)
class SetPlayerNameMsg:
    """Rename the player at this index."""

    index: int
    name: str


@dataclass(frozen=True)
class SetColorPaletteMsg:
    """Switch to the named colour palette."""

    name: str


@dataclass(frozen=True)
class SetTimeFormatMsg:
    """Change the clock format."""

    format: str


@dataclass(frozen=True)
class SetOneTurnForAllPlayersMsg:
    """Toggle the one-turn-for-all-players mode of the current ruleset."""

    value: bool


@dataclass(frozen=True)
class SetEnableLogMsg:
    """Toggle CSV logging."""

    value: bool


Message = Union[
    StartGameMsg,
    EndGameMsg,
    EndGameConfirmMsg,
    ShowEndGameConfirmMsg,
    ShowExitConfirmMsg,
    ExitConfirmMsg,
    SwitchTurnsMsg,
    NextPhaseMsg,
    PrevPhaseMsg,
    ShowOptionsMsg,
    ShowAboutMsg,
    ShowMainScreenMsg,
    TickMsg,
    KeyPressMsg,
    ShowModalMsg,
    RestoreMainUIMsg,
    SetRulesetMsg,
    SetPlayerCountMsg,
    SetPlayerNameMsg,
    SetColorPaletteMsg,
    SetTimeFormatMsg,
    SetOneTurnForAllPlayersMsg,
    SetEnableLogMsg,
]