"""Application state: players, game status and the model holding them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

from hammerclock.options import Options, default_options
from hammerclock.palette import K9S_PALETTE, ColorPalette
from hammerclock.rules import Rules


class GameStatus(str, Enum):
    """The state of the game as shown in the status panel."""

    NOT_STARTED = "Game Not Started"
    IN_PROGRESS = "Game In Progress"
    PAUSED = "Game Paused"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LogEntry:
    """One recorded player action."""

    date_time: str = ""
    player_name: str = ""
    turn: int = 0
    phase: str = ""
    message: str = ""


@dataclass
class Player:
    """A player with their clock, turn counter and action log."""

    name: str
    time_elapsed: timedelta = timedelta(0)
    is_turn: bool = False
    current_phase: int = 0
    turn_count: int = 0
    action_log: list[LogEntry] = field(default_factory=list)


@dataclass
class Model:
    """The whole application state."""

    players: list[Player] = field(default_factory=list)
    phases: tuple[str, ...] = ()
    game_status: GameStatus = GameStatus.NOT_STARTED
    current_screen: str = "main"
    game_started: bool = False
    options: Options = field(default_factory=Options)
    current_color_palette: ColorPalette = K9S_PALETTE
    total_game_time: timedelta = timedelta(0)

    def current_rules(self) -> Rules:
        """Return the ruleset currently selected in the options."""
        return self.options.rules[self.options.default]

    def active_players(self) -> list[Player]:
        """Return the players whose turn it is."""
        return [player for player in self.players if player.is_turn]


def make_players(count: int, names: Sequence[str]) -> list[Player]:
    """Create count players, named from names where given; the first has the turn."""
    return [
        Player(
            name=names[i] if i < len(names) else f"Player {i + 1}",
            is_turn=i == 0,
        )
        for i in range(count)
    ]


def new_model() -> Model:
    """Return a model built from the default options."""
    opts = default_options()
    return Model(
        players=make_players(opts.player_count, opts.player_names),
        phases=tuple(opts.rules[opts.default].phases),
        game_status=GameStatus.NOT_STARTED,
        current_screen="main",
        game_started=False,
        options=opts,
        current_color_palette=K9S_PALETTE,
        total_game_time=timedelta(0),
    )