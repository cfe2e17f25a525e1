"""Game rulesets: a name, an ordered list of phases and a turn mode."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


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


def _string_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"field {key!r}: expected a list of strings")
    result = []
    for item in value:
        if item is None:
            item = ""
        if not isinstance(item, str):
            raise ValueError(f"field {key!r}: expected a list of strings")
        result.append(item)
    return result


@dataclass(frozen=True)
class Rules:
    """A ruleset; when one_turn_for_all_players is set, phases are ignored."""

    name: str = ""
    phases: tuple[str, ...] = ()
    one_turn_for_all_players: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "phases", tuple(self.phases))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form used in options files."""
        return {
            "name": self.name,
            "phases": list(self.phases),
            "oneTurnForAllPlayers": self.one_turn_for_all_players,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Rules:
        """Build a ruleset from its JSON form; missing fields take zero values."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError("a ruleset must be a JSON object")
        return cls(
            name=_typed(data, "name", str, ""),
            phases=tuple(_string_list(data, "phases")),
            one_turn_for_all_players=_typed(data, "oneTurnForAllPlayers", bool, False),
        )


WARHAMMER_RULES = Rules(
    name="Warhammer 40K (10th Edition)",
    phases=(
        "Command Phase",
        "Movement Phase",
        "Shooting Phase",
        "Charge Phase",
        "Fight Phase",
        "End Phase",
    ),
)

KILL_TEAM_RULES = Rules(
    name="Kill Team (2021)",
    phases=(
        "Initiative Phase",
        "Movement Phase",
        "Shooting Phase",
        "Fight Phase",
        "Morale Phase",
    ),
)

NECROMUNDA_RULES = Rules(
    name="Necromunda (2022 edition)",
    phases=("Recovery Phase", "Action Phase", "End Phase"),
)

AGE_OF_SIGMAR_RULES = Rules(
    name="Age of Sigmar (4th Edition)",
    phases=(
        "Start of Turn Phase",
        "Hero Phase",
        "Movement Phase",
        "Shooting Phase",
        "Charge Phase",
        "Combat Phase",
        "End of Turn Phase",
    ),
)

WARCRY_RULES = Rules(
    name="Warcry (3rd edition)",
    phases=(
        "Set Up Phase",
        "Players' Phase (activating models alternately)",
        "End Phase",
    ),
)

BLOOD_BOWL_RULES = Rules(
    name="Blood Bowl (2020 edition)",
    phases=(
        "Pre-Match Phase",
        "Kick-Off Phase",
        "Team Turn (both teams alternate)",
        "End of Turn Phase",
        "Post-Match Phase",
    ),
)

BUNNY_KINGDOM_RULES = Rules(
    name="Bunny Kingdom",
    phases=(
        "Draft Phase (players select cards)",
        "Build Phase (place cards on the board)",
        "Scoring Phase (calculate points based on card placement)",
    ),
)

CHESS_RULES = Rules(name="Chess", phases=(), one_turn_for_all_players=True)

ALL_RULES: tuple[Rules, ...] = (
    WARHAMMER_RULES,
    KILL_TEAM_RULES,
    NECROMUNDA_RULES,
    AGE_OF_SIGMAR_RULES,
    WARCRY_RULES,
    BLOOD_BOWL_RULES,
    BUNNY_KINGDOM_RULES,
    CHESS_RULES,
)


def ruleset_names(rules: Iterable[Rules]) -> list[str]:
    """Return the names of the given rulesets, in order."""
    return [ruleset.name for ruleset in rules]