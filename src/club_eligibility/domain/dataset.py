from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


class RuleSelection(StrEnum):
    RULE1 = "rule1"
    RULE2 = "rule2"
    BOTH = "both"


class Bias(StrEnum):
    HIGHER = "higher"
    LOWER = "lower"
    EQUAL = "equal"


class PlayerSort(StrEnum):
    SURNAME = "surname"
    MATCHES = "matches"
    BIAS = "bias"


@dataclass(frozen=True)
class TeamGrade:
    team: str
    grade: int


def _freeze(mapping: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class PlayerAtClub:
    surname: str
    name: str
    total_club_matches: int
    matches_by_team: Mapping[str, int] = field(default_factory=dict)
    grades_by_team: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "matches_by_team", _freeze(self.matches_by_team))
        object.__setattr__(self, "grades_by_team", _freeze(self.grades_by_team))

    @property
    def key(self) -> tuple[str, str]:
        return (self.surname, self.name)


@dataclass(frozen=True)
class EligiblePlayer:
    surname: str
    name: str
    total_club_matches: int
    matches_by_team: dict[str, int] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return f"{self.surname}, {self.name}"


@dataclass(frozen=True)
class ParsedData:
    """Snapshot of one uploaded dataset.

    A new upload builds a new ParsedData; there is no partial update path.
    """

    clubs: tuple[str, ...]
    teams_by_club: Mapping[str, tuple[TeamGrade, ...]]
    players_by_club: Mapping[str, tuple[PlayerAtClub, ...]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "teams_by_club", MappingProxyType(dict(self.teams_by_club)))
        object.__setattr__(self, "players_by_club", MappingProxyType(dict(self.players_by_club)))

    @classmethod
    def empty(cls) -> "ParsedData":
        return cls(clubs=(), teams_by_club={}, players_by_club={})

    @property
    def is_empty(self) -> bool:
        return not self.clubs

    def teams_for(self, club: str) -> tuple[TeamGrade, ...]:
        return self.teams_by_club.get(club, ())

    def players_for(self, club: str) -> tuple[PlayerAtClub, ...]:
        return self.players_by_club.get(club, ())

    def find_player(self, club: str, surname: str, name: str) -> PlayerAtClub | None:
        for player in self.players_for(club):
            if player.key == (surname, name):
                return player
        return None

    @property
    def player_count(self) -> int:
        return sum(len(players) for players in self.players_by_club.values())
