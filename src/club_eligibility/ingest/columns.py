import re
from dataclasses import dataclass, field

SURNAME = "Surname"
NAME = "Name"
NOMINATED_CLUB = "Nominated Club"
TEAM = "Team"
TOTAL_ROUNDS = "Total Rounds Played"

# Order matters: the first missing column is the one reported.
REQUIRED_COLUMNS: tuple[str, ...] = (SURNAME, NAME, NOMINATED_CLUB, TEAM, TOTAL_ROUNDS)

SMALL_SIDED_PATTERN = r"\b[67]\s*-?\s*a\s*-?\s*side\b"


def missing_columns(headers: list[str] | tuple[str, ...]) -> list[str]:
    present = set(headers)
    return [col for col in REQUIRED_COLUMNS if col not in present]


@dataclass(frozen=True)
class CompetitionLayout:
    """Which header positions hold per-competition round counts.

    Positions are 1-indexed and inclusive. Competitions whose header matches
    ``excluded_pattern`` (case-insensitive) are ignored entirely.
    """

    first_position: int = 6
    last_position: int = 18
    excluded_pattern: str = SMALL_SIDED_PATTERN
    _excluded: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.first_position < 1 or self.last_position < self.first_position:
            raise ValueError(
                f"Invalid competition column range {self.first_position}-{self.last_position}"
            )
        object.__setattr__(self, "_excluded", re.compile(self.excluded_pattern, re.IGNORECASE))

    def is_excluded(self, header: str) -> bool:
        return self._excluded.search(header) is not None

    def competition_indices(self, headers: list[str] | tuple[str, ...]) -> list[int]:
        """0-based positions of counted competition columns.

        Empty when the header row is too short. Headers may repeat or be
        blank, so callers read cells by position rather than by name.
        """
        if len(headers) < self.last_position:
            return []
        return [i for i in range(self.first_position - 1, self.last_position) if not self.is_excluded(headers[i])]

    def competition_columns(self, headers: list[str] | tuple[str, ...]) -> list[str]:
        return [headers[i] for i in self.competition_indices(headers)]


DEFAULT_LAYOUT = CompetitionLayout()
