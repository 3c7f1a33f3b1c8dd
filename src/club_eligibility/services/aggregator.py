import logging
from collections import defaultdict
from collections.abc import Iterable

from club_eligibility.domain.dataset import ParsedData, PlayerAtClub, TeamGrade
from club_eligibility.domain.records import NormalizedRow
from club_eligibility.grading import extract_grade

logger = logging.getLogger(__name__)


class _PlayerTotals:
    def __init__(self, surname: str, name: str) -> None:
        self.surname = surname
        self.name = name
        self.total = 0
        self.matches_by_team: dict[str, int] = {}
        self.grades_by_team: dict[str, int] = {}

    def add(self, team: str, grade: int, matches: int) -> None:
        self.total += matches
        self.matches_by_team[team] = self.matches_by_team.get(team, 0) + matches
        self.grades_by_team[team] = grade

    def freeze(self) -> PlayerAtClub:
        return PlayerAtClub(
            surname=self.surname,
            name=self.name,
            total_club_matches=self.total,
            matches_by_team=self.matches_by_team,
            grades_by_team=self.grades_by_team,
        )


def aggregate(rows: Iterable[NormalizedRow]) -> ParsedData:
    """Fold normalized rows into per-club team grades and player totals.

    Duplicate rows for the same player and team are summed. Clubs are sorted
    by name, each club's teams by ascending grade (ties keep discovery order).
    """
    # dicts preserve insertion order, which is the tie-break for equal grades
    per_team: dict[tuple[str, str, str, str], int] = {}
    for row in rows:
        key = (row.surname, row.name, row.nominated_club, row.team)
        per_team[key] = per_team.get(key, 0) + row.effective_count

    grades_by_club: dict[str, dict[str, int]] = defaultdict(dict)
    players_by_club: dict[str, dict[tuple[str, str], _PlayerTotals]] = defaultdict(dict)
    for (surname, name, club, team), matches in per_team.items():
        club_grades = grades_by_club[club]
        if team not in club_grades:
            club_grades[team] = extract_grade(team)
        club_players = players_by_club[club]
        player = club_players.get((surname, name))
        if player is None:
            player = club_players[(surname, name)] = _PlayerTotals(surname, name)
        player.add(team, club_grades[team], matches)

    clubs = tuple(sorted(grades_by_club))
    data = ParsedData(
        clubs=clubs,
        teams_by_club={
            club: tuple(
                sorted(
                    (TeamGrade(team=team, grade=grade) for team, grade in grades_by_club[club].items()),
                    key=lambda tg: tg.grade,
                )
            )
            for club in clubs
        },
        players_by_club={club: tuple(p.freeze() for p in players_by_club[club].values()) for club in clubs},
    )
    logger.debug("Aggregated %d player-team totals into %d clubs", len(per_team), len(clubs))
    return data
