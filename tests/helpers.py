import csv
import io

from club_eligibility.domain.dataset import PlayerAtClub
from club_eligibility.grading import extract_grade

BASIC_HEADER = ["Surname", "Name", "Nominated Club", "Team", "Total Rounds Played"]


def make_csv(rows: list[list[str]], header: list[str] | None = None, title: str | None = None) -> str:
    """Build CSV text, optionally preceded by a decorative title line."""
    buf = io.StringIO()
    if title is not None:
        buf.write(title + "\n")
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(BASIC_HEADER if header is None else header)
    writer.writerows(rows)
    return buf.getvalue()


def competition_header(competitions: list[str]) -> list[str]:
    """Header with identity columns, a filler column, 13 competition slots and the total."""
    padded = competitions + [f"Spare {i}" for i in range(13 - len(competitions))]
    return ["Surname", "Name", "Nominated Club", "Team", "Registration", *padded, "Total Rounds Played"]


def competition_row(
    surname: str, name: str, club: str, team: str, cells: list[str], total: str = "0"
) -> list[str]:
    return [surname, name, club, team, "", *cells, *([""] * (13 - len(cells))), total]


def make_player(matches_by_team: dict[str, int], surname: str = "Smith", name: str = "John") -> PlayerAtClub:
    return PlayerAtClub(
        surname=surname,
        name=name,
        total_club_matches=sum(matches_by_team.values()),
        matches_by_team=matches_by_team,
        grades_by_team={team: extract_grade(team) for team in matches_by_team},
    )
