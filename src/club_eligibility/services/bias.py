from collections.abc import Mapping
from typing import Protocol

from club_eligibility.domain.dataset import Bias
from club_eligibility.grading import extract_grade


class _HasTeamMatches(Protocol):
    @property
    def matches_by_team(self) -> Mapping[str, int]: ...


def classify_bias(player: _HasTeamMatches, target_team: str) -> Bias:
    """Whether a player's matches lean toward higher or lower grades than the target.

    Presentation only; has no bearing on eligibility.
    """
    target_grade = extract_grade(target_team)
    higher = 0
    lower = 0
    for team, matches in player.matches_by_team.items():
        grade = extract_grade(team)
        if grade < target_grade:
            higher += matches
        elif grade > target_grade:
            lower += matches
    if higher > lower:
        return Bias.HIGHER
    if lower > higher:
        return Bias.LOWER
    return Bias.EQUAL
