import logging
from dataclasses import dataclass

from club_eligibility.domain.dataset import Bias, EligiblePlayer, ParsedData, PlayerAtClub, PlayerSort, RuleSelection
from club_eligibility.grading import extract_grade
from club_eligibility.services.bias import classify_bias

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleThresholds:
    # Rule 1: matches needed at or below the target grade
    min_matches: int = 4
    # Rule 2: share of matches above the target grade that disqualifies (strict <)
    max_higher_share: float = 0.51


DEFAULT_THRESHOLDS = RuleThresholds()


def _grade_of(player: PlayerAtClub, team: str) -> int:
    grade = player.grades_by_team.get(team)
    return extract_grade(team) if grade is None else grade


def qualifying_matches(player: PlayerAtClub, target_grade: int) -> int:
    """Matches in teams at or below the target grade (grade number >= target)."""
    return sum(m for team, m in player.matches_by_team.items() if _grade_of(player, team) >= target_grade)


def higher_grade_matches(player: PlayerAtClub, target_grade: int) -> int:
    return sum(m for team, m in player.matches_by_team.items() if _grade_of(player, team) < target_grade)


def passes_rule1(player: PlayerAtClub, target_grade: int, thresholds: RuleThresholds = DEFAULT_THRESHOLDS) -> bool:
    return qualifying_matches(player, target_grade) >= thresholds.min_matches


def passes_rule2(player: PlayerAtClub, target_grade: int, thresholds: RuleThresholds = DEFAULT_THRESHOLDS) -> bool:
    if player.total_club_matches < 1:
        return False
    share = higher_grade_matches(player, target_grade) / player.total_club_matches
    return share < thresholds.max_higher_share


def is_eligible(
    player: PlayerAtClub,
    target_grade: int,
    rule_selection: RuleSelection,
    thresholds: RuleThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    if rule_selection is RuleSelection.RULE1:
        return passes_rule1(player, target_grade, thresholds)
    if rule_selection is RuleSelection.RULE2:
        return passes_rule2(player, target_grade, thresholds)
    return passes_rule1(player, target_grade, thresholds) and passes_rule2(player, target_grade, thresholds)


def _project(player: PlayerAtClub) -> EligiblePlayer:
    return EligiblePlayer(
        surname=player.surname,
        name=player.name,
        total_club_matches=player.total_club_matches,
        matches_by_team=dict(player.matches_by_team),
    )


def evaluate(
    data: ParsedData,
    club: str,
    target_team: str,
    rule_selection: RuleSelection | str = RuleSelection.BOTH,
    *,
    thresholds: RuleThresholds = DEFAULT_THRESHOLDS,
) -> list[EligiblePlayer]:
    """Players at ``club`` eligible to play in ``target_team``.

    Unknown clubs yield an empty list. Each returned player owns a fresh
    copy of its per-team matches.
    """
    selection = RuleSelection(rule_selection)
    target_grade = extract_grade(target_team)
    players = data.players_for(club)
    eligible = [_project(p) for p in players if is_eligible(p, target_grade, selection, thresholds)]
    logger.debug(
        "%s/%s (grade %d, %s): %d of %d players eligible",
        club,
        target_team,
        target_grade,
        selection,
        len(eligible),
        len(players),
    )
    return eligible


_BIAS_ORDER = {Bias.HIGHER: 0, Bias.EQUAL: 1, Bias.LOWER: 2}


def _name_key(player: EligiblePlayer) -> tuple[str, str]:
    return (player.surname.casefold(), player.name.casefold())


def sort_players(
    players: list[EligiblePlayer], target_team: str, sort: PlayerSort | str = PlayerSort.SURNAME
) -> list[EligiblePlayer]:
    order = PlayerSort(sort)
    if order is PlayerSort.MATCHES:
        return sorted(players, key=lambda p: (-p.total_club_matches, *_name_key(p)))
    if order is PlayerSort.BIAS:
        return sorted(players, key=lambda p: (_BIAS_ORDER[classify_bias(p, target_team)], *_name_key(p)))
    return sorted(players, key=_name_key)
