from collections.abc import Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from club_eligibility.domain.dataset import Bias, EligiblePlayer, ParsedData, PlayerAtClub, RuleSelection, TeamGrade
from club_eligibility.domain.records import ParseOutcome
from club_eligibility.grading import extract_grade
from club_eligibility.services.bias import classify_bias

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_BIAS_STYLE = {Bias.HIGHER: "yellow", Bias.LOWER: "cyan", Bias.EQUAL: "dim"}


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def _team_breakdown(matches_by_team: Mapping[str, int]) -> str:
    ordered = sorted(matches_by_team.items(), key=lambda kv: (extract_grade(kv[0]), kv[0]))
    return ", ".join(f"{escape(team)} ({count})" for team, count in ordered)


def print_upload_result(data: ParsedData, outcome: ParseOutcome, destination: str) -> None:
    console.print(f"[bold green]Upload complete:[/bold green] {len(data.clubs)} clubs, {data.player_count} players")
    console.print(f"  Rows accepted: {len(outcome.rows)}")
    if outcome.skipped_title_row:
        console.print("  [dim]Title row skipped[/dim]")
    counts = outcome.rejection_counts()
    if counts:
        console.print(f"  [yellow]Rows skipped: {sum(counts.values())}[/yellow]")
        for reason, count in sorted(counts.items()):
            console.print(f"    {reason}: {count}")
    console.print(f"  Stored at: {destination}")


def print_clubs(data: ParsedData) -> None:
    if data.is_empty:
        console.print("No clubs found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Club")
    table.add_column("Teams", justify="right")
    table.add_column("Players", justify="right")
    for club in data.clubs:
        table.add_row(escape(club), str(len(data.teams_for(club))), str(len(data.players_for(club))))
    console.print(table)


def print_teams(club: str, teams: tuple[TeamGrade, ...]) -> None:
    if not teams:
        console.print(f"No teams found for club [bold]{escape(club)}[/bold].")
        return
    console.print(f"Teams for [bold]{escape(club)}[/bold]")
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Team")
    table.add_column("Grade", justify="right")
    for tg in teams:
        table.add_row(escape(tg.team), str(tg.grade))
    console.print(table)


def print_eligible_players(
    players: list[EligiblePlayer], club: str, target_team: str, rule_selection: RuleSelection
) -> None:
    console.print(
        f"Eligible players for [bold]{escape(target_team)}[/bold] at [bold]{escape(club)}[/bold] "
        f"[dim](rules: {rule_selection})[/dim]"
    )
    if not players:
        console.print("No eligible players match the selected rules.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Player")
    table.add_column("Games", justify="right")
    table.add_column("Teams")
    table.add_column("Bias")
    for p in players:
        bias = classify_bias(p, target_team)
        style = _BIAS_STYLE[bias]
        table.add_row(
            escape(p.display_name),
            str(p.total_club_matches),
            _team_breakdown(p.matches_by_team),
            f"[{style}]{bias}[/{style}]",
        )
    console.print(table)
    console.print(f"[dim]{len(players)} players[/dim]")


def print_player_report(
    player: PlayerAtClub, target_team: str, *, rule1: bool, rule2: bool, bias: Bias
) -> None:
    console.print(f"[bold]{escape(player.surname)}, {escape(player.name)}[/bold]: {player.total_club_matches} games")
    console.print(f"  Teams: {_team_breakdown(player.matches_by_team)}")
    for label, passed in (("Rule 1 (four-week)", rule1), ("Rule 2 (51%)", rule2)):
        verdict = "[green]pass[/green]" if passed else "[red]fail[/red]"
        console.print(f"  {label} for {escape(target_team)}: {verdict}")
    console.print(f"  Bias: {bias}")
