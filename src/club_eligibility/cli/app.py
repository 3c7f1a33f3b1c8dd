import logging
from pathlib import Path
from typing import Annotated

import typer

from club_eligibility.cli._logging import configure_logging
from club_eligibility.cli._output import (
    print_clubs,
    print_eligible_players,
    print_error,
    print_player_report,
    print_teams,
    print_upload_result,
)
from club_eligibility.config import EligibilitySettings, SettingsError, create_config, load_settings
from club_eligibility.domain.dataset import ParsedData, PlayerSort, RuleSelection
from club_eligibility.domain.result import Err
from club_eligibility.grading import extract_grade
from club_eligibility.services.bias import classify_bias
from club_eligibility.services.dataset_loader import load_dataset
from club_eligibility.services.eligibility import evaluate, passes_rule1, passes_rule2, sort_players
from club_eligibility.store import CsvStore

logger = logging.getLogger(__name__)

app = typer.Typer(name="club-eligibility", help="Club player eligibility checks from a matches-played export")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    config: Annotated[str, typer.Option("--config", help="YAML config file")] = "eligibility.yaml",
    store: Annotated[str | None, typer.Option("--store", help="Path of the stored matches export")] = None,
) -> None:
    """Club player eligibility checks from a matches-played export."""
    configure_logging(verbose=verbose)
    try:
        ctx.obj = load_settings(create_config(yaml_path=config, store_path=store))
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


def _settings(ctx: typer.Context) -> EligibilitySettings:
    settings = ctx.obj
    assert isinstance(settings, EligibilitySettings)
    return settings


def _load_stored(settings: EligibilitySettings) -> ParsedData:
    text = CsvStore(settings.store_path).load()
    if isinstance(text, Err):
        print_error(f"{text.message}. Upload a file with 'upload' first.")
        raise typer.Exit(code=1)
    result = load_dataset(text.value, settings.layout)
    if isinstance(result, Err):
        print_error(result.message)
        raise typer.Exit(code=1)
    data, _ = result.value
    return data


def _require_club(data: ParsedData, club: str) -> None:
    if club not in data.clubs:
        print_error(f"Unknown club: {club!r}")
        raise typer.Exit(code=1)


_ClubArg = Annotated[str, typer.Argument(help="Nominated club")]
_TeamArg = Annotated[str, typer.Argument(help="Team to check eligibility for")]


@app.command()
def upload(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Matches-played CSV export", exists=True, dir_okay=False)],
    encoding: Annotated[str, typer.Option("--encoding", help="File encoding")] = "utf-8-sig",
) -> None:
    """Validate a matches export and replace the stored dataset with it."""
    settings = _settings(ctx)
    try:
        text = path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        print_error(f"Not valid {encoding} text: {path} ({e.reason}). Try --encoding cp1252.")
        raise typer.Exit(code=1) from e
    except (OSError, LookupError) as e:
        print_error(f"Could not read {path}: {e}")
        raise typer.Exit(code=1) from e
    result = load_dataset(text, settings.layout)
    if isinstance(result, Err):
        print_error(result.message)
        raise typer.Exit(code=1)
    data, outcome = result.value
    store = CsvStore(settings.store_path)
    saved = store.save(text)
    if isinstance(saved, Err):
        print_error(saved.message)
        raise typer.Exit(code=1)
    print_upload_result(data, outcome, store.source_detail)


@app.command()
def clubs(ctx: typer.Context) -> None:
    """List the nominated clubs in the stored dataset."""
    print_clubs(_load_stored(_settings(ctx)))


@app.command()
def teams(ctx: typer.Context, club: _ClubArg) -> None:
    """List a club's teams, highest grade first."""
    data = _load_stored(_settings(ctx))
    _require_club(data, club)
    print_teams(club, data.teams_for(club))


@app.command()
def check(
    ctx: typer.Context,
    club: _ClubArg,
    team: _TeamArg,
    rule: Annotated[RuleSelection, typer.Option("--rule", help="Which rules to apply")] = RuleSelection.BOTH,
    sort: Annotated[PlayerSort, typer.Option("--sort", help="Order of the player list")] = PlayerSort.SURNAME,
) -> None:
    """Show the players eligible to play in TEAM."""
    settings = _settings(ctx)
    data = _load_stored(settings)
    _require_club(data, club)
    if team not in {tg.team for tg in data.teams_for(club)}:
        logger.warning("%s has no team named %r; checking against grade %d", club, team, extract_grade(team))
    players = evaluate(data, club, team, rule, thresholds=settings.thresholds)
    print_eligible_players(sort_players(players, team, sort), club, team, rule)


@app.command()
def player(
    ctx: typer.Context,
    club: _ClubArg,
    surname: Annotated[str, typer.Argument(help="Player surname")],
    name: Annotated[str, typer.Argument(help="Player first name")],
    team: _TeamArg,
) -> None:
    """Explain one player's eligibility for TEAM."""
    settings = _settings(ctx)
    data = _load_stored(settings)
    _require_club(data, club)
    found = data.find_player(club, surname, name)
    if found is None:
        print_error(f"No player {surname}, {name} at {club}")
        raise typer.Exit(code=1)
    grade = extract_grade(team)
    print_player_report(
        found,
        team,
        rule1=passes_rule1(found, grade, settings.thresholds),
        rule2=passes_rule2(found, grade, settings.thresholds),
        bias=classify_bias(found, team),
    )
