import re
from collections.abc import Sequence

from club_eligibility.domain.records import Accepted, NormalizedRow, Rejected, RejectReason, RowOutcome
from club_eligibility.ingest._csv_helpers import cell
from club_eligibility.ingest.columns import (
    DEFAULT_LAYOUT,
    NAME,
    NOMINATED_CLUB,
    SURNAME,
    TEAM,
    TOTAL_ROUNDS,
    CompetitionLayout,
)

_TRAILING_COUNT = re.compile(r"\((\d+)\)$")
_FINALS_MARKER = "(f)"
# Spreadsheets sometimes write whole numbers as "5.0"
_WHOLE_NUMBER = re.compile(r"[+-]?(\d+)(?:\.0*)?")


def count_rounds(cell_text: str) -> int:
    """Rounds recorded in one competition cell, e.g. ``"W(3)"`` -> 3."""
    match = _TRAILING_COUNT.search(cell_text.strip())
    return int(match.group(1)) if match else 0


def count_finals(cell_text: str) -> int:
    return cell_text.count(_FINALS_MARKER)


def _competition_count(cells: list[str]) -> int:
    base = sum(count_rounds(c) for c in cells)
    finals = sum(count_finals(c) for c in cells)
    return max(base - finals, 0)


def parse_total(raw: str) -> int | None:
    """Whole, non-negative round total, or None for anything else."""
    text = raw.strip()
    match = _WHOLE_NUMBER.fullmatch(text)
    if match is None or text.startswith("-"):
        return None
    return int(match.group(1))


def _competition_cells(
    record: dict[str, str],
    headers: list[str] | tuple[str, ...],
    layout: CompetitionLayout,
    values: Sequence[str] | None,
) -> list[str]:
    indices = layout.competition_indices(headers)
    if values is None:
        return [cell(record, headers[i]) for i in indices]
    return [values[i].strip() if i < len(values) else "" for i in indices]


def _effective_count(
    record: dict[str, str],
    headers: list[str] | tuple[str, ...],
    layout: CompetitionLayout,
    values: Sequence[str] | None,
) -> int | None:
    competition = _competition_cells(record, headers, layout, values)
    if any(competition):
        return _competition_count(competition)
    return parse_total(cell(record, TOTAL_ROUNDS))


def normalize_row(
    record: dict[str, str],
    headers: list[str] | tuple[str, ...],
    layout: CompetitionLayout = DEFAULT_LAYOUT,
    line: int | None = None,
    values: Sequence[str] | None = None,
) -> RowOutcome:
    """Normalize one record into an accepted row or a tagged rejection."""
    row = normalize(record, headers, layout, values)
    if row is None:
        return Rejected(RejectReason.INVALID_TOTAL, line, cell(record, TOTAL_ROUNDS))
    if not row.nominated_club:
        return Rejected(RejectReason.MISSING_CLUB, line, f"{row.surname}, {row.name}")
    if not row.team:
        return Rejected(RejectReason.MISSING_TEAM, line, f"{row.surname}, {row.name}")
    return Accepted(row)


def normalize(
    record: dict[str, str],
    headers: list[str] | tuple[str, ...],
    layout: CompetitionLayout = DEFAULT_LAYOUT,
    values: Sequence[str] | None = None,
) -> NormalizedRow | None:
    """Normalized row, or None when the participation count is unusable.

    Competition columns win when the row has any data in them; otherwise the
    ``Total Rounds Played`` column is used as-is. Competition cells are read
    from ``values`` by position when given, since competition headers can
    repeat or be blank. Rows with an empty club or team are returned; the
    table parser drops them.
    """
    count = _effective_count(record, headers, layout, values)
    if count is None:
        return None
    return NormalizedRow(
        surname=cell(record, SURNAME),
        name=cell(record, NAME),
        nominated_club=cell(record, NOMINATED_CLUB),
        team=cell(record, TEAM),
        effective_count=count,
    )
