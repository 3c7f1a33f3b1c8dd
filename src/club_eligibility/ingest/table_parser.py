import csv
import io
import logging
from collections.abc import Iterator

from club_eligibility.domain.errors import EligibilityError, MalformedInput, MissingColumn
from club_eligibility.domain.records import Accepted, NormalizedRow, ParseOutcome, Rejected
from club_eligibility.domain.result import Err, Ok, Result
from club_eligibility.ingest._csv_helpers import drop_first_line, strip_bom
from club_eligibility.ingest.columns import DEFAULT_LAYOUT, CompetitionLayout, missing_columns
from club_eligibility.ingest.normalizer import normalize_row

logger = logging.getLogger(__name__)


class _Attempt:
    """One pass over the text, reading the header eagerly and the records lazily."""

    def __init__(self, text: str, skipped_title_row: bool) -> None:
        self.skipped_title_row = skipped_title_row
        self._reader = csv.reader(io.StringIO(text), strict=True)
        self.headers: tuple[str, ...] = tuple(h.strip() for h in next(self._reader, []))
        self.missing = missing_columns(self.headers)

    def records(self) -> Iterator[tuple[int, dict[str, str], list[str]]]:
        line_offset = 1 if self.skipped_title_row else 0
        for values in self._reader:
            if not values:
                continue
            record: dict[str, str] = {}
            for i, header in enumerate(self.headers):
                record.setdefault(header, values[i] if i < len(values) else "")
            yield self._reader.line_num + line_offset, record, values


def _log_rejection(rejection: Rejected, *, first: bool) -> None:
    level = logging.INFO if first else logging.DEBUG
    logger.log(level, "Rejected line %s (%s): %r", rejection.line, rejection.reason, rejection.detail)


def _resolve_header(text: str) -> Result[_Attempt, EligibilityError]:
    primary = _Attempt(text, skipped_title_row=False)
    if not primary.missing:
        return Ok(primary)
    fallback = _Attempt(drop_first_line(text), skipped_title_row=True)
    if not fallback.missing:
        return Ok(fallback)
    closest = fallback if len(fallback.missing) < len(primary.missing) else primary
    logger.debug("Header %s is missing %s", list(closest.headers), closest.missing)
    return Err(MissingColumn.named(closest.missing[0]))


def parse_table(
    raw_text: str, layout: CompetitionLayout = DEFAULT_LAYOUT
) -> Result[ParseOutcome, EligibilityError]:
    """Parse a matches export into normalized rows.

    The header is the first line, or the second when the first is a title
    row that lacks the required columns. Invalid rows are reported as
    rejections rather than errors.
    """
    text = strip_bom(raw_text)
    rows: list[NormalizedRow] = []
    rejections: list[Rejected] = []
    try:
        resolved = _resolve_header(text)
        if isinstance(resolved, Err):
            return resolved
        attempt = resolved.value
        for line, record, values in attempt.records():
            outcome = normalize_row(record, attempt.headers, layout, line=line, values=values)
            if isinstance(outcome, Accepted):
                rows.append(outcome.row)
            else:
                _log_rejection(outcome, first=not any(r.reason is outcome.reason for r in rejections))
                rejections.append(outcome)
    except csv.Error as e:
        logger.debug("CSV decoder failed: %s", e)
        return Err(MalformedInput.from_decoder(str(e)))

    logger.info(
        "Parsed %d rows (%d rejected%s)",
        len(rows),
        len(rejections),
        ", title row skipped" if attempt.skipped_title_row else "",
    )
    return Ok(
        ParseOutcome(
            rows=tuple(rows),
            headers=attempt.headers,
            skipped_title_row=attempt.skipped_title_row,
            rejections=tuple(rejections),
        )
    )
