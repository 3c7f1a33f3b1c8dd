import logging

from club_eligibility.domain.dataset import ParsedData
from club_eligibility.domain.errors import EligibilityError
from club_eligibility.domain.records import ParseOutcome
from club_eligibility.domain.result import Err, Ok, Result
from club_eligibility.ingest.columns import DEFAULT_LAYOUT, CompetitionLayout
from club_eligibility.ingest.table_parser import parse_table
from club_eligibility.services.aggregator import aggregate

logger = logging.getLogger(__name__)


def _log_rejections(outcome: ParseOutcome) -> None:
    for reason, count in sorted(outcome.rejection_counts().items()):
        logger.info("Skipped %d rows: %s", count, reason)


def load_dataset(
    raw_text: str, layout: CompetitionLayout = DEFAULT_LAYOUT
) -> Result[tuple[ParsedData, ParseOutcome], EligibilityError]:
    """Parse and aggregate a matches export in one step."""
    parsed = parse_table(raw_text, layout)
    if isinstance(parsed, Err):
        logger.warning("Could not parse matches export: %s", parsed.error.message)
        return parsed
    outcome = parsed.value
    _log_rejections(outcome)
    data = aggregate(outcome.rows)
    logger.info("Loaded %d clubs, %d players", len(data.clubs), data.player_count)
    return Ok((data, outcome))
