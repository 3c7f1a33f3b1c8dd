from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum


@dataclass(frozen=True)
class NormalizedRow:
    surname: str
    name: str
    nominated_club: str
    team: str
    effective_count: int


class RejectReason(StrEnum):
    INVALID_TOTAL = "invalid_total"
    MISSING_CLUB = "missing_club"
    MISSING_TEAM = "missing_team"


@dataclass(frozen=True)
class Accepted:
    row: NormalizedRow


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason
    line: int | None = None
    detail: str = ""


RowOutcome = Accepted | Rejected


@dataclass(frozen=True)
class ParseOutcome:
    rows: tuple[NormalizedRow, ...]
    headers: tuple[str, ...]
    skipped_title_row: bool = False
    rejections: tuple[Rejected, ...] = field(default=())

    def rejection_counts(self) -> Counter[RejectReason]:
        return Counter(r.reason for r in self.rejections)
