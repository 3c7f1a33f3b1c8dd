import logging

import pytest

from club_eligibility.domain.errors import MalformedInput, MissingColumn
from club_eligibility.domain.records import NormalizedRow, RejectReason
from club_eligibility.domain.result import Err, Ok
from club_eligibility.ingest.table_parser import parse_table
from tests.helpers import competition_header, competition_row, make_csv


class TestHeaderDetection:
    def test_header_on_first_line(self) -> None:
        result = parse_table(make_csv([["Smith", "John", "Oak FC", "Premier 2", "5"]]))
        assert isinstance(result, Ok)
        assert result.value.rows == (NormalizedRow("Smith", "John", "Oak FC", "Premier 2", 5),)
        assert not result.value.skipped_title_row

    def test_title_row_skipped(self) -> None:
        text = make_csv([["Smith", "John", "Oak FC", "Premier 2", "5"]], title="Matches Played 2025,,,,")
        result = parse_table(text)
        assert isinstance(result, Ok)
        assert result.value.skipped_title_row
        assert len(result.value.rows) == 1
        assert result.value.headers == ("Surname", "Name", "Nominated Club", "Team", "Total Rounds Played")

    def test_header_names_are_trimmed(self) -> None:
        text = " Surname ,Name,Nominated Club ,Team,Total Rounds Played\nSmith,John,Oak FC,Premier 2,5\n"
        result = parse_table(text)
        assert isinstance(result, Ok)
        assert len(result.value.rows) == 1

    def test_bom_stripped(self) -> None:
        text = "\ufeff" + make_csv([["Smith", "John", "Oak FC", "Premier 2", "5"]])
        result = parse_table(text)
        assert isinstance(result, Ok)
        assert len(result.value.rows) == 1


class TestMissingColumn:
    def test_missing_nominated_club(self) -> None:
        text = make_csv([["Smith", "John", "Premier 2", "5"]], header=["Surname", "Name", "Team", "Total Rounds Played"])
        assert parse_table(text) == Err(MissingColumn.named("Nominated Club"))

    def test_missing_nominated_club_after_title_row(self) -> None:
        text = make_csv(
            [["Smith", "John", "Premier 2", "5"]],
            header=["Surname", "Name", "Team", "Total Rounds Played"],
            title="Season report",
        )
        result = parse_table(text)
        assert isinstance(result, Err)
        assert result.error == MissingColumn.named("Nominated Club")

    def test_first_missing_in_fixed_order(self) -> None:
        text = make_csv([["x", "y"]], header=["Team", "Name"])
        result = parse_table(text)
        assert isinstance(result, Err)
        assert isinstance(result.error, MissingColumn)
        assert result.error.column == "Surname"

    def test_empty_input(self) -> None:
        assert parse_table("") == Err(MissingColumn.named("Surname"))


class TestMalformedInput:
    def test_unterminated_quote(self) -> None:
        text = make_csv([]) + 'Smith,"John,Oak FC,Premier 2,5\n'
        result = parse_table(text)
        assert isinstance(result, Err)
        assert isinstance(result.error, MalformedInput)
        assert result.error.message.startswith("Malformed CSV:")

    def test_text_after_closing_quote(self) -> None:
        text = make_csv([]) + 'Smith,"John"x,Oak FC,Premier 2,5\n'
        result = parse_table(text)
        assert isinstance(result, Err)
        assert isinstance(result.error, MalformedInput)


class TestRowHandling:
    def test_invalid_rows_reported_as_rejections(self) -> None:
        text = make_csv(
            [
                ["Smith", "John", "Oak FC", "Premier 2", "5"],
                ["Jones", "Amy", "", "Premier 1", "3"],
                ["Brown", "Sam", "Oak FC", "", "3"],
                ["Total", "", "", "", "n/a"],
                ["", "", "", "", ""],
            ]
        )
        result = parse_table(text)
        assert isinstance(result, Ok)
        outcome = result.value
        assert len(outcome.rows) == 1
        counts = outcome.rejection_counts()
        assert counts[RejectReason.MISSING_CLUB] == 1
        assert counts[RejectReason.MISSING_TEAM] == 1
        assert counts[RejectReason.INVALID_TOTAL] == 2

    def test_rejections_carry_source_line(self) -> None:
        text = make_csv([["Smith", "John", "Oak FC", "Premier 2", "5"], ["Jones", "Amy", "Oak FC", "Premier 1", "-2"]])
        result = parse_table(text)
        assert isinstance(result, Ok)
        assert [r.line for r in result.value.rejections] == [3]

    def test_rejection_line_accounts_for_title_row(self) -> None:
        text = make_csv([["Jones", "Amy", "Oak FC", "Premier 1", "x"]], title="Report")
        result = parse_table(text)
        assert isinstance(result, Ok)
        assert [r.line for r in result.value.rejections] == [3]

    def test_blank_lines_skipped(self) -> None:
        text = make_csv([["Smith", "John", "Oak FC", "Premier 2", "5"]]) + "\n\n"
        result = parse_table(text)
        assert isinstance(result, Ok)
        assert result.value.rejections == ()

    def test_short_rows_padded(self) -> None:
        text = make_csv([]) + "Smith,John,Oak FC\n"
        result = parse_table(text)
        assert isinstance(result, Ok)
        assert result.value.rows == ()
        assert result.value.rejections[0].reason is RejectReason.INVALID_TOTAL

    def test_competition_columns_by_position(self) -> None:
        header = competition_header(["League", "7-a-side", "Cup"])
        rows = [
            competition_row("Smith", "John", "Oak FC", "Premier 2", ["W(f)(3)", "(9)", "(2)"], total="99"),
            competition_row("Jones", "Amy", "Oak FC", "Premier 1", ["", "(4)", ""], total="6"),
        ]
        result = parse_table(make_csv(rows, header=header))
        assert isinstance(result, Ok)
        counts = {r.surname: r.effective_count for r in result.value.rows}
        assert counts == {"Smith": 4, "Jones": 6}

    def test_repeated_competition_headers_counted_by_position(self) -> None:
        header = competition_header(["Pennant", "Pennant"])
        rows = [competition_row("Smith", "John", "Oak FC", "Premier 2", ["W(3)", "W(2)"], total="9")]
        result = parse_table(make_csv(rows, header=header))
        assert isinstance(result, Ok)
        assert [r.effective_count for r in result.value.rows] == [5]

    def test_blank_competition_headers_counted_by_position(self) -> None:
        header = competition_header(["", ""])
        rows = [competition_row("Smith", "John", "Oak FC", "Premier 2", ["", "W(2)"], total="9")]
        result = parse_table(make_csv(rows, header=header))
        assert isinstance(result, Ok)
        assert [r.effective_count for r in result.value.rows] == [2]


class TestRejectionLogging:
    def test_first_rejection_of_each_kind_logged_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        text = make_csv(
            [
                ["Smith", "John", "Oak FC", "Premier 2", "5.5"],
                ["Jones", "Amy", "Oak FC", "Premier 1", "n/a"],
                ["Brown", "Sam", "", "Premier 1", "3"],
            ]
        )
        with caplog.at_level(logging.DEBUG, logger="club_eligibility"):
            parse_table(text)
        info = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        debug = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert any("'5.5'" in m for m in info)
        assert any("'n/a'" in m for m in debug)
        assert not any("'n/a'" in m for m in info)
        assert any("missing_club" in m for m in info)
