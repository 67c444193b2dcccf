"""Unit tests for CSV generation and the download response."""

import csv
import io
import re
from datetime import datetime, timezone
from uuid import uuid4

from api.v1.csv_download import csv_filename, send_csv
from domain.entities.hour import HourEntry
from domain.entities.tag import Tag
from domain.services.entry_csv_generator import HEADERS, EntryCSVGenerator
from tests.unit.conftest import make_hour


def _entry(**overrides) -> HourEntry:
    hour = make_hour(
        starting_time=datetime(2015, 4, 20, 9, 0),
        ending_time=datetime(2015, 4, 20, 11, 30),
        value=2.5,
        description="Pairing on #tdd, #api",
        tags=[Tag(name="tdd"), Tag(name="api")],
    )
    values = {
        "hour": hour,
        "user_name": "Jane Doe",
        "project_name": "Acme site",
        "category_name": "Development",
        "client_name": "Acme Corp",
    }
    values.update(overrides)
    return HourEntry(**values)


def _rows(data: bytes) -> list[list[str]]:
    return list(csv.reader(io.StringIO(data.decode("utf-8"))))


class TestGenerate:
    def test_header_only_for_no_entries(self):
        assert _rows(EntryCSVGenerator.generate([])) == [list(HEADERS)]

    def test_one_row_per_entry(self):
        rows = _rows(EntryCSVGenerator.generate([_entry()]))

        assert rows[1] == [
            "20/04/2015",
            "Jane Doe",
            "Acme site",
            "Acme Corp",
            "Development",
            "2.5",
            "2015-04-20T09:00:00",
            "2015-04-20T11:30:00",
            "Pairing on #tdd, #api",
            "tdd, api",
        ]

    def test_keeps_input_order(self):
        first = _entry(user_name="First")
        second = _entry(user_name="Second")

        rows = _rows(EntryCSVGenerator.generate([second, first]))

        assert [row[1] for row in rows[1:]] == ["Second", "First"]

    def test_open_entry_without_client(self):
        hour = make_hour(ending_time=None, description=None)
        entry = HourEntry(
            hour=hour,
            user_name="Jane",
            project_name="Internal",
            category_name="Meeting",
        )

        row = _rows(EntryCSVGenerator.generate([entry]))[1]

        assert row[3] == ""
        assert row[7] == ""
        assert row[8] == ""
        assert row[9] == ""

    def test_whole_hours_have_no_decimals(self):
        entry = _entry(hour=make_hour(value=8.0))

        assert _rows(EntryCSVGenerator.generate([entry]))[1][5] == "8"


class TestSendCsv:
    def test_filename_has_name_and_timestamp(self):
        now = datetime(2015, 4, 20, 12, 0, 5, 123, tzinfo=timezone.utc)

        assert csv_filename("hours", now) == "hours-entries-2015-04-20T12:00:05+00:00.csv"

    def test_response_is_csv_attachment(self):
        response = send_csv("jane-doe", [_entry()])

        assert response.media_type == "text/csv"
        assert response.headers["content-type"].startswith("text/csv")
        disposition = response.headers["content-disposition"]
        assert re.fullmatch(
            r'attachment; filename="jane-doe-entries-\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\+00:00\.csv"',
            disposition,
        )

    def test_response_body_is_generated_csv(self):
        entries = [_entry(hour=make_hour(id=uuid4()))]

        response = send_csv("hours", entries)

        assert response.body == EntryCSVGenerator.generate(entries)
