"""CSV rendering of hour entries."""

import csv
import io
from collections.abc import Sequence
from datetime import datetime

from domain.entities.hour import FILTER_DATE_FORMAT, HourEntry

HEADERS = (
    "Date",
    "User",
    "Project",
    "Client",
    "Category",
    "Hours",
    "Starting time",
    "Ending time",
    "Description",
    "Tags",
)


def _format_time(value: datetime | None) -> str:
    return value.isoformat() if value else ""


class EntryCSVGenerator:
    """Turns an ordered sequence of hour entries into CSV bytes."""

    @staticmethod
    def generate(hours_entries: Sequence[HourEntry]) -> bytes:
        """Render one row per entry, in input order, under a header row."""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(HEADERS)
        for entry in hours_entries:
            hour = entry.hour
            writer.writerow(
                [
                    hour.starting_time.strftime(FILTER_DATE_FORMAT),
                    entry.user_name,
                    entry.project_name,
                    entry.client_name or "",
                    entry.category_name,
                    f"{hour.value:g}",
                    _format_time(hour.starting_time),
                    _format_time(hour.ending_time),
                    hour.description or "",
                    hour.tag_list,
                ]
            )
        return buffer.getvalue().encode("utf-8")
