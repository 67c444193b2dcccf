"""CSV file download responses."""

from collections.abc import Sequence
from datetime import datetime, timezone

from fastapi.responses import Response

from domain.entities.hour import HourEntry
from domain.services.entry_csv_generator import EntryCSVGenerator

CSV_MEDIA_TYPE = "text/csv"


def csv_filename(name: str, now: datetime | None = None) -> str:
    """``<name>-entries-<ISO timestamp>.csv``."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat(timespec="seconds")
    return f"{name}-entries-{timestamp}.csv"


def send_csv(name: str, hours_entries: Sequence[HourEntry]) -> Response:
    """Render the entries as CSV and return them as a file download."""
    return Response(
        content=EntryCSVGenerator.generate(hours_entries),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{csv_filename(name)}"'},
    )
