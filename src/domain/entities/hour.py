"""Hour domain entity, hashtag parsing and entry filters."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from core.exceptions import InvalidFilterError
from domain.entities.tag import Tag

HASHTAG_PATTERN = re.compile(r"#(\w+)")
WORD_PATTERN = re.compile(r"\w+")

FILTER_DATE_FORMAT = "%d/%m/%Y"

AUDITED_FIELDS = (
    "user_id",
    "project_id",
    "category_id",
    "starting_time",
    "ending_time",
    "value",
    "description",
)


def parse_hashtags(text: str | None) -> list[str]:
    """Return the distinct hashtags of ``text`` in order of appearance.

    Duplicates are detected case-insensitively; the first casing wins.
    """
    seen: set[str] = set()
    names: list[str] = []
    for match in HASHTAG_PATTERN.finditer(text or ""):
        name = match.group(1)
        if name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    return names


def search_tokens(text: str | None) -> list[str]:
    """Split text into lowercase word tokens."""
    return [token.lower() for token in WORD_PATTERN.findall(text or "")]


def build_search_text(description: str | None) -> str:
    """Build the space-delimited token string stored alongside a description.

    Every token is surrounded by single spaces so a whole-word lookup is a
    plain ``LIKE '% token %'``.
    """
    tokens = search_tokens(description)
    if not tokens:
        return ""
    return f" {' '.join(tokens)} "


def naive_utc(value: datetime | None) -> datetime | None:
    """Express an aware datetime as naive UTC; naive values are taken as UTC.

    Times are stored without a zone, like every ``datetime.utcnow`` default.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


@dataclass
class Hour:
    """Domain entity for a logged time entry."""

    user_id: UUID
    project_id: UUID
    category_id: UUID
    starting_time: datetime
    value: float = 0.0
    id: UUID = field(default_factory=uuid4)
    ending_time: datetime | None = None
    description: str | None = None
    tags: list[Tag] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_open(self) -> bool:
        """An entry without an ending time is still in progress."""
        return self.ending_time is None

    @property
    def tag_names(self) -> list[str]:
        """Hashtags currently present in the description."""
        return parse_hashtags(self.description)

    @property
    def tag_list(self) -> str:
        """Linked tag names, comma separated, in association order."""
        return ", ".join(tag.name for tag in self.tags)

    def audited_attributes(self) -> dict[str, Any]:
        """JSON-safe snapshot of the attributes tracked by the audit trail."""
        return {name: _jsonable(getattr(self, name)) for name in AUDITED_FIELDS}


@dataclass(frozen=True, slots=True)
class HourEntry:
    """Read-only value object: an Hour with its related names resolved."""

    hour: Hour
    user_name: str
    project_name: str
    category_name: str
    client_name: str | None = None


def _parse_date(name: str, raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return datetime.strptime(str(raw).strip(), FILTER_DATE_FORMAT).date()
    except ValueError:
        raise InvalidFilterError(name, str(raw)) from None


def _parse_id(name: str, raw: Any) -> UUID | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError:
        raise InvalidFilterError(name, str(raw), expected="a UUID") from None


@dataclass(frozen=True, slots=True)
class HourFilter:
    """Predicates for querying hours. Every present predicate must hold."""

    from_date: date | None = None
    to_date: date | None = None
    user_id: UUID | None = None
    project_id: UUID | None = None
    category_id: UUID | None = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "HourFilter":
        """Build a filter from request-style values (dates as DD/MM/YYYY)."""
        return cls(
            from_date=_parse_date("from_date", values.get("from_date")),
            to_date=_parse_date("to_date", values.get("to_date")),
            user_id=_parse_id("user_id", values.get("user_id")),
            project_id=_parse_id("project_id", values.get("project_id")),
            category_id=_parse_id("category_id", values.get("category_id")),
        )

    @property
    def starts_at_or_after(self) -> datetime | None:
        """Lower bound for starting_time (start of from_date)."""
        if self.from_date is None:
            return None
        return datetime.combine(self.from_date, time.min)

    @property
    def starts_at_or_before(self) -> datetime | None:
        """Upper bound for starting_time (end of to_date)."""
        if self.to_date is None:
            return None
        return datetime.combine(self.to_date, time.max)


class HourOrder(StrEnum):
    """Orderings available when listing hours."""

    STARTING_TIME = "starting_time"
    CREATED_AT = "created_at"


@dataclass(frozen=True, slots=True)
class HourQuery:
    """A composition of hour scopes applied to a single statement."""

    filter: HourFilter = field(default_factory=HourFilter)
    search: str | None = None
    open_for_user: UUID | None = None
    with_clients: bool = False
    tag_id: UUID | None = None
    order: HourOrder = HourOrder.STARTING_TIME
