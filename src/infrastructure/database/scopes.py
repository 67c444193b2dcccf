"""Composable query scopes for hours.

Each scope takes a ``select(HourModel)`` statement and returns it narrowed or
ordered, so scopes can be chained in any combination.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import Select, false

from domain.entities.hour import HourFilter, HourOrder, HourQuery, search_tokens
from infrastructure.database.models import HourModel, ProjectModel, TaggingModel

HourSelect = Select[Any]


def by_last_created_at(stmt: HourSelect) -> HourSelect:
    """Most recently created first."""
    return stmt.order_by(HourModel.created_at.desc())


def by_starting_time(stmt: HourSelect) -> HourSelect:
    """Latest starting time first."""
    return stmt.order_by(HourModel.starting_time.desc())


def with_clients(stmt: HourSelect) -> HourSelect:
    """Only hours whose project is billed to a client."""
    return stmt.where(HourModel.project.has(ProjectModel.client_id.is_not(None)))


def open_per_user(stmt: HourSelect, user_id: UUID) -> HourSelect:
    """Only the user's hours that have no ending time."""
    return stmt.where(HourModel.user_id == user_id, HourModel.ending_time.is_(None))


def query(stmt: HourSelect, entry_filter: HourFilter) -> HourSelect:
    """AND-compose every predicate present on the filter."""
    if entry_filter.starts_at_or_after is not None:
        stmt = stmt.where(HourModel.starting_time >= entry_filter.starts_at_or_after)
    if entry_filter.starts_at_or_before is not None:
        stmt = stmt.where(HourModel.starting_time <= entry_filter.starts_at_or_before)
    if entry_filter.user_id is not None:
        stmt = stmt.where(HourModel.user_id == entry_filter.user_id)
    if entry_filter.project_id is not None:
        stmt = stmt.where(HourModel.project_id == entry_filter.project_id)
    if entry_filter.category_id is not None:
        stmt = stmt.where(HourModel.category_id == entry_filter.category_id)
    return stmt


def search_by_description(stmt: HourSelect, term: str) -> HourSelect:
    """Whole-word, case-insensitive match of every word in ``term``.

    A blank term matches nothing.
    """
    tokens = search_tokens(term)
    if not tokens:
        return stmt.where(false())
    for token in tokens:
        stmt = stmt.where(HourModel.search_text.contains(f" {token} ", autoescape=True))
    return stmt


def tagged_with(stmt: HourSelect, tag_id: UUID) -> HourSelect:
    """Only hours linked to the tag."""
    return stmt.where(HourModel.taggings.any(TaggingModel.tag_id == tag_id))


def apply(stmt: HourSelect, hour_query: HourQuery) -> HourSelect:
    """Apply every scope requested by ``hour_query``, ordering last."""
    stmt = query(stmt, hour_query.filter)
    if hour_query.search is not None:
        stmt = search_by_description(stmt, hour_query.search)
    if hour_query.open_for_user is not None:
        stmt = open_per_user(stmt, hour_query.open_for_user)
    if hour_query.with_clients:
        stmt = with_clients(stmt)
    if hour_query.tag_id is not None:
        stmt = tagged_with(stmt, hour_query.tag_id)
    if hour_query.order == HourOrder.CREATED_AT:
        return by_last_created_at(stmt)
    return by_starting_time(stmt)
