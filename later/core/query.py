"""
Filter and sort composition for listing items.

Each filter axis maps its value to an optional predicate fragment through
a lookup table; the fragments that are present are combined with AND.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from sqlalchemy import ColumnElement, and_, func

from ..storage.models import Item, ItemTag
from .types import ContentType, FilterSpec, SortOrder, State


@dataclass(frozen=True)
class ItemQuery:
    """A composed retrieval: one predicate, an ordering and a row cap."""

    predicate: ColumnElement[bool]
    order_by: tuple[ColumnElement, ...]
    limit: int | None


_STATE_CONDITIONS: dict[State, ColumnElement[bool] | None] = {
    State.ALL: None,
    State.UNREAD: Item.unread.is_(True),
    State.READ: Item.unread.is_(False),
}

_CONTENT_TYPE_LABELS: dict[ContentType, str | None] = {
    ContentType.ALL: None,
    ContentType.ARTICLE: "text",
    ContentType.IMAGE: "image",
    ContentType.VIDEO: "video",
}

_SORT_ORDERS: dict[SortOrder, tuple[ColumnElement, ...]] = {
    SortOrder.NEWEST: (Item.date_resolved.desc(), Item.id.asc()),
    SortOrder.OLDEST: (Item.date_resolved.asc(), Item.id.asc()),
    SortOrder.TITLE: (Item.title.asc(), Item.id.asc()),
}


def owner_condition(owner_id: int) -> ColumnElement[bool]:
    return Item.owner_id == owner_id


def state_condition(state: State) -> ColumnElement[bool] | None:
    return _STATE_CONDITIONS[state]


def content_type_condition(content_type: ContentType) -> ColumnElement[bool] | None:
    label = _CONTENT_TYPE_LABELS[content_type]
    if label is None:
        return None
    return func.lower(Item.mime_type) == label


def tags_condition(tags: Iterable[str] | None) -> ColumnElement[bool] | None:
    """Item has at least one of ``tags``; None when no tags were given."""
    wanted = sorted(set(tags or ()))
    if not wanted:
        return None
    return Item.tag_rows.any(ItemTag.name.in_(wanted))


def build_query(spec: FilterSpec) -> ItemQuery:
    """Compose the predicate, sort order and limit for a listing request."""
    conditions = [
        owner_condition(spec.owner_id),
        state_condition(spec.state),
        content_type_condition(spec.content_type),
        tags_condition(spec.tags),
    ]
    present = [condition for condition in conditions if condition is not None]
    return ItemQuery(
        predicate=and_(*present),
        order_by=_SORT_ORDERS[spec.sort],
        limit=spec.limit,
    )


def any_tag_query(owner_id: int, tags: Iterable[str]) -> ItemQuery:
    """Owner's items carrying any of ``tags``, unsorted and unlimited.

    Callers must pass a non-empty tag set; an empty set has no matching
    predicate here.
    """
    condition = tags_condition(tags)
    if condition is None:
        raise ValueError("any_tag_query requires at least one tag")
    return ItemQuery(
        predicate=and_(owner_condition(owner_id), condition),
        order_by=(),
        limit=None,
    )
