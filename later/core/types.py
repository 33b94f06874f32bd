"""
Core data types for the reading list.

This module defines the value objects that flow between the resolver,
the item service and the query composer:
- ContentClass: Coarse classification of a remote resource
- PartialMetadata / UrlMetadata: Extraction and resolution results
- State / ContentType / SortOrder: Filter axes for listing items
- FilterSpec: One listing request
- ItemEdit: One edit request
- ItemRecord: Immutable snapshot of a stored item
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable

from ..errors import InvalidFilter


class ContentClass(str, Enum):
    """Coarse bucket derived from a declared content type."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


@dataclass(frozen=True)
class PartialMetadata:
    """What an extractor learns about a resolved URL."""

    title: str
    has_image: bool = False
    has_video: bool = False


@dataclass(frozen=True)
class UrlMetadata:
    """Result of resolving a URL.

    Attributes:
        normal_url: The URL as submitted by the caller
        resolved_url: The final URL reached after following redirects
        mime_type: Coarse content label ("text", "image" or "video")
        title: Document title or file name
        has_image: Whether the resource is or embeds an image
        has_video: Whether the resource is or embeds a video
        date_resolved: When the resolution happened (UTC)
    """

    normal_url: str
    resolved_url: str
    mime_type: str
    title: str
    has_image: bool
    has_video: bool
    date_resolved: datetime


class _Axis(str, Enum):
    @classmethod
    def parse(cls, value: str | _Axis) -> Any:
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            allowed = ", ".join(member.name.lower() for member in cls)
            raise InvalidFilter(
                f"Unknown {cls.__name__} value {value!r}; expected one of: {allowed}"
            ) from None


class State(_Axis):
    ALL = "all"
    UNREAD = "unread"
    READ = "read"


class ContentType(_Axis):
    ALL = "all"
    ARTICLE = "article"
    IMAGE = "image"
    VIDEO = "video"


class SortOrder(_Axis):
    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE = "title"


def normalize_tags(tags: Iterable[str] | None) -> frozenset[str]:
    """Strip tag names and drop empty ones."""
    if not tags:
        return frozenset()
    return frozenset(tag.strip() for tag in tags if tag and tag.strip())


@dataclass(frozen=True)
class FilterSpec:
    """A single listing request.

    Axis values may be given as enum members or as case-insensitive
    names ("unread", "ARTICLE", ...). Tags use OR semantics.
    """

    owner_id: int
    state: State = State.ALL
    content_type: ContentType = ContentType.ALL
    tags: frozenset[str] = field(default_factory=frozenset)
    sort: SortOrder = SortOrder.NEWEST
    limit: int = 10

    def __post_init__(self) -> None:
        object.__setattr__(self, "state", State.parse(self.state))
        object.__setattr__(self, "content_type", ContentType.parse(self.content_type))
        object.__setattr__(self, "sort", SortOrder.parse(self.sort))
        object.__setattr__(self, "tags", normalize_tags(self.tags))
        if self.limit <= 0:
            raise InvalidFilter(f"limit must be positive, got {self.limit}")


@dataclass(frozen=True)
class ItemEdit:
    """Changes requested for one item.

    Attributes:
        item_id: Target item
        unread: New read state, or None to leave it unchanged
        tags: Tags to add (or to install when replace_tags is set)
        replace_tags: Discard existing tags before installing ``tags``
    """

    item_id: int
    unread: bool | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    replace_tags: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", normalize_tags(self.tags))


@dataclass(frozen=True)
class ItemRecord:
    """Snapshot of a stored item, detached from any database session."""

    id: int
    owner_id: int
    url: str
    resolved_url: str
    mime_type: str
    title: str
    has_image: bool
    has_video: bool
    date_resolved: datetime
    unread: bool
    tags: frozenset[str] = field(default_factory=frozenset)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "url": self.url,
            "resolved_url": self.resolved_url,
            "mime_type": self.mime_type,
            "title": self.title,
            "has_image": self.has_image,
            "has_video": self.has_video,
            "date_resolved": self.date_resolved.isoformat(),
            "unread": self.unread,
            "tags": sorted(self.tags),
        }
