"""
Core domain types.

Value objects shared by the resolver, the item service and the query
composer. The composer itself lives in ``later.core.query``.
"""

from .types import (
    ContentClass,
    ContentType,
    FilterSpec,
    ItemEdit,
    ItemRecord,
    PartialMetadata,
    SortOrder,
    State,
    UrlMetadata,
)

__all__ = [
    "ContentClass",
    "ContentType",
    "FilterSpec",
    "ItemEdit",
    "ItemRecord",
    "PartialMetadata",
    "SortOrder",
    "State",
    "UrlMetadata",
]
