"""Item storage operations used by the item service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from .models import Item, Owner

if TYPE_CHECKING:
    from ..core.query import ItemQuery


class ItemRepository:
    """Thin query layer over one SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    def owner_exists(self, owner_id: int) -> bool:
        return self.session.get(Owner, owner_id) is not None

    def add_owner(self, owner: Owner) -> Owner:
        self.session.add(owner)
        self.session.flush()
        return owner

    def get(self, item_id: int) -> Item | None:
        return self.session.get(Item, item_id)

    def find_by_owner_and_resolved_url(self, owner_id: int, resolved_url: str) -> Item | None:
        stmt = select(Item).where(Item.owner_id == owner_id, Item.resolved_url == resolved_url)
        return self.session.scalars(stmt).first()

    def add(self, item: Item) -> Item:
        """Stage a new item and flush it so the uniqueness constraint is checked now."""
        self.session.add(item)
        self.session.flush()
        return item

    def save(self, item: Item) -> None:
        self.session.flush()

    def delete_by_owner_and_id(self, owner_id: int, item_id: int) -> int:
        """Delete the item only when both ids match. Returns the row count."""
        stmt = delete(Item).where(Item.owner_id == owner_id, Item.id == item_id)
        result = self.session.execute(stmt)
        return result.rowcount or 0

    def find(self, query: ItemQuery) -> list[Item]:
        stmt = select(Item).where(query.predicate)
        if query.order_by:
            stmt = stmt.order_by(*query.order_by)
        if query.limit is not None:
            stmt = stmt.limit(query.limit)
        return list(self.session.scalars(stmt))
