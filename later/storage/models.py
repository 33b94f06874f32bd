"""Reading-list models: owners, saved items and their tags."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator

from .database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Stores naive UTC, returns aware UTC regardless of backend."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):  # noqa: ANN001
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):  # noqa: ANN001
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class Owner(Base):
    """A user whose reading list holds items."""

    __tablename__ = "owners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    registered_at: Mapped[datetime] = mapped_column(UTCDateTime, default=_utcnow)

    items: Mapped[list["Item"]] = relationship(
        back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )


class Item(Base):
    """A saved URL. (owner_id, resolved_url) is unique."""

    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("owners.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    resolved_url: Mapped[str] = mapped_column(Text, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    has_image: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_video: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date_resolved: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    unread: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    owner: Mapped[Owner] = relationship(back_populates="items")
    tag_rows: Mapped[list["ItemTag"]] = relationship(
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "resolved_url", name="uix_items_owner_resolved_url"),
        Index("ix_items_owner_date_resolved", "owner_id", "date_resolved"),
    )

    @property
    def tags(self) -> set[str]:
        return {row.name for row in self.tag_rows}

    def add_tags(self, tags: set[str] | frozenset[str]) -> bool:
        """Union ``tags`` into the item. Returns True if anything was added."""
        missing = set(tags) - self.tags
        for name in sorted(missing):
            self.tag_rows.append(ItemTag(name=name))
        return bool(missing)

    def replace_tags(self, tags: set[str] | frozenset[str]) -> None:
        wanted = set(tags)
        self.tag_rows = [row for row in self.tag_rows if row.name in wanted]
        self.add_tags(wanted)


class ItemTag(Base):
    """One free-text tag attached to an item."""

    __tablename__ = "item_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    item_id: Mapped[int] = mapped_column(
        ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    item: Mapped[Item] = relationship(back_populates="tag_rows")

    __table_args__ = (UniqueConstraint("item_id", "name", name="uix_item_tags_item_name"),)
