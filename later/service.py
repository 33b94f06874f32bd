"""
Item service: ingestion, editing, deletion and listing.

Ingestion resolves the submitted URL, then deduplicates on
(owner, resolved URL): a first submission creates an unread item, later
submissions only union their tags into it. Metadata captured on the first
successful resolution is never refreshed.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from .config import AppConfig
from .core.query import any_tag_query, build_query
from .core.types import FilterSpec, ItemEdit, ItemRecord, UrlMetadata, normalize_tags
from .errors import AccessForbidden, ItemNotFound, LaterError, OwnerNotFound
from .fetch.client import HttpClientConfig
from .fetch.resolver import UrlResolver
from .logging_utils import log_event
from .storage.database import create_db_engine, init_db, make_session_factory, session_scope
from .storage.models import Item, Owner
from .storage.repository import ItemRepository

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    def resolve(self, url: str) -> UrlMetadata: ...


def to_record(item: Item) -> ItemRecord:
    return ItemRecord(
        id=item.id,
        owner_id=item.owner_id,
        url=item.url,
        resolved_url=item.resolved_url,
        mime_type=item.mime_type,
        title=item.title,
        has_image=item.has_image,
        has_video=item.has_video,
        date_resolved=item.date_resolved,
        unread=item.unread,
        tags=frozenset(item.tags),
    )


def new_item(owner_id: int, metadata: UrlMetadata, tags: frozenset[str]) -> Item:
    item = Item(
        owner_id=owner_id,
        url=metadata.normal_url,
        resolved_url=metadata.resolved_url,
        mime_type=metadata.mime_type,
        title=metadata.title,
        has_image=metadata.has_image,
        has_video=metadata.has_video,
        date_resolved=metadata.date_resolved,
        unread=True,
    )
    item.add_tags(tags)
    return item


class ItemService:
    """Coordinates the resolver and the item store.

    Every public method runs in its own session scope: it commits when the
    method returns and rolls back when it raises.
    """

    def __init__(self, session_factory: sessionmaker[Session], resolver: Resolver):
        self._session_factory = session_factory
        self._resolver = resolver

    def register_owner(self, name: str, email: str) -> int:
        with session_scope(self._session_factory) as session:
            owner = ItemRepository(session).add_owner(Owner(name=name, email=email))
            log_event(logger, "Registered owner", owner_id=owner.id)
            return owner.id

    def add_item(self, owner_id: int, url: str, tags: Iterable[str] | None = None) -> ItemRecord:
        """Save ``url`` for ``owner_id``, or merge ``tags`` into the existing item.

        Raises:
            OwnerNotFound: The owner does not exist (checked before any request)
            ResolveError: Any resolver failure; nothing is persisted
        """
        wanted = normalize_tags(tags)
        with session_scope(self._session_factory) as session:
            if not ItemRepository(session).owner_exists(owner_id):
                raise OwnerNotFound(owner_id)

        try:
            metadata = self._resolver.resolve(url)
        except LaterError as exc:
            logger.warning("Failed to resolve %s for owner %s: %s", url, owner_id, exc)
            raise

        with session_scope(self._session_factory) as session:
            repo = ItemRepository(session)
            item = repo.find_by_owner_and_resolved_url(owner_id, metadata.resolved_url)
            if item is None:
                item = self._create(repo, owner_id, metadata, wanted)
                if item is not None:
                    log_event(
                        logger,
                        "Created item",
                        owner_id=owner_id,
                        item_id=item.id,
                        resolved_url=metadata.resolved_url,
                    )
                    return to_record(item)
                item = repo.find_by_owner_and_resolved_url(owner_id, metadata.resolved_url)
                if item is None:
                    raise OwnerNotFound(owner_id)

            if wanted and item.add_tags(wanted):
                repo.save(item)
                log_event(
                    logger,
                    "Merged tags into existing item",
                    owner_id=owner_id,
                    item_id=item.id,
                    tags=sorted(wanted),
                )
            return to_record(item)

    def _create(
        self,
        repo: ItemRepository,
        owner_id: int,
        metadata: UrlMetadata,
        tags: frozenset[str],
    ) -> Item | None:
        """Insert a new item; None when a concurrent writer got there first.

        The lookup-then-insert sequence is not atomic, so the unique
        (owner_id, resolved_url) constraint can fire here. The failed insert
        is rolled back and the caller falls through to the merge path.
        """
        try:
            return repo.add(new_item(owner_id, metadata, tags))
        except IntegrityError:
            repo.session.rollback()
            logger.info(
                "Item for owner %s and %s was created concurrently; merging instead",
                owner_id,
                metadata.resolved_url,
            )
            return None

    def edit_item(self, owner_id: int, edit: ItemEdit) -> None:
        """Apply a read-state overwrite and a tag replace-or-union.

        Raises:
            ItemNotFound: No item has ``edit.item_id``
            AccessForbidden: The item belongs to another owner
        """
        with session_scope(self._session_factory) as session:
            repo = ItemRepository(session)
            item = repo.get(edit.item_id)
            if item is None:
                raise ItemNotFound(edit.item_id)
            if item.owner_id != owner_id:
                logger.warning("Owner %s tried to edit item %s", owner_id, edit.item_id)
                raise AccessForbidden(owner_id, edit.item_id)

            if edit.unread is not None:
                item.unread = edit.unread
            if edit.replace_tags:
                item.replace_tags(edit.tags)
            else:
                item.add_tags(edit.tags)
            repo.save(item)

    def delete_item(self, owner_id: int, item_id: int) -> None:
        """Delete the item if it belongs to ``owner_id``; otherwise do nothing.

        A mismatch is not reported, so callers cannot probe for other
        owners' item ids.
        """
        with session_scope(self._session_factory) as session:
            deleted = ItemRepository(session).delete_by_owner_and_id(owner_id, item_id)
        logger.debug("Delete of item %s by owner %s removed %s row(s)", item_id, owner_id, deleted)

    def list_items(self, spec: FilterSpec) -> list[ItemRecord]:
        with session_scope(self._session_factory) as session:
            items = ItemRepository(session).find(build_query(spec))
            return [to_record(item) for item in items]

    def list_items_by_tag(self, owner_id: int, tags: Iterable[str]) -> list[ItemRecord]:
        wanted = normalize_tags(tags)
        if not wanted:
            return []
        with session_scope(self._session_factory) as session:
            items = ItemRepository(session).find(any_tag_query(owner_id, wanted))
            return [to_record(item) for item in items]


def build_service(cfg: AppConfig, transport=None) -> ItemService:  # noqa: ANN001
    """Wire an ItemService from configuration, creating tables if needed."""
    engine = create_db_engine(cfg.storage)
    init_db(engine)
    resolver = UrlResolver(HttpClientConfig.from_fetch_config(cfg.fetch), transport=transport)
    return ItemService(make_session_factory(engine), resolver)
