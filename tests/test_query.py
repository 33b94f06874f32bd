"""Tests for filter/sort composition against a real SQLite store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from later.config import StorageConfig
from later.core.query import any_tag_query, build_query, content_type_condition, state_condition
from later.core.types import ContentType, FilterSpec, SortOrder, State
from later.errors import InvalidFilter
from later.storage import (
    Item,
    ItemRepository,
    Owner,
    create_db_engine,
    init_db,
    make_session_factory,
    session_scope,
)

BASE = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def factory(tmp_path):
    engine = create_db_engine(StorageConfig(database_url=f"sqlite:///{tmp_path / 'q.db'}"))
    init_db(engine)
    return make_session_factory(engine)


def _item(owner_id, n, mime_type="text", unread=True, tags=(), title=None):
    item = Item(
        owner_id=owner_id,
        url=f"https://a.example/{n}",
        resolved_url=f"https://a.example/{n}",
        mime_type=mime_type,
        title=title if title is not None else f"Item {n}",
        has_image=mime_type == "image",
        has_video=mime_type == "video",
        date_resolved=BASE + timedelta(days=n),
        unread=unread,
    )
    item.add_tags(set(tags))
    return item


@pytest.fixture
def seeded(factory):
    with session_scope(factory) as session:
        repo = ItemRepository(session)
        me = repo.add_owner(Owner(name="Me", email="me@example.com")).id
        other = repo.add_owner(Owner(name="Other", email="other@example.com")).id
        for item in [
            _item(me, 1, "text", unread=True, tags={"python"}, title="Charlie"),
            _item(me, 2, "image", unread=True, tags={"cats"}, title="Alpha"),
            _item(me, 3, "text", unread=False, tags={"python", "web"}, title="Bravo"),
            _item(me, 4, "video", unread=True, title="Delta"),
            _item(me, 5, "TEXT", unread=True, tags={"web"}, title="Echo"),
            _item(other, 6, "text", unread=True, tags={"python"}, title="Foxtrot"),
        ]:
            repo.add(item)
    return factory, me, other


def _titles(factory, spec):
    with session_scope(factory) as session:
        return [item.title for item in ItemRepository(session).find(build_query(spec))]


def test_unread_articles_newest_first(seeded):
    factory, me, _ = seeded
    spec = FilterSpec(owner_id=me, state=State.UNREAD, content_type=ContentType.ARTICLE)

    assert _titles(factory, spec) == ["Echo", "Charlie"]


def test_limit_truncates_after_sorting(seeded):
    factory, me, _ = seeded
    spec = FilterSpec(owner_id=me, sort=SortOrder.NEWEST, limit=2)

    assert _titles(factory, spec) == ["Echo", "Delta"]


def test_oldest_and_title_orders(seeded):
    factory, me, _ = seeded

    assert _titles(factory, FilterSpec(owner_id=me, sort=SortOrder.OLDEST)) == [
        "Charlie",
        "Alpha",
        "Bravo",
        "Delta",
        "Echo",
    ]
    assert _titles(factory, FilterSpec(owner_id=me, sort=SortOrder.TITLE)) == [
        "Alpha",
        "Bravo",
        "Charlie",
        "Delta",
        "Echo",
    ]


def test_read_state(seeded):
    factory, me, _ = seeded

    assert _titles(factory, FilterSpec(owner_id=me, state=State.READ)) == ["Bravo"]


def test_image_and_video_types(seeded):
    factory, me, _ = seeded

    assert _titles(factory, FilterSpec(owner_id=me, content_type=ContentType.IMAGE)) == ["Alpha"]
    assert _titles(factory, FilterSpec(owner_id=me, content_type=ContentType.VIDEO)) == ["Delta"]


def test_tags_use_or_semantics_and_combine_with_other_axes(seeded):
    factory, me, _ = seeded

    any_tag = FilterSpec(owner_id=me, tags=frozenset({"cats", "web"}), sort=SortOrder.TITLE)
    assert _titles(factory, any_tag) == ["Alpha", "Bravo", "Echo"]

    unread_web = FilterSpec(owner_id=me, state=State.UNREAD, tags=frozenset({"web"}))
    assert _titles(factory, unread_web) == ["Echo"]


def test_owner_axis_is_always_applied(seeded):
    factory, _, other = seeded

    assert _titles(factory, FilterSpec(owner_id=other)) == ["Foxtrot"]


def test_any_tag_query_is_unlimited_and_owner_scoped(seeded):
    factory, me, _ = seeded
    with session_scope(factory) as session:
        items = ItemRepository(session).find(any_tag_query(me, {"python"}))
        titles = sorted(item.title for item in items)

    assert titles == ["Bravo", "Charlie"]


def test_all_axes_contribute_no_condition():
    assert state_condition(State.ALL) is None
    assert content_type_condition(ContentType.ALL) is None


def test_filter_spec_parses_names_case_insensitively():
    spec = FilterSpec(owner_id=1, state="Unread", content_type="article", sort="TITLE")

    assert spec.state is State.UNREAD
    assert spec.content_type is ContentType.ARTICLE
    assert spec.sort is SortOrder.TITLE


def test_filter_spec_rejects_unknown_values_and_bad_limit():
    with pytest.raises(InvalidFilter):
        FilterSpec(owner_id=1, state="archived")
    with pytest.raises(InvalidFilter):
        FilterSpec(owner_id=1, limit=0)
