"""
Item persistence.

This package holds the SQLAlchemy models, engine/session helpers and the
repository the item service talks to.
"""

from .database import Base, create_db_engine, init_db, make_session_factory, session_scope
from .models import Item, ItemTag, Owner
from .repository import ItemRepository

__all__ = [
    "Base",
    "create_db_engine",
    "init_db",
    "make_session_factory",
    "session_scope",
    "Item",
    "ItemTag",
    "Owner",
    "ItemRepository",
]
