"""
Later - a personal reading list.

This package saves URLs for an owner: each URL is probed, classified as
text, image or video, described with a title and media flags, and
deduplicated on its resolved address. Saved items are listed back under
composable filters (read state, content type, tags, sort order).

Main entry point is the CLI via the `later` command.

Example:
    $ later add 1 https://example.com/article --tag python
"""

__all__ = ["__version__", "ItemService", "UrlResolver", "FilterSpec", "ItemEdit", "ItemRecord"]
__version__ = "0.1.0"

from .core.types import FilterSpec, ItemEdit, ItemRecord
from .fetch.resolver import UrlResolver
from .service import ItemService
