"""
Error taxonomy for the reading-list service.

Every failure raised by the resolver, the storage layer or the item
service derives from LaterError. Each class carries an HTTP-like
``status`` that outward surfaces (the CLI) use to pick an exit code.
"""

from __future__ import annotations


class LaterError(Exception):
    """Base class for all domain errors."""

    status: int = 500


class ResolveError(LaterError):
    """A URL could not be resolved into metadata."""

    status = 400

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class MalformedUrl(ResolveError):
    def __init__(self, url: str):
        super().__init__(f"The URL is malformed: {url}", url)


class UnknownStatusCode(ResolveError):
    status = 502

    def __init__(self, status_code: int, url: str | None = None):
        super().__init__(f"The server returned an unknown status code: {status_code}", url)
        self.status_code = status_code


class AccessDenied(ResolveError):
    status = 502

    def __init__(self, url: str):
        super().__init__(f"There is no access to the resource at the specified URL: {url}", url)
        self.status_code = 401


class UpstreamError(ResolveError):
    status = 502

    def __init__(self, status_code: int, url: str | None = None):
        super().__init__(
            f"Cannot get the data on the item because the server returned an error. "
            f"Response status: {status_code}",
            url,
        )
        self.status_code = status_code


class UnsupportedContentType(ResolveError):
    status = 415

    def __init__(self, content_type: str, url: str | None = None):
        super().__init__(
            f"The content type [ {content_type} ] at the specified URL is not supported.", url
        )
        self.content_type = content_type


class ConnectionFailure(ResolveError):
    status = 502

    def __init__(self, url: str, reason: str | None = None):
        message = f"Cannot retrieve data from the URL: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, url)


class InterruptedOperation(ResolveError):
    status = 500

    def __init__(self, url: str):
        super().__init__(
            f"Cannot get the metadata for url: {url} because the operation was interrupted.", url
        )


class OwnerNotFound(LaterError):
    status = 404

    def __init__(self, owner_id: int):
        super().__init__(f"Owner {owner_id} not found")
        self.owner_id = owner_id


class ItemNotFound(LaterError):
    status = 404

    def __init__(self, item_id: int):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class AccessForbidden(LaterError):
    status = 403

    def __init__(self, owner_id: int, item_id: int):
        super().__init__(f"Owner {owner_id} has no access to item {item_id}")
        self.owner_id = owner_id
        self.item_id = item_id


class InvalidFilter(LaterError):
    status = 400
