"""
URL resolution: probe, classify, extract.

UrlResolver.resolve() turns a submitted URL into UrlMetadata:
1. Validate the URL syntax (no network call on failure)
2. Probe it with HEAD, following redirects; the final URL is the resolved URL
3. Classify the declared Content-Type into text, image or video
4. Run the matching extractor against the resolved URL
5. Stamp the result with the original URL, resolved URL, label and time

No state is kept between calls.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Callable, Mapping

import httpx

from ..core.types import ContentClass, UrlMetadata
from ..errors import MalformedUrl, UnsupportedContentType
from ..logging_utils import log_event
from .client import HttpClientConfig, build_client, send
from .extractors import Extractor, build_extractors

logger = logging.getLogger(__name__)

WILDCARD_CONTENT_TYPE = "*/*"


class UrlResolver:
    """Resolves URLs into metadata using a shared, immutable client setup.

    Args:
        config: Outbound HTTP settings
        transport: Optional httpx transport override, mainly for tests
        extractors: Optional strategy table replacing the default one
        clock: Returns the resolution timestamp; defaults to UTC now
    """

    def __init__(
        self,
        config: HttpClientConfig,
        transport: httpx.BaseTransport | None = None,
        extractors: Mapping[ContentClass, Extractor] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.config = config
        self._client = build_client(config, transport=transport)
        self._extractors = dict(extractors) if extractors else build_extractors(self._client)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def resolve(self, url: str) -> UrlMetadata:
        target = validate_url(url)

        response = send(self._client, "HEAD", target)
        resolved_url = str(response.url)
        declared = response.headers.get("content-type") or WILDCARD_CONTENT_TYPE
        content_class = classify_content_type(declared)
        if content_class is None:
            raise UnsupportedContentType(media_type(declared), resolved_url)

        partial = self._extractors[content_class].extract(resolved_url)
        metadata = UrlMetadata(
            normal_url=url,
            resolved_url=resolved_url,
            mime_type=content_class.value,
            title=partial.title,
            has_image=partial.has_image,
            has_video=partial.has_video,
            date_resolved=self._clock(),
        )
        log_event(
            logger,
            "Resolved URL",
            url=url,
            resolved_url=resolved_url,
            mime_type=metadata.mime_type,
        )
        return metadata

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> UrlResolver:
        return self

    def __exit__(self, *exc_info) -> None:  # noqa: ANN002
        self.close()


def validate_url(url: str) -> str:
    """Return ``url`` stripped if it is an absolute http(s) URL with a host."""
    candidate = (url or "").strip()
    if not candidate:
        raise MalformedUrl(url)
    try:
        parsed = httpx.URL(candidate)
    except (httpx.InvalidURL, TypeError, ValueError):
        raise MalformedUrl(url) from None
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise MalformedUrl(url)
    return candidate


def media_type(content_type: str) -> str:
    """Media type without parameters, lower-cased ("text/html; charset=utf-8" -> "text/html")."""
    return content_type.split(";", 1)[0].strip().lower()


def classify_content_type(content_type: str) -> ContentClass | None:
    """Map a declared Content-Type to a content class.

    A wildcard type is compatible with text/*, so it classifies as text.
    Returns None for anything unsupported.
    """
    mtype = media_type(content_type)
    if mtype in ("", "*", WILDCARD_CONTENT_TYPE):
        return ContentClass.TEXT
    main = mtype.split("/", 1)[0]
    if main == "*":
        return ContentClass.TEXT
    for content_class in ContentClass:
        if main == content_class.value:
            return content_class
    return None
