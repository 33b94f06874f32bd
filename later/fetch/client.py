"""
Shared HTTP client and response classification.

The client is built once from an immutable HttpClientConfig and reused for
every probe and fetch. ``send`` turns transport failures and error
statuses into the resolver's error taxonomy; nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

import httpx

from ..config import FetchConfig
from ..errors import (
    AccessDenied,
    ConnectionFailure,
    InterruptedOperation,
    UnknownStatusCode,
    UpstreamError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpClientConfig:
    """Outbound HTTP settings.

    Attributes:
        timeout_seconds: Connect/read timeout for each request
        max_redirects: Redirects followed before the request fails
        user_agent: HTTP User-Agent header string
        trust_env: Whether to respect system proxy settings
    """

    timeout_seconds: float = 120.0
    max_redirects: int = 20
    user_agent: str = "later/0.1"
    trust_env: bool = True

    @classmethod
    def from_fetch_config(cls, cfg: FetchConfig) -> HttpClientConfig:
        return cls(
            timeout_seconds=cfg.timeout_seconds,
            max_redirects=cfg.max_redirects,
            user_agent=cfg.user_agent,
            trust_env=cfg.trust_env,
        )


def build_client(
    config: HttpClientConfig,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create a client that always follows redirects.

    Args:
        config: Timeout, redirect and header settings
        transport: Optional transport override (e.g. httpx.MockTransport in tests)
    """
    return httpx.Client(
        timeout=config.timeout_seconds,
        headers={"User-Agent": config.user_agent},
        follow_redirects=True,
        max_redirects=config.max_redirects,
        trust_env=config.trust_env,
        transport=transport,
    )


def send(client: httpx.Client, method: str, url: str) -> httpx.Response:
    """Send one request and classify the outcome.

    Returns the final response (after redirects) for 1xx/2xx/3xx statuses.

    Raises:
        InterruptedOperation: The call was interrupted mid-flight
        ConnectionFailure: DNS, connect, reset, timeout or redirect-limit failure
        UnknownStatusCode: Status outside the known HTTP status codes
        AccessDenied: Status 401
        UpstreamError: Any other 4xx/5xx status
    """
    try:
        response = client.request(method, url)
    except InterruptedError as exc:
        raise InterruptedOperation(url) from exc
    except httpx.RequestError as exc:
        if _is_interrupted(exc):
            raise InterruptedOperation(url) from exc
        logger.debug("Request %s %s failed: %s", method, url, exc)
        raise ConnectionFailure(url, f"{type(exc).__name__}: {exc}") from exc

    check_status(response.status_code, str(response.url))
    return response


def check_status(status_code: int, url: str) -> None:
    try:
        httpx.codes(status_code)
    except ValueError:
        raise UnknownStatusCode(status_code, url) from None
    if status_code == httpx.codes.UNAUTHORIZED:
        raise AccessDenied(url)
    if httpx.codes.is_error(status_code):
        raise UpstreamError(status_code, url)


def _is_interrupted(exc: BaseException) -> bool:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, InterruptedError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False
