"""Shared fixtures: a fake web served through httpx.MockTransport and a SQLite-backed service."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
import pytest

from later.config import AppConfig
from later.service import build_service


@dataclass
class FakePage:
    status: int = 200
    content_type: str | None = "text/html; charset=utf-8"
    body: str = ""
    location: str | None = None


@dataclass
class FakeWeb:
    """In-memory web. Unknown URLs fail like an unresolvable host."""

    pages: dict[str, FakePage] = field(default_factory=dict)
    requests: list[tuple[str, str]] = field(default_factory=list)

    def add(self, url: str, **kwargs) -> None:
        self.pages[url] = FakePage(**kwargs)

    def redirect(self, url: str, target: str, status: int = 301) -> None:
        self.pages[url] = FakePage(status=status, content_type=None, location=target)

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append((request.method, url))
        page = self.pages.get(url)
        if page is None:
            raise httpx.ConnectError("Name or service not known", request=request)
        headers = {}
        if page.content_type is not None:
            headers["Content-Type"] = page.content_type
        if page.location is not None:
            headers["Location"] = page.location
        body = b"" if request.method == "HEAD" else page.body.encode("utf-8")
        return httpx.Response(page.status, headers=headers, content=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def web() -> FakeWeb:
    return FakeWeb()


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    cfg = AppConfig()
    cfg.storage.database_url = f"sqlite:///{tmp_path / 'later.db'}"
    return cfg


@pytest.fixture
def service(app_config, web):
    return build_service(app_config, transport=web.transport())


@pytest.fixture
def owner_id(service) -> int:
    return service.register_owner("Ada", "ada@example.com")
