from __future__ import annotations

from pathlib import PurePosixPath
from typing import Protocol
from urllib.parse import unquote, urlsplit

from bs4 import BeautifulSoup
import httpx

from ..core.types import ContentClass, PartialMetadata
from .client import send


class Extractor(Protocol):
    def extract(self, url: str) -> PartialMetadata: ...


class TextExtractor:
    """Fetches the page and reads its title and embedded media."""

    def __init__(self, client: httpx.Client):
        self._client = client

    def extract(self, url: str) -> PartialMetadata:
        response = send(self._client, "GET", url)
        return parse_markup(response.text)


class ImageExtractor:
    def extract(self, url: str) -> PartialMetadata:
        return PartialMetadata(title=file_name(url), has_image=True, has_video=False)


class VideoExtractor:
    def extract(self, url: str) -> PartialMetadata:
        return PartialMetadata(title=file_name(url), has_image=False, has_video=True)


def build_extractors(client: httpx.Client) -> dict[ContentClass, Extractor]:
    return {
        ContentClass.TEXT: TextExtractor(client),
        ContentClass.IMAGE: ImageExtractor(),
        ContentClass.VIDEO: VideoExtractor(),
    }


def parse_markup(html: str) -> PartialMetadata:
    soup = BeautifulSoup(html, "html.parser")
    title = soup.title.get_text(strip=True) if soup.title else ""
    return PartialMetadata(
        title=title,
        has_image=soup.find("img") is not None,
        has_video=soup.find("video") is not None,
    )


def file_name(url: str) -> str:
    """Last non-empty path segment of ``url``, percent-decoded."""
    path = unquote(urlsplit(url).path)
    return PurePosixPath(path).name
