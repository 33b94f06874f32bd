"""Tests for the per-content-type extraction strategies."""

from __future__ import annotations

import httpx

from later.core.types import ContentClass
from later.fetch.extractors import (
    ImageExtractor,
    TextExtractor,
    VideoExtractor,
    build_extractors,
    file_name,
    parse_markup,
)


def test_parse_markup_detects_video_without_image():
    meta = parse_markup("<html><title>Clip</title><body><video src='a.mp4'></video></body></html>")

    assert meta.title == "Clip"
    assert meta.has_video is True
    assert meta.has_image is False


def test_parse_markup_without_title_gives_empty_title():
    meta = parse_markup("<p>No head here</p>")

    assert meta.title == ""
    assert meta.has_image is False
    assert meta.has_video is False


def test_file_name_uses_last_segment():
    assert file_name("https://a.example/a/b/photo.jpg?size=large") == "photo.jpg"
    assert file_name("https://a.example/a/b/") == "b"
    assert file_name("https://a.example/") == ""


def test_media_extractors_set_flags():
    image = ImageExtractor().extract("https://a.example/x.gif")
    video = VideoExtractor().extract("https://a.example/y.webm")

    assert (image.title, image.has_image, image.has_video) == ("x.gif", True, False)
    assert (video.title, video.has_image, video.has_video) == ("y.webm", False, True)


def test_text_extractor_gets_page():
    seen = []

    def handler(request):
        seen.append(request.method)
        return httpx.Response(200, text="<title>Doc</title><img src='a.png'>")

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        meta = TextExtractor(client).extract("https://a.example/doc")

    assert seen == ["GET"]
    assert meta.title == "Doc"
    assert meta.has_image is True


def test_build_extractors_covers_every_class():
    with httpx.Client() as client:
        extractors = build_extractors(client)

    assert set(extractors) == set(ContentClass)
