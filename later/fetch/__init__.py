"""
URL probing and metadata extraction.

This package handles the shared HTTP client, the per-content-type
extraction strategies and the resolver that ties them together.
"""

from .client import HttpClientConfig, build_client, send
from .extractors import Extractor, ImageExtractor, TextExtractor, VideoExtractor, build_extractors
from .resolver import UrlResolver, classify_content_type, validate_url

__all__ = [
    "HttpClientConfig",
    "build_client",
    "send",
    "Extractor",
    "ImageExtractor",
    "TextExtractor",
    "VideoExtractor",
    "build_extractors",
    "UrlResolver",
    "classify_content_type",
    "validate_url",
]
