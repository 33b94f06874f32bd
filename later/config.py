"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP probing and fetching settings
- StorageConfig: Database connection settings
- ListingConfig: Default filter axes for listing items
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


DATABASE_URL_ENV = "LATER_DATABASE_URL"


@dataclass
class FetchConfig:
    """Configuration for URL resolution.

    Attributes:
        timeout_seconds: Connect/read timeout applied to every request
        max_redirects: Maximum number of redirects followed before failing
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    timeout_seconds: float = 120.0
    max_redirects: int = 20
    trust_env: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )


@dataclass
class StorageConfig:
    """Configuration for the item store.

    Attributes:
        database_url: SQLAlchemy database URL
        echo: Whether to log emitted SQL
    """

    database_url: str = "sqlite:///later.db"
    echo: bool = False


@dataclass
class ListingConfig:
    """Default filter axes used when a caller leaves them out.

    Attributes:
        state: "all", "unread" or "read"
        content_type: "all", "article", "image" or "video"
        sort: "newest", "oldest" or "title"
        limit: Maximum number of items returned
    """

    state: str = "unread"
    content_type: str = "all"
    sort: str = "newest"
    limit: int = 10


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        log_dir: Directory the log file is written to
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "later.jsonl"
    log_dir: str = "logs"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    listing: ListingConfig = field(default_factory=ListingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults.

    The database URL may be overridden with the LATER_DATABASE_URL
    environment variable.
    """
    raw: dict[str, Any] = {}
    if path:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    cfg = _merge_config(AppConfig(), raw)
    env_url = os.getenv(DATABASE_URL_ENV)
    if env_url:
        cfg.storage.database_url = env_url
    return cfg


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "fetch": {
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "max_redirects": cfg.fetch.max_redirects,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
        },
        "storage": {
            "database_url": cfg.storage.database_url,
            "echo": cfg.storage.echo,
        },
        "listing": {
            "state": cfg.listing.state,
            "content_type": cfg.listing.content_type,
            "sort": cfg.listing.sort,
            "limit": cfg.listing.limit,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "log_dir": cfg.logging.log_dir,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        fetch=FetchConfig(**data["fetch"]),
        storage=StorageConfig(**data["storage"]),
        listing=ListingConfig(**data["listing"]),
        logging=LoggingConfig(**data["logging"]),
    )
