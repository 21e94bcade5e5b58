"""Exception hierarchy for sitemap generation."""

from __future__ import annotations


class SitemapError(Exception):
    """Base class for every error raised by sitemap_cli."""


class ConfigError(SitemapError, ValueError):
    """Generator-wide settings are invalid (raised at construction)."""


class UrlValidationError(SitemapError, ValueError):
    """A submitted record cannot enter a sitemap."""


class SitemapIOError(SitemapError, OSError):
    """A sitemap or index file could not be opened or written."""


class SessionStateError(SitemapError, RuntimeError):
    """The generator was used after its session was finalized."""


class SitemapOverflowError(SitemapError):
    """More entries were submitted than the configured output can hold."""
