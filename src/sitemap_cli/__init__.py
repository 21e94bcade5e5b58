"""sitemap-cli: sitemaps.org sitemap and sitemap-index generation."""

from sitemap_cli.core.errors import (
    ConfigError,
    SessionStateError,
    SitemapError,
    SitemapIOError,
    SitemapOverflowError,
    UrlValidationError,
)
from sitemap_cli.core.generator import (
    SitemapGenerator,
    generator_for,
    image_sitemap_generator,
    news_sitemap_generator,
    web_sitemap_generator,
)
from sitemap_cli.core.models import (
    ChangeFreq,
    DatePrecision,
    GeneratorConfig,
    Image,
    ImageUrl,
    IndexFile,
    NewsAccess,
    NewsUrl,
    Variant,
    WebUrl,
    WrittenFile,
)

__version__ = "0.1.0"

__all__ = [
    "ChangeFreq",
    "ConfigError",
    "DatePrecision",
    "GeneratorConfig",
    "Image",
    "ImageUrl",
    "IndexFile",
    "NewsAccess",
    "NewsUrl",
    "SessionStateError",
    "SitemapError",
    "SitemapGenerator",
    "SitemapIOError",
    "SitemapOverflowError",
    "UrlValidationError",
    "Variant",
    "WebUrl",
    "WrittenFile",
    "generator_for",
    "image_sitemap_generator",
    "news_sitemap_generator",
    "web_sitemap_generator",
]
