"""Pydantic models for sitemap records, generator configuration, and results."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sitemap_cli.core.urls import validate_absolute_url

# ── Protocol ceilings ────────────────────────────────────────────────────────

MAX_URLS_PER_SITEMAP: int = 50_000
MAX_NEWS_URLS_PER_SITEMAP: int = 1_000
MAX_SITEMAP_BYTES: int = 10 * 1024 * 1024
MAX_SITEMAPS_PER_INDEX: int = 50_000
MAX_IMAGES_PER_URL: int = 1_000
MAX_STOCK_TICKERS: int = 5


class Variant(str, Enum):
    """URL record flavors, each with its own renderer."""

    web = "web"
    news = "news"
    image = "image"


class ChangeFreq(str, Enum):
    """How frequently the page is likely to change."""

    always = "always"
    hourly = "hourly"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"
    never = "never"


class NewsAccess(str, Enum):
    """Access restriction for a Google News article."""

    registration = "Registration"
    subscription = "Subscription"


class DatePrecision(str, Enum):
    """W3C Datetime patterns, from coarsest to finest, plus ``auto``."""

    year = "year"
    month = "month"
    day = "day"
    minute = "minute"
    second = "second"
    millisecond = "millisecond"
    auto = "auto"


class OutputFormat(str, Enum):
    """CLI report formats."""

    table = "table"
    json = "json"
    csv = "csv"


def _absolute(value: str) -> str:
    return validate_absolute_url(value)


def _plain_file_name(value: str) -> str:
    if not value or "/" in value or "\\" in value:
        raise ValueError(f"must be a plain file name: {value!r}")
    return value


# ── URL records ──────────────────────────────────────────────────────────────


class WebUrl(BaseModel):
    """One plain sitemap entry."""

    model_config = ConfigDict(frozen=True)

    variant: ClassVar[Variant] = Variant.web

    url: str = Field(description="Absolute URL of the page")
    lastmod: datetime | None = Field(default=None, description="Last modification time")
    changefreq: ChangeFreq | None = None
    priority: float | None = Field(default=None, ge=0.0, le=1.0)

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        return _absolute(v)


class NewsUrl(WebUrl):
    """A Google News sitemap entry.

    ``title``, ``publication_date``, ``publication_name`` and
    ``publication_language`` are mandatory; construction fails when one is missing or empty.
    """

    variant: ClassVar[Variant] = Variant.news

    title: str = Field(min_length=1)
    publication_date: datetime | str = Field(
        description="Datetime, or a string already in W3C format"
    )
    publication_name: str = Field(min_length=1)
    publication_language: str = Field(min_length=1)
    access: NewsAccess | None = None
    genres: tuple[str, ...] = ()
    keywords: str | None = None
    stock_tickers: tuple[str, ...] = Field(default=(), max_length=MAX_STOCK_TICKERS)

    @field_validator("publication_date")
    @classmethod
    def check_publication_date(cls, v: datetime | str) -> datetime | str:
        if isinstance(v, str) and not v.strip():
            raise ValueError("publication_date must not be empty")
        return v

    @field_validator("keywords", mode="before")
    @classmethod
    def join_keywords(cls, v: object) -> object:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, Iterable):
            return ", ".join(str(k) for k in v)
        return v


class Image(BaseModel):
    """One ``<image:image>`` entry attached to a page."""

    model_config = ConfigDict(frozen=True)

    loc: str
    caption: str | None = None
    geo_location: str | None = None
    title: str | None = None
    license: str | None = None

    @field_validator("loc", "license")
    @classmethod
    def check_url(cls, v: str | None) -> str | None:
        return v if v is None else _absolute(v)


class ImageUrl(WebUrl):
    """A sitemap entry carrying Google image-sitemap extensions."""

    variant: ClassVar[Variant] = Variant.image

    images: tuple[Image, ...] = Field(default=(), max_length=MAX_IMAGES_PER_URL)


# ── Generator configuration ──────────────────────────────────────────────────


class GeneratorConfig(BaseModel):
    """Settings for one sitemap generator session."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(description="Every entry must fall under this URL")
    output_dir: Path = Field(description="Directory the sitemap files are written to")
    max_urls_per_file: int | None = Field(
        default=None, gt=0, description="Defaults to the variant's protocol ceiling"
    )
    max_bytes_per_file: int = Field(default=MAX_SITEMAP_BYTES, gt=0)
    file_name_prefix: str = "sitemap"
    date_precision: DatePrecision = DatePrecision.second
    auto_flush: bool = Field(
        default=True, description="Split into numbered files when a sitemap fills up"
    )
    validate_urls: bool = Field(
        default=True, description="Reject entries outside base_url"
    )
    write_index: bool = True
    index_file_name: str = "sitemap_index.xml"
    index_lastmod: bool = True
    sitemap_index_url: str | None = Field(
        default=None, description="Public URL of the index; derived from base_url if unset"
    )

    @field_validator("base_url", "sitemap_index_url")
    @classmethod
    def check_url(cls, v: str | None) -> str | None:
        return v if v is None else _absolute(v)

    @field_validator("file_name_prefix", "index_file_name")
    @classmethod
    def check_file_name(cls, v: str) -> str:
        return _plain_file_name(v)


# ── Results ──────────────────────────────────────────────────────────────────


class WrittenFile(BaseModel):
    """One sitemap file produced during a session."""

    model_config = ConfigDict(frozen=True)

    sequence_number: int
    path: Path
    public_url: str
    lastmod: datetime
    url_count: int = 0
    byte_size: int = 0


class IndexFile(BaseModel):
    """The sitemap index written when a session produced several files."""

    model_config = ConfigDict(frozen=True)

    path: Path
    public_url: str
    sitemap_count: int = 0
