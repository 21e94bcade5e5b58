"""Tests for per-variant XML renderers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from sitemap_cli.core.dates import W3CDateFormat
from sitemap_cli.core.models import (
    MAX_NEWS_URLS_PER_SITEMAP,
    MAX_URLS_PER_SITEMAP,
    Image,
    ImageUrl,
    NewsUrl,
    Variant,
    WebUrl,
)
from sitemap_cli.core.renderers import (
    IMAGE_NAMESPACE,
    NEWS_NAMESPACE,
    ImageRenderer,
    NewsRenderer,
    WebRenderer,
    render_tag,
    renderer_for,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
BASE = "  "
FMT = W3CDateFormat()


def _news(**overrides) -> NewsUrl:
    kwargs = {
        "url": "http://www.example.com/index.html",
        "title": "Beispieltitel",
        "publication_date": EPOCH,
        "publication_name": "Beispiel",
        "publication_language": "de",
    }
    kwargs.update(overrides)
    return NewsUrl(**kwargs)


class TestRenderTag:
    def test_renders_value(self) -> None:
        assert render_tag("loc", "http://a.com/", 2) == "    <loc>http://a.com/</loc>\n"

    def test_omits_none_and_empty(self) -> None:
        assert render_tag("changefreq", None, 2) == ""
        assert render_tag("news:keywords", "", 3) == ""

    def test_zero_is_not_empty(self) -> None:
        assert render_tag("priority", 0.0, 2) == "    <priority>0.0</priority>\n"

    def test_escapes_markup(self) -> None:
        assert render_tag("t", "Tom & Jerry <3>", 0) == "<t>Tom &amp; Jerry &lt;3&gt;</t>\n"


class TestWebRenderer:
    def test_mandatory_only(self) -> None:
        """All optional fields null: only <loc>, no empty tags."""
        out = WebRenderer().render(WebUrl(url="http://example.com/a"), FMT)
        assert out == (
            BASE + "<url>\n"
            + BASE + BASE + "<loc>http://example.com/a</loc>\n"
            + BASE + "</url>\n"
        )

    def test_all_fields_in_schema_order(self) -> None:
        record = WebUrl(
            url="http://example.com/a",
            lastmod=EPOCH,
            changefreq="daily",
            priority=0.5,
        )
        out = WebRenderer().render(record, FMT)
        assert out == (
            BASE + "<url>\n"
            + BASE + BASE + "<loc>http://example.com/a</loc>\n"
            + BASE + BASE + "<lastmod>1970-01-01T00:00:00Z</lastmod>\n"
            + BASE + BASE + "<changefreq>daily</changefreq>\n"
            + BASE + BASE + "<priority>0.5</priority>\n"
            + BASE + "</url>\n"
        )

    def test_priority_one_renders_as_float(self) -> None:
        out = WebRenderer().render(WebUrl(url="http://example.com/a", priority=1), FMT)
        assert "<priority>1.0</priority>" in out

    def test_computed_priority_rounded(self) -> None:
        out = WebRenderer().render(WebUrl(url="http://example.com/a", priority=0.1 + 0.2), FMT)
        assert "<priority>0.3</priority>" in out

    def test_priority_keeps_two_decimals(self) -> None:
        out = WebRenderer().render(WebUrl(url="http://example.com/a", priority=0.25), FMT)
        assert "<priority>0.25</priority>" in out

    def test_query_string_ampersand_escaped(self) -> None:
        out = WebRenderer().render(WebUrl(url="http://example.com/?a=1&b=2"), FMT)
        assert "<loc>http://example.com/?a=1&amp;b=2</loc>" in out

    def test_rendering_is_idempotent(self) -> None:
        record = WebUrl(url="http://example.com/a", lastmod=EPOCH, priority=0.3)
        renderer = WebRenderer()
        assert renderer.render(record, FMT) == renderer.render(record, FMT)

    def test_no_namespaces(self) -> None:
        assert WebRenderer().namespaces_for(WebUrl(url="http://example.com/a")) == ()


class TestNewsRenderer:
    def test_minimal_news_block(self) -> None:
        out = NewsRenderer().render(_news(), FMT)
        assert out == (
            BASE + "<url>\n"
            + BASE + BASE + "<loc>http://www.example.com/index.html</loc>\n"
            + BASE + BASE + "<news:news>\n"
            + BASE * 3 + "<news:publication>\n"
            + BASE * 4 + "<news:name>Beispiel</news:name>\n"
            + BASE * 4 + "<news:language>de</news:language>\n"
            + BASE * 3 + "</news:publication>\n"
            + BASE * 3 + "<news:publication_date>1970-01-01T00:00:00Z</news:publication_date>\n"
            + BASE * 3 + "<news:title>Beispieltitel</news:title>\n"
            + BASE + BASE + "</news:news>\n"
            + BASE + "</url>\n"
        )

    def test_minimal_news_omits_optional_elements(self) -> None:
        out = NewsRenderer().render(_news(title="T", publication_name="P"), FMT)
        for tag in ("news:access", "news:genres", "news:keywords", "news:stock_tickers"):
            assert f"<{tag}>" not in out

    def test_all_fields_in_fixed_order(self) -> None:
        record = _news(
            access="Subscription",
            genres=["PressRelease", "Blog"],
            keywords=["Klaatu", "Barrata", "Nicto"],
            stock_tickers=["NASDAQ:A", "NASDAQ:B"],
        )
        out = NewsRenderer().render(record, FMT)
        assert out == (
            BASE + "<url>\n"
            + BASE + BASE + "<loc>http://www.example.com/index.html</loc>\n"
            + BASE + BASE + "<news:news>\n"
            + BASE * 3 + "<news:publication>\n"
            + BASE * 4 + "<news:name>Beispiel</news:name>\n"
            + BASE * 4 + "<news:language>de</news:language>\n"
            + BASE * 3 + "</news:publication>\n"
            + BASE * 3 + "<news:access>Subscription</news:access>\n"
            + BASE * 3 + "<news:genres>PressRelease,Blog</news:genres>\n"
            + BASE * 3 + "<news:publication_date>1970-01-01T00:00:00Z</news:publication_date>\n"
            + BASE * 3 + "<news:title>Beispieltitel</news:title>\n"
            + BASE * 3 + "<news:keywords>Klaatu, Barrata, Nicto</news:keywords>\n"
            + BASE * 3 + "<news:stock_tickers>NASDAQ:A,NASDAQ:B</news:stock_tickers>\n"
            + BASE + BASE + "</news:news>\n"
            + BASE + "</url>\n"
        )

    def test_preformatted_publication_date_verbatim(self) -> None:
        out = NewsRenderer().render(_news(publication_date="2008-12-23"), FMT)
        assert "<news:publication_date>2008-12-23</news:publication_date>" in out

    def test_title_escaped(self) -> None:
        out = NewsRenderer().render(_news(title="Fish & Chips"), FMT)
        assert "<news:title>Fish &amp; Chips</news:title>" in out

    def test_standard_elements_precede_news_block(self) -> None:
        out = NewsRenderer().render(_news(lastmod=EPOCH, priority=0.7), FMT)
        assert out.index("<lastmod>") < out.index("<priority>") < out.index("<news:news>")

    def test_declares_news_namespace(self) -> None:
        assert NewsRenderer().namespaces_for(_news()) == (NEWS_NAMESPACE,)


class TestImageRenderer:
    def test_image_block(self) -> None:
        record = ImageUrl(
            url="http://example.com/gallery",
            images=[
                Image(loc="http://example.com/a.jpg", caption="A cat", title="Cat"),
                Image(loc="http://example.com/b.jpg"),
            ],
        )
        out = ImageRenderer().render(record, FMT)
        assert out == (
            BASE + "<url>\n"
            + BASE + BASE + "<loc>http://example.com/gallery</loc>\n"
            + BASE + BASE + "<image:image>\n"
            + BASE * 3 + "<image:loc>http://example.com/a.jpg</image:loc>\n"
            + BASE * 3 + "<image:caption>A cat</image:caption>\n"
            + BASE * 3 + "<image:title>Cat</image:title>\n"
            + BASE + BASE + "</image:image>\n"
            + BASE + BASE + "<image:image>\n"
            + BASE * 3 + "<image:loc>http://example.com/b.jpg</image:loc>\n"
            + BASE + BASE + "</image:image>\n"
            + BASE + "</url>\n"
        )

    def test_namespace_only_when_images_present(self) -> None:
        renderer = ImageRenderer()
        bare = ImageUrl(url="http://example.com/page")
        rich = ImageUrl(url="http://example.com/page", images=[Image(loc="http://example.com/a.jpg")])
        assert renderer.namespaces_for(bare) == ()
        assert renderer.namespaces_for(rich) == (IMAGE_NAMESPACE,)


@pytest.mark.parametrize(
    ("variant", "cls", "ceiling"),
    [
        (Variant.web, WebRenderer, MAX_URLS_PER_SITEMAP),
        (Variant.news, NewsRenderer, MAX_NEWS_URLS_PER_SITEMAP),
        (Variant.image, ImageRenderer, MAX_URLS_PER_SITEMAP),
    ],
)
def test_renderer_for_variant(variant: Variant, cls: type, ceiling: int) -> None:
    renderer = renderer_for(variant)
    assert isinstance(renderer, cls)
    assert renderer.max_urls == ceiling
    assert renderer.variant is variant


def test_renderer_for_accepts_string_tag() -> None:
    assert isinstance(renderer_for("news"), NewsRenderer)
