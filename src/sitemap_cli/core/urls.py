"""URL helpers: absolute-URL validation, base-URL containment, public URLs."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

from sitemap_cli.core.errors import UrlValidationError


def validate_absolute_url(value: str) -> str:
    """Return *value* unchanged if it is an absolute URL, else raise ValueError."""
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"not an absolute URL: {value!r}")
    return value


def check_under_base(url: str, base_url: str) -> None:
    """Raise UrlValidationError unless *url* lives under *base_url*.

    Scheme and host must match (case-insensitively). The path must equal the
    base path or sit below it, so ``/blog`` contains ``/blog/post`` but not
    ``/blogger``.
    """
    parsed, base = urlparse(url), urlparse(base_url)
    base_path = base.path.rstrip("/")
    if not (
        parsed.scheme.lower() == base.scheme.lower()
        and parsed.netloc.lower() == base.netloc.lower()
        and (parsed.path.rstrip("/") == base_path or parsed.path.startswith(base_path + "/"))
    ):
        raise UrlValidationError(
            f"URL {url} is not under the base URL {base_url}"
        )


def public_url(base_url: str, file_name: str) -> str:
    """Resolve *file_name* against the directory named by *base_url*."""
    if not base_url.endswith("/"):
        base_url += "/"
    return urljoin(base_url, file_name)
