"""Record loader: reads sitemap entries from .txt or .csv files."""

from __future__ import annotations

import csv
from pathlib import Path

from pydantic import ValidationError

from sitemap_cli.core.errors import UrlValidationError
from sitemap_cli.core.models import Image, ImageUrl, NewsUrl, Variant, WebUrl

MULTI_VALUE_SEPARATOR = "|"

_RECORD_TYPES: dict[Variant, type[WebUrl]] = {
    Variant.web: WebUrl,
    Variant.news: NewsUrl,
    Variant.image: ImageUrl,
}
_MULTI_VALUE_COLUMNS = {"genres", "stock_tickers", "images"}


def _split(value: str) -> list[str]:
    return [v.strip() for v in value.split(MULTI_VALUE_SEPARATOR) if v.strip()]


def _row_to_record(row: dict[str, str], variant: Variant) -> WebUrl:
    fields: dict[str, object] = {}
    for key, raw in row.items():
        if key is None:
            continue
        key = key.strip().lower()
        value = (raw or "").strip()
        if not value:
            continue
        if key in _MULTI_VALUE_COLUMNS:
            items = _split(value)
            fields[key] = [Image(loc=i) for i in items] if key == "images" else items
        else:
            fields[key] = value
    return _RECORD_TYPES[variant](**fields)


def _load_txt(path: Path) -> list[WebUrl]:
    records: list[WebUrl] = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            records.append(WebUrl(url=line))
        except ValidationError as exc:
            raise UrlValidationError(f"{path}:{lineno}: invalid URL {line!r}") from exc
    return records


def _load_csv(path: Path, variant: Variant) -> list[WebUrl]:
    records: list[WebUrl] = []
    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            try:
                records.append(_row_to_record(row, variant))
            except ValueError as exc:
                raise UrlValidationError(
                    f"{path}:{reader.line_num}: {exc}"
                ) from exc
    return records


def load_records(path: str | Path, variant: Variant = Variant.web) -> list[WebUrl]:
    """Load records of *variant* from *path*.

    ``.txt`` files hold one URL per line (web variant only); blank lines and
    ``#`` comments are skipped. ``.csv`` files carry a header row naming the
    record fields; genres, stock_tickers and images are ``|``-separated.
    """
    path = Path(path)
    variant = Variant(variant)
    if path.suffix.lower() == ".csv":
        return _load_csv(path, variant)
    if variant is not Variant.web:
        raise UrlValidationError(
            f"{variant.value} records need a .csv file with one column per field"
        )
    return _load_txt(path)
