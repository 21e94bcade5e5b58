"""W3C Datetime formatting (the ISO-8601 profile used by sitemaps.org)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sitemap_cli.core.models import DatePrecision


def _resolve_auto(instant: datetime) -> DatePrecision:
    """Pick the coarsest precision that still represents *instant* exactly."""
    if instant.microsecond:
        return DatePrecision.millisecond
    if instant.second:
        return DatePrecision.second
    if instant.hour or instant.minute:
        return DatePrecision.minute
    return DatePrecision.day


def _format_offset(instant: datetime) -> str:
    offset = instant.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def format_timestamp(
    instant: datetime, precision: DatePrecision = DatePrecision.second
) -> str:
    """Format *instant* as a W3C Datetime string at the given precision.

    Naive datetimes are taken to be UTC. Precisions coarser than ``minute``
    carry no time zone designator, matching the W3C profile.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    if precision is DatePrecision.auto:
        precision = _resolve_auto(instant)

    if precision is DatePrecision.year:
        return f"{instant.year:04d}"
    if precision is DatePrecision.month:
        return f"{instant.year:04d}-{instant.month:02d}"
    day = f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"
    if precision is DatePrecision.day:
        return day

    time = f"{instant.hour:02d}:{instant.minute:02d}"
    if precision is DatePrecision.second:
        time += f":{instant.second:02d}"
    elif precision is DatePrecision.millisecond:
        time += f":{instant.second:02d}.{instant.microsecond // 1000:03d}"
    return f"{day}T{time}{_format_offset(instant)}"


class W3CDateFormat:
    """Callable formatter bound to one precision, shared by all renderers."""

    def __init__(self, precision: DatePrecision = DatePrecision.second) -> None:
        self.precision = precision

    def __call__(self, instant: datetime) -> str:
        return format_timestamp(instant, self.precision)
