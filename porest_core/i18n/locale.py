"""Per-request locale negotiation.

Priority: explicit ``?lang=`` query parameter, then the ``Accept-Language``
header, then the configured default locale. Only supported locales are ever
returned.
"""

from __future__ import annotations

from collections.abc import Sequence

from starlette.requests import HTTPConnection

from porest_core.core.config import Settings, settings
from porest_core.i18n.message_resolver import normalize_locale


def parse_accept_language(header: str | None) -> list[tuple[str, float]]:
    """Parse an ``Accept-Language`` header into ``(tag, q)`` pairs.

    Pairs are ordered by descending weight; ties keep header order.
    Malformed weights count as ``0``.
    """
    if not header:
        return []
    entries: list[tuple[str, float]] = []
    for part in header.split(","):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag:
            continue
        weight = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                weight = float(params[2:])
            except ValueError:
                weight = 0.0
        entries.append((tag, weight))
    return sorted(entries, key=lambda entry: entry[1], reverse=True)


def match_supported(tag: str, supported: Sequence[str]) -> str | None:
    """Return the supported locale for ``tag`` (exact, then by language)."""
    normalized = normalize_locale(tag)
    if normalized in supported:
        return normalized
    language = normalized.split("-", 1)[0]
    if language in supported:
        return language
    return None


def negotiate_locale(
    query_value: str | None,
    accept_language: str | None,
    supported: Sequence[str],
    default: str,
) -> str:
    """Pick the active locale for one request.

    Args:
        query_value: Value of the locale override query parameter.
        accept_language: Raw ``Accept-Language`` header.
        supported: Supported lower-case locale tags.
        default: Locale used when nothing else matches.

    Returns:
        One of ``supported`` or ``default``.
    """
    if query_value:
        match = match_supported(query_value, supported)
        if match is not None:
            return match

    for tag, weight in parse_accept_language(accept_language):
        if weight <= 0:
            continue
        if tag == "*":
            return default
        match = match_supported(tag, supported)
        if match is not None:
            return match

    return default


def resolve_request_locale(
    connection: HTTPConnection, config: Settings | None = None
) -> str:
    """Negotiate the locale of an incoming request."""
    config = config or settings
    return negotiate_locale(
        query_value=connection.query_params.get(config.LOCALE_PARAM_NAME),
        accept_language=connection.headers.get("accept-language"),
        supported=config.SUPPORTED_LOCALES,
        default=config.DEFAULT_LOCALE,
    )


__all__ = [
    "match_supported",
    "negotiate_locale",
    "parse_accept_language",
    "resolve_request_locale",
]
