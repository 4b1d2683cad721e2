"""Localized listings of display enums."""

from __future__ import annotations

from collections.abc import Iterable

from porest_core.core.types import UNORDERED_SEQ, DisplayType
from porest_core.i18n.message_resolver import MessageResolver
from porest_core.schemas.response import DisplayTypeItem


def _sort_key(member: DisplayType) -> int:
    seq = member.order_seq
    return seq if seq is not None else UNORDERED_SEQ


def describe_display_types(
    members: Iterable[DisplayType],
    resolver: MessageResolver,
    locale: str | None = None,
) -> list[DisplayTypeItem]:
    """Return ``members`` as labelled items sorted by ``order_seq``.

    Members without an order keep their relative order after the ordered
    ones. A member without a bundled label is named by its code.

    Args:
        members: Display enum class or any iterable of its members.
        resolver: Resolver used for the labels.
        locale: Active locale; the resolver's default when omitted.

    Returns:
        Items ready to be returned inside an ``ApiResponse``.
    """
    return [
        DisplayTypeItem(
            code=member.code,
            name=resolver.resolve(member, locale=locale),
            order_seq=member.order_seq,
        )
        for member in sorted(members, key=_sort_key)
    ]


__all__ = ["describe_display_types"]
