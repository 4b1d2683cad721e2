"""Shared FastAPI dependency helpers for API routes."""

from typing import Annotated

from fastapi import Depends, Request

from porest_core.i18n.locale import resolve_request_locale
from porest_core.i18n.message_resolver import MessageResolver, get_message_resolver


def get_request_id(request: Request) -> str:
    """Get request id from request context.

    Args:
        request: Incoming FastAPI request object.

    Returns:
        Request id string when available, otherwise ``"unknown"``.
    """
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return "unknown"


def get_locale(request: Request) -> str:
    """Provide the negotiated locale of the current request.

    Args:
        request: Incoming FastAPI request object.

    Returns:
        Supported locale tag such as ``"ko"`` or ``"en"``.
    """
    return resolve_request_locale(request)


def get_resolver() -> MessageResolver:
    """Provide the shared message resolver."""
    return get_message_resolver()


LocaleDep = Annotated[str, Depends(get_locale)]
MessageResolverDep = Annotated[MessageResolver, Depends(get_resolver)]

__all__ = [
    "LocaleDep",
    "MessageResolverDep",
    "get_locale",
    "get_request_id",
    "get_resolver",
]
