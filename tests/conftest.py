"""Shared pytest fixtures for porest-core tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from loguru import logger

from porest_core.api.exception_handlers import GlobalExceptionHandler
from porest_core.i18n.message_resolver import MessageCatalog, MessageResolver

TEST_BUNDLES: dict[str, dict[str, str]] = {
    "en": {
        "error.common.invalid.input": "Invalid input.",
        "error.common.invalid.parameter.value": "The value of parameter '{0}' is invalid.",
        "error.common.unauthorized": "Authentication is required.",
        "error.common.forbidden": "Access denied.",
        "error.common.not.found": "Not found.",
        "error.common.404": "No such route.",
        "error.common.internal.server": "Something went wrong.",
        "error.user.duplicate": "User {0} already exists.",
    },
    "ko": {
        "error.common.invalid.input": "입력값이 올바르지 않습니다.",
        "error.common.not.found": "대상을 찾을 수 없습니다.",
        "error.common.internal.server": "서버 내부 오류가 발생했습니다.",
    },
}


@pytest.fixture
def catalog() -> MessageCatalog:
    """Small in-memory catalog with Korean as the default locale."""
    return MessageCatalog.from_mapping(TEST_BUNDLES, default_locale="ko")


@pytest.fixture
def resolver(catalog: MessageCatalog) -> MessageResolver:
    return MessageResolver(catalog)


@pytest.fixture
def exception_handler(resolver: MessageResolver) -> GlobalExceptionHandler:
    return GlobalExceptionHandler(resolver)


@pytest.fixture
def log_records() -> Iterator[list[dict[str, Any]]]:
    """Capture loguru records emitted during one test."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(
        lambda message: records.append(message.record), level="DEBUG"
    )
    try:
        yield records
    finally:
        logger.remove(handler_id)


@pytest_asyncio.fixture
async def make_client() -> AsyncGenerator[Any, None]:
    """Return a factory opening an ``AsyncClient`` against an ASGI app.

    App exceptions are not re-raised, so catch-all responses can be
    asserted like any other.
    """
    clients: list[AsyncClient] = []

    def _make(app: Any) -> AsyncClient:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        client = AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()
