"""Error code contract and the shared error code catalog.

Every error surfaced to API clients is backed by an error code: a stable
machine-readable ``code``, a ``message_key`` into the localized message
bundles and the ``http_status`` returned with it. Services define their own
catalogs next to the shared one::

    class UserErrorCode(ErrorCodeMixin, Enum):
        USER_NOT_FOUND = ("USER_001", "error.user.not.found", HTTPStatus.NOT_FOUND)

Codes are a wire contract: once published, a code never changes meaning.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from enum import Enum
from http import HTTPStatus
from typing import Protocol, runtime_checkable


@runtime_checkable
class ErrorCodeProvider(Protocol):
    """Anything that can describe an error to API clients."""

    @property
    def code(self) -> str: ...

    @property
    def message_key(self) -> str: ...

    @property
    def http_status(self) -> HTTPStatus: ...

    @property
    def http_status_code(self) -> int: ...


class ErrorCodeMixin:
    """Give an ``Enum`` the ``ErrorCodeProvider`` shape.

    Member values are ``(code, message_key, http_status)`` tuples.
    """

    def __init__(self, code: str, message_key: str, http_status: HTTPStatus) -> None:
        self._code = code
        self._message_key = message_key
        self._http_status = HTTPStatus(http_status)

    @property
    def code(self) -> str:
        return self._code

    @property
    def message_key(self) -> str:
        return self._message_key

    @property
    def http_status(self) -> HTTPStatus:
        return self._http_status

    @property
    def http_status_code(self) -> int:
        # Derived on every access so it can never drift from http_status.
        return self.http_status.value


class ErrorCode(ErrorCodeMixin, Enum):
    """Shared error codes used across all services."""

    # COMMON
    SUCCESS = ("COMMON_200", "error.common.success", HTTPStatus.OK)
    INVALID_INPUT = ("COMMON_400", "error.common.invalid.input", HTTPStatus.BAD_REQUEST)
    INVALID_DATE_RANGE = (
        "COMMON_401",
        "error.common.invalid.date.range",
        HTTPStatus.BAD_REQUEST,
    )
    INVALID_PARAMETER = (
        "COMMON_402",
        "error.common.invalid.parameter",
        HTTPStatus.BAD_REQUEST,
    )
    UNSUPPORTED_TYPE = (
        "COMMON_403",
        "error.common.unsupported.type",
        HTTPStatus.BAD_REQUEST,
    )
    UNAUTHORIZED = ("COMMON_411", "error.common.unauthorized", HTTPStatus.UNAUTHORIZED)
    FORBIDDEN = ("COMMON_412", "error.common.forbidden", HTTPStatus.FORBIDDEN)
    NOT_FOUND = ("COMMON_404", "error.common.not.found", HTTPStatus.NOT_FOUND)
    INTERNAL_SERVER_ERROR = (
        "COMMON_500",
        "error.common.internal.server",
        HTTPStatus.INTERNAL_SERVER_ERROR,
    )

    # FILE
    FILE_NOT_FOUND = ("FILE_001", "error.file.notfound", HTTPStatus.NOT_FOUND)


def ensure_unique_codes(*catalogs: Iterable[ErrorCodeProvider]) -> None:
    """Check that no code is declared twice across the given catalogs.

    Args:
        catalogs: Error code enums (or any iterables of providers).

    Raises:
        ValueError: If the same code appears more than once.
    """
    counts = Counter(entry.code for catalog in catalogs for entry in catalog)
    duplicates = sorted(code for code, count in counts.items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate error codes: {', '.join(duplicates)}")


__all__ = ["ErrorCode", "ErrorCodeMixin", "ErrorCodeProvider", "ensure_unique_codes"]
