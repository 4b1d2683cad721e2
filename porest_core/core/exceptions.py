"""Business exception hierarchy backed by error codes.

Each subclass tags *why* a failure happened; the HTTP status always comes
from the error code it carries. Business code raises these and lets them
propagate to the global exception handler.
"""

from __future__ import annotations

from typing import Any

from porest_core.core.error_codes import ErrorCodeProvider


class BusinessException(Exception):
    """Base class for catalog-backed business failures.

    Supports the four construction forms::

        BusinessException(code)
        BusinessException(code, "custom message")
        BusinessException(code, cause)
        BusinessException(code, "custom message", cause)

    Without a custom message, ``message`` equals ``code.message_key``; the
    handler uses that to decide whether the text needs localizing.
    """

    def __init__(
        self,
        error_code: ErrorCodeProvider,
        message: str | BaseException | None = None,
        cause: BaseException | None = None,
    ) -> None:
        if isinstance(message, BaseException):
            if cause is not None:
                raise TypeError("cause given twice")
            message, cause = None, message
        self.error_code = error_code
        self.message = message if message is not None else error_code.message_key
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def has_custom_message(self) -> bool:
        return self.message != self.error_code.message_key

    def __reduce__(self) -> tuple[Any, ...]:
        # ``args`` only holds the message, so rebuild from the constructor inputs.
        return (self.__class__, (self.error_code, self.message, self.__cause__))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.error_code.code!r}, "
            f"message={self.message!r})"
        )


class EntityNotFoundException(BusinessException):
    """Raised when a business entity lookup finds nothing."""


class ResourceNotFoundException(BusinessException):
    """Raised when a non-entity resource (file, external object) is missing."""


class DuplicateException(BusinessException):
    """Raised when a create or update would violate uniqueness."""


class InvalidValueException(BusinessException):
    """Raised when an input value is invalid for the operation."""


class BusinessRuleViolationException(BusinessException):
    """Raised when a domain rule forbids the requested change."""


class UnauthorizedException(BusinessException):
    """Raised when the caller is not authenticated."""


class ForbiddenException(BusinessException):
    """Raised when the caller lacks permission for a business action."""


class ExternalServiceException(BusinessException):
    """Raised when a call to a service outside this process fails."""


class AccessDeniedError(Exception):
    """Framework-level authorization failure raised by auth dependencies."""


class ParameterTypeMismatchError(ValueError):
    """Raised when a single request parameter cannot be converted.

    Attributes:
        name: Parameter name.
        value: Raw value that failed conversion.
    """

    def __init__(self, name: str, value: Any = None) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for parameter '{name}'")


__all__ = [
    "AccessDeniedError",
    "BusinessException",
    "BusinessRuleViolationException",
    "DuplicateException",
    "EntityNotFoundException",
    "ExternalServiceException",
    "ForbiddenException",
    "InvalidValueException",
    "ParameterTypeMismatchError",
    "ResourceNotFoundException",
    "UnauthorizedException",
]
