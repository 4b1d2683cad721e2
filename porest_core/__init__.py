"""Shared error taxonomy, response envelope and i18n for FastAPI services."""

from porest_core.api.exception_handlers import (
    GlobalExceptionHandler,
    install_exception_handlers,
)
from porest_core.core.error_codes import ErrorCode, ErrorCodeMixin, ErrorCodeProvider
from porest_core.core.exceptions import (
    AccessDeniedError,
    BusinessException,
    BusinessRuleViolationException,
    DuplicateException,
    EntityNotFoundException,
    ExternalServiceException,
    ForbiddenException,
    InvalidValueException,
    ParameterTypeMismatchError,
    ResourceNotFoundException,
    UnauthorizedException,
)
from porest_core.core.messages import MessageKey
from porest_core.core.types import CountryCode, DisplayType, DisplayTypeMixin, YNType
from porest_core.i18n.message_resolver import MessageCatalog, MessageResolver
from porest_core.schemas.response import ApiResponse

__version__ = "0.1.0"

__all__ = [
    "AccessDeniedError",
    "ApiResponse",
    "BusinessException",
    "BusinessRuleViolationException",
    "CountryCode",
    "DisplayType",
    "DisplayTypeMixin",
    "DuplicateException",
    "EntityNotFoundException",
    "ErrorCode",
    "ErrorCodeMixin",
    "ErrorCodeProvider",
    "ExternalServiceException",
    "ForbiddenException",
    "GlobalExceptionHandler",
    "InvalidValueException",
    "MessageCatalog",
    "MessageKey",
    "MessageResolver",
    "ParameterTypeMismatchError",
    "ResourceNotFoundException",
    "UnauthorizedException",
    "YNType",
    "install_exception_handlers",
]
