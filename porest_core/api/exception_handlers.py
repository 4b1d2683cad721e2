"""Global exception-to-response mapping.

Every exception escaping a route is turned into exactly one
``ApiResponse`` error body plus an HTTP status. Rules are evaluated top to
bottom and the first match wins; the last rule matches everything, so the
mapping is total. Internal exception text never reaches the response body.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from porest_core.api.deps import get_request_id
from porest_core.core.error_codes import ErrorCode, ErrorCodeProvider
from porest_core.core.exceptions import (
    AccessDeniedError,
    BusinessException,
    EntityNotFoundException,
    ExternalServiceException,
    ParameterTypeMismatchError,
    UnauthorizedException,
)
from porest_core.core.messages import MessageKey
from porest_core.core.metrics import increment_error_responses
from porest_core.i18n.locale import resolve_request_locale
from porest_core.i18n.message_resolver import MessageResolver, get_message_resolver
from porest_core.schemas.response import ApiResponse

_PARAMETER_LOCATIONS = frozenset({"query", "path", "header", "cookie"})
_REQUEST_LOCATIONS = _PARAMETER_LOCATIONS | {"body"}
_TYPE_MISMATCH_ERRORS = frozenset({"enum", "literal_error", "uuid_type"})


@dataclass(frozen=True)
class ErrorResult:
    """Status, body and optional headers produced for one exception."""

    status_code: int
    body: ApiResponse[None]
    headers: Mapping[str, str] | None = None

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=self.body.model_dump(mode="json"),
            headers=dict(self.headers) if self.headers else None,
        )


Predicate = Callable[[BaseException], bool]
RuleHandler = Callable[[Any, str | None, Any], ErrorResult]


@dataclass(frozen=True)
class ExceptionRule:
    """One ``(predicate, handler)`` pair of the dispatch table."""

    name: str
    predicate: Predicate
    handler: RuleHandler = field(compare=False)

    def matches(self, exc: BaseException) -> bool:
        return self.predicate(exc)


def _instance_of(*types: type[BaseException]) -> Predicate:
    return lambda exc: isinstance(exc, types)


def _http_status_is(status_code: int) -> Predicate:
    return lambda exc: (
        isinstance(exc, StarletteHTTPException) and exc.status_code == status_code
    )


def _format_loc(loc: Iterable[Any]) -> str:
    parts = list(loc)
    if parts and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(str(part) for part in parts)


def join_field_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Render validation errors as ``"field: msg"`` joined with ``", "``.

    Errors keep the order the validator reported them in. Errors without a
    field (for example a missing body) are rendered as the bare message.
    """
    rendered = []
    for error in errors:
        field_name = _format_loc(error.get("loc", ()))
        message = str(error.get("msg", ""))
        rendered.append(f"{field_name}: {message}" if field_name else message)
    return ", ".join(rendered)


def type_mismatch_parameter(exc: BaseException) -> str | None:
    """Return the parameter name if ``exc`` is a single-parameter conversion failure."""
    if isinstance(exc, ParameterTypeMismatchError):
        return exc.name
    if not isinstance(exc, RequestValidationError):
        return None
    errors = exc.errors()
    if len(errors) != 1:
        return None
    error = errors[0]
    loc = tuple(error.get("loc", ()))
    error_type = str(error.get("type", ""))
    if len(loc) < 2 or loc[0] not in _PARAMETER_LOCATIONS:
        return None
    if not (error_type.endswith("_parsing") or error_type in _TYPE_MISMATCH_ERRORS):
        return None
    return str(loc[1])


_is_forbidden_http_error = _http_status_is(HTTPStatus.FORBIDDEN)


def _is_access_denied(exc: BaseException) -> bool:
    return isinstance(exc, AccessDeniedError) or _is_forbidden_http_error(exc)


def _is_type_mismatch(exc: BaseException) -> bool:
    return type_mismatch_parameter(exc) is not None


def _is_illegal_argument(exc: BaseException) -> bool:
    return isinstance(exc, ValueError) and not isinstance(
        exc, (ValidationError, ParameterTypeMismatchError)
    )


def _is_request_validation(exc: BaseException) -> bool:
    return isinstance(exc, RequestValidationError) and not _is_type_mismatch(exc)


class GlobalExceptionHandler:
    """Ordered, first-match-wins mapping from exception to error response.

    Stateless apart from the injected resolver, so a single instance serves
    all requests.
    """

    def __init__(self, resolver: MessageResolver | None = None) -> None:
        self.resolver = resolver or get_message_resolver()
        self.rules: tuple[ExceptionRule, ...] = (
            ExceptionRule(
                "entity_not_found",
                _instance_of(EntityNotFoundException),
                self._handle_entity_not_found,
            ),
            ExceptionRule(
                "external_service",
                _instance_of(ExternalServiceException),
                self._handle_external_service,
            ),
            ExceptionRule(
                "unauthorized",
                _instance_of(UnauthorizedException),
                self._handle_unauthorized,
            ),
            ExceptionRule(
                "business",
                _instance_of(BusinessException),
                self._handle_business,
            ),
            ExceptionRule(
                "access_denied",
                _is_access_denied,
                self._handle_access_denied,
            ),
            ExceptionRule(
                "no_resource_found",
                _http_status_is(HTTPStatus.NOT_FOUND),
                self._handle_no_resource_found,
            ),
            ExceptionRule(
                "illegal_argument", _is_illegal_argument, self._handle_illegal_argument
            ),
            ExceptionRule(
                "request_validation",
                _is_request_validation,
                self._handle_request_validation,
            ),
            ExceptionRule(
                "binding",
                _instance_of(ValidationError),
                self._handle_binding,
            ),
            ExceptionRule(
                "type_mismatch", _is_type_mismatch, self._handle_type_mismatch
            ),
            ExceptionRule(
                "http_error",
                _instance_of(StarletteHTTPException),
                self._handle_http_error,
            ),
            ExceptionRule("unexpected", lambda exc: True, self._handle_unexpected),
        )

    def match(self, exc: BaseException) -> ExceptionRule:
        """Return the first rule matching ``exc``."""
        for rule in self.rules:
            if rule.matches(exc):
                return rule
        # The last rule accepts everything.
        raise AssertionError("exception rules are not exhaustive")

    def handle(
        self, exc: BaseException, locale: str | None = None, log: Any = None
    ) -> ErrorResult:
        """Map ``exc`` to an error result, logging it as its category requires.

        Args:
            exc: Exception raised while handling a request.
            locale: Negotiated request locale; default locale when omitted.
            log: Loguru logger with request context bound.

        Returns:
            The status code, body and headers to send.
        """
        rule = self.match(exc)
        result = rule.handler(exc, locale, log or logger)
        try:
            increment_error_responses(result.body.code, result.status_code)
        except ValueError as exc_metric:
            (log or logger).bind(error=str(exc_metric)).warning(
                "Skipped error_responses_total metric"
            )
        return result

    def resolve_message(self, exc: BusinessException, locale: str | None = None) -> str:
        """Use the caller's custom message verbatim, otherwise localize the code."""
        if exc.has_custom_message:
            return exc.message
        return self.resolver.resolve(exc.error_code, locale=locale)

    def _from_error_code(
        self, error_code: ErrorCodeProvider, message: str, **kwargs: Any
    ) -> ErrorResult:
        return ErrorResult(
            status_code=error_code.http_status_code,
            body=ApiResponse.error(error_code.code, message),
            **kwargs,
        )

    def _business_result(
        self, exc: BusinessException, locale: str | None
    ) -> ErrorResult:
        return self._from_error_code(exc.error_code, self.resolve_message(exc, locale))

    def _handle_entity_not_found(
        self, exc: EntityNotFoundException, locale: str | None, log: Any
    ) -> ErrorResult:
        log.warning(
            "EntityNotFoundException", error_code=exc.error_code.code, detail=exc.message
        )
        return self._business_result(exc, locale)

    def _handle_external_service(
        self, exc: ExternalServiceException, locale: str | None, log: Any
    ) -> ErrorResult:
        log.opt(exception=exc).error(
            "ExternalServiceException",
            error_code=exc.error_code.code,
            detail=exc.message,
        )
        return self._business_result(exc, locale)

    def _handle_unauthorized(
        self, exc: UnauthorizedException, locale: str | None, log: Any
    ) -> ErrorResult:
        log.warning(
            "UnauthorizedException", error_code=exc.error_code.code, detail=exc.message
        )
        return self._business_result(exc, locale)

    def _handle_business(
        self, exc: BusinessException, locale: str | None, log: Any
    ) -> ErrorResult:
        log.warning(
            type(exc).__name__, error_code=exc.error_code.code, detail=exc.message
        )
        return self._business_result(exc, locale)

    def _handle_access_denied(
        self, exc: BaseException, locale: str | None, log: Any
    ) -> ErrorResult:
        log.warning("Access denied", detail=_detail_of(exc))
        message = self.resolver.resolve(ErrorCode.FORBIDDEN, locale=locale)
        return ErrorResult(
            status_code=HTTPStatus.FORBIDDEN,
            body=ApiResponse.error(ErrorCode.FORBIDDEN.code, message),
        )

    def _handle_no_resource_found(
        self, exc: StarletteHTTPException, locale: str | None, log: Any
    ) -> ErrorResult:
        log.warning("Invalid resource access")
        message = self.resolver.resolve(MessageKey.COMMON_404, locale=locale)
        return ErrorResult(
            status_code=HTTPStatus.NOT_FOUND,
            body=ApiResponse.error(ErrorCode.NOT_FOUND.code, message),
        )

    def _handle_illegal_argument(
        self, exc: ValueError, locale: str | None, log: Any
    ) -> ErrorResult:
        log.warning("Illegal argument", detail=str(exc))
        message = str(exc) or self.resolver.resolve(
            ErrorCode.INVALID_INPUT, locale=locale
        )
        return self._invalid_input(message)

    def _handle_request_validation(
        self, exc: RequestValidationError, locale: str | None, log: Any
    ) -> ErrorResult:
        message = join_field_errors(exc.errors())
        log.warning("Request validation failed", detail=message)
        return self._invalid_input(message)

    def _handle_binding(
        self, exc: ValidationError, locale: str | None, log: Any
    ) -> ErrorResult:
        message = join_field_errors(exc.errors())
        log.warning("Binding failed", detail=message)
        return self._invalid_input(message)

    def _handle_type_mismatch(
        self, exc: BaseException, locale: str | None, log: Any
    ) -> ErrorResult:
        message = self.resolver.resolve(
            MessageKey.COMMON_INVALID_PARAMETER_VALUE,
            type_mismatch_parameter(exc),
            locale=locale,
        )
        log.warning("Parameter type mismatch", detail=message)
        return self._invalid_input(message)

    def _handle_http_error(
        self, exc: StarletteHTTPException, locale: str | None, log: Any
    ) -> ErrorResult:
        if exc.status_code == HTTPStatus.UNAUTHORIZED:
            error_code = ErrorCode.UNAUTHORIZED
        elif exc.status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
            error_code = ErrorCode.INVALID_INPUT
        else:
            error_code = ErrorCode.INTERNAL_SERVER_ERROR
        log.warning(
            "HTTP exception raised", status_code=exc.status_code, detail=_detail_of(exc)
        )
        return ErrorResult(
            status_code=exc.status_code,
            body=ApiResponse.error(
                error_code.code, self.resolver.resolve(error_code, locale=locale)
            ),
            headers=exc.headers,
        )

    def _handle_unexpected(
        self, exc: BaseException, locale: str | None, log: Any
    ) -> ErrorResult:
        log.opt(exception=exc).error(
            "Unexpected exception", exception_type=type(exc).__name__
        )
        error_code = ErrorCode.INTERNAL_SERVER_ERROR
        return self._from_error_code(
            error_code, self.resolver.resolve(error_code, locale=locale)
        )

    def _invalid_input(self, message: str) -> ErrorResult:
        return self._from_error_code(ErrorCode.INVALID_INPUT, message)


def _detail_of(exc: BaseException) -> str:
    if isinstance(exc, StarletteHTTPException):
        return str(exc.detail)
    return str(exc)


HANDLED_EXCEPTION_TYPES: tuple[type[BaseException], ...] = (
    BusinessException,
    AccessDeniedError,
    StarletteHTTPException,
    RequestValidationError,
    ValidationError,
    ValueError,
    Exception,
)


def install_exception_handlers(
    app: FastAPI, handler: GlobalExceptionHandler | None = None
) -> GlobalExceptionHandler:
    """Route every exception type through one ``GlobalExceptionHandler``.

    Starlette picks a registered handler by MRO; all of them delegate to the
    same ordered rules, so the outcome does not depend on which was picked.

    Args:
        app: FastAPI application to configure.
        handler: Dispatcher to use; a default one is built when omitted.

    Returns:
        The installed dispatcher.
    """
    dispatcher = handler or GlobalExceptionHandler()

    async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
        request_id = get_request_id(request)
        log = logger.bind(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        result = dispatcher.handle(exc, locale=resolve_request_locale(request), log=log)
        response = result.to_response()
        if request_id != "unknown":
            response.headers["X-Request-ID"] = request_id
        return response

    for exc_type in HANDLED_EXCEPTION_TYPES:
        app.add_exception_handler(exc_type, handle_exception)

    app.state.exception_handler = dispatcher
    return dispatcher


__all__ = [
    "ErrorResult",
    "ExceptionRule",
    "GlobalExceptionHandler",
    "HANDLED_EXCEPTION_TYPES",
    "install_exception_handlers",
    "join_field_errors",
    "type_mismatch_parameter",
]
