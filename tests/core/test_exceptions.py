"""Tests for BusinessException construction rules."""

from __future__ import annotations

import copy
import pickle

import pytest

from porest_core.core.error_codes import ErrorCode
from porest_core.core.exceptions import (
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

ALL_EXCEPTION_TYPES = [
    BusinessException,
    EntityNotFoundException,
    ResourceNotFoundException,
    DuplicateException,
    InvalidValueException,
    BusinessRuleViolationException,
    UnauthorizedException,
    ForbiddenException,
    ExternalServiceException,
]


@pytest.mark.parametrize("exc_type", ALL_EXCEPTION_TYPES)
class TestConstruction:
    def test_code_only_defaults_message_to_message_key(self, exc_type: type) -> None:
        exc = exc_type(ErrorCode.NOT_FOUND)

        assert exc.error_code is ErrorCode.NOT_FOUND
        assert exc.message == ErrorCode.NOT_FOUND.message_key
        assert str(exc) == ErrorCode.NOT_FOUND.message_key
        assert exc.has_custom_message is False
        assert exc.__cause__ is None

    def test_custom_message_is_kept(self, exc_type: type) -> None:
        exc = exc_type(ErrorCode.INVALID_INPUT, "age must be >= 0")

        assert exc.message == "age must be >= 0"
        assert exc.has_custom_message is True

    def test_cause_only_defaults_message_and_chains(self, exc_type: type) -> None:
        cause = KeyError("user-42")
        exc = exc_type(ErrorCode.NOT_FOUND, cause)

        assert exc.message == ErrorCode.NOT_FOUND.message_key
        assert exc.__cause__ is cause
        assert exc.has_custom_message is False

    def test_message_and_cause(self, exc_type: type) -> None:
        cause = TimeoutError("upstream timed out")
        exc = exc_type(ErrorCode.INTERNAL_SERVER_ERROR, "billing unavailable", cause)

        assert exc.message == "billing unavailable"
        assert exc.__cause__ is cause

    def test_is_business_exception(self, exc_type: type) -> None:
        assert issubclass(exc_type, BusinessException)

    def test_pickle_round_trip(self, exc_type: type) -> None:
        exc = exc_type(ErrorCode.NOT_FOUND, "custom", TimeoutError("slow"))

        restored = pickle.loads(pickle.dumps(exc))

        assert type(restored) is exc_type
        assert restored.error_code is ErrorCode.NOT_FOUND
        assert restored.message == "custom"
        assert isinstance(restored.__cause__, TimeoutError)

    def test_copy_without_custom_message(self, exc_type: type) -> None:
        exc = exc_type(ErrorCode.NOT_FOUND)

        copied = copy.copy(exc)

        assert copied.error_code is ErrorCode.NOT_FOUND
        assert copied.has_custom_message is False
        assert copied.__cause__ is None


def test_cause_given_twice_is_rejected() -> None:
    with pytest.raises(TypeError):
        BusinessException(ErrorCode.NOT_FOUND, ValueError("a"), ValueError("b"))


def test_keyword_construction() -> None:
    cause = RuntimeError("boom")
    exc = DuplicateException(ErrorCode.INVALID_INPUT, cause=cause)

    assert exc.message == ErrorCode.INVALID_INPUT.message_key
    assert exc.__cause__ is cause


def test_raise_from_keeps_explicit_cause() -> None:
    with pytest.raises(ExternalServiceException) as excinfo:
        try:
            raise ConnectionError("refused")
        except ConnectionError as err:
            raise ExternalServiceException(ErrorCode.INTERNAL_SERVER_ERROR) from err

    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_repr_names_code_and_message() -> None:
    exc = EntityNotFoundException(ErrorCode.NOT_FOUND, "user 7")

    assert repr(exc) == "EntityNotFoundException(code='COMMON_404', message='user 7')"


def test_parameter_type_mismatch_is_value_error() -> None:
    exc = ParameterTypeMismatchError("page", "abc")

    assert isinstance(exc, ValueError)
    assert exc.name == "page"
    assert exc.value == "abc"
