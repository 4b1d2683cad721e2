"""Pydantic envelope wrapping every API response body."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from porest_core.core.error_codes import ErrorCode

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform ``{success, code, message, data}`` body."""

    model_config = ConfigDict(frozen=True)

    success: bool
    code: str
    message: str
    data: Optional[T] = None

    @classmethod
    def ok(cls, data: Optional[T] = None, message: str = "") -> "ApiResponse[T]":
        """Build a success envelope with the shared success code."""
        return cls(success=True, code=ErrorCode.SUCCESS.code, message=message, data=data)

    @classmethod
    def error(cls, code: str, message: str) -> "ApiResponse[None]":
        """Build an error envelope; ``data`` is always ``null``."""
        return ApiResponse[None](success=False, code=code, message=message, data=None)


class DisplayTypeItem(BaseModel):
    """One labelled choice of a display enum, e.g. a dropdown option."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    order_seq: Optional[int] = None


__all__ = ["ApiResponse", "DisplayTypeItem"]
