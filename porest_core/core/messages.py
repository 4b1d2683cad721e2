"""Message keys for texts that are not backed by an error code."""

from enum import Enum


class MessageKey(str, Enum):
    """Symbolic names for message bundle keys."""

    # FILE
    FILE_NOT_FOUND = "error.file.notfound"
    FILE_READ = "error.file.read"
    FILE_COPY = "error.file.copy"
    FILE_MOVE = "error.file.move"
    FILE_SAVE_ERROR = "error.file.save"

    # COMMON
    COMMON_SUCCESS = "error.common.success"
    COMMON_INVALID_INPUT = "error.common.invalid.input"
    COMMON_INVALID_PARAMETER_VALUE = "error.common.invalid.parameter.value"
    COMMON_UNAUTHORIZED = "error.common.unauthorized"
    COMMON_FORBIDDEN = "error.common.forbidden"
    COMMON_NOT_FOUND = "error.common.not.found"
    COMMON_404 = "error.common.404"
    COMMON_INTERNAL_SERVER = "error.common.internal.server"

    @property
    def key(self) -> str:
        return self.value


__all__ = ["MessageKey"]
