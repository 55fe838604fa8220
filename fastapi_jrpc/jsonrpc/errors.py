"""JSON-RPC 2.0 error codes, reasons and the error object."""
from dataclasses import dataclass
from typing import Any, Dict, Type

from pydantic import BaseModel, ConfigDict


class ErrorCode:
    """JSON-RPC 2.0 reserved error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Implementation-defined server errors
    SERVER_ERROR_MIN = -32099
    SERVER_ERROR_MAX = -32000


@dataclass(frozen=True)
class ErrorReason:
    """Base class of the error reasons."""

    @property
    def code(self) -> int:
        return reason_to_code(self)


@dataclass(frozen=True)
class ParseError(ErrorReason):
    def __str__(self) -> str:
        return "Parse error"


@dataclass(frozen=True)
class InvalidRequest(ErrorReason):
    def __str__(self) -> str:
        return "Invalid Request"


@dataclass(frozen=True)
class MethodNotFound(ErrorReason):
    def __str__(self) -> str:
        return "Method not found"


@dataclass(frozen=True)
class InvalidParams(ErrorReason):
    def __str__(self) -> str:
        return "Invalid params"


@dataclass(frozen=True)
class InternalError(ErrorReason):
    def __str__(self) -> str:
        return "Internal error"


@dataclass(frozen=True)
class ServerError(ErrorReason):
    """Any code outside the five named ones, normally -32099..-32000."""

    server_code: int

    def __str__(self) -> str:
        return f"Server error: {self.server_code}"


_NAMED_CODES: Dict[Type[ErrorReason], int] = {
    ParseError: ErrorCode.PARSE_ERROR,
    InvalidRequest: ErrorCode.INVALID_REQUEST,
    MethodNotFound: ErrorCode.METHOD_NOT_FOUND,
    InvalidParams: ErrorCode.INVALID_PARAMS,
    InternalError: ErrorCode.INTERNAL_ERROR,
}
_NAMED_REASONS: Dict[int, Type[ErrorReason]] = {
    code: reason for reason, code in _NAMED_CODES.items()
}


def reason_to_code(reason: ErrorReason) -> int:
    """Return the integer code of an error reason."""
    if isinstance(reason, ServerError):
        return reason.server_code
    try:
        return _NAMED_CODES[type(reason)]
    except KeyError:
        raise TypeError(f"Not a JSON-RPC error reason: {reason!r}") from None


def code_to_reason(code: int) -> ErrorReason:
    """Return the error reason of an integer code.

    Only the five reserved codes map to named reasons, every other
    code becomes ``ServerError(code)``.
    """
    reason = _NAMED_REASONS.get(code)
    if reason is None:
        return ServerError(code)
    return reason()


class JsonRpcError(BaseModel):
    """JSON-RPC 2.0 error object.

    Build it with :meth:`new` so the code always comes from an
    :class:`ErrorReason`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: int
    message: str
    data: Any = None

    @classmethod
    def new(cls, reason: ErrorReason, message: str, data: Any = None) -> "JsonRpcError":
        return cls(code=reason_to_code(reason), message=message, data=data)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "JsonRpcError":
        """Wrap an unexpected exception as an internal error."""
        return cls.new(InternalError(), str(exc))

    def error_reason(self) -> ErrorReason:
        return code_to_reason(self.code)

    def __str__(self) -> str:
        return f"{self.error_reason()}: {self.message}"
