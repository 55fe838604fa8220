"""Custom exception classes for the JSON-RPC layer."""
from typing import TYPE_CHECKING, Any

from ..jsonrpc.errors import ErrorReason, JsonRpcError

if TYPE_CHECKING:
    from ..jsonrpc.models import JsonRpcResponse


class JRPCError(Exception):
    """Base exception for JSON-RPC related errors."""

    pass


class JsonRpcRejection(JRPCError):
    """A request that ends with a ready-made error response.

    Raised by the extractor checkpoints and by ``parse_params``; the HTTP
    layer sends ``response`` back to the client.
    """

    def __init__(self, response: "JsonRpcResponse"):
        super().__init__(str(response.answer))
        self.response = response


class JsonRpcException(JRPCError):
    """Business error raised by a method handler.

    The dispatcher answers it with ``error`` addressed to the request id.
    """

    def __init__(self, reason: ErrorReason, message: str, data: Any = None):
        super().__init__(message)
        self.error = JsonRpcError.new(reason, message, data)
