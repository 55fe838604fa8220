"""JSON-RPC 2.0 request extraction and responses for FastAPI."""
from .jsonrpc import (
    ErrorCode,
    ErrorReason,
    InternalError,
    InvalidParams,
    InvalidRequest,
    JsonRpcAnswer,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    MethodNotFound,
    ParseError,
    ServerError,
    Success,
    code_to_reason,
    reason_to_code,
)
from .utils.errors import JRPCError, JsonRpcException, JsonRpcRejection
from .extractor import JsonRpcExtractor
from .transport import (
    JrpcResult,
    extractor_dependency,
    into_response,
    jsonrpc_request,
    register_exception_handlers,
)
from .jsonrpc.handler import JSONRPCHandler

__all__ = [
    "ErrorCode",
    "ErrorReason",
    "InternalError",
    "InvalidParams",
    "InvalidRequest",
    "JsonRpcAnswer",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFound",
    "ParseError",
    "ServerError",
    "Success",
    "code_to_reason",
    "reason_to_code",
    "JRPCError",
    "JsonRpcException",
    "JsonRpcRejection",
    "JsonRpcExtractor",
    "JrpcResult",
    "extractor_dependency",
    "into_response",
    "jsonrpc_request",
    "register_exception_handlers",
    "JSONRPCHandler",
]
