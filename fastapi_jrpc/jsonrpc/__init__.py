"""JSON-RPC 2.0 envelope: error taxonomy and request/response models."""
from .errors import (
    ErrorCode,
    ErrorReason,
    InternalError,
    InvalidParams,
    InvalidRequest,
    JsonRpcError,
    MethodNotFound,
    ParseError,
    ServerError,
    code_to_reason,
    reason_to_code,
)
from .models import Id, JsonRpcAnswer, JsonRpcRequest, JsonRpcResponse, Success, parse_id

__all__ = [
    "ErrorCode",
    "ErrorReason",
    "InternalError",
    "InvalidParams",
    "InvalidRequest",
    "JsonRpcError",
    "MethodNotFound",
    "ParseError",
    "ServerError",
    "code_to_reason",
    "reason_to_code",
    "Id",
    "JsonRpcAnswer",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "Success",
    "parse_id",
]
