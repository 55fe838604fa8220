"""Extraction of JSON-RPC 2.0 requests from HTTP requests."""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_json as encode_json
from starlette.requests import ClientDisconnect, Request

from .jsonrpc.errors import InvalidParams, InvalidRequest, JsonRpcError, MethodNotFound
from .jsonrpc.models import Id, JsonRpcRequest, JsonRpcResponse
from .utils.errors import JsonRpcRejection
from .utils.validation import describe_validation_error, is_json_content_type

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_BODY_SIZE = 2 * 1024 * 1024


def _invalid_request(message: str) -> JsonRpcRejection:
    # No id is known before the envelope is decoded.
    error = JsonRpcError.new(InvalidRequest(), message)
    return JsonRpcRejection(JsonRpcResponse.error(None, error))


def check_content_type(content_type: Optional[str]) -> None:
    """Reject anything but ``application/json`` and ``application/*+json``."""
    if not is_json_content_type(content_type):
        logger.debug(f"Rejected request with Content-Type: {content_type!r}")
        raise _invalid_request("Expected request with `Content-Type: application/json`")


async def read_body(request: Request, max_body_size: int = DEFAULT_MAX_BODY_SIZE) -> bytes:
    """Buffer the whole request body, up to ``max_body_size`` bytes."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > max_body_size:
        raise _invalid_request("Failed to buffer the request body: length limit exceeded")

    chunks = []
    size = 0
    try:
        async for chunk in request.stream():
            size += len(chunk)
            if size > max_body_size:
                raise _invalid_request("Failed to buffer the request body: length limit exceeded")
            chunks.append(chunk)
    except ClientDisconnect:
        logger.warning("Client disconnected while sending a JSON-RPC request")
        raise _invalid_request("Failed to buffer the request body: client disconnected") from None
    return b"".join(chunks)


def decode_request(body: bytes) -> JsonRpcRequest:
    """Decode the envelope, turning decode failures into a rejection."""
    try:
        return JsonRpcRequest.model_validate_json(body)
    except ValidationError as e:
        message = describe_validation_error(e)
        logger.debug(f"Invalid JSON-RPC request: {message}")
        raise _invalid_request(message) from None


@dataclass(frozen=True)
class JsonRpcExtractor:
    """A validated JSON-RPC request, ready for method dispatch.

    ``params`` is kept as raw JSON until the handler knows which shape it
    expects, see :meth:`parse_params`. Invalid params are raised as
    :class:`JsonRpcRejection`, the failure arm of ``JrpcResult``.

    Example::

        async def handler(req: JsonRpcExtractor = Depends(jsonrpc_request)) -> JrpcResult:
            if req.method == "add":
                a, b = req.parse_params(tuple[int, int])
                return JsonRpcResponse.success(req.get_answer_id(), a + b)
            return req.method_not_found(req.method)
    """

    id: Id
    method: str
    params: Any

    @classmethod
    def from_body(cls, content_type: Optional[str], body: bytes) -> "JsonRpcExtractor":
        """Validate an already buffered request.

        Raises:
            JsonRpcRejection: carrying an Invalid Request response with a null id
        """
        check_content_type(content_type)
        request = decode_request(body)
        return cls(id=request.id, method=request.method, params=request.params)

    @classmethod
    async def from_request(
        cls, request: Request, max_body_size: int = DEFAULT_MAX_BODY_SIZE
    ) -> "JsonRpcExtractor":
        """Validate a Starlette request: content type, body, envelope."""
        content_type = request.headers.get("content-type")
        check_content_type(content_type)
        body = await read_body(request, max_body_size)
        return cls.from_body(content_type, body)

    def get_answer_id(self) -> Id:
        return self.id

    def parse_params(self, shape: Type[T]) -> T:
        """Validate ``params`` against ``shape``.

        ``shape`` is anything pydantic can validate: a model class,
        ``list[int]``, ``tuple[int, int]``, a ``TypedDict`` and so on.
        Validation is strict JSON validation, so ``"1"`` is not an ``int``.

        A failure is raised rather than returned. Inside a
        :class:`JSONRPCHandler` method it becomes the reply; in a plain
        endpoint install :func:`register_exception_handlers` so it is sent
        back with HTTP 200.

        Raises:
            JsonRpcRejection: carrying an Invalid params response for this id
        """
        try:
            return TypeAdapter(shape).validate_json(encode_json(self.params), strict=True)
        except ValidationError as e:
            error = JsonRpcError.new(InvalidParams(), describe_validation_error(e))
            raise JsonRpcRejection(JsonRpcResponse.error(self.id, error)) from None

    def method_not_found(self, method: str) -> JsonRpcResponse:
        error = JsonRpcError.new(MethodNotFound(), f"Method `{method}` not found")
        return JsonRpcResponse.error(self.id, error)
