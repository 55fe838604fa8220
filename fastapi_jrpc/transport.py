"""HTTP boundary: JSON-RPC requests and responses over FastAPI."""
import logging
from typing import Callable, Awaitable

from fastapi import FastAPI, Request, Response

from .extractor import DEFAULT_MAX_BODY_SIZE, JsonRpcExtractor
from .jsonrpc.models import JsonRpcResponse
from .utils.errors import JsonRpcException, JsonRpcRejection

logger = logging.getLogger(__name__)

# Dispatch outcome: a returned response is the success arm, a raised
# JsonRpcRejection the failure arm. Both carry a JsonRpcResponse.
JrpcResult = JsonRpcResponse


def into_response(response: JsonRpcResponse) -> Response:
    """Render a JSON-RPC response as an HTTP 200 reply.

    Protocol errors travel inside the body, never in the HTTP status.
    """
    return Response(
        content=response.to_json(),
        status_code=200,
        media_type="application/json",
    )


def extractor_dependency(
    max_body_size: int = DEFAULT_MAX_BODY_SIZE,
) -> Callable[[Request], Awaitable[JsonRpcExtractor]]:
    """Build a FastAPI dependency yielding a :class:`JsonRpcExtractor`."""

    async def jsonrpc_request(request: Request) -> JsonRpcExtractor:
        return await JsonRpcExtractor.from_request(request, max_body_size)

    return jsonrpc_request


jsonrpc_request = extractor_dependency()


async def _handle_rejection(request: Request, exc: JsonRpcRejection) -> Response:
    logger.debug(f"JSON-RPC request to {request.url.path} rejected: {exc}")
    return into_response(exc.response)


async def _handle_exception(request: Request, exc: JsonRpcException) -> Response:
    # Raised outside a dispatcher, so the request id is unknown.
    logger.warning(f"Unhandled JSON-RPC error on {request.url.path}: {exc.error}")
    return into_response(JsonRpcResponse.error(None, exc.error))


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers turning JSON-RPC exceptions into HTTP 200 replies."""
    app.add_exception_handler(JsonRpcRejection, _handle_rejection)
    app.add_exception_handler(JsonRpcException, _handle_exception)
