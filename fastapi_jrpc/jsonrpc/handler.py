"""JSON-RPC 2.0 method dispatcher."""
from typing import Any, Awaitable, Callable, Dict
import logging

from .errors import JsonRpcError
from .models import JsonRpcResponse
from ..extractor import JsonRpcExtractor
from ..utils.errors import JsonRpcException, JsonRpcRejection

logger = logging.getLogger(__name__)

MethodHandler = Callable[[JsonRpcExtractor], Awaitable[Any]]


class JSONRPCHandler:
    """Routes extracted JSON-RPC requests to registered methods."""

    def __init__(self):
        self.methods: Dict[str, MethodHandler] = {}

    def register_method(self, method_name: str, handler: MethodHandler):
        """Register a JSON-RPC method handler.

        Args:
            method_name: Name of the JSON-RPC method (e.g., "add")
            handler: Async callable taking the JsonRpcExtractor; it returns a
                JsonRpcResponse or any JSON serializable result
        """
        self.methods[method_name] = handler
        logger.info(f"Registered JSON-RPC method: {method_name}")

    def method(self, method_name: str) -> Callable[[MethodHandler], MethodHandler]:
        """Decorator form of :meth:`register_method`."""

        def decorator(handler: MethodHandler) -> MethodHandler:
            self.register_method(method_name, handler)
            return handler

        return decorator

    async def handle(self, request: JsonRpcExtractor) -> JsonRpcResponse:
        """Handle an extracted JSON-RPC request.

        Args:
            request: JsonRpcExtractor produced from the HTTP request

        Returns:
            JsonRpcResponse with result or error
        """
        handler = self.methods.get(request.method)
        if handler is None:
            logger.debug(f"Method not found: {request.method}")
            return request.method_not_found(request.method)

        try:
            result = await handler(request)
        except JsonRpcRejection as e:
            return e.response
        except JsonRpcException as e:
            return JsonRpcResponse.error(request.id, e.error)
        except Exception as e:
            logger.error(f"Internal error handling {request.method}: {e}", exc_info=True)
            return JsonRpcResponse.error(request.id, JsonRpcError.from_exception(e))

        if isinstance(result, JsonRpcResponse):
            return result
        return JsonRpcResponse.success(request.id, result)
