"""Example FastAPI service answering JSON-RPC 2.0 requests."""
import logging
from contextlib import asynccontextmanager
from typing import Tuple

from fastapi import Depends, FastAPI, Response
from pydantic import BaseModel

from .config import Settings
from .extractor import JsonRpcExtractor
from .jsonrpc.errors import ServerError
from .jsonrpc.handler import JSONRPCHandler
from .transport import extractor_dependency, into_response, register_exception_handlers
from .utils.errors import JsonRpcException

settings = Settings.from_env()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

jsonrpc_handler = JSONRPCHandler()
jsonrpc_request = extractor_dependency(settings.max_body_size)


class AddParams(BaseModel):
    a: int
    b: int


class DivideByZero(JsonRpcException):
    def __init__(self):
        super().__init__(ServerError(-32099), "Divisor must not be equal to 0")


def register_jsonrpc_methods():
    """Register all JSON-RPC 2.0 methods."""

    # Method: add
    async def add(request: JsonRpcExtractor):
        params = request.parse_params(AddParams)
        return params.a + params.b

    # Method: sub
    async def sub(request: JsonRpcExtractor):
        a, b = request.parse_params(Tuple[int, int])
        if a <= b:
            raise ValueError("a must be greater than b")
        return a - b

    # Method: div
    async def div(request: JsonRpcExtractor):
        a, b = request.parse_params(Tuple[int, int])
        if b == 0:
            raise DivideByZero()
        # Rounds toward zero.
        quotient = abs(a) // abs(b)
        return quotient if (a < 0) == (b < 0) else -quotient

    jsonrpc_handler.register_method("add", add)
    jsonrpc_handler.register_method("sub", sub)
    jsonrpc_handler.register_method("div", div)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI app."""
    logger.info(f"Starting {settings.service_name}...")
    if not jsonrpc_handler.methods:
        register_jsonrpc_methods()
    logger.info(f"Registered {len(jsonrpc_handler.methods)} JSON-RPC methods")
    yield
    logger.info(f"Shutting down {settings.service_name}...")


app = FastAPI(
    title="FastAPI JSON-RPC example",
    description="JSON-RPC 2.0 over HTTP POST",
    version="0.8.0",
    lifespan=lifespan,
)
register_exception_handlers(app)


@app.post("/")
async def jsonrpc_endpoint(request: JsonRpcExtractor = Depends(jsonrpc_request)) -> Response:
    """JSON-RPC 2.0 endpoint, always answers with HTTP 200."""
    response = await jsonrpc_handler.handle(request)
    return into_response(response)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": "0.8.0",
    }
