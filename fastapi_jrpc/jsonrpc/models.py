"""JSON-RPC 2.0 request/response models."""
import logging
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    StrictInt,
    StrictStr,
    TypeAdapter,
    model_serializer,
    model_validator,
)
from pydantic_core import PydanticSerializationError, to_jsonable_python
from pydantic_core import to_json as encode_json

from .errors import InternalError, JsonRpcError

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"

Int64 = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]

# Request/response identifier: a JSON number, a JSON string or null.
# Integers are tried first, then strings, then null.
Id = Optional[Union[Int64, StrictStr]]

_id_adapter: TypeAdapter = TypeAdapter(Id)


def parse_id(value: Any) -> Optional[Union[int, str]]:
    """Validate a raw value as a request identifier."""
    return _id_adapter.validate_python(value)


def _check_version(data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    if "jsonrpc" not in data:
        raise ValueError("Missing jsonrpc version")
    if data.pop("jsonrpc") != JSONRPC_VERSION:
        raise ValueError("Unknown jsonrpc version")
    return data


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model.

    The ``jsonrpc`` tag is checked while decoding and emitted while encoding,
    it is not kept on the model.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Id
    method: StrictStr
    params: Any

    @classmethod
    def new(cls, id: Id, method: str, params: Any = None) -> "JsonRpcRequest":
        return cls.model_validate(
            {"jsonrpc": JSONRPC_VERSION, "id": id, "method": method, "params": params}
        )

    @model_validator(mode="before")
    @classmethod
    def check_version(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return _check_version(data)

    @model_serializer
    def to_wire(self) -> Dict[str, Any]:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": self.id,
            "method": self.method,
            "params": self.params,
        }


class Success(BaseModel):
    """Successful arm of a response."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    result: Any


# No discriminant on the wire, the arms differ by `result` vs `error` key.
JsonRpcAnswer = Union[Success, JsonRpcError]

_RESPONSE_KEYS = {"jsonrpc", "result", "error", "id"}


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response model."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    answer: JsonRpcAnswer
    id: Id

    @classmethod
    def success(cls, id: Id, value: Any) -> "JsonRpcResponse":
        """Build a response carrying ``value`` as its result.

        If ``value`` can not be represented as JSON an internal error
        response is returned instead.
        """
        try:
            result = to_jsonable_python(value)
            # Some values (lone surrogates) only fail when written out.
            encode_json(result)
        except (PydanticSerializationError, TypeError, ValueError) as e:
            logger.warning(f"Result for request {id!r} is not JSON serializable: {e}")
            return cls.error(id, JsonRpcError.new(InternalError(), str(e)))
        return cls(answer=Success(result=result), id=id)

    @classmethod
    def error(cls, id: Id, error: JsonRpcError) -> "JsonRpcResponse":
        return cls(answer=error, id=id)

    def is_success(self) -> bool:
        return isinstance(self.answer, Success)

    def is_error(self) -> bool:
        return isinstance(self.answer, JsonRpcError)

    @model_validator(mode="before")
    @classmethod
    def from_wire(cls, data: Any) -> Any:
        if not isinstance(data, dict) or ("answer" in data and "jsonrpc" not in data):
            return data

        unknown = sorted(set(data) - _RESPONSE_KEYS)
        if unknown:
            raise ValueError(f"Unknown fields: {', '.join(unknown)}")
        data = _check_version(data)

        has_result = "result" in data
        has_error = "error" in data
        if has_result == has_error:
            raise ValueError("Expected exactly one of `result` or `error`")

        decoded: Dict[str, Any] = {}
        if has_result:
            decoded["answer"] = Success(result=data["result"])
        else:
            decoded["answer"] = JsonRpcError.model_validate(data["error"])
        if "id" in data:
            decoded["id"] = data["id"]
        return decoded

    @model_serializer
    def to_wire(self, info: SerializationInfo) -> Dict[str, Any]:
        body: Dict[str, Any] = {"jsonrpc": JSONRPC_VERSION}
        if isinstance(self.answer, Success):
            body["result"] = self.answer.result
        else:
            body["error"] = self.answer.model_dump(mode=info.mode)
        body["id"] = self.id
        return body

    def to_json(self) -> bytes:
        return self.model_dump_json().encode("utf-8")
