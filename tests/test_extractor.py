"""Tests for extracting JSON-RPC requests from HTTP requests."""
from typing import Dict, List, Optional, Tuple

import pytest
from pydantic import BaseModel
from starlette.requests import Request
from fastapi_jrpc.extractor import JsonRpcExtractor, check_content_type, read_body
from fastapi_jrpc.jsonrpc.errors import ErrorCode
from fastapi_jrpc.utils.errors import JsonRpcRejection
from fastapi_jrpc.utils.validation import is_json_content_type, parse_mime_type

ADD_BODY = b'{"jsonrpc":"2.0","id":0,"method":"add","params":{"a":0,"b":111}}'


def make_request(chunks: List[bytes], headers: Optional[Dict[str, str]] = None, disconnect=False):
    """Build a Starlette request fed by the given body chunks."""
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]
    if disconnect:
        messages = [{"type": "http.disconnect"}]

    async def receive():
        return messages.pop(0)

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "query_string": b"",
        "headers": [
            (key.lower().encode("latin-1"), value.encode("latin-1"))
            for key, value in (headers or {}).items()
        ],
    }
    return Request(scope, receive)


class AddParams(BaseModel):
    a: int
    b: int


# Content type

@pytest.mark.parametrize(
    "value",
    [
        "application/json",
        "application/json; charset=utf-8",
        "APPLICATION/JSON",
        "application/vnd.api+json",
        "application/json-rpc+json; charset=utf-8",
    ],
)
def test_json_content_types_are_accepted(value):
    """application/json and +json suffixed types pass the check."""
    assert is_json_content_type(value)
    check_content_type(value)


@pytest.mark.parametrize(
    "value",
    [None, "", "text/plain", "text/json", "application/xml", "application/jsonp", "json", "application/"],
)
def test_other_content_types_are_rejected(value):
    """Anything else is an Invalid Request with a null id."""
    assert not is_json_content_type(value)

    with pytest.raises(JsonRpcRejection) as exc_info:
        check_content_type(value)

    response = exc_info.value.response
    assert response.id is None
    assert response.answer.code == ErrorCode.INVALID_REQUEST


def test_parse_mime_type_splits_suffix():
    """The structured syntax suffix is parsed apart from the subtype."""
    mime = parse_mime_type("application/vnd.api+json; charset=utf-8")

    assert mime.type == "application"
    assert mime.subtype == "vnd.api"
    assert mime.suffix == "json"
    assert parse_mime_type("not a mime type") is None


# Envelope decode

def test_from_body_extracts_request():
    """A valid request yields id, method and raw params."""
    request = JsonRpcExtractor.from_body("application/json", ADD_BODY)

    assert request.get_answer_id() == 0
    assert request.method == "add"
    assert request.params == {"a": 0, "b": 111}


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b'{"jsonrpc":"1.0","id":4,"method":"add","params":{}}',
        b'{"jsonrpc":"2.0","id":4,"params":{}}',
        b'{"jsonrpc":"2.0","id":4,"method":"add","params":{},"unknown":1}',
        b'[{"jsonrpc":"2.0","id":4,"method":"add","params":{}}]',
        b"",
    ],
)
def test_from_body_rejects_invalid_envelopes(body):
    """Decode failures become Invalid Request responses with a null id."""
    with pytest.raises(JsonRpcRejection) as exc_info:
        JsonRpcExtractor.from_body("application/json", body)

    response = exc_info.value.response
    assert response.id is None
    assert response.answer.code == ErrorCode.INVALID_REQUEST
    assert response.answer.message
    assert response.answer.data is None


def test_from_body_reports_version_mismatch():
    """The decoder message is carried in the error."""
    with pytest.raises(JsonRpcRejection) as exc_info:
        JsonRpcExtractor.from_body(
            "application/json", b'{"jsonrpc":"1.0","id":4,"method":"add","params":{}}'
        )

    assert "Unknown jsonrpc version" in exc_info.value.response.answer.message


def test_from_body_checks_content_type_first():
    """A bad content type wins over a valid body."""
    with pytest.raises(JsonRpcRejection) as exc_info:
        JsonRpcExtractor.from_body("text/plain", ADD_BODY)

    assert exc_info.value.response.answer.message == (
        "Expected request with `Content-Type: application/json`"
    )


# Params

def test_parse_params_into_model():
    """Params validate into a model."""
    request = JsonRpcExtractor(id=0, method="add", params={"a": 0, "b": 111})

    params = request.parse_params(AddParams)

    assert params == AddParams(a=0, b=111)


def test_parse_params_into_tuple():
    """Params validate into any pydantic understood type."""
    request = JsonRpcExtractor(id="x", method="sub", params=[5, 3])

    assert request.parse_params(Tuple[int, int]) == (5, 3)
    assert request.parse_params(List[int]) == [5, 3]


@pytest.mark.parametrize("id", [7, "seven"])
def test_parse_params_failure_keeps_request_id(id):
    """Invalid params are answered to the request id."""
    request = JsonRpcExtractor(id=id, method="add", params={"a": "zero"})

    with pytest.raises(JsonRpcRejection) as exc_info:
        request.parse_params(AddParams)

    response = exc_info.value.response
    assert response.id == id
    assert response.answer.code == ErrorCode.INVALID_PARAMS
    assert response.answer.data is None
    assert "b" in response.answer.message


def test_method_not_found():
    """method_not_found answers to the known id."""
    request = JsonRpcExtractor(id=0, method="lol", params={})

    response = request.method_not_found("lol")

    assert response.to_json() == (
        b'{"jsonrpc":"2.0","error":{"code":-32601,'
        b'"message":"Method `lol` not found","data":null},"id":0}'
    )


# Starlette requests

@pytest.mark.asyncio
async def test_from_request_reads_chunked_body():
    """The body is buffered across chunks."""
    http_request = make_request(
        [ADD_BODY[:10], ADD_BODY[10:]], {"Content-Type": "application/json"}
    )

    request = await JsonRpcExtractor.from_request(http_request)

    assert request.method == "add"
    assert request.params == {"a": 0, "b": 111}


@pytest.mark.asyncio
async def test_from_request_without_content_type():
    """A missing content type is rejected before the body is read."""
    http_request = make_request([ADD_BODY])

    with pytest.raises(JsonRpcRejection) as exc_info:
        await JsonRpcExtractor.from_request(http_request)

    assert exc_info.value.response.id is None
    assert exc_info.value.response.answer.code == ErrorCode.INVALID_REQUEST


@pytest.mark.asyncio
async def test_read_body_enforces_limit_while_streaming():
    """Bodies over the limit are rejected even without Content-Length."""
    http_request = make_request([b"x" * 10, b"x" * 10], {"Content-Type": "application/json"})

    with pytest.raises(JsonRpcRejection) as exc_info:
        await read_body(http_request, max_body_size=15)

    response = exc_info.value.response
    assert response.id is None
    assert response.answer.message == "Failed to buffer the request body: length limit exceeded"


@pytest.mark.asyncio
async def test_read_body_enforces_declared_length():
    """A declared Content-Length over the limit is rejected up front."""
    http_request = make_request(
        [b"{}"], {"Content-Type": "application/json", "Content-Length": "100"}
    )

    with pytest.raises(JsonRpcRejection):
        await read_body(http_request, max_body_size=15)


@pytest.mark.asyncio
async def test_read_body_client_disconnect():
    """A client disconnect while reading is an Invalid Request."""
    http_request = make_request([], {"Content-Type": "application/json"}, disconnect=True)

    with pytest.raises(JsonRpcRejection) as exc_info:
        await read_body(http_request)

    response = exc_info.value.response
    assert response.id is None
    assert response.answer.code == ErrorCode.INVALID_REQUEST
    assert "client disconnected" in response.answer.message


def test_parse_params_does_not_coerce_strings():
    """Numeric strings are not accepted as integers."""
    request = JsonRpcExtractor(id=3, method="add", params={"a": "1", "b": "2"})

    with pytest.raises(JsonRpcRejection) as exc_info:
        request.parse_params(AddParams)

    response = exc_info.value.response
    assert response.id == 3
    assert response.answer.code == ErrorCode.INVALID_PARAMS
