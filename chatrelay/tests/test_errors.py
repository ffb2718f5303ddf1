from __future__ import annotations

import types

import httpx
import pytest

from chatrelay.base.errors import (
    APIError,
    ConfigError,
    EmptyInputError,
    ErrorCode,
    HTTPStatusError,
    InputTooLargeError,
    ProviderError,
    RequestTimeoutError,
    TransportError,
    UnknownProviderError,
    classify_exception,
    code_for_status,
)
from chatrelay.base.http import wrap_transport_exception


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101


def test_classify_transport_exceptions():
    assert classify_exception(httpx.ConnectTimeout("t")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(TimeoutError("t")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.RemoteProtocolError("eof")) is ErrorCode.TRANSIENT  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("invalid parameter")) is ErrorCode.VALIDATION  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (402, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (520, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.UNKNOWN),
    ],
)
def test_code_for_status(status, code):
    assert code_for_status(status) is code  # nosec B101


def test_api_error_string_forms():
    in_band = APIError("boom", status=200, error_type="server_error")
    assert str(in_band) == "API error (server_error): boom"  # nosec B101
    pre_stream = APIError("denied", status=403)
    assert str(pre_stream) == "HTTP 403 - API error (unknown): denied"  # nosec B101
    assert pre_stream.code is ErrorCode.AUTH  # nosec B101


def test_api_error_uses_numeric_envelope_code_when_in_band():
    assert APIError("x", status=200, error_code=404).code is ErrorCode.NOT_FOUND  # nosec B101
    assert APIError("x", status=200, error_code="weird").code is ErrorCode.SERVER_ERROR  # nosec B101


def test_error_kinds_carry_codes():
    assert EmptyInputError().code is ErrorCode.VALIDATION  # nosec B101
    assert InputTooLargeError(11, 10, path="a.txt").message.startswith("file 'a.txt' size (11 bytes)")  # nosec B101
    assert HTTPStatusError(503, "down").message == "HTTP 503: down"  # nosec B101
    assert ConfigError("bad").code is ErrorCode.CONFIG  # nosec B101
    assert UnknownProviderError("foo").code is ErrorCode.NOT_FOUND  # nosec B101
    assert RequestTimeoutError(2.5).message == "request timed out after 2.5s"  # nosec B101


def test_to_dict_shape():
    err = HTTPStatusError(500, "oops", provider="ollama", model="llama3")
    assert err.to_dict() == {  # nosec B101
        "error": "HTTP 500: oops",
        "code": "server_error",
        "provider": "ollama",
        "model": "llama3",
    }
    assert ConfigError("bad").to_dict() == {"error": "bad", "code": "config"}  # nosec B101


def test_wrap_transport_exception():
    passthrough = ConfigError("x")
    assert wrap_transport_exception(passthrough) is passthrough  # nosec B101
    timeout = wrap_transport_exception(httpx.ReadTimeout("slow"), provider="ollama", timeout_seconds=7)
    assert isinstance(timeout, RequestTimeoutError)  # nosec B101
    assert timeout.provider == "ollama"  # nosec B101
    other = wrap_transport_exception(httpx.ConnectError("refused"))
    assert isinstance(other, TransportError)  # nosec B101
    assert other.code is ErrorCode.TRANSIENT  # nosec B101
