"""Tests for the Lambda@Edge function URL signer."""

import base64
import hashlib
import importlib.util
from pathlib import Path

import pytest
from botocore.credentials import Credentials

import nextjs_cdn

HANDLER_PATH = Path(nextjs_cdn.__file__).parent / "assets" / "sign_fn_url" / "index.py"
FN_URL_HOST = "abcdefghijklmnop.lambda-url.eu-west-1.on.aws"


@pytest.fixture
def signer(monkeypatch):
    spec = importlib.util.spec_from_file_location("sign_fn_url_index", HANDLER_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "_load_credentials", lambda: Credentials("AKIDEXAMPLE", "secret", "session-token"))
    return module


def origin_request_event(method="GET", uri="/api/hello", querystring="", body=None, host=FN_URL_HOST):
    request = {
        "clientIp": "203.0.113.10",
        "method": method,
        "uri": uri,
        "querystring": querystring,
        "headers": {"accept": [{"key": "Accept", "value": "*/*"}]},
        "origin": {"custom": {"domainName": host, "path": "", "port": 443, "protocol": "https"}},
    }
    if body is not None:
        request["body"] = body
    return {"Records": [{"cf": {"request": request}}]}


def header(request, name):
    return request["headers"][name][0]["value"]


def test_signs_get_request(signer):
    request = signer.handler(origin_request_event(querystring="a=1&b=2"), None)

    authorization = header(request, "authorization")
    assert authorization.startswith("AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/")
    assert "/eu-west-1/lambda/aws4_request" in authorization
    assert header(request, "x-amz-security-token") == "session-token"
    assert header(request, "x-amz-content-sha256") == hashlib.sha256(b"").hexdigest()
    assert header(request, "x-amz-date")
    assert header(request, "accept") == "*/*"


def test_signs_base64_body(signer):
    payload = b'{"name": "next"}'
    event = origin_request_event(
        method="POST",
        body={"action": "read-only", "data": base64.b64encode(payload).decode(), "encoding": "base64"},
    )

    request = signer.handler(event, None)

    assert header(request, "x-amz-content-sha256") == hashlib.sha256(payload).hexdigest()


def test_signs_text_body(signer):
    event = origin_request_event(method="PUT", body={"data": "hello", "encoding": "text"})

    request = signer.handler(event, None)

    assert header(request, "x-amz-content-sha256") == hashlib.sha256(b"hello").hexdigest()


def test_rejects_non_function_url_origin(signer):
    with pytest.raises(ValueError, match="Not a Lambda function URL host"):
        signer.handler(origin_request_event(host="example.com"), None)
