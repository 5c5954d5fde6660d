"""Origin-request handler that SigV4-signs requests to Lambda function URLs.

Runs on Lambda@Edge in front of origins such as
``<url-id>.lambda-url.<region>.on.aws``. Environment variables are not
available at the edge, so credentials come from the execution role.
"""

import base64
import hashlib
import logging

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.session import get_session

logger = logging.getLogger()
logger.setLevel(logging.INFO)

SIGNED_HEADERS = ("authorization", "x-amz-date", "x-amz-security-token", "x-amz-content-sha256")

_session = None


def _load_credentials():
    global _session
    if _session is None:
        _session = get_session()
    return _session.get_credentials().get_frozen_credentials()


def _region_from_host(host):
    # <url-id>.lambda-url.<region>.on.aws
    parts = host.split(".")
    if len(parts) < 3 or parts[1] != "lambda-url":
        raise ValueError(f"Not a Lambda function URL host: {host}")
    return parts[2]


def _request_body(request):
    body = request.get("body") or {}
    data = body.get("data") or ""
    if body.get("encoding") == "base64":
        return base64.b64decode(data)
    return data.encode("utf-8")


def handler(event, context):
    request = event["Records"][0]["cf"]["request"]
    host = request["origin"]["custom"]["domainName"]
    body = _request_body(request)

    url = f"https://{host}{request['uri']}"
    if request.get("querystring"):
        url = f"{url}?{request['querystring']}"

    aws_request = AWSRequest(
        method=request["method"],
        url=url,
        data=body,
        headers={"host": host, "x-amz-content-sha256": hashlib.sha256(body).hexdigest()},
    )
    SigV4Auth(_load_credentials(), "lambda", _region_from_host(host)).add_auth(aws_request)

    headers = request.setdefault("headers", {})
    for name in SIGNED_HEADERS:
        value = aws_request.headers.get(name)
        if value:
            headers[name] = [{"key": name, "value": value}]
    logger.info("Signed %s %s for %s", request["method"], request["uri"], host)
    return request
