"""Lambda@Edge function that signs requests to IAM-protected function URLs.

CloudFront has no way to present an identity to a Lambda function URL, so
when the URLs use ``AWS_IAM`` auth an origin-request edge function signs each
request with SigV4 before it reaches the origin. Once CloudFront origin access
control for function URLs is used instead, this can be removed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from aws_cdk import (
    RemovalPolicy,
    aws_cloudfront as cloudfront,
    aws_iam as iam,
    aws_lambda as _lambda,
)
from aws_cdk.aws_cloudfront import experimental as cloudfront_experimental
from constructs import Construct

from .constants import EDGE_INVOKE_PRINCIPALS

logger = logging.getLogger(__name__)

SIGN_FN_URL_DIR = Path(__file__).parent / "assets" / "sign_fn_url"


def create_sign_fn_url_edge_lambda(
    scope: Construct,
    *,
    server_function: _lambda.IFunction,
    image_opt_function: _lambda.IFunction,
    stack_id: Optional[str] = None,
) -> cloudfront.EdgeLambda:
    """Create the signing edge function and return it as an origin-request association."""
    origin_request_edge_fn = cloudfront_experimental.EdgeFunction(
        scope,
        "EdgeFn",
        runtime=_lambda.Runtime.PYTHON_3_12,
        handler="index.handler",
        code=_lambda.Code.from_asset(str(SIGN_FN_URL_DIR)),
        current_version_options=_lambda.VersionOptions(
            removal_policy=RemovalPolicy.DESTROY,
            retry_attempts=1,
        ),
        stack_id=stack_id,
    )
    for principal in EDGE_INVOKE_PRINCIPALS:
        origin_request_edge_fn.current_version.grant_invoke(iam.ServicePrincipal(principal))
    origin_request_edge_fn.add_to_role_policy(
        iam.PolicyStatement(
            actions=["lambda:InvokeFunctionUrl"],
            resources=[server_function.function_arn, image_opt_function.function_arn],
        )
    )
    function_version = _lambda.Version.from_version_arn(
        scope,
        "Version",
        origin_request_edge_fn.current_version.function_arn,
    )
    logger.info("Signing function URL requests at the edge")
    return cloudfront.EdgeLambda(
        event_type=cloudfront.LambdaEdgeEventType.ORIGIN_REQUEST,
        function_version=function_version,
        include_body=True,
    )
