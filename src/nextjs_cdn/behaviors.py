"""Cache behavior bundles for the static, server and image backends."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from aws_cdk import (
    Fn,
    aws_cloudfront as cloudfront,
    aws_cloudfront_origins as origins,
    aws_lambda as _lambda,
    aws_s3 as s3,
)
from constructs import Construct

from .cache_policies import CachePolicySet, OriginRequestPolicySet
from .constants import (
    API_PATH_PATTERN,
    DATA_PATH_PATTERN,
    FORWARDED_HOST_HEADER,
    IMAGE_PATH_PATTERN,
    MAX_STATIC_BEHAVIORS,
)
from .exceptions import DuplicatePathPatternError, TooManyBehaviorsError
from .models import Backend, BehaviorBundle, BuildManifest
from .paths import build_path_pattern, validate_path_pattern

logger = logging.getLogger(__name__)

COMMON_BEHAVIOR_OPTIONS = {
    "viewer_protocol_policy": cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
    "compress": True,
}

# Without this the server sees the function URL domain as the request host
FORWARDED_HOST_FUNCTION_CODE = f"""
function handler(event) {{
  var request = event.request;
  request.headers["{FORWARDED_HOST_HEADER}"] = request.headers.host;
  return request;
}}
"""


@dataclass(frozen=True)
class BehaviorSet:
    static: BehaviorBundle
    server: BehaviorBundle
    image: BehaviorBundle

    def for_backend(self, backend: Backend) -> BehaviorBundle:
        return {Backend.STATIC: self.static, Backend.SERVER: self.server, Backend.IMAGE: self.image}[backend]


def static_path_patterns(manifest: BuildManifest, base_path: Optional[str] = None) -> List[str]:
    """Path patterns for every top-level static artifact, in manifest order.

    Raises:
        TooManyBehaviorsError: More artifacts than cache behaviors left after the default one
        InvalidPathPatternError: An artifact name is not a valid path pattern
    """
    if len(manifest) > MAX_STATIC_BEHAVIORS:
        raise TooManyBehaviorsError(len(manifest))
    return [build_path_pattern(base_path, validate_path_pattern(entry.path_pattern)) for entry in manifest]


def dynamic_routes(base_path: Optional[str] = None) -> List[Tuple[str, Backend]]:
    """Routes served by the Lambda backends, in install order."""
    return [
        (build_path_pattern(base_path, API_PATH_PATTERN), Backend.SERVER),
        (build_path_pattern(base_path, DATA_PATH_PATTERN), Backend.SERVER),
        (build_path_pattern(base_path, IMAGE_PATH_PATTERN), Backend.IMAGE),
    ]


def root_fallback_patterns(manifest: BuildManifest, base_path: Optional[str] = None) -> List[str]:
    """Patterns routing the site root to the server when there is no static index.html.

    With a base path the distribution's default behavior belongs to another
    site, so both ``/base-path`` and ``/base-path/*`` are routed explicitly.
    """
    if manifest.has_index_document:
        return []
    if base_path:
        return [build_path_pattern(base_path, ""), build_path_pattern(base_path, "*")]
    return ["/"]


def function_url_origin(function: _lambda.IFunction, auth_type: _lambda.FunctionUrlAuthType) -> origins.HttpOrigin:
    fn_url = function.add_function_url(auth_type=auth_type)
    return origins.HttpOrigin(Fn.parse_domain_name(fn_url.url))


def create_static_behavior(
    static_assets_bucket: s3.IBucket, cache_policies: CachePolicySet
) -> BehaviorBundle:
    return BehaviorBundle(
        backend=Backend.STATIC,
        origin=origins.S3BucketOrigin.with_origin_access_control(static_assets_bucket),
        options={
            **COMMON_BEHAVIOR_OPTIONS,
            "allowed_methods": cloudfront.AllowedMethods.ALLOW_GET_HEAD_OPTIONS,
            "cached_methods": cloudfront.CachedMethods.CACHE_GET_HEAD_OPTIONS,
            "cache_policy": cache_policies.static_cache_policy,
            "response_headers_policy": cache_policies.static_response_headers_policy,
        },
    )


def create_forwarded_host_function(scope: Construct) -> List[cloudfront.FunctionAssociation]:
    cloudfront_fn = cloudfront.Function(
        scope,
        "CloudFrontFn",
        code=cloudfront.FunctionCode.from_inline(FORWARDED_HOST_FUNCTION_CODE),
    )
    return [
        cloudfront.FunctionAssociation(
            event_type=cloudfront.FunctionEventType.VIEWER_REQUEST,
            function=cloudfront_fn,
        )
    ]


def create_server_behavior(
    scope: Construct,
    server_function: _lambda.IFunction,
    *,
    auth_type: _lambda.FunctionUrlAuthType,
    cache_policies: CachePolicySet,
    origin_request_policies: OriginRequestPolicySet,
    edge_lambdas: Sequence[cloudfront.EdgeLambda] = (),
) -> BehaviorBundle:
    options = {
        **COMMON_BEHAVIOR_OPTIONS,
        "allowed_methods": cloudfront.AllowedMethods.ALLOW_ALL,
        "origin_request_policy": origin_request_policies.server_origin_request_policy,
        "cache_policy": cache_policies.server_cache_policy,
        "function_associations": create_forwarded_host_function(scope),
    }
    if edge_lambdas:
        options["edge_lambdas"] = list(edge_lambdas)
    return BehaviorBundle(
        backend=Backend.SERVER,
        origin=function_url_origin(server_function, auth_type),
        options=options,
    )


def create_image_behavior(
    image_opt_function: _lambda.IFunction,
    *,
    auth_type: _lambda.FunctionUrlAuthType,
    cache_policies: CachePolicySet,
    origin_request_policies: OriginRequestPolicySet,
    edge_lambdas: Sequence[cloudfront.EdgeLambda] = (),
) -> BehaviorBundle:
    options = {
        **COMMON_BEHAVIOR_OPTIONS,
        "allowed_methods": cloudfront.AllowedMethods.ALLOW_GET_HEAD_OPTIONS,
        "cached_methods": cloudfront.CachedMethods.CACHE_GET_HEAD_OPTIONS,
        "cache_policy": cache_policies.image_cache_policy,
        "origin_request_policy": origin_request_policies.image_origin_request_policy,
    }
    if edge_lambdas:
        options["edge_lambdas"] = list(edge_lambdas)
    return BehaviorBundle(
        backend=Backend.IMAGE,
        origin=function_url_origin(image_opt_function, auth_type),
        options=options,
    )


def build_behavior_set(
    scope: Construct,
    *,
    static_assets_bucket: s3.IBucket,
    server_function: _lambda.IFunction,
    image_opt_function: _lambda.IFunction,
    cache_policies: CachePolicySet,
    origin_request_policies: OriginRequestPolicySet,
    auth_type: _lambda.FunctionUrlAuthType = _lambda.FunctionUrlAuthType.NONE,
    edge_lambdas: Sequence[cloudfront.EdgeLambda] = (),
) -> BehaviorSet:
    logger.debug("Creating behaviors with function URL auth type %s", auth_type)
    return BehaviorSet(
        static=create_static_behavior(static_assets_bucket, cache_policies),
        server=create_server_behavior(
            scope,
            server_function,
            auth_type=auth_type,
            cache_policies=cache_policies,
            origin_request_policies=origin_request_policies,
            edge_lambdas=edge_lambdas,
        ),
        image=create_image_behavior(
            image_opt_function,
            auth_type=auth_type,
            cache_policies=cache_policies,
            origin_request_policies=origin_request_policies,
            edge_lambdas=edge_lambdas,
        ),
    )


def plan_routes(manifest: BuildManifest, base_path: Optional[str] = None) -> List[Tuple[str, Backend]]:
    """Every rule of a site in install order: static artifacts, Lambda routes, root fallback.

    Raises:
        ValidationFailureError: A pattern is invalid, duplicated, or there are too many artifacts
    """
    routes = [(pattern, Backend.STATIC) for pattern in static_path_patterns(manifest, base_path)]
    routes.extend(dynamic_routes(base_path))
    fallback = root_fallback_patterns(manifest, base_path)
    if not fallback:
        logger.info("Static index.html found, skipping root path behavior")
    routes.extend((pattern, Backend.SERVER) for pattern in fallback)

    seen = set()
    for pattern, _ in routes:
        if pattern in seen:
            raise DuplicatePathPatternError(pattern)
        seen.add(pattern)
    return routes
