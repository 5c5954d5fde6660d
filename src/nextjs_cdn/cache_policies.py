"""CloudFront cache, response headers and origin request policy resolution.

Every policy slot is either supplied by the caller or falls back to a default.
The defaults for the server and image backends are immutable constants that
can be shared by any number of distributions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from aws_cdk import (
    Duration,
    aws_cloudfront as cloudfront,
)
from constructs import Construct

from .constants import DEFAULT_STATIC_MAX_AGE, SECONDS_PER_DAY

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CachePolicyDefaults:
    """Literal settings of a default cache policy.

    Query strings and cookies are always forwarded in full and both
    brotli and gzip encodings are part of the cache key.
    """

    comment: str
    header_allow_list: Tuple[str, ...]
    min_ttl_seconds: int
    default_ttl_seconds: int
    max_ttl_seconds: int

    def cache_policy_kwargs(self) -> Dict[str, Any]:
        return {
            "query_string_behavior": cloudfront.CacheQueryStringBehavior.all(),
            "header_behavior": cloudfront.CacheHeaderBehavior.allow_list(*self.header_allow_list),
            "cookie_behavior": cloudfront.CacheCookieBehavior.all(),
            "min_ttl": Duration.seconds(self.min_ttl_seconds),
            "default_ttl": Duration.seconds(self.default_ttl_seconds),
            "max_ttl": Duration.seconds(self.max_ttl_seconds),
            "enable_accept_encoding_brotli": True,
            "enable_accept_encoding_gzip": True,
            "comment": self.comment,
        }

    def to_cache_policy_props(self) -> cloudfront.CachePolicyProps:
        return cloudfront.CachePolicyProps(**self.cache_policy_kwargs())

    def create(self, scope: Construct, construct_id: str) -> cloudfront.CachePolicy:
        return cloudfront.CachePolicy(scope, construct_id, **self.cache_policy_kwargs())


# Responses must carry explicit cache directives to be cached at all
SERVER_CACHE_POLICY = CachePolicyDefaults(
    comment="Nextjs Server Default Cache Policy",
    header_allow_list=("accept", "rsc", "next-router-prefetch", "next-router-state-tree", "next-url"),
    min_ttl_seconds=0,
    default_ttl_seconds=0,
    max_ttl_seconds=365 * SECONDS_PER_DAY,
)

IMAGE_CACHE_POLICY = CachePolicyDefaults(
    comment="Nextjs Image Default Cache Policy",
    header_allow_list=("accept",),
    min_ttl_seconds=0,
    default_ttl_seconds=SECONDS_PER_DAY,
    max_ttl_seconds=365 * SECONDS_PER_DAY,
)


@dataclass(frozen=True)
class NextjsCachePolicyProps:
    """Overrides for the cache policies created internally."""

    static_response_header_policy: Optional[cloudfront.IResponseHeadersPolicy] = None
    static_cache_policy: Optional[cloudfront.ICachePolicy] = None
    server_cache_policy: Optional[cloudfront.ICachePolicy] = None
    image_cache_policy: Optional[cloudfront.ICachePolicy] = None
    # Cache-control max-age for static assets, 30 days when unset
    static_client_max_age_default: Optional[Duration] = None


@dataclass(frozen=True)
class NextjsOriginRequestPolicyProps:
    """Overrides for the origin request policies of the Lambda backends."""

    server_origin_request_policy: Optional[cloudfront.IOriginRequestPolicy] = None
    image_optimization_origin_request_policy: Optional[cloudfront.IOriginRequestPolicy] = None


@dataclass(frozen=True)
class CachePolicySet:
    """Resolved policies for the three backends."""

    static_response_headers_policy: cloudfront.IResponseHeadersPolicy
    static_cache_policy: cloudfront.ICachePolicy
    server_cache_policy: cloudfront.ICachePolicy
    image_cache_policy: cloudfront.ICachePolicy


@dataclass(frozen=True)
class OriginRequestPolicySet:
    server_origin_request_policy: cloudfront.IOriginRequestPolicy
    image_origin_request_policy: cloudfront.IOriginRequestPolicy


def override_or_default(override: Optional[T], default: Callable[[], T], slot: str) -> T:
    """Return ``override`` when supplied, otherwise build the default lazily."""
    if override is not None:
        logger.debug("Using caller supplied %s", slot)
        return override
    return default()


def static_cache_control_value(max_age: Optional[Duration] = None) -> str:
    seconds = int(max_age.to_seconds()) if max_age is not None else DEFAULT_STATIC_MAX_AGE
    return f"public,max-age={seconds},immutable"


def create_static_response_headers_policy(
    scope: Construct, max_age: Optional[Duration] = None
) -> cloudfront.ResponseHeadersPolicy:
    """Default browser caching for static assets.

    Does not override a cache-control header already set on the S3 object.
    """
    return cloudfront.ResponseHeadersPolicy(
        scope,
        "StaticResponseHeadersPolicy",
        custom_headers_behavior=cloudfront.ResponseCustomHeadersBehavior(
            custom_headers=[
                cloudfront.ResponseCustomHeader(
                    header="cache-control",
                    override=False,
                    value=static_cache_control_value(max_age),
                )
            ]
        ),
    )


def resolve_cache_policies(
    scope: Construct, overrides: Optional[NextjsCachePolicyProps] = None
) -> CachePolicySet:
    overrides = overrides or NextjsCachePolicyProps()
    return CachePolicySet(
        static_response_headers_policy=override_or_default(
            overrides.static_response_header_policy,
            lambda: create_static_response_headers_policy(scope, overrides.static_client_max_age_default),
            "static response headers policy",
        ),
        static_cache_policy=override_or_default(
            overrides.static_cache_policy,
            lambda: cloudfront.CachePolicy.CACHING_OPTIMIZED,
            "static cache policy",
        ),
        server_cache_policy=override_or_default(
            overrides.server_cache_policy,
            lambda: SERVER_CACHE_POLICY.create(scope, "ServerCachePolicy"),
            "server cache policy",
        ),
        image_cache_policy=override_or_default(
            overrides.image_cache_policy,
            lambda: IMAGE_CACHE_POLICY.create(scope, "ImageCachePolicy"),
            "image cache policy",
        ),
    )


def resolve_origin_request_policies(
    overrides: Optional[NextjsOriginRequestPolicyProps] = None,
) -> OriginRequestPolicySet:
    """Lambda function URLs reject requests whose Host is not their own domain."""
    overrides = overrides or NextjsOriginRequestPolicyProps()
    default = cloudfront.OriginRequestPolicy.ALL_VIEWER_EXCEPT_HOST_HEADER
    return OriginRequestPolicySet(
        server_origin_request_policy=override_or_default(
            overrides.server_origin_request_policy, lambda: default, "server origin request policy"
        ),
        image_origin_request_policy=override_or_default(
            overrides.image_optimization_origin_request_policy,
            lambda: default,
            "image origin request policy",
        ),
    )
