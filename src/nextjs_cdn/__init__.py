"""Next.js CDN - CloudFront routing for Next.js applications on AWS.

This package composes the cache behaviors, cache policies, custom domain
and certificate of a CloudFront distribution serving a Next.js build whose
static assets live in S3 and whose dynamic routes run on Lambda.
"""

from __future__ import annotations

from .cache_policies import (
    IMAGE_CACHE_POLICY,
    SERVER_CACHE_POLICY,
    CachePolicyDefaults,
    CachePolicySet,
    NextjsCachePolicyProps,
    NextjsOriginRequestPolicyProps,
    resolve_cache_policies,
    resolve_origin_request_policies,
)
from .custom_domain import DomainResolver, ResolvedDomain
from .distribution import NextjsDistribution
from .exceptions import (
    ConfigurationConflictError,
    ConfigurationError,
    DuplicatePathPatternError,
    InvalidPathPatternError,
    NextjsCdnError,
    TooManyBehaviorsError,
    ValidationFailureError,
)
from .models import (
    Backend,
    BuildManifest,
    CustomDomain,
    DistributionDescription,
    ManifestEntry,
    NextjsDomainProps,
    RoutingRule,
)
from .paths import build_path_pattern, validate_path_pattern

__version__ = "0.1.0"

__all__ = [
    "Backend",
    "BuildManifest",
    "CachePolicyDefaults",
    "CachePolicySet",
    "ConfigurationConflictError",
    "ConfigurationError",
    "CustomDomain",
    "DistributionDescription",
    "DomainResolver",
    "DuplicatePathPatternError",
    "IMAGE_CACHE_POLICY",
    "InvalidPathPatternError",
    "ManifestEntry",
    "NextjsCachePolicyProps",
    "NextjsCdnError",
    "NextjsDistribution",
    "NextjsDomainProps",
    "NextjsOriginRequestPolicyProps",
    "ResolvedDomain",
    "RoutingRule",
    "SERVER_CACHE_POLICY",
    "TooManyBehaviorsError",
    "ValidationFailureError",
    "build_path_pattern",
    "resolve_cache_policies",
    "resolve_origin_request_policies",
    "validate_path_pattern",
]
