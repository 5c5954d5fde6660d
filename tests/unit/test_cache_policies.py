"""Tests for cache and origin request policy resolution."""

from aws_cdk import (
    Duration,
    aws_cloudfront as cloudfront,
)
from aws_cdk.assertions import Match, Template

from nextjs_cdn import (
    IMAGE_CACHE_POLICY,
    SERVER_CACHE_POLICY,
    NextjsCachePolicyProps,
    NextjsOriginRequestPolicyProps,
    resolve_cache_policies,
    resolve_origin_request_policies,
)
from nextjs_cdn.cache_policies import static_cache_control_value

ONE_YEAR = 365 * 24 * 60 * 60


class TestDefaultConstants:
    def test_server_cache_policy_literals(self):
        assert SERVER_CACHE_POLICY.header_allow_list == (
            "accept",
            "rsc",
            "next-router-prefetch",
            "next-router-state-tree",
            "next-url",
        )
        assert SERVER_CACHE_POLICY.min_ttl_seconds == 0
        assert SERVER_CACHE_POLICY.default_ttl_seconds == 0
        assert SERVER_CACHE_POLICY.max_ttl_seconds == ONE_YEAR

    def test_image_cache_policy_literals(self):
        assert IMAGE_CACHE_POLICY.header_allow_list == ("accept",)
        assert IMAGE_CACHE_POLICY.min_ttl_seconds == 0
        assert IMAGE_CACHE_POLICY.default_ttl_seconds == 24 * 60 * 60
        assert IMAGE_CACHE_POLICY.max_ttl_seconds == ONE_YEAR

    def test_static_cache_control_defaults_to_thirty_days(self):
        assert static_cache_control_value() == "public,max-age=2592000,immutable"
        assert static_cache_control_value(Duration.hours(1)) == "public,max-age=3600,immutable"


class TestResolveCachePolicies:
    def test_defaults_are_created(self, stack):
        policies = resolve_cache_policies(stack)
        template = Template.from_stack(stack)

        assert (
            policies.static_cache_policy.cache_policy_id
            == cloudfront.CachePolicy.CACHING_OPTIMIZED.cache_policy_id
        )
        template.resource_count_is("AWS::CloudFront::CachePolicy", 2)
        template.has_resource_properties(
            "AWS::CloudFront::CachePolicy",
            {
                "CachePolicyConfig": {
                    "Comment": "Nextjs Server Default Cache Policy",
                    "DefaultTTL": 0,
                    "MinTTL": 0,
                    "MaxTTL": ONE_YEAR,
                    "ParametersInCacheKeyAndForwardedToOrigin": {
                        "CookiesConfig": {"CookieBehavior": "all"},
                        "QueryStringsConfig": {"QueryStringBehavior": "all"},
                        "HeadersConfig": {
                            "HeaderBehavior": "whitelist",
                            "Headers": list(SERVER_CACHE_POLICY.header_allow_list),
                        },
                        "EnableAcceptEncodingBrotli": True,
                        "EnableAcceptEncodingGzip": True,
                    },
                }
            },
        )
        template.has_resource_properties(
            "AWS::CloudFront::CachePolicy",
            {
                "CachePolicyConfig": {
                    "Comment": "Nextjs Image Default Cache Policy",
                    "DefaultTTL": 86400,
                    "MinTTL": 0,
                    "MaxTTL": ONE_YEAR,
                    "ParametersInCacheKeyAndForwardedToOrigin": {
                        "HeadersConfig": {"HeaderBehavior": "whitelist", "Headers": ["accept"]},
                    },
                }
            },
        )
        template.has_resource_properties(
            "AWS::CloudFront::ResponseHeadersPolicy",
            {
                "ResponseHeadersPolicyConfig": {
                    "CustomHeadersConfig": {
                        "Items": [
                            {
                                "Header": "cache-control",
                                "Override": False,
                                "Value": "public,max-age=2592000,immutable",
                            }
                        ]
                    }
                }
            },
        )

    def test_static_client_max_age_override(self, stack):
        resolve_cache_policies(stack, NextjsCachePolicyProps(static_client_max_age_default=Duration.days(7)))

        Template.from_stack(stack).has_resource_properties(
            "AWS::CloudFront::ResponseHeadersPolicy",
            {
                "ResponseHeadersPolicyConfig": {
                    "CustomHeadersConfig": {
                        "Items": [Match.object_like({"Value": "public,max-age=604800,immutable"})]
                    }
                }
            },
        )

    def test_overrides_replace_defaults(self, stack):
        headers_policy = cloudfront.ResponseHeadersPolicy.SECURITY_HEADERS
        server_policy = cloudfront.CachePolicy.CACHING_DISABLED
        image_policy = cloudfront.CachePolicy.from_cache_policy_id(stack, "ImagePolicy", "image-policy-id")
        static_policy = cloudfront.CachePolicy.USE_ORIGIN_CACHE_CONTROL_HEADERS

        policies = resolve_cache_policies(
            stack,
            NextjsCachePolicyProps(
                static_response_header_policy=headers_policy,
                static_cache_policy=static_policy,
                server_cache_policy=server_policy,
                image_cache_policy=image_policy,
            ),
        )
        template = Template.from_stack(stack)

        assert policies.static_response_headers_policy is headers_policy
        assert policies.static_cache_policy is static_policy
        assert policies.server_cache_policy is server_policy
        assert policies.image_cache_policy is image_policy
        template.resource_count_is("AWS::CloudFront::CachePolicy", 0)
        template.resource_count_is("AWS::CloudFront::ResponseHeadersPolicy", 0)


class TestResolveOriginRequestPolicies:
    def test_defaults_exclude_host_header(self):
        policies = resolve_origin_request_policies()

        default_id = cloudfront.OriginRequestPolicy.ALL_VIEWER_EXCEPT_HOST_HEADER.origin_request_policy_id
        assert policies.server_origin_request_policy.origin_request_policy_id == default_id
        assert policies.image_origin_request_policy.origin_request_policy_id == default_id

    def test_overrides_are_used(self):
        server = cloudfront.OriginRequestPolicy.ALL_VIEWER
        image = cloudfront.OriginRequestPolicy.CORS_S3_ORIGIN

        policies = resolve_origin_request_policies(
            NextjsOriginRequestPolicyProps(
                server_origin_request_policy=server,
                image_optimization_origin_request_policy=image,
            )
        )

        assert policies.server_origin_request_policy is server
        assert policies.image_origin_request_policy is image
