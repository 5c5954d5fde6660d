"""Test configuration for pytest."""

from types import SimpleNamespace
from typing import Callable, Dict, List

import pytest
from aws_cdk import (
    App,
    Environment,
    Stack,
    aws_lambda as _lambda,
    aws_route53 as route53,
    aws_s3 as s3,
)
from aws_cdk.assertions import Template

from nextjs_cdn import BuildManifest

TEST_ACCOUNT = "123456789012"
TEST_REGION = "us-east-1"
TEST_CERTIFICATE_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/11111111-2222-3333-4444-555555555555"

INLINE_HANDLER = "exports.handler = async () => ({ statusCode: 200 });"


@pytest.fixture
def stack() -> Stack:
    """Stack with an explicit environment, required by edge functions and zone lookups."""
    app = App()
    return Stack(app, "TestStack", env=Environment(account=TEST_ACCOUNT, region=TEST_REGION))


def make_backends(stack: Stack) -> SimpleNamespace:
    """Static assets bucket plus server and image Lambda functions."""
    return SimpleNamespace(
        static_assets_bucket=s3.Bucket(stack, "StaticAssets"),
        server_function=_lambda.Function(
            stack,
            "ServerFn",
            runtime=_lambda.Runtime.NODEJS_20_X,
            handler="index.handler",
            code=_lambda.Code.from_inline(INLINE_HANDLER),
        ),
        image_opt_function=_lambda.Function(
            stack,
            "ImageOptFn",
            runtime=_lambda.Runtime.NODEJS_20_X,
            handler="index.handler",
            code=_lambda.Code.from_inline(INLINE_HANDLER),
        ),
    )


@pytest.fixture
def backends(stack: Stack) -> SimpleNamespace:
    return make_backends(stack)


@pytest.fixture
def backends_factory() -> Callable[[Stack], SimpleNamespace]:
    """Create backends in a stack other than the default test stack."""
    return make_backends


@pytest.fixture
def certificate_arn() -> str:
    return TEST_CERTIFICATE_ARN


@pytest.fixture
def manifest() -> BuildManifest:
    """Typical Next.js public output without a static index.html."""
    return BuildManifest.from_listing(["_next/", "favicon.ico", "images/", "robots.txt"])


@pytest.fixture
def zone_lookups(monkeypatch) -> List[str]:
    """Replace Route 53 context lookups with imported zones and record the looked up names."""
    looked_up: List[str] = []

    def fake_from_lookup(scope, construct_id, *, domain_name, **kwargs):
        looked_up.append(domain_name)
        return route53.HostedZone.from_hosted_zone_attributes(
            scope,
            construct_id,
            hosted_zone_id="Z0123456789ABCDEFGHIJ",
            zone_name=domain_name,
        )

    monkeypatch.setattr(route53.HostedZone, "from_lookup", fake_from_lookup)
    return looked_up


def _distribution_config(template: Template, logical_id_prefix: str) -> Dict:
    for logical_id, resource in template.find_resources("AWS::CloudFront::Distribution").items():
        if logical_id.startswith(logical_id_prefix):
            return resource["Properties"]["DistributionConfig"]
    raise AssertionError(f"Template missing distribution {logical_id_prefix}")


@pytest.fixture
def distribution_config() -> Callable[..., Dict]:
    """Return the DistributionConfig of the distribution whose logical id starts with a prefix."""

    def _get(stack: Stack, logical_id_prefix: str = "SiteDistribution") -> Dict:
        return _distribution_config(Template.from_stack(stack), logical_id_prefix)

    return _get


@pytest.fixture
def path_patterns(distribution_config) -> Callable[..., List[str]]:
    """Return cache behavior path patterns of a distribution in template order."""

    def _get(stack: Stack, logical_id_prefix: str = "SiteDistribution") -> List[str]:
        config = distribution_config(stack, logical_id_prefix)
        return [behavior["PathPattern"] for behavior in config.get("CacheBehaviors", [])]

    return _get
