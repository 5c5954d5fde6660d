"""CloudFront distribution serving a Next.js application."""

from __future__ import annotations

import logging
import os
from typing import Any, List, Mapping, Optional, Tuple, Union

from aws_cdk import (
    aws_certificatemanager as acm,
    aws_cloudfront as cloudfront,
    aws_lambda as _lambda,
    aws_route53 as route53,
    aws_s3 as s3,
)
from constructs import Construct
from pydantic import ValidationError

from .behaviors import BehaviorSet, build_behavior_set, plan_routes
from .cache_policies import (
    NextjsCachePolicyProps,
    NextjsOriginRequestPolicyProps,
    resolve_cache_policies,
    resolve_origin_request_policies,
)
from .constants import MAX_CACHE_BEHAVIORS
from .custom_domain import DomainResolver
from .edge import create_sign_fn_url_edge_lambda
from .exceptions import ConfigurationConflictError, ConfigurationError
from .models import (
    BehaviorBundle,
    BuildManifest,
    CustomDomain,
    CustomDomainInput,
    DistributionDescription,
    DistributionSettings,
    RoutingRule,
)

logger = logging.getLogger(__name__)

# Always set by the construct, never taken from distribution_overrides
COMPOSER_CONTROLLED_PROPS = ("domain_names", "certificate", "default_behavior")


class NextjsDistribution(Construct):
    """Create a CloudFront distribution to serve a Next.js application.

    Rules are installed in a fixed order: one per static artifact, then
    ``api/*``, ``_next/data/*``, ``_next/image*`` and finally the site root
    fallback when the static output has no ``index.html``.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        static_assets_bucket: s3.IBucket,
        server_function: _lambda.IFunction,
        image_opt_function: _lambda.IFunction,
        build_manifest: Optional[BuildManifest] = None,
        nextjs_path: Optional[Union[str, os.PathLike]] = None,
        cache_policies: Optional[NextjsCachePolicyProps] = None,
        origin_request_policies: Optional[NextjsOriginRequestPolicyProps] = None,
        custom_domain: Optional[CustomDomainInput] = None,
        function_url_auth_type: Optional[_lambda.FunctionUrlAuthType] = None,
        base_path: Optional[str] = None,
        distribution: Optional[cloudfront.Distribution] = None,
        distribution_overrides: Optional[Mapping[str, Any]] = None,
        stage_name: Optional[str] = None,
        stack_prefix: Optional[str] = None,
    ) -> None:
        super().__init__(scope, construct_id)

        if distribution is not None and distribution_overrides is not None:
            raise ConfigurationConflictError(
                'You can either pass an existing "distribution" or pass configs to create one via '
                '"distribution_overrides".'
            )
        try:
            self.settings = DistributionSettings(
                base_path=base_path,
                stage_name=stage_name,
                **({"stack_prefix": stack_prefix} if stack_prefix else {}),
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid distribution settings: {exc}") from exc

        self.build_manifest = self._load_build_manifest(build_manifest, nextjs_path)
        self.custom_domain = CustomDomain.from_input(custom_domain)
        self.function_url_auth_type = function_url_auth_type or _lambda.FunctionUrlAuthType.NONE
        self._rules: List[RoutingRule] = []

        # Fail before anything is provisioned
        routes = plan_routes(self.build_manifest, self.base_path)

        # Create Custom Domain
        self._domain_resolver = DomainResolver(self)
        resolved = self._domain_resolver.resolve(self.custom_domain)
        self.hosted_zone: Optional[route53.IHostedZone] = resolved.hosted_zone
        self.certificate: Optional[acm.ICertificate] = resolved.certificate

        # Create Behaviors
        edge_lambdas = []
        if self.is_fn_url_iam_auth:
            edge_lambdas.append(
                create_sign_fn_url_edge_lambda(
                    self,
                    server_function=server_function,
                    image_opt_function=image_opt_function,
                    stack_id=self.settings.edge_stack_id,
                )
            )
        self.behaviors: BehaviorSet = build_behavior_set(
            self,
            static_assets_bucket=static_assets_bucket,
            server_function=server_function,
            image_opt_function=image_opt_function,
            cache_policies=resolve_cache_policies(self, cache_policies),
            origin_request_policies=resolve_origin_request_policies(origin_request_policies),
            auth_type=self.function_url_auth_type,
            edge_lambdas=edge_lambdas,
        )

        # Create CloudFront Distribution
        if distribution is not None:
            self.distribution = distribution
        else:
            self.distribution = self._create_cloudfront_distribution(distribution_overrides)
        for pattern, backend in routes:
            self._add_rule(pattern, self.behaviors.for_backend(backend))
        self._check_behavior_count()

        # Connect Custom Domain to CloudFront Distribution
        self.dns_records = self._domain_resolver.add_alias_records(self.distribution, self.custom_domain, resolved)

    @staticmethod
    def _load_build_manifest(
        build_manifest: Optional[BuildManifest], nextjs_path: Optional[Union[str, os.PathLike]]
    ) -> BuildManifest:
        if build_manifest is not None:
            return build_manifest
        if nextjs_path is None:
            raise ConfigurationError('Either "build_manifest" or "nextjs_path" is required.')
        return BuildManifest.from_nextjs_build(nextjs_path)

    @property
    def base_path(self) -> Optional[str]:
        return self.settings.base_path

    @property
    def is_fn_url_iam_auth(self) -> bool:
        return self.function_url_auth_type == _lambda.FunctionUrlAuthType.AWS_IAM

    @property
    def url(self) -> str:
        """The CloudFront URL of the website."""
        return f"https://{self.distribution.distribution_domain_name}"

    @property
    def custom_domain_name(self) -> Optional[str]:
        return self.custom_domain.domain_name if self.custom_domain else None

    @property
    def custom_domain_url(self) -> Optional[str]:
        """URL of the website on the custom domain, if one is configured."""
        name = self.custom_domain_name
        return f"https://{name}" if name else None

    @property
    def distribution_id(self) -> str:
        return self.distribution.distribution_id

    @property
    def distribution_domain(self) -> str:
        return self.distribution.distribution_domain_name

    @property
    def domain_names(self) -> Tuple[str, ...]:
        return self.custom_domain.domain_names if self.custom_domain else ()

    @property
    def rules(self) -> Tuple[RoutingRule, ...]:
        """Rules added by this construct, in install order."""
        return tuple(self._rules)

    @property
    def description(self) -> DistributionDescription:
        return DistributionDescription(
            rules=self.rules,
            domain_names=self.domain_names,
            certificate=self.certificate,
        )

    def _create_cloudfront_distribution(
        self, overrides: Optional[Mapping[str, Any]] = None
    ) -> cloudfront.Distribution:
        overrides = dict(overrides or {})
        for key in COMPOSER_CONTROLLED_PROPS:
            if overrides.pop(key, None) is not None:
                logger.warning("Ignoring distribution override %r, it is set by NextjsDistribution", key)

        domain_names = list(self.domain_names)
        return cloudfront.Distribution(
            self,
            "Distribution",
            **{
                "default_root_object": "",
                "minimum_protocol_version": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021,
                **overrides,
                "domain_names": domain_names or None,
                "certificate": self.certificate,
                "default_behavior": self.behaviors.server.behavior_options(),
            },
        )

    def _add_rule(self, path_pattern: str, bundle: BehaviorBundle) -> None:
        self.distribution.add_behavior(path_pattern, bundle.origin, **bundle.options)
        self._rules.append(RoutingRule(path_pattern, bundle.backend, bundle))
        logger.debug("Added %s behavior for %s", bundle.backend.value, path_pattern)

    def _check_behavior_count(self) -> None:
        """Warn when this construct's rules plus the default behavior exceed the quota.

        Behaviors added to a caller supplied distribution by other code are not
        visible here and are not counted.
        """
        total = len(self._rules) + 1
        if total > MAX_CACHE_BEHAVIORS:
            logger.warning(
                "Distribution has %d cache behaviors, above the default CloudFront quota of %d",
                total,
                MAX_CACHE_BEHAVIORS,
            )
