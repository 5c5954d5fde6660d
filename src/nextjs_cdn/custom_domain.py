"""Hosted zone, certificate and DNS record resolution for custom domains."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from aws_cdk import (
    aws_certificatemanager as acm,
    aws_cloudfront as cloudfront,
    aws_route53 as route53,
    aws_route53_patterns as route53_patterns,
    aws_route53_targets as route53_targets,
)
from constructs import Construct

from .constants import CERTIFICATE_REGION
from .models import CustomDomain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedDomain:
    """Zone and certificate for a custom domain; either may be absent."""

    hosted_zone: Optional[route53.IHostedZone] = field(default=None, compare=False)
    certificate: Optional[acm.ICertificate] = field(default=None, compare=False)


class DomainResolver:
    """Resolve the Route 53 zone and ACM certificate for a custom domain.

    Constructs are added to ``scope`` with the ids ``HostedZone``,
    ``Certificate``, ``AliasRecord``, ``AliasRecordAAAA`` and ``Redirect``.
    """

    def __init__(self, scope: Construct) -> None:
        self._scope = scope

    def resolve(self, custom_domain: Optional[CustomDomain]) -> ResolvedDomain:
        if custom_domain is None:
            return ResolvedDomain()
        custom_domain.validate()
        hosted_zone = self.lookup_hosted_zone(custom_domain)
        certificate = self.resolve_certificate(custom_domain, hosted_zone)
        return ResolvedDomain(hosted_zone=hosted_zone, certificate=certificate)

    def _from_lookup(self, domain_name: str) -> route53.IHostedZone:
        logger.info("Looking up hosted zone for %s", domain_name)
        return route53.HostedZone.from_lookup(self._scope, "HostedZone", domain_name=domain_name)

    def lookup_hosted_zone(self, custom_domain: CustomDomain) -> Optional[route53.IHostedZone]:
        if custom_domain.is_bare:
            return self._from_lookup(custom_domain.domain_name)
        if isinstance(custom_domain.hosted_zone, str):
            return self._from_lookup(custom_domain.hosted_zone)
        if custom_domain.hosted_zone:
            return custom_domain.hosted_zone
        if isinstance(custom_domain.domain_name, str):
            # Domain is not hosted on Route 53
            if custom_domain.is_external_domain:
                return None
            return self._from_lookup(custom_domain.domain_name)
        return custom_domain.hosted_zone

    def resolve_certificate(
        self, custom_domain: CustomDomain, hosted_zone: Optional[route53.IHostedZone]
    ) -> Optional[acm.ICertificate]:
        if hosted_zone is None:
            return custom_domain.certificate
        if custom_domain.certificate and not custom_domain.is_bare:
            return custom_domain.certificate
        logger.info("Issuing DNS validated certificate for %s", custom_domain.domain_name)
        return acm.DnsValidatedCertificate(
            self._scope,
            "Certificate",
            domain_name=custom_domain.domain_name,
            hosted_zone=hosted_zone,
            region=CERTIFICATE_REGION,
        )

    def add_alias_records(
        self,
        distribution: cloudfront.IDistribution,
        custom_domain: Optional[CustomDomain],
        resolved: ResolvedDomain,
    ) -> Tuple[Construct, ...]:
        """Point the custom domain at the distribution; no-op without a hosted zone."""
        if custom_domain is None or resolved.hosted_zone is None:
            return ()

        record_name = custom_domain.domain_name
        target = route53.RecordTarget.from_alias(route53_targets.CloudFrontTarget(distribution))
        records: Tuple[Construct, ...] = (
            route53.ARecord(
                self._scope, "AliasRecord", record_name=record_name, zone=resolved.hosted_zone, target=target
            ),
            route53.AaaaRecord(
                self._scope, "AliasRecordAAAA", record_name=record_name, zone=resolved.hosted_zone, target=target
            ),
        )

        if custom_domain.domain_alias:
            logger.info("Redirecting %s to %s", custom_domain.domain_alias, record_name)
            records += (
                route53_patterns.HttpsRedirect(
                    self._scope,
                    "Redirect",
                    zone=resolved.hosted_zone,
                    record_names=[custom_domain.domain_alias],
                    target_domain=record_name,
                ),
            )
        return records
