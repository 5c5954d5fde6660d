"""Custom domain inputs and their normalized form.

Callers pass either a bare domain name or a ``NextjsDomainProps`` record.
``CustomDomain.from_input`` folds both into one shape so that domain
resolution never has to look at the original input again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union

from aws_cdk import (
    aws_certificatemanager as acm,
    aws_route53 as route53,
)

from ..exceptions import ConfigurationConflictError


@dataclass(frozen=True)
class NextjsDomainProps:
    """Structured custom domain settings.

    Attributes:
        domain_name: Primary domain name served by the distribution
        alternate_names: Additional names attached to the distribution
        hosted_zone: Route 53 zone name or zone reference for the domain
        certificate: Existing ACM certificate (us-east-1) to use
        domain_alias: Hostname redirected to ``domain_name`` over HTTPS
        is_external_domain: Domain is hosted outside Route 53
    """

    domain_name: str
    alternate_names: Sequence[str] = ()
    hosted_zone: Union[str, route53.IHostedZone, None] = None
    certificate: Optional[acm.ICertificate] = None
    domain_alias: Optional[str] = None
    is_external_domain: bool = False


CustomDomainInput = Union[str, NextjsDomainProps]


@dataclass(frozen=True)
class CustomDomain:
    """Normalized custom domain.

    ``is_bare`` records that the caller only gave a domain name, which always
    means a Route 53 zone of the same name and a newly issued certificate.
    """

    domain_name: str
    alternate_names: Tuple[str, ...] = ()
    hosted_zone: Union[str, route53.IHostedZone, None] = field(default=None, compare=False)
    certificate: Optional[acm.ICertificate] = field(default=None, compare=False)
    domain_alias: Optional[str] = None
    is_external_domain: bool = False
    is_bare: bool = False

    @classmethod
    def from_input(cls, value: Optional[CustomDomainInput]) -> Optional["CustomDomain"]:
        if value is None:
            return None
        if isinstance(value, str):
            return cls(domain_name=value, is_bare=True)
        return cls(
            domain_name=value.domain_name,
            alternate_names=tuple(value.alternate_names or ()),
            hosted_zone=value.hosted_zone,
            certificate=value.certificate,
            domain_alias=value.domain_alias,
            is_external_domain=value.is_external_domain is True,
        )

    @property
    def domain_names(self) -> Tuple[str, ...]:
        """Names advertised by the distribution, primary first."""
        return (self.domain_name, *self.alternate_names)

    def validate(self) -> None:
        """Reject settings that only make sense for Route 53 hosted domains."""
        if not self.is_external_domain:
            return
        if not self.certificate:
            raise ConfigurationConflictError(
                'A valid certificate is required when "is_external_domain" is set to "True".'
            )
        if self.domain_alias:
            raise ConfigurationConflictError(
                "Domain alias is only supported for domains hosted on Amazon Route 53. "
                'Do not set the "custom_domain.domain_alias" when "is_external_domain" is enabled.'
            )
        if self.hosted_zone:
            raise ConfigurationConflictError(
                "Hosted zones can only be configured for domains hosted on Amazon Route 53. "
                'Do not set the "custom_domain.hosted_zone" when "is_external_domain" is enabled.'
            )
