"""Routing rule domain objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from aws_cdk import (
    aws_certificatemanager as acm,
    aws_cloudfront as cloudfront,
)


class Backend(str, Enum):
    """Destination a routing rule forwards matching requests to."""

    STATIC = "static"
    SERVER = "server"
    IMAGE = "image"


@dataclass(frozen=True)
class BehaviorBundle:
    """Origin plus the cache behavior options shared by every rule of one backend.

    ``options`` holds keyword arguments accepted by both
    ``cloudfront.BehaviorOptions`` and ``Distribution.add_behavior``.
    """

    backend: Backend
    origin: cloudfront.IOrigin = field(compare=False)
    options: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def behavior_options(self) -> cloudfront.BehaviorOptions:
        return cloudfront.BehaviorOptions(origin=self.origin, **self.options)


@dataclass(frozen=True)
class RoutingRule:
    """A path pattern routed to one backend."""

    path_pattern: str
    backend: Backend
    bundle: Optional[BehaviorBundle] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class DistributionDescription:
    """Finalized routing of a distribution, for provisioning collaborators."""

    rules: Tuple[RoutingRule, ...]
    domain_names: Tuple[str, ...]
    certificate: Optional[acm.ICertificate] = field(default=None, compare=False)

    @property
    def path_patterns(self) -> Tuple[str, ...]:
        return tuple(rule.path_pattern for rule in self.rules)
