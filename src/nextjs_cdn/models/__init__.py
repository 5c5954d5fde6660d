"""Domain objects for composing Next.js CloudFront distributions."""

from .build_manifest import BuildManifest, ManifestEntry
from .domain_props import CustomDomain, CustomDomainInput, NextjsDomainProps
from .routing import Backend, BehaviorBundle, DistributionDescription, RoutingRule
from .settings import DistributionSettings

__all__ = [
    "Backend",
    "BehaviorBundle",
    "BuildManifest",
    "CustomDomain",
    "CustomDomainInput",
    "DistributionDescription",
    "DistributionSettings",
    "ManifestEntry",
    "NextjsDomainProps",
    "RoutingRule",
]
