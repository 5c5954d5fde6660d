"""Environment configuration for the Next.js site CDK app."""

import os
from typing import Optional

from .constants import DEFAULT_STACK_PREFIX


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


class AppConfig:
    """Configuration for synthesizing a Next.js site stack."""

    # Directory holding the Next.js project (with its .open-next build output)
    NEXTJS_PATH: str = os.getenv("NEXTJS_PATH", ".")

    # Custom domain served by the distribution (optional)
    CUSTOM_DOMAIN: Optional[str] = _optional("NEXTJS_CDN_CUSTOM_DOMAIN")

    # Mount the site under /<base-path> on CloudFront (optional)
    BASE_PATH: Optional[str] = _optional("NEXTJS_CDN_BASE_PATH")

    # Sign function URL requests at the edge instead of leaving them open
    FUNCTION_URL_IAM_AUTH: bool = os.getenv("NEXTJS_CDN_FUNCTION_URL_AUTH", "NONE").upper() == "AWS_IAM"

    # Naming of the edge function stack
    STACK_PREFIX: str = os.getenv("NEXTJS_CDN_STACK_PREFIX", DEFAULT_STACK_PREFIX)
    STAGE_NAME: Optional[str] = _optional("NEXTJS_CDN_STAGE_NAME")


class LoggingConfig:
    """Configuration for CDK app logging."""

    LOG_LEVEL: str = os.getenv("NEXTJS_CDN_LOG_LEVEL", "INFO").upper()


# Global config instances
app_config = AppConfig()
logging_config = LoggingConfig()
