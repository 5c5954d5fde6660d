"""Shared exception types for the Next.js CloudFront constructs."""

from __future__ import annotations

from .constants import CLOUDFRONT_LIMITS_URL, MAX_CACHE_BEHAVIORS, PATH_PATTERN_DOCS_URL


class NextjsCdnError(RuntimeError):
    """Base exception for distribution composition errors."""

    def __init__(self, message: str, *, error_code: str = "nextjs_cdn_error") -> None:
        super().__init__(message)
        self.error_code = error_code


class ConfigurationError(NextjsCdnError):
    """Construct inputs are missing or malformed."""

    def __init__(self, message: str, *, error_code: str = "CONFIGURATION_ERROR") -> None:
        super().__init__(message, error_code=error_code)


class ConfigurationConflictError(ConfigurationError):
    """Mutually exclusive inputs were supplied together."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="CONFIGURATION_CONFLICT")


class ValidationFailureError(NextjsCdnError):
    """A generated routing rule cannot be installed on the distribution."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="VALIDATION_FAILURE")


class InvalidPathPatternError(ValidationFailureError):
    """Path pattern does not match the CloudFront path pattern grammar."""

    def __init__(self, pattern: str) -> None:
        super().__init__(
            f"Invalid CloudFront Distribution Cache Behavior Path Pattern: {pattern}. "
            f"Please see documentation here: {PATH_PATTERN_DOCS_URL}"
        )
        self.pattern = pattern


class TooManyBehaviorsError(ValidationFailureError):
    """Static build output would need more cache behaviors than CloudFront allows."""

    def __init__(self, count: int) -> None:
        super().__init__(
            f"Too many public/ files in Next.js build ({count}). CloudFront limits Distributions "
            f"to {MAX_CACHE_BEHAVIORS} Cache Behaviors. See documented limit here: {CLOUDFRONT_LIMITS_URL}"
        )
        self.count = count


class DuplicatePathPatternError(ValidationFailureError):
    """Two routing rules were generated for the same path pattern."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"Duplicate CloudFront Distribution Cache Behavior Path Pattern: {pattern}")
        self.pattern = pattern
