"""Path pattern helpers for CloudFront cache behaviors."""

from __future__ import annotations

from typing import Optional

from .constants import PATH_PATTERN_REGEX
from .exceptions import InvalidPathPatternError


def build_path_pattern(base_path: Optional[str], raw: str) -> str:
    """Optionally prepend the base path to a path pattern.

    With a base path, the empty pattern means the exact site root and maps to
    the base path itself rather than ``/base-path/``.
    """
    if not base_path:
        return raw
    if raw == "":
        return base_path
    return f"{base_path}/{raw}"


def validate_path_pattern(pattern: str) -> str:
    if not PATH_PATTERN_REGEX.fullmatch(pattern):
        raise InvalidPathPatternError(pattern)
    return pattern
