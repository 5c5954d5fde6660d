"""Pydantic model for scalar construct settings."""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator

from ..constants import DEFAULT_STACK_PREFIX, PATH_PATTERN_REGEX


class DistributionSettings(BaseModel):
    """Scalar settings of a ``NextjsDistribution``."""

    base_path: Annotated[
        Optional[str],
        Field(
            default=None,
            description="Prefix the site under /base-path on CloudFront",
            examples=["/my-base-path"],
        ),
    ]
    stage_name: Annotated[
        Optional[str],
        Field(default=None, description="Deployment stage used to name the edge function stack"),
    ]
    stack_prefix: Annotated[
        str,
        Field(
            default=DEFAULT_STACK_PREFIX,
            min_length=1,
            description="Prefix of the edge function stack name",
        ),
    ]

    @field_validator("base_path")
    @classmethod
    def validate_base_path(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        if not value.startswith("/") or value.endswith("/"):
            raise ValueError("base_path must start with '/' and must not end with '/'")
        if not PATH_PATTERN_REGEX.fullmatch(value):
            raise ValueError(f"base_path contains characters not allowed in a path pattern: {value}")
        return value

    @property
    def edge_stack_id(self) -> str:
        """Id of the us-east-1 stack holding the edge function."""
        if self.stage_name:
            return f"{self.stack_prefix}-{self.stage_name}-edge"
        return f"{self.stack_prefix}-edge"
