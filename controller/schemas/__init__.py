"""Pydantic schemas for API requests and responses."""

from controller.schemas.autofollow import (
    FgacRolesBody,
    AutoFollowPatternBody,
    AcknowledgedResponse,
    AutoFollowPatternResponse,
    ListAutoFollowPatternsResponse
)
from controller.schemas.common import ErrorResponse

__all__ = [
    "FgacRolesBody",
    "AutoFollowPatternBody",
    "AcknowledgedResponse",
    "AutoFollowPatternResponse",
    "ListAutoFollowPatternsResponse",
    "ErrorResponse"
]
