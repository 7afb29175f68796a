"""Pydantic schemas for the auto-follow endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, StrictStr


class FgacRolesBody(BaseModel):
    """Role delegation pair, shared by every request that accepts `assume_roles`."""
    model_config = ConfigDict(extra='forbid')

    leader_fgac_role: Optional[StrictStr] = None
    follower_fgac_role: Optional[StrictStr] = None


class AutoFollowPatternBody(BaseModel):
    """Request body for adding or removing an auto-follow pattern."""
    model_config = ConfigDict(extra='forbid')

    connection: Optional[StrictStr] = None
    name: Optional[StrictStr] = None
    pattern: Optional[StrictStr] = None
    assume_roles: Optional[FgacRolesBody] = None


class AcknowledgedResponse(BaseModel):
    """Response model for accepted mutations."""
    acknowledged: bool


class AutoFollowPatternResponse(BaseModel):
    """Response model for a registered pattern."""
    connection: str
    name: str
    pattern: str
    created_at: str
    has_assume_roles: bool


class ListAutoFollowPatternsResponse(BaseModel):
    """Response model for pattern listing."""
    patterns: List[AutoFollowPatternResponse]
