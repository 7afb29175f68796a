"""Auto-follow pattern API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from common.constants import AUTOFOLLOW_PATH
from common.logging_config import get_logger
from controller.models.autofollow_request import Action, UpdateAutoFollowPatternRequest
from controller.schemas.autofollow import (
    AcknowledgedResponse,
    AutoFollowPatternResponse,
    ListAutoFollowPatternsResponse
)
from controller.schemas.common import ErrorResponse
from controller.services.autofollow_service import AutoFollowService

logger = get_logger(__name__)

router = APIRouter(prefix=AUTOFOLLOW_PATH, tags=["Auto-follow"])

_autofollow_service: AutoFollowService = AutoFollowService()


def set_autofollow_service(service: AutoFollowService):
    """Set the global auto-follow service instance"""
    global _autofollow_service
    _autofollow_service = service


def get_autofollow_service() -> AutoFollowService:
    """Dependency to get auto-follow service"""
    return _autofollow_service


@router.post(
    "",
    response_model=AcknowledgedResponse,
    responses={400: {"model": ErrorResponse}}
)
async def add_pattern(
    request: Request,
    service: AutoFollowService = Depends(get_autofollow_service)
):
    """
    Register an auto-follow pattern.

    Body:
        - connection: Leader connection alias (required)
        - name: Pattern name, unique per connection (required)
        - pattern: Index name glob (required)
        - assume_roles: {leader_fgac_role, follower_fgac_role} (optional)

    Raises:
        - 400: Malformed body, failed validation or name already registered
    """
    update = UpdateAutoFollowPatternRequest.from_json(await request.body(), Action.ADD)
    service.update(update)
    return AcknowledgedResponse(acknowledged=True)


@router.delete(
    "",
    response_model=AcknowledgedResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def remove_pattern(
    request: Request,
    service: AutoFollowService = Depends(get_autofollow_service)
):
    """
    Unregister an auto-follow pattern. The body must not carry `pattern`.

    Raises:
        - 400: Malformed body or failed validation
        - 404: No such pattern
    """
    update = UpdateAutoFollowPatternRequest.from_json(await request.body(), Action.REMOVE)
    service.update(update)
    return AcknowledgedResponse(acknowledged=True)


@router.get("", response_model=ListAutoFollowPatternsResponse)
async def list_patterns(
    connection: Optional[str] = Query(None),
    service: AutoFollowService = Depends(get_autofollow_service)
):
    """List registered patterns, optionally for one connection."""
    patterns = service.list_patterns(connection)
    return ListAutoFollowPatternsResponse(
        patterns=[
            AutoFollowPatternResponse(
                connection=p.connection,
                name=p.name,
                pattern=p.pattern,
                created_at=p.created_at.isoformat(),
                has_assume_roles=p.assume_roles is not None
            )
            for p in patterns
        ]
    )
