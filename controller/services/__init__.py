"""Service layer for business logic."""

from controller.services.autofollow_service import AutoFollowService

__all__ = [
    "AutoFollowService",
]
