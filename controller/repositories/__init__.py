"""Repository layer for data access."""

from controller.repositories.autofollow_repository import AutoFollowPatternRepository

__all__ = [
    "AutoFollowPatternRepository",
]
