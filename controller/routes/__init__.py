"""API routes package."""

from controller.routes.autofollow_routes import router as autofollow_router

__all__ = ["autofollow_router"]
