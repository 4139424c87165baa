"""API routers."""

from marketplace.routers.auth import router as auth_router
from marketplace.routers.users import router as users_router

__all__ = ["auth_router", "users_router"]
