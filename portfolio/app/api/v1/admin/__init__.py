"""Admin API module - content management endpoints (admin auth required)."""
from portfolio.app.api.v1.admin.media import router as media_router
from portfolio.app.api.v1.admin.ordering import router as ordering_router
from portfolio.app.api.v1.admin.projects import router as projects_router
from portfolio.app.api.v1.admin.site_config import router as site_config_router

__all__ = ["media_router", "ordering_router", "projects_router", "site_config_router"]
