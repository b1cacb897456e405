"""
Admin site config endpoints - key/value settings
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.app.core.config import PUBLIC_CONFIG_CACHE_KEY
from portfolio.app.core.dependencies import get_current_admin, get_db
from portfolio.app.core.logging_config import get_logger
from portfolio.app.models.admin_user import AdminUser
from portfolio.app.services import content_service
from portfolio.app.utils import cache

logger = get_logger("api.admin.site_config")
router = APIRouter()


@router.get("")
def get_site_config(
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(get_current_admin),
) -> dict[str, str]:
    return content_service.get_site_config(db)


@router.put("")
async def update_site_config(
    values: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """Upsert each key in the body; keys not sent are unchanged."""
    try:
        content_service.update_site_config(db, values)
    except Exception as e:
        db.rollback()
        logger.exception("Error updating site config error=%s", str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update config",
        )
    await cache.delete(PUBLIC_CONFIG_CACHE_KEY)
    return {"success": True}
