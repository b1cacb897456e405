"""
Admin projects endpoints - list, upsert, delete
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.app.core.config import PUBLIC_DATA_CACHE_KEY
from portfolio.app.core.dependencies import get_current_admin, get_db
from portfolio.app.core.logging_config import get_logger
from portfolio.app.models.admin_user import AdminUser
from portfolio.app.schemas.content import DeleteRequest, ProjectIn
from portfolio.app.services import content_service
from portfolio.app.utils import cache

logger = get_logger("api.admin.projects")
router = APIRouter()


@router.get("")
def list_projects(
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """All project rows ordered by sort_order (tags still JSON text, as stored)."""
    return content_service.list_projects(db)


@router.post("")
async def save_project(
    payload: ProjectIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """Create or update a project by **id**. Also used once per row when saving a new order."""
    try:
        project = content_service.upsert_project(db, payload.model_dump())
    except Exception as e:
        db.rollback()
        logger.exception("Error saving project id=%s error=%s", payload.id, str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save project",
        )
    await cache.delete(PUBLIC_DATA_CACHE_KEY)
    logger.info("Project saved id=%s sort_order=%s", project.id, project.sort_order)
    return {"success": True}


@router.delete("")
async def delete_project(
    payload: DeleteRequest,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """Delete a project by **id**."""
    deleted = content_service.delete_project(db, str(payload.id))
    await cache.delete(PUBLIC_DATA_CACHE_KEY)
    logger.info("Project delete id=%s deleted=%s", payload.id, deleted)
    return {"success": True}
