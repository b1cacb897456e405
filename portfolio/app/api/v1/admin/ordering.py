"""
Batch reorder endpoint - one transaction for a whole sort session
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.app.core.config import PUBLIC_DATA_CACHE_KEY
from portfolio.app.core.dependencies import get_current_admin, get_db
from portfolio.app.core.logging_config import get_logger
from portfolio.app.models.admin_user import AdminUser
from portfolio.app.schemas.content import SortOrderUpdate
from portfolio.app.services import content_service
from portfolio.app.services.content_service import DuplicateItemsError, MissingItemsError, UnknownEntityError
from portfolio.app.utils import cache

logger = get_logger("api.admin.ordering")
router = APIRouter()


@router.put("/{entity}")
async def save_sort_order(
    entity: str,
    payload: SortOrderUpdate,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Set **sort_order** for every listed row of **entity** (projects, awards, experiences,
    skills, sites, social-links, games). All-or-nothing.
    """
    if not payload.items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="items required")
    try:
        updated = content_service.apply_sort_order(db, entity, [i.model_dump() for i in payload.items])
    except UnknownEntityError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown entity: {entity}")
    except DuplicateItemsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Duplicate ids: {', '.join(str(i) for i in e.ids)}",
        )
    except MissingItemsError as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown ids: {', '.join(str(i) for i in e.ids)}",
        )
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid id")
    except Exception as e:
        db.rollback()
        logger.exception("Error saving sort order entity=%s error=%s", entity, str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save order",
        )

    await cache.delete(PUBLIC_DATA_CACHE_KEY)
    return {"success": True, "updated": updated}
