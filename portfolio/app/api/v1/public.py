"""
Public site endpoints - content and config read by the public pages
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.app.core.config import PUBLIC_CONFIG_CACHE_KEY, PUBLIC_DATA_CACHE_KEY, settings
from portfolio.app.core.dependencies import get_db
from portfolio.app.core.logging_config import get_logger
from portfolio.app.services import content_service
from portfolio.app.utils import cache

logger = get_logger("api.public")
router = APIRouter()


@router.get("/data")
async def get_public_data(db: Session = Depends(get_db)):
    """Projects, experiences, skills, sites, awards, social links and games in display order."""
    cached = await cache.get(PUBLIC_DATA_CACHE_KEY)
    if cached is not None:
        return cached
    try:
        data = content_service.build_public_data(db)
    except Exception as e:
        logger.exception("Failed to build public data error=%s", str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="DB unavailable",
        )
    await cache.set(PUBLIC_DATA_CACHE_KEY, data, ttl=settings.public_data_cache_ttl)
    return data


@router.get("/config")
async def get_public_config(db: Session = Depends(get_db)) -> dict[str, str]:
    """Site config map. Empty when the table is unreadable so pages fall back to defaults."""
    cached = await cache.get(PUBLIC_CONFIG_CACHE_KEY)
    if cached is not None:
        return cached
    try:
        config = content_service.get_site_config(db)
    except Exception as e:
        logger.warning("Public config unavailable error=%s", e)
        return {}
    await cache.set(PUBLIC_CONFIG_CACHE_KEY, config, ttl=settings.public_data_cache_ttl)
    return config
