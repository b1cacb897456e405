"""
Resume profile endpoints - save, load and claim resume builder documents.

Public (no admin auth): a profile is owned by whichever devices are linked to it.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from portfolio.app.core.dependencies import get_db, get_rate_limiter
from portfolio.app.core.logging_config import get_logger
from portfolio.app.schemas.resume_profile import (
    LoadResponse,
    ResumeProfileClaim,
    ResumeProfileSave,
    SaveResponse,
    profile_model_to_out,
)
from portfolio.app.services.rate_limiter import RateLimiter
from portfolio.app.services.resume_sync import ResumeSyncError, ResumeSyncService

logger = get_logger("api.resume_profiles")
router = APIRouter()


def _sync_error(e: ResumeSyncError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.to_detail())


def _storage_error(db: Session, action: str, e: Exception) -> HTTPException:
    db.rollback()
    logger.exception("Resume profile %s failed error=%s", action, str(e))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "storage_error", "message": f"Failed to {action} profile"},
    )


@router.get("", response_model=LoadResponse, response_model_exclude_none=True)
def load_profile(
    name: Optional[str] = Query(None),
    deviceToken: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Load a profile by exact name, or the most recently updated profile linked to a device.

    Returns `{found: false}` when nothing matches.
    """
    service = ResumeSyncService(db, rate_limiter)
    try:
        profile = service.load(name=name, device_token=deviceToken)
    except ResumeSyncError as e:
        raise _sync_error(e)
    except Exception as e:
        raise _storage_error(db, "load", e)

    if profile is None:
        return LoadResponse(found=False)
    out = profile_model_to_out(profile)
    return LoadResponse(found=True, profile=out, updatedAt=out.updatedAt)


@router.post("", response_model=SaveResponse)
def save_profile(
    payload: ResumeProfileSave,
    db: Session = Depends(get_db),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Create or update a profile.

    - new name: created and linked to **deviceToken**
    - existing name, linked device: updated unless the server copy is newer than **lastSavedTs** (409 conflict)
    - existing name, unknown device: 409 name_taken
    - same device within the cooldown window: 429
    """
    service = ResumeSyncService(db, rate_limiter)
    try:
        result = service.save(
            payload.profileName,
            payload.resumeData,
            layout=payload.layout,
            palette=payload.palette,
            show_icons=payload.showIcons,
            font_scale=payload.fontScale,
            locale=payload.locale,
            device_token=payload.deviceToken,
            last_saved_ts=payload.lastSavedTs,
        )
    except ResumeSyncError as e:
        raise _sync_error(e)
    except Exception as e:
        raise _storage_error(db, "save", e)

    return SaveResponse(action=result.action, id=result.profile.id, updatedAt=result.updated_at_ms)


@router.put("", response_model=SaveResponse)
def claim_profile(
    payload: ResumeProfileClaim,
    db: Session = Depends(get_db),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """Link **deviceToken** to the existing profile **profileName** (open it on another device)."""
    service = ResumeSyncService(db, rate_limiter)
    try:
        result = service.claim(payload.profileName, payload.deviceToken)
    except ResumeSyncError as e:
        raise _sync_error(e)
    except Exception as e:
        raise _storage_error(db, "claim", e)

    return SaveResponse(action=result.action, id=result.profile.id, updatedAt=result.updated_at_ms)
