"""
Admin authentication endpoints - Login and current admin
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.app.core.dependencies import get_current_admin, get_db
from portfolio.app.core.logging_config import get_logger
from portfolio.app.models.admin_user import AdminUser
from portfolio.app.schemas.admin import AdminLogin, AdminResponse, TokenResponse
from portfolio.app.services.auth_service import AuthService

logger = get_logger("api.auth")
router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def login(login_data: AdminLogin, db: Session = Depends(get_db)):
    """
    Login admin and get access token

    - **username**: Admin username
    - **password**: Admin password
    """
    if not login_data.username or not login_data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required",
        )

    logger.info("Admin login attempt username=%s", login_data.username)
    try:
        result = AuthService.login_admin(db, login_data.username, login_data.password)

        if not result["success"]:
            logger.warning(
                "Admin login failed username=%s reason=%s",
                login_data.username,
                result["message"],
            )
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=result["message"],
                headers={"WWW-Authenticate": "Bearer"},
            )

        admin = result["admin"]
        logger.info("Admin logged in admin_id=%s username=%s", admin.id, admin.username)
        return TokenResponse(
            access_token=result["access_token"],
            token_type=result["token_type"],
            username=admin.username,
            message=result["message"],
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Admin login error username=%s error=%s", login_data.username, str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.get("/me", response_model=AdminResponse)
def get_me(current_admin: AdminUser = Depends(get_current_admin)):
    """Get the currently authenticated admin."""
    return AdminResponse(id=current_admin.id, username=current_admin.username)
