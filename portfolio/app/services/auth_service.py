"""
Admin authentication business logic
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portfolio.app.core.security import create_access_token, get_password_hash, verify_password
from portfolio.app.models.admin_user import AdminUser


class AuthService:
    """Service for admin authentication operations"""

    @staticmethod
    def login_admin(db: Session, username: str, password: str):
        """Authenticate admin and return access token"""
        admin = db.query(AdminUser).filter(AdminUser.username == username).first()

        if not admin or not verify_password(password, admin.password_hash):
            return {"success": False, "message": "Invalid credentials"}

        access_token = create_access_token(data={"sub": str(admin.id), "username": admin.username})

        return {
            "success": True,
            "access_token": access_token,
            "token_type": "bearer",
            "admin": admin,
            "message": "Login successful",
        }

    @staticmethod
    def create_or_reset_admin(db: Session, username: str, password: str):
        """Create an admin, or reset the password if the username exists"""
        admin = db.query(AdminUser).filter(AdminUser.username == username).first()
        try:
            if admin:
                admin.password_hash = get_password_hash(password)
                action = "reset"
            else:
                admin = AdminUser(username=username, password_hash=get_password_hash(password))
                db.add(admin)
                action = "created"
            db.commit()
            db.refresh(admin)
            return {"success": True, "admin": admin, "action": action}
        except IntegrityError:
            db.rollback()
            return {"success": False, "message": "Error saving admin user"}
