"""
Create an admin user, or reset its password if it already exists.
Run: python -m portfolio.app.tasks.create_admin <username> <password>
"""
import sys

from sqlalchemy.orm import Session

from portfolio.app.db.base import Base
from portfolio.app.db.session import SessionLocal, engine
from portfolio.app.services.auth_service import AuthService

import portfolio.app.models  # noqa: F401


def create_admin(db: Session, username: str, password: str) -> dict:
    """Create or reset `username`. Returns {action, username} or {error}."""
    username = (username or "").strip()
    if not username or not password:
        return {"error": "username and password required"}
    result = AuthService.create_or_reset_admin(db, username, password)
    if not result["success"]:
        return {"error": result["message"]}
    return {"action": result["action"], "username": result["admin"].username}


def run_create_admin(username: str, password: str) -> dict:
    """Run using a new DB session (tables are created if missing)."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        return create_admin(db, username, password)
    except Exception as e:
        db.rollback()
        return {"error": str(e)}
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("usage: python -m portfolio.app.tasks.create_admin <username> <password>")
        sys.exit(2)
    outcome = run_create_admin(sys.argv[1], sys.argv[2])
    print(outcome)
    sys.exit(1 if "error" in outcome else 0)
