from sqlalchemy import Column, DateTime, Integer, String

from portfolio.app.db.base import Base
from portfolio.app.utils.timeutil import utcnow


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime, default=utcnow)
