"""
SiteConfig - free-form key/value settings edited from the admin panel (site title, umami id, ...)
"""
from sqlalchemy import Column, String, Text

from portfolio.app.db.base import Base


class SiteConfig(Base):
    __tablename__ = "site_config"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False, default="")
