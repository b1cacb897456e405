"""
ResumeProfile - a named resume document saved from the resume builder.
Devices allowed to update a profile are kept in resume_profile_devices.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import relationship

from portfolio.app.core.config import (
    DEFAULT_FONT_SCALE,
    DEFAULT_LAYOUT,
    DEFAULT_LOCALE,
    DEFAULT_PALETTE,
)
from portfolio.app.db.base import Base
from portfolio.app.utils.timeutil import utcnow


class ResumeProfile(Base):
    __tablename__ = "resume_profiles"

    id = Column(Integer, primary_key=True, index=True)
    profile_name = Column(String(100), unique=True, nullable=False)

    resume_data = Column(JSON, nullable=False)
    layout = Column(String(50), nullable=False, default=DEFAULT_LAYOUT)
    palette = Column(String(50), nullable=False, default=DEFAULT_PALETTE)
    show_icons = Column(Boolean, nullable=False, default=True)
    font_scale = Column(Integer, nullable=False, default=DEFAULT_FONT_SCALE)
    locale = Column(String(10), nullable=False, default=DEFAULT_LOCALE)

    updated_at = Column(DateTime, nullable=False, default=utcnow)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    devices = relationship(
        "ResumeProfileDevice",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="ResumeProfileDevice.id",
    )

    @property
    def device_tokens(self) -> list[str]:
        return [d.device_token for d in self.devices]

    def has_device(self, token: str | None) -> bool:
        return bool(token) and token in self.device_tokens


class ResumeProfileDevice(Base):
    __tablename__ = "resume_profile_devices"
    __table_args__ = (
        UniqueConstraint("profile_id", "device_token", name="uq_resume_profile_device"),
    )

    id = Column(Integer, primary_key=True)
    profile_id = Column(
        Integer, ForeignKey("resume_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # opaque client-generated id, one per browser/device install
    device_token = Column(String(200), nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)

    profile = relationship("ResumeProfile", back_populates="devices")
