"""
Profile store - lookup and mutation of resume_profiles rows by name or linked device.
The UNIQUE constraint on profile_name decides which of two concurrent creates wins.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portfolio.app.core.logging_config import get_logger, mask_token
from portfolio.app.models.resume_profile import ResumeProfile, ResumeProfileDevice
from portfolio.app.utils.timeutil import next_write_time, utcnow

logger = get_logger("services.profile_store")

# Columns a save is allowed to overwrite
UPDATABLE_FIELDS = frozenset({
    "resume_data", "layout", "palette", "show_icons", "font_scale", "locale",
})


class DuplicateNameError(Exception):
    """Insert rejected by the profile_name uniqueness constraint."""

    def __init__(self, profile_name: str):
        super().__init__(f"Profile name already exists: {profile_name}")
        self.profile_name = profile_name


class ProfileStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_name(self, name: str) -> ResumeProfile | None:
        """Exact, case-sensitive match on profile_name."""
        return (
            self.db.query(ResumeProfile)
            .filter(ResumeProfile.profile_name == name)
            .first()
        )

    def find_by_id(self, profile_id: int) -> ResumeProfile | None:
        return self.db.query(ResumeProfile).filter(ResumeProfile.id == profile_id).first()

    def find_latest_by_device_token(self, token: str) -> ResumeProfile | None:
        """Most recently updated profile that `token` is linked to."""
        return (
            self.db.query(ResumeProfile)
            .join(ResumeProfileDevice, ResumeProfileDevice.profile_id == ResumeProfile.id)
            .filter(ResumeProfileDevice.device_token == token)
            .order_by(ResumeProfile.updated_at.desc(), ResumeProfile.id.desc())
            .first()
        )

    def insert(self, profile_name: str, fields: dict[str, Any], device_token: str | None = None) -> ResumeProfile:
        """
        Create a profile with `device_token` (if any) as its only linked device.
        Raises DuplicateNameError if the name is already taken.
        """
        now = utcnow()
        profile = ResumeProfile(
            profile_name=profile_name,
            created_at=now,
            updated_at=now,
            **{k: v for k, v in fields.items() if k in UPDATABLE_FIELDS},
        )
        if device_token:
            profile.devices.append(ResumeProfileDevice(device_token=device_token))
        self.db.add(profile)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Profile insert rejected (duplicate name) name=%s", profile_name)
            raise DuplicateNameError(profile_name) from e
        self.db.refresh(profile)
        return profile

    def update(self, profile: ResumeProfile, fields: dict[str, Any]) -> ResumeProfile:
        """Overwrite document fields; updated_at always moves forward in the same commit."""
        for key, value in fields.items():
            if key in UPDATABLE_FIELDS:
                setattr(profile, key, value)
        profile.updated_at = next_write_time(profile.updated_at)
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def link_device(self, name: str, token: str) -> ResumeProfile | None:
        """
        Add `token` to the profile's linked devices if missing. Idempotent.
        Returns None if no profile has that name. Does not touch updated_at.
        """
        profile = self.find_by_name(name)
        if profile is None:
            return None
        if profile.has_device(token):
            return profile
        profile.devices.append(ResumeProfileDevice(device_token=token))
        try:
            self.db.commit()
        except IntegrityError:
            # another request linked the same token first
            self.db.rollback()
            logger.info("Device already linked name=%s token=%s", name, mask_token(token))
            return self.find_by_name(name)
        self.db.refresh(profile)
        logger.info(
            "Device linked name=%s token=%s devices=%d",
            name,
            mask_token(token),
            len(profile.devices),
        )
        return profile
