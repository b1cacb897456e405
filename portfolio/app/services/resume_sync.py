"""
Resume profile sync - save / load / claim on top of ProfileStore.

A profile is identified by its human-chosen name; the set of linked device tokens
decides who may overwrite it. Writes use optimistic concurrency: a linked device
whose last known save is older than the server copy (beyond a skew tolerance)
gets a conflict carrying the server snapshot instead of overwriting it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from portfolio.app.core.config import (
    DEFAULT_FONT_SCALE,
    DEFAULT_LAYOUT,
    DEFAULT_LOCALE,
    DEFAULT_PALETTE,
    DEVICE_TOKEN_MAX_LENGTH,
    PROFILE_NAME_MAX_LENGTH,
    PROFILE_NAME_MIN_LENGTH,
    RESUME_LAYOUTS,
    RESUME_LOCALES,
    RESUME_PALETTES,
    settings,
)
from portfolio.app.core.logging_config import get_logger, mask_token
from portfolio.app.models.resume_profile import ResumeProfile
from portfolio.app.schemas.resume_profile import profile_model_to_out
from portfolio.app.services.profile_store import DuplicateNameError, ProfileStore
from portfolio.app.services.rate_limiter import RateLimiter
from portfolio.app.utils.timeutil import to_epoch_ms

logger = get_logger("services.resume_sync")


# --- Errors ---

class ResumeSyncError(Exception):
    """Base for sync failures. `error` is the wire code the client branches on."""
    error = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class InvalidNameError(ResumeSyncError):
    error = "invalid_name"
    status_code = 400


class MissingDataError(ResumeSyncError):
    error = "missing_data"
    status_code = 400


class InvalidRequestError(ResumeSyncError):
    error = "invalid_request"
    status_code = 400


class RateLimitedError(ResumeSyncError):
    error = "rate_limited"
    status_code = 429


class NameTakenError(ResumeSyncError):
    error = "name_taken"
    status_code = 409


class ProfileNotFoundError(ResumeSyncError):
    error = "not_found"
    status_code = 404


class ConflictError(ResumeSyncError):
    error = "conflict"
    status_code = 409

    def __init__(self, message: str, server_profile: dict[str, Any], server_updated_at: int):
        super().__init__(message)
        self.server_profile = server_profile
        self.server_updated_at = server_updated_at

    def to_detail(self) -> dict[str, Any]:
        detail = super().to_detail()
        detail["serverProfile"] = self.server_profile
        detail["serverUpdatedAt"] = self.server_updated_at
        return detail


# --- Conflict detection ---

class TimestampCheck(str, Enum):
    NOT_CHECKED = "not_checked"  # client sent no last-save time, or server has none
    IN_SYNC = "in_sync"
    SERVER_NEWER = "server_newer"


def compare_timestamps(server_ms: int | None, client_ms: int | None, tolerance_ms: int) -> TimestampCheck:
    """Server copy counts as newer only when it is more than `tolerance_ms` ahead of the client."""
    if not client_ms or not server_ms:
        return TimestampCheck.NOT_CHECKED
    if server_ms > client_ms + tolerance_ms:
        return TimestampCheck.SERVER_NEWER
    return TimestampCheck.IN_SYNC


@dataclass
class SyncResult:
    action: str  # created | updated | linked
    profile: ResumeProfile

    @property
    def updated_at_ms(self) -> int:
        return to_epoch_ms(self.profile.updated_at)


def _clean_name(profile_name: Any) -> str:
    if not isinstance(profile_name, str):
        raise InvalidNameError("Profile name must be at least 2 characters")
    name = profile_name.strip()
    if len(name) < PROFILE_NAME_MIN_LENGTH:
        raise InvalidNameError("Profile name must be at least 2 characters")
    if len(name) > PROFILE_NAME_MAX_LENGTH:
        raise InvalidNameError("Profile name must be at most 100 characters")
    return name


def _clean_token(device_token: Any) -> str:
    if device_token is None:
        return ""
    if not isinstance(device_token, str):
        raise InvalidRequestError("deviceToken must be a string")
    return device_token[:DEVICE_TOKEN_MAX_LENGTH]


def _pick(value: str | None, allowed: tuple[str, ...], default: str, label: str) -> str:
    if not value:
        return default
    if value not in allowed:
        raise InvalidRequestError(f"Unknown {label}: {value}")
    return value


def document_fields(
    resume_data: Any,
    layout: str | None = None,
    palette: str | None = None,
    show_icons: bool | None = None,
    font_scale: int | None = None,
    locale: str | None = None,
) -> dict[str, Any]:
    """Normalize the document part of a save into model columns, applying defaults."""
    if font_scale is not None and font_scale < 0:
        raise InvalidRequestError("fontScale must be positive")
    return {
        "resume_data": resume_data,
        "layout": _pick(layout, RESUME_LAYOUTS, DEFAULT_LAYOUT, "layout"),
        "palette": _pick(palette, RESUME_PALETTES, DEFAULT_PALETTE, "palette"),
        "show_icons": show_icons is not False,
        "font_scale": font_scale or DEFAULT_FONT_SCALE,
        "locale": _pick(locale, RESUME_LOCALES, DEFAULT_LOCALE, "locale"),
    }


class ResumeSyncService:
    def __init__(
        self,
        db: Session,
        rate_limiter: RateLimiter,
        conflict_tolerance_ms: int | None = None,
    ):
        self.store = ProfileStore(db)
        self.rate_limiter = rate_limiter
        self.conflict_tolerance_ms = (
            settings.resume_conflict_tolerance_ms
            if conflict_tolerance_ms is None
            else conflict_tolerance_ms
        )

    def save(
        self,
        profile_name: Any,
        resume_data: Any,
        *,
        layout: str | None = None,
        palette: str | None = None,
        show_icons: bool | None = None,
        font_scale: int | None = None,
        locale: str | None = None,
        device_token: str | None = None,
        last_saved_ts: int | None = None,
    ) -> SyncResult:
        """
        Create the profile if the name is free, otherwise update it when this device is linked.

        Raises InvalidNameError, MissingDataError, InvalidRequestError, RateLimitedError,
        ConflictError, NameTakenError.
        """
        name = _clean_name(profile_name)
        if resume_data is None:
            raise MissingDataError("resumeData is required")
        fields = document_fields(resume_data, layout, palette, show_icons, font_scale, locale)
        token = _clean_token(device_token)

        if not self.rate_limiter.should_allow(token):
            logger.info("Resume save rate limited name=%s token=%s", name, mask_token(token))
            raise RateLimitedError("Too frequent. Please wait a few seconds.")

        existing = self.store.find_by_name(name)
        if existing is None:
            return self._create(name, fields, token)

        if not existing.has_device(token):
            logger.info("Resume save refused, name taken name=%s token=%s", name, mask_token(token))
            raise NameTakenError("This profile name is already taken.")

        server_ms = to_epoch_ms(existing.updated_at)
        check = compare_timestamps(server_ms, last_saved_ts, self.conflict_tolerance_ms)
        if check is TimestampCheck.SERVER_NEWER:
            logger.info(
                "Resume save conflict name=%s server_ts=%s client_ts=%s",
                name,
                server_ms,
                last_saved_ts,
            )
            raise ConflictError(
                "Server has newer data from another device.",
                server_profile=profile_model_to_out(existing).model_dump(),
                server_updated_at=server_ms,
            )

        profile = self.store.update(existing, fields)
        logger.info("Resume profile updated id=%s name=%s token=%s", profile.id, name, mask_token(token))
        return SyncResult(action="updated", profile=profile)

    def _create(self, name: str, fields: dict[str, Any], token: str) -> SyncResult:
        try:
            profile = self.store.insert(name, fields, device_token=token or None)
        except DuplicateNameError as e:
            # lost a concurrent create for the same name
            raise NameTakenError("This profile name is already taken.") from e
        logger.info("Resume profile created id=%s name=%s token=%s", profile.id, name, mask_token(token))
        return SyncResult(action="created", profile=profile)

    def load(self, name: str | None = None, device_token: str | None = None) -> ResumeProfile | None:
        """Lookup by name (preferred) or by linked device. None when nothing matches."""
        if name:
            return self.store.find_by_name(name.strip())
        if device_token:
            return self.store.find_latest_by_device_token(_clean_token(device_token))
        raise InvalidRequestError("name or deviceToken required")

    def claim(self, profile_name: str | None, device_token: str | None) -> SyncResult:
        """Link `device_token` to an existing profile so it can update it. Idempotent."""
        if not profile_name or not profile_name.strip() or not device_token:
            raise InvalidRequestError("profileName and deviceToken required")
        name = profile_name.strip()
        profile = self.store.link_device(name, _clean_token(device_token))
        if profile is None:
            raise ProfileNotFoundError("Profile not found")
        return SyncResult(action="linked", profile=profile)
