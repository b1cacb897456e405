"""
Resume profile Pydantic schemas - camelCase wire format used by the resume builder page
"""
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from portfolio.app.models.resume_profile import ResumeProfile
from portfolio.app.utils.timeutil import to_epoch_ms


class ResumeProfileSave(BaseModel):
    """POST body. Validation of name/data happens in the sync service so failures map to 400."""
    model_config = ConfigDict(populate_by_name=True)

    profileName: Optional[Any] = None  # type-checked by the sync service (400 invalid_name)
    resumeData: Optional[Any] = None
    layout: Optional[str] = None
    palette: Optional[str] = None
    showIcons: Optional[bool] = None
    fontScale: Optional[int] = None
    locale: Optional[str] = None
    deviceToken: Optional[Any] = None
    # epoch ms of the client's last successful save
    lastSavedTs: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("lastSavedTs", "lastSavedTimestamp"),
    )


class ResumeProfileClaim(BaseModel):
    """PUT body - link a device to an existing profile."""
    profileName: Optional[str] = None
    deviceToken: Optional[str] = None


class ResumeProfileOut(BaseModel):
    id: int
    profileName: str
    resumeData: Any = None
    layout: str
    palette: str
    showIcons: bool
    fontScale: int
    locale: str
    updatedAt: int
    createdAt: int


class SaveResponse(BaseModel):
    success: bool = True
    action: Literal["created", "updated", "linked"]
    id: int
    updatedAt: int


class LoadResponse(BaseModel):
    found: bool
    profile: Optional[ResumeProfileOut] = None
    updatedAt: Optional[int] = None


def profile_model_to_out(profile: ResumeProfile) -> ResumeProfileOut:
    """Convert DB row to wire schema. Linked device tokens are never exposed."""
    return ResumeProfileOut(
        id=profile.id,
        profileName=profile.profile_name,
        resumeData=profile.resume_data,
        layout=profile.layout,
        palette=profile.palette,
        showIcons=bool(profile.show_icons),
        fontScale=profile.font_scale,
        locale=profile.locale,
        updatedAt=to_epoch_ms(profile.updated_at),
        createdAt=to_epoch_ms(profile.created_at),
    )
