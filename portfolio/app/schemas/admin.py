"""
Admin auth Pydantic schemas for request/response validation
"""
from pydantic import BaseModel
from typing import Optional


class AdminLogin(BaseModel):
    """Schema for admin login. Fields optional so missing values map to 400, not 422."""
    username: Optional[str] = None
    password: Optional[str] = None


class AdminResponse(BaseModel):
    """Schema for admin response"""
    id: int
    username: str

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Schema for token response"""
    access_token: str
    token_type: str = "bearer"
    username: str
    message: Optional[str] = None
