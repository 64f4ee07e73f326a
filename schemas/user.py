"""
Pydantic schemas for users and roles
"""

from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
from models.base import UserRole


class UserLogin(BaseModel):
    """Login/registration payload; extra fields are kept as profile data"""
    email: str = Field(..., min_length=3, max_length=320)
    role: Optional[UserRole] = None

    @validator("email")
    def clean_email(cls, v):
        v = v.strip()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v

    class Config:
        extra = "allow"


class UserLoginResponse(BaseModel):
    message: str
    inserted: bool
    insertedId: Optional[str] = None


class UserSearchResult(BaseModel):
    """Projection returned by the user search"""
    email: str
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True
        use_enum_values = True


class RoleUpdateRequest(BaseModel):
    role: str


class RoleResponse(BaseModel):
    role: UserRole

    class Config:
        use_enum_values = True


class RoleUpdateResponse(RoleResponse):
    message: str
