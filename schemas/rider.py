"""
Pydantic schemas for rider applications
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from models.base import RiderStatus


class RiderApplication(BaseModel):
    """Rider application; extra fields (phone, region, bike, ...) are stored as sent"""
    email: str = Field(..., min_length=3, max_length=320)
    name: Optional[str] = Field(None, max_length=200)

    class Config:
        extra = "allow"


class RiderStatusUpdate(BaseModel):
    status: str
    email: Optional[str] = None


class RiderStatusUpdateResponse(BaseModel):
    """
    Outcome of a status change.

    role_updated reports whether the matching user was promoted to rider;
    it is False for every status other than active, and when the promotion
    step failed or found no user.
    """
    message: str
    status: RiderStatus
    role_updated: bool

    class Config:
        use_enum_values = True


class RiderResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    status: RiderStatus
    applied_at: datetime

    @classmethod
    def from_model(cls, rider):
        return cls(**{
            **(rider.details or {}),
            "id": rider.id,
            "email": rider.email,
            "name": rider.name,
            "status": rider.status,
            "applied_at": rider.applied_at,
        })

    class Config:
        extra = "allow"
        use_enum_values = True
