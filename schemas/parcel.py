"""
Pydantic schemas for parcels
"""

from pydantic import BaseModel, validator
from typing import Optional
from datetime import datetime, timezone
from models.base import PaymentStatus


class ParcelCreate(BaseModel):
    """
    Parcel submission.

    Only the owner and creation date are interpreted; every other field is
    a free-form delivery detail stored as sent.
    """
    created_by: Optional[str] = None
    creation_date: Optional[datetime] = None

    @validator("creation_date", pre=True)
    def parse_creation_date(cls, v):
        """Accept epoch milliseconds as well as ISO-8601 strings"""
        if isinstance(v, bool):
            raise ValueError("creation_date must be a timestamp")
        if isinstance(v, (int, float)):
            return datetime.fromtimestamp(v / 1000, tz=timezone.utc)
        return v

    class Config:
        extra = "allow"
        json_schema_extra = {
            "example": {
                "created_by": "owner@example.com",
                "creation_date": "2024-01-15T10:30:00Z",
                "title": "Documents",
                "sender_region": "Dhaka",
                "receiver_region": "Khulna",
                "weight": 1.5
            }
        }


class ParcelResponse(BaseModel):
    """Stored parcel: core columns plus the delivery details as sent"""
    id: str
    created_by: Optional[str] = None
    creation_date: datetime
    payment_status: PaymentStatus

    @classmethod
    def from_model(cls, parcel):
        return cls(**{
            **(parcel.details or {}),
            "id": parcel.id,
            "created_by": parcel.created_by,
            "creation_date": parcel.creation_date,
            "payment_status": parcel.payment_status,
        })

    class Config:
        extra = "allow"
        use_enum_values = True
