"""
Pydantic schemas for tracking events
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class TrackingEventCreate(BaseModel):
    tracking_id: str = Field(..., min_length=1)
    parcel_id: Optional[str] = None
    status: str = Field(..., min_length=1)
    message: Optional[str] = None
    updated_by: Optional[str] = None


class TrackingEventResponse(TrackingEventCreate):
    id: str
    timestamp: datetime

    class Config:
        from_attributes = True
