"""
Pydantic schemas shared by every API endpoint
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InsertResponse(BaseModel):
    """Id of a newly inserted document"""
    insertedId: str


class DeleteResponse(BaseModel):
    """Number of removed documents (0 when nothing matched)"""
    deletedCount: int


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = Field(..., description="Overall system status: healthy or unhealthy")
    timestamp: datetime = Field(default_factory=_utcnow)
    database_connected: bool


# ============================================================================
# Error Response Schema
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str
    detail: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Parcel not found",
                "detail": None,
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
