"""
Tracking log endpoints (open, no authentication)
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db
from schemas.api import InsertResponse
from schemas.tracking import TrackingEventCreate, TrackingEventResponse
from services.tracking import TrackingLog

router = APIRouter(tags=["Tracking"])


@router.post("/track", response_model=InsertResponse)
async def append_tracking_event(event: TrackingEventCreate, db: AsyncSession = Depends(get_db)):
    event_id = await TrackingLog(db).append_event(event)
    return InsertResponse(insertedId=event_id)


@router.get("/track/{tracking_id}", response_model=List[TrackingEventResponse])
async def list_tracking_events(tracking_id: str, db: AsyncSession = Depends(get_db)):
    """Status history of one tracking id, oldest first"""
    return await TrackingLog(db).list_events(tracking_id)
