"""
Rider endpoints
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db
from schemas.api import InsertResponse
from schemas.rider import (
    RiderApplication,
    RiderResponse,
    RiderStatusUpdate,
    RiderStatusUpdateResponse,
)
from services.riders import RiderDirectory

router = APIRouter(prefix="/riders", tags=["Riders"])


@router.post("", response_model=InsertResponse, status_code=status.HTTP_201_CREATED)
async def apply_as_rider(application: RiderApplication, db: AsyncSession = Depends(get_db)):
    """Submit a rider application; a second one for the same email is a 409"""
    rider_id = await RiderDirectory(db).apply(application)
    return InsertResponse(insertedId=rider_id)


@router.get("/pending", response_model=List[RiderResponse])
async def list_pending_riders(db: AsyncSession = Depends(get_db)):
    riders = await RiderDirectory(db).list_pending()
    return [RiderResponse.from_model(r) for r in riders]


@router.patch("/update-status/{rider_id}", response_model=RiderStatusUpdateResponse)
async def update_rider_status(
    rider_id: str,
    body: RiderStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    Accept, reject, activate or deactivate a rider.

    Activation also promotes the user with the given email (the rider's own
    email when omitted) to the rider role; role_updated tells whether it did.
    """
    role_updated = await RiderDirectory(db).update_status(rider_id, body.status, body.email)
    return RiderStatusUpdateResponse(
        message=f"Rider status updated to {body.status}",
        status=body.status,
        role_updated=role_updated
    )


@router.get("/active", response_model=List[RiderResponse])
async def list_active_riders(
    search: Optional[str] = Query(None, description="Part of the rider name, any case"),
    db: AsyncSession = Depends(get_db)
):
    riders = await RiderDirectory(db).list_active(search)
    return [RiderResponse.from_model(r) for r in riders]
