"""
Parcel endpoints (bearer token required)
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db, get_current_identity
from core.security import VerifiedIdentity
from schemas.api import InsertResponse, DeleteResponse
from schemas.parcel import ParcelCreate, ParcelResponse
from services.parcels import ParcelRegistry

router = APIRouter(tags=["Parcels"])


@router.post("/parcels", response_model=InsertResponse, status_code=status.HTTP_201_CREATED)
async def create_parcel(
    parcel: ParcelCreate,
    identity: VerifiedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """Submit a parcel; it starts unpaid"""
    parcel_id = await ParcelRegistry(db).create_parcel(parcel, owner_email=identity.email)
    return InsertResponse(insertedId=parcel_id)


@router.get("/parcels", response_model=List[ParcelResponse])
async def list_parcels(
    email: Optional[str] = Query(None, description="Only parcels created by this email"),
    identity: VerifiedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """Parcels sorted by creation_date, latest first"""
    parcels = await ParcelRegistry(db).list_parcels(owner=email)
    return [ParcelResponse.from_model(p) for p in parcels]


@router.get("/myparcels", response_model=List[ParcelResponse])
async def list_my_parcels(
    email: str = Query(..., min_length=1, description="Owner email"),
    identity: VerifiedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    parcels = await ParcelRegistry(db).list_parcels(owner=email)
    return [ParcelResponse.from_model(p) for p in parcels]


@router.get("/parcels/{parcel_id}", response_model=ParcelResponse)
async def get_parcel(
    parcel_id: str,
    identity: VerifiedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    parcel = await ParcelRegistry(db).get_parcel(parcel_id)
    return ParcelResponse.from_model(parcel)


@router.delete("/parcels/{parcel_id}", response_model=DeleteResponse)
async def delete_parcel(
    parcel_id: str,
    identity: VerifiedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """Deleting an unknown id is not an error: deletedCount is 0"""
    deleted = await ParcelRegistry(db).delete_parcel(parcel_id)
    return DeleteResponse(deletedCount=deleted)
