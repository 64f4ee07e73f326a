"""
Parcel registry: create, list, fetch and delete parcels
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from models.parcel import Parcel
from models.base import PaymentStatus, utcnow
from schemas.parcel import ParcelCreate
from core.exceptions import InvalidInputError, NotFoundError
import logging

logger = logging.getLogger(__name__)

# Keys with a column of their own; never duplicated into details
_CORE_FIELDS = {"id", "created_by", "creation_date", "payment_status"}


class ParcelRegistry:
    """Parcel persistence for one request's session"""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def create_parcel(self, parcel: ParcelCreate, owner_email: Optional[str] = None) -> str:
        """
        Store a new parcel.

        The parcel always starts unpaid. created_by falls back to the
        authenticated caller's email.

        Returns:
            Generated parcel id
        """
        data = parcel.model_dump(exclude_unset=True)
        if not data:
            raise InvalidInputError("Parcel data is missing")

        details = {k: v for k, v in data.items() if k not in _CORE_FIELDS}

        record = Parcel(
            created_by=parcel.created_by or owner_email,
            creation_date=parcel.creation_date or utcnow(),
            payment_status=PaymentStatus.UNPAID,
            details=details
        )
        self.db.add(record)
        await self.db.commit()

        logger.info(f"Parcel {record.id} created by {record.created_by}")
        return record.id

    async def list_parcels(self, owner: Optional[str] = None) -> List[Parcel]:
        """All parcels, or one owner's parcels, latest first"""
        query = select(Parcel)
        if owner:
            query = query.where(Parcel.created_by == owner)
        query = query.order_by(Parcel.creation_date.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_parcel(self, parcel_id: str) -> Parcel:
        parcel = await self.db.get(Parcel, parcel_id)
        if parcel is None:
            raise NotFoundError("Parcel not found", context={"parcel_id": parcel_id})
        return parcel

    async def delete_parcel(self, parcel_id: str) -> int:
        """Delete a parcel; returns the number of rows removed (0 if absent)"""
        result = await self.db.execute(delete(Parcel).where(Parcel.id == parcel_id))
        await self.db.commit()

        if result.rowcount:
            logger.info(f"Parcel {parcel_id} deleted")
        return result.rowcount
