"""
Tracking log: append-only parcel status events
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from models.tracking import TrackingEvent
from models.base import utcnow
from schemas.tracking import TrackingEventCreate
import logging

logger = logging.getLogger(__name__)


class TrackingLog:
    """Write-once event log; events are never updated or deleted"""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def append_event(self, event: TrackingEventCreate) -> str:
        record = TrackingEvent(
            tracking_id=event.tracking_id,
            parcel_id=event.parcel_id,
            status=event.status,
            message=event.message,
            updated_by=event.updated_by,
            timestamp=utcnow()
        )
        self.db.add(record)
        await self.db.commit()

        logger.info(f"Tracking {event.tracking_id}: {event.status}")
        return record.id

    async def list_events(self, tracking_id: str) -> List[TrackingEvent]:
        """Events of one tracking id, oldest first"""
        result = await self.db.execute(
            select(TrackingEvent)
            .where(TrackingEvent.tracking_id == tracking_id)
            .order_by(TrackingEvent.timestamp.asc())
        )
        return list(result.scalars().all())
