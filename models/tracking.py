from sqlalchemy import Column, String, DateTime, Text, Index
from models.base import Base, new_id, utcnow


class TrackingEvent(Base):
    """
    Append-only status event for a tracked parcel.

    parcel_id is free text: events are accepted without checking that the
    parcel exists.
    """
    __tablename__ = "tracking_events"

    id = Column(String(32), primary_key=True, default=new_id)

    tracking_id = Column(String(100), nullable=False)
    parcel_id = Column(String(64), nullable=True)
    status = Column(String(100), nullable=False)
    message = Column(Text, nullable=True)
    updated_by = Column(String(320), nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_tracking_id_timestamp", "tracking_id", "timestamp"),
    )
