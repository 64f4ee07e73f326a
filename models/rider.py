from sqlalchemy import Column, String, DateTime, Index
from models.base import Base, JSONType, RiderStatus, enum_column, new_id, utcnow


class Rider(Base):
    """
    Delivery-worker application and account.

    One application per email. Status changes are driven by administrators;
    activation also promotes the matching user to the rider role.
    """
    __tablename__ = "riders"

    id = Column(String(32), primary_key=True, default=new_id)

    email = Column(String(320), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=True, index=True)
    status = Column(
        enum_column(RiderStatus, "rider_status"),
        nullable=False,
        default=RiderStatus.PENDING
    )
    applied_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Application fields (phone, region, bike, ...)
    details = Column(JSONType, nullable=False, default=dict)

    __table_args__ = (
        Index("idx_rider_status_applied", "status", "applied_at"),
    )
