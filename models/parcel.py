from sqlalchemy import Column, String, DateTime, Index
from models.base import Base, JSONType, PaymentStatus, enum_column, new_id, utcnow


class Parcel(Base):
    """
    A delivery request owned by the user who created it.

    Design:
    - created_by holds the owner's email (the natural owner key)
    - details keeps every client-supplied delivery field that has no column
    - payment_status only moves unpaid -> paid, through the payment ledger
    """
    __tablename__ = "parcels"

    id = Column(String(32), primary_key=True, default=new_id)

    created_by = Column(String(320), nullable=True, index=True)
    creation_date = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    payment_status = Column(
        enum_column(PaymentStatus, "payment_status"),
        nullable=False,
        default=PaymentStatus.UNPAID
    )

    # Arbitrary delivery fields (sender, receiver, weight, cost, ...)
    details = Column(JSONType, nullable=False, default=dict)

    __table_args__ = (
        Index("idx_parcel_owner_created", "created_by", "creation_date"),
    )
