from sqlalchemy import Column, String, DateTime, Float, Index
from models.base import Base, new_id, utcnow


class Payment(Base):
    """
    Immutable record of a completed payment.

    Several payments may reference the same parcel (retries); parcel_id is
    kept as a plain reference so a payment survives its parcel's deletion.
    """
    __tablename__ = "payments"

    id = Column(String(32), primary_key=True, default=new_id)

    parcel_id = Column(String(64), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    transaction_id = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    payment_method = Column(String(100), nullable=False)
    payment_time = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_payment_email_time", "email", "payment_time"),
    )
