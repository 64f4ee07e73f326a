"""
Pydantic schemas for payment intents and payment records
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PaymentIntentRequest(BaseModel):
    """Amount to charge, in the smallest currency unit (cents)"""
    amount: Optional[int] = None


class PaymentIntentResponse(BaseModel):
    clientSecret: str


class PaymentCreate(BaseModel):
    """Confirmed payment reported by the client after the gateway charged it"""
    parcelId: str = Field(..., min_length=1)
    amount: float
    transactionId: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    title: str
    payment_method: str
    payment_time: Optional[datetime] = None


class PaymentRecordResponse(BaseModel):
    """
    Result of recording a payment.

    updated is the number of parcels switched to paid; 0 means the parcel id
    matched nothing (or was already paid) while the payment itself was saved.
    """
    insertedId: str
    updated: int


class PaymentResponse(BaseModel):
    id: str
    parcelId: str
    amount: float
    transactionId: str
    email: str
    title: str
    payment_method: str
    payment_time: datetime

    @classmethod
    def from_model(cls, payment):
        return cls(
            id=payment.id,
            parcelId=payment.parcel_id,
            amount=payment.amount,
            transactionId=payment.transaction_id,
            email=payment.email,
            title=payment.title,
            payment_method=payment.payment_method,
            payment_time=payment.payment_time,
        )
