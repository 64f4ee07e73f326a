"""
Payment endpoints (bearer token required)
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db, get_current_identity, get_payment_gateway
from core.security import VerifiedIdentity
from schemas.payment import (
    PaymentCreate,
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentRecordResponse,
    PaymentResponse,
)
from services.gateway import PaymentGateway
from services.payments import PaymentLedger

router = APIRouter(tags=["Payments"])


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    body: PaymentIntentRequest,
    identity: VerifiedIdentity = Depends(get_current_identity),
    gateway: PaymentGateway = Depends(get_payment_gateway)
):
    """
    Create a gateway payment intent.

    amount is in the smallest currency unit. Nothing is stored; the client
    completes the payment with the returned secret and then posts /payments.
    """
    client_secret = await PaymentLedger(gateway=gateway).create_payment_intent(body.amount)
    return PaymentIntentResponse(clientSecret=client_secret)


@router.post("/payments", response_model=PaymentRecordResponse)
async def record_payment(
    payment: PaymentCreate,
    identity: VerifiedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """Record a completed payment and mark its parcel paid"""
    payment_id, updated = await PaymentLedger(db).record_payment(payment)
    return PaymentRecordResponse(insertedId=payment_id, updated=updated)


@router.get("/payments", response_model=List[PaymentResponse])
async def list_payments(
    email: Optional[str] = Query(None, description="Only payments made by this email"),
    identity: VerifiedIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """Payment history, latest first"""
    payments = await PaymentLedger(db).list_payments(email=email)
    return [PaymentResponse.from_model(p) for p in payments]
