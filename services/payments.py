"""
Payment ledger: payment intents, payment records and the parcel paid flag
"""

from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, update
from models.payment import Payment
from models.parcel import Parcel
from models.base import PaymentStatus, utcnow
from schemas.payment import PaymentCreate
from services.gateway import PaymentGateway
from core.exceptions import InternalError, InvalidInputError
import logging

logger = logging.getLogger(__name__)


class PaymentLedger:
    """
    Record payments and flip the paid flag of the parcel they pay for.

    Recording a payment inserts the payment and updates the parcel in the
    same transaction: either both are stored or neither is.
    """

    def __init__(self, db_session: Optional[AsyncSession] = None, gateway: Optional[PaymentGateway] = None):
        self.db = db_session
        self.gateway = gateway

    async def create_payment_intent(self, amount: Optional[int]) -> str:
        """Ask the gateway for a payment intent; returns its client secret"""
        if amount is None or amount <= 0:
            raise InvalidInputError("Invalid amount", context={"amount": amount})
        if self.gateway is None:
            raise InternalError("Payment gateway is not available")

        return await self.gateway.create_payment_intent(amount)

    async def record_payment(self, payment: PaymentCreate) -> Tuple[str, int]:
        """
        Insert a payment and mark its parcel paid.

        Returns:
            (payment id, number of parcels switched to paid)
        """
        record = Payment(
            parcel_id=payment.parcelId,
            amount=payment.amount,
            transaction_id=payment.transactionId,
            email=payment.email,
            title=payment.title,
            payment_method=payment.payment_method,
            payment_time=payment.payment_time or utcnow()
        )

        try:
            self.db.add(record)
            await self.db.flush()

            result = await self.db.execute(
                update(Parcel)
                .where(
                    Parcel.id == payment.parcelId,
                    Parcel.payment_status != PaymentStatus.PAID
                )
                .values(payment_status=PaymentStatus.PAID)
            )
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.error(f"Payment for parcel {payment.parcelId} rolled back")
            raise

        updated = result.rowcount
        if updated == 0:
            logger.warning(
                f"Payment {record.id} recorded but parcel {payment.parcelId} "
                f"was not found or already paid"
            )
        else:
            logger.info(f"Payment {record.id} recorded, parcel {payment.parcelId} marked paid")

        return record.id, updated

    async def list_payments(self, email: Optional[str] = None) -> List[Payment]:
        """Payments, optionally for one payer, latest first"""
        query = select(Payment)
        if email:
            query = query.where(Payment.email == email)
        query = query.order_by(Payment.payment_time.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())
