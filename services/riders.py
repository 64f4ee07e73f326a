"""
Rider directory: applications, approval workflow and the role cascade
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import select, update
from models.rider import Rider
from models.user import User
from models.base import (
    RiderStatus,
    UserRole,
    RIDER_AVAILABLE_STATUSES,
    RIDER_DECISION_STATUSES,
    utcnow,
)
from schemas.rider import RiderApplication
from core.exceptions import ConflictError, InvalidInputError, NoChangeError, NotFoundError
import logging

logger = logging.getLogger(__name__)


def parse_decision(value: str) -> RiderStatus:
    try:
        status = RiderStatus(value)
    except ValueError:
        status = None
    if status not in RIDER_DECISION_STATUSES:
        raise InvalidInputError(
            "Invalid status",
            context={"status": value, "allowed": sorted(s.value for s in RIDER_DECISION_STATUSES)}
        )
    return status


class RiderDirectory:
    """
    Rider persistence for one request's session.

    Activation runs in two steps: the rider's status is committed first, then
    the matching user is promoted to rider. The second step's outcome is
    returned to the caller; its failure never undoes the first step.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def apply(self, application: RiderApplication) -> str:
        """Store a pending application; one per email"""
        if await self._has_applied(application.email):
            raise ConflictError("Rider already exists", context={"email": application.email})

        rider = Rider(
            email=application.email,
            name=application.name,
            status=RiderStatus.PENDING,
            applied_at=utcnow(),
            details=application.model_extra or {}
        )
        self.db.add(rider)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictError(
                "Rider already exists",
                context={"email": application.email},
                original_exception=e
            )

        logger.info(f"Rider application {rider.id} received from {application.email}")
        return rider.id

    async def _has_applied(self, email: str) -> bool:
        result = await self.db.execute(select(Rider.id).where(Rider.email == email))
        return result.scalar_one_or_none() is not None

    async def list_pending(self) -> List[Rider]:
        result = await self.db.execute(
            select(Rider)
            .where(Rider.status == RiderStatus.PENDING)
            .order_by(Rider.applied_at.asc())
        )
        return list(result.scalars().all())

    async def update_status(self, rider_id: str, status: str, email: Optional[str] = None) -> bool:
        """
        Change a rider's status.

        Returns:
            Whether the user role cascade promoted a user (only on active)
        """
        new_status = parse_decision(status)

        rider = await self.db.get(Rider, rider_id)
        if rider is None:
            raise NotFoundError("Rider not found", context={"rider_id": rider_id})
        if rider.status is new_status:
            raise NoChangeError(
                "Rider status unchanged",
                context={"rider_id": rider_id, "status": new_status.value}
            )

        rider.status = new_status
        await self.db.commit()
        logger.info(f"Rider {rider_id} status set to {new_status.value}")

        if new_status is not RiderStatus.ACTIVE:
            return False
        return await self._promote_user(email or rider.email)

    async def _promote_user(self, email: str) -> bool:
        """
        Set the user's role to rider and drop any stashed pre-admin role.

        Returns False if no user matched or the write failed.
        """
        try:
            result = await self.db.execute(
                update(User).where(User.email == email).values(role=UserRole.RIDER, previous_role=None)
            )
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception(f"Rider activated but role update for {email} failed")
            return False

        if result.rowcount == 0:
            logger.warning(f"Rider activated but no user matches {email}")
            return False
        return True

    async def list_active(self, search: Optional[str] = None) -> List[Rider]:
        """Accepted or active riders, optionally filtered by name"""
        query = select(Rider).where(Rider.status.in_(list(RIDER_AVAILABLE_STATUSES)))
        if search:
            query = query.where(Rider.name.icontains(search, autoescape=True))
        query = query.order_by(Rider.applied_at.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())
