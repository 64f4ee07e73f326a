"""
User and role directory.

Roles toggle reversibly: promoting to admin remembers the previous role,
and any demotion restores it.
"""

from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from models.user import User
from models.base import UserRole, utcnow
from schemas.user import UserLogin
from core.exceptions import InvalidInputError, NotFoundError, NoChangeError
import logging

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


def parse_role(value: str) -> UserRole:
    try:
        return UserRole(value)
    except ValueError:
        raise InvalidInputError(
            "Invalid role",
            context={"role": value, "allowed": [r.value for r in UserRole]}
        )


def resolve_role_change(
    current: UserRole,
    previous: Optional[UserRole],
    requested: UserRole
) -> Tuple[UserRole, Optional[UserRole]]:
    """
    Compute (new role, new previous_role) for a role change request.

    Admin promotion stashes the current role. Any non-admin request is a
    demotion: the requested value is ignored and the stashed role (or user)
    comes back.
    """
    if requested is UserRole.ADMIN:
        if current is UserRole.ADMIN:
            return current, previous
        return UserRole.ADMIN, current
    return previous or UserRole.USER, None


class UserDirectory:
    """User persistence for one request's session"""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _find(self, email: str):
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def upsert_login(self, login: UserLogin) -> Tuple[bool, str]:
        """
        Register a login.

        Returns:
            (created, user id); created is False when the email was known and
            only last_log_in moved
        """
        if login.role not in (None, UserRole.USER):
            raise InvalidInputError(
                "Only the user role can be self-assigned",
                context={"role": login.role.value}
            )

        user = await self._find(login.email)
        if user is not None:
            return False, await self._touch(user)

        now = utcnow()
        user = User(
            email=login.email,
            role=UserRole.USER,
            profile=login.model_extra or {},
            created_at=now,
            last_log_in=now
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Concurrent first login for the same email won the insert
            await self.db.rollback()
            existing = await self._find(login.email)
            if existing is None:
                raise
            return False, await self._touch(existing)

        logger.info(f"User {login.email} created")
        return True, user.id

    async def _touch(self, user: User) -> str:
        user.last_log_in = utcnow()
        await self.db.commit()
        return user.id

    async def search_users(self, email_fragment: str) -> List[User]:
        """Case-insensitive partial email match, capped at SEARCH_LIMIT"""
        result = await self.db.execute(
            select(User)
            .where(User.email.icontains(email_fragment, autoescape=True))
            .order_by(User.email)
            .limit(SEARCH_LIMIT)
        )
        users = list(result.scalars().all())
        if not users:
            raise NotFoundError("No users found", context={"email": email_fragment})
        return users

    async def get_role(self, email: str) -> UserRole:
        user = await self._find(email)
        if user is None:
            raise NotFoundError("User not found", context={"email": email})
        return user.role

    async def set_role(self, email: str, role: str) -> UserRole:
        """
        Promote to admin or demote back.

        Raises:
            InvalidInputError: role is not user, rider or admin
            NotFoundError: no user with this email
            NoChangeError: the stored role would stay the same
        """
        requested = parse_role(role)

        user = await self._find(email)
        if user is None:
            raise NotFoundError("User not found", context={"email": email})

        new_role, new_previous = resolve_role_change(user.role, user.previous_role, requested)
        if new_role is user.role:
            raise NoChangeError(
                "User role unchanged",
                context={"email": email, "role": user.role.value}
            )

        user.role = new_role
        user.previous_role = new_previous
        await self.db.commit()

        logger.info(f"User {email} role set to {new_role.value}")
        return new_role
