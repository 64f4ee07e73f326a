"""
Unit tests for the rider directory and the activation cascade
"""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.dml import Update
from models.base import RiderStatus, UserRole
from models.rider import Rider
from models.user import User
from schemas.rider import RiderApplication
from services.riders import RiderDirectory
from services.users import UserDirectory
from core.exceptions import ConflictError, InvalidInputError, NoChangeError, NotFoundError


async def apply(session, email="r@x.com", name="Rahim Uddin", **extra) -> str:
    return await RiderDirectory(session).apply(RiderApplication(email=email, name=name, **extra))


class TestApply:

    @pytest.mark.asyncio
    async def test_application_starts_pending(self, db_session):
        rider_id = await apply(db_session, phone="01700000000", region="Dhaka")

        rider = await db_session.get(Rider, rider_id)
        assert rider.status is RiderStatus.PENDING
        assert rider.applied_at is not None
        assert rider.details == {"phone": "01700000000", "region": "Dhaka"}

    @pytest.mark.asyncio
    async def test_second_application_for_same_email_conflicts(self, db_session):
        await apply(db_session)

        with pytest.raises(ConflictError):
            await apply(db_session, name="Someone Else")

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_caught_by_unique_email(self, db_session, monkeypatch):
        await apply(db_session)

        async def not_yet_applied(self, email):
            return False

        monkeypatch.setattr(RiderDirectory, "_has_applied", not_yet_applied)

        with pytest.raises(ConflictError):
            await apply(db_session, name="Someone Else")

        monkeypatch.undo()
        riders = (await db_session.execute(Rider.__table__.select())).all()
        assert len(riders) == 1


class TestUpdateStatus:

    @pytest.mark.asyncio
    async def test_activation_promotes_user(self, db_session):
        db_session.add(User(email="r@x.com", role=UserRole.USER))
        await db_session.commit()
        rider_id = await apply(db_session)

        role_updated = await RiderDirectory(db_session).update_status(rider_id, "active", "r@x.com")

        assert role_updated is True
        rider = await db_session.get(Rider, rider_id)
        assert rider.status is RiderStatus.ACTIVE
        user = (await db_session.execute(User.__table__.select().where(User.email == "r@x.com"))).one()
        assert user.role is UserRole.RIDER

    @pytest.mark.asyncio
    async def test_activating_an_admin_clears_stashed_role(self, db_session):
        db_session.add(User(email="r@x.com", role=UserRole.USER))
        await db_session.commit()
        users = UserDirectory(db_session)
        await users.set_role("r@x.com", "admin")
        rider_id = await apply(db_session)

        role_updated = await RiderDirectory(db_session).update_status(rider_id, "active", "r@x.com")

        assert role_updated is True
        user = (await db_session.execute(User.__table__.select().where(User.email == "r@x.com"))).one()
        assert user.role is UserRole.RIDER
        assert user.previous_role is None

        # Demotion goes back to rider, not to the stale pre-admin role
        db_session.expire_all()
        await users.set_role("r@x.com", "admin")
        assert await users.set_role("r@x.com", "user") is UserRole.RIDER

    @pytest.mark.asyncio
    async def test_activation_without_user_reports_no_cascade(self, db_session):
        rider_id = await apply(db_session)

        role_updated = await RiderDirectory(db_session).update_status(rider_id, "active", "r@x.com")

        assert role_updated is False
        rider = await db_session.get(Rider, rider_id)
        assert rider.status is RiderStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_cascade_failure_keeps_rider_active(self, db_session, monkeypatch):
        db_session.add(User(email="r@x.com", role=UserRole.USER))
        await db_session.commit()
        rider_id = await apply(db_session)
        original_execute = AsyncSession.execute

        async def failing_execute(self, statement, *args, **kwargs):
            if isinstance(statement, Update) and statement.table.name == "users":
                raise OperationalError("UPDATE users", {}, Exception("database is locked"))
            return await original_execute(self, statement, *args, **kwargs)

        monkeypatch.setattr(AsyncSession, "execute", failing_execute)
        role_updated = await RiderDirectory(db_session).update_status(rider_id, "active", "r@x.com")
        monkeypatch.undo()

        assert role_updated is False
        rider = await db_session.get(Rider, rider_id)
        await db_session.refresh(rider)
        assert rider.status is RiderStatus.ACTIVE
        user = (await db_session.execute(User.__table__.select().where(User.email == "r@x.com"))).one()
        assert user.role is UserRole.USER

    @pytest.mark.asyncio
    async def test_other_statuses_do_not_touch_users(self, db_session):
        db_session.add(User(email="r@x.com", role=UserRole.USER))
        await db_session.commit()
        rider_id = await apply(db_session)

        role_updated = await RiderDirectory(db_session).update_status(rider_id, "accepted", "r@x.com")

        assert role_updated is False
        user = (await db_session.execute(User.__table__.select().where(User.email == "r@x.com"))).one()
        assert user.role is UserRole.USER

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["pending", "approved", ""])
    async def test_invalid_status(self, db_session, status):
        rider_id = await apply(db_session)

        with pytest.raises(InvalidInputError):
            await RiderDirectory(db_session).update_status(rider_id, status)

    @pytest.mark.asyncio
    async def test_unknown_rider(self, db_session):
        with pytest.raises(NotFoundError):
            await RiderDirectory(db_session).update_status("missing", "accepted")

    @pytest.mark.asyncio
    async def test_same_status_raises_no_change(self, db_session):
        rider_id = await apply(db_session)
        directory = RiderDirectory(db_session)
        await directory.update_status(rider_id, "rejected")

        with pytest.raises(NoChangeError):
            await directory.update_status(rider_id, "rejected")


class TestListings:

    @pytest.mark.asyncio
    async def test_pending_only(self, db_session):
        first = await apply(db_session, email="a@x.com")
        second = await apply(db_session, email="b@x.com")
        await RiderDirectory(db_session).update_status(second, "accepted")

        pending = await RiderDirectory(db_session).list_pending()

        assert [r.id for r in pending] == [first]

    @pytest.mark.asyncio
    async def test_active_includes_accepted_and_active(self, db_session):
        directory = RiderDirectory(db_session)
        accepted = await apply(db_session, email="a@x.com", name="Karim")
        active = await apply(db_session, email="b@x.com", name="Rahim")
        rejected = await apply(db_session, email="c@x.com", name="Salim")
        await apply(db_session, email="d@x.com", name="Pending Person")
        await directory.update_status(accepted, "accepted")
        await directory.update_status(active, "active")
        await directory.update_status(rejected, "rejected")

        riders = await directory.list_active()

        assert {r.id for r in riders} == {accepted, active}

    @pytest.mark.asyncio
    async def test_active_search_matches_name_any_case(self, db_session):
        directory = RiderDirectory(db_session)
        karim = await apply(db_session, email="a@x.com", name="Karim Hossain")
        rahim = await apply(db_session, email="b@x.com", name="Rahim Uddin")
        await directory.update_status(karim, "active")
        await directory.update_status(rahim, "active")

        riders = await directory.list_active("HOSS")

        assert [r.id for r in riders] == [karim]
