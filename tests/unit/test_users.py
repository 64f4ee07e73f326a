"""
Unit tests for the user directory and the reversible admin toggle
"""

import pytest
from datetime import datetime
from models.base import UserRole
from models.user import User
from schemas.user import UserLogin
from services.users import UserDirectory, resolve_role_change
from core.exceptions import InvalidInputError, NoChangeError, NotFoundError


async def add_user(session, email: str, role: UserRole = UserRole.USER) -> User:
    user = User(email=email, role=role)
    session.add(user)
    await session.commit()
    return user


class TestUpsertLogin:

    @pytest.mark.asyncio
    async def test_first_login_creates_user(self, db_session):
        created, user_id = await UserDirectory(db_session).upsert_login(
            UserLogin(email="a@x.com", name="Alice")
        )

        assert created is True
        user = await db_session.get(User, user_id)
        assert user.role is UserRole.USER
        assert user.profile == {"name": "Alice"}
        assert user.created_at == user.last_log_in

    @pytest.mark.asyncio
    async def test_second_login_only_moves_last_log_in(self, db_session):
        directory = UserDirectory(db_session)
        _, user_id = await directory.upsert_login(UserLogin(email="a@x.com"))
        user = await db_session.get(User, user_id)
        created_at, first_login = user.created_at, user.last_log_in

        created, same_id = await directory.upsert_login(UserLogin(email="a@x.com"))

        assert created is False
        assert same_id == user_id
        await db_session.refresh(user)
        assert user.created_at == created_at
        assert user.last_log_in >= first_login

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", ["admin", "rider"])
    async def test_only_user_role_can_be_self_assigned(self, db_session, role):
        with pytest.raises(InvalidInputError):
            await UserDirectory(db_session).upsert_login(UserLogin(email="a@x.com", role=role))

        users = (await db_session.execute(User.__table__.select())).all()
        assert users == []

    @pytest.mark.asyncio
    async def test_concurrent_first_login_falls_back_to_existing_user(self, db_session, monkeypatch):
        existing = User(email="a@x.com", role=UserRole.USER, last_log_in=datetime(2000, 1, 1))
        db_session.add(existing)
        await db_session.commit()
        existing_id = existing.id
        real_find = UserDirectory._find
        lookups = []

        async def find_misses_first_time(self, email):
            lookups.append(email)
            if len(lookups) == 1:
                return None
            return await real_find(self, email)

        monkeypatch.setattr(UserDirectory, "_find", find_misses_first_time)
        created, user_id = await UserDirectory(db_session).upsert_login(UserLogin(email="a@x.com"))
        monkeypatch.undo()

        assert (created, user_id) == (False, existing_id)
        assert len(lookups) == 2
        user = await db_session.get(User, existing_id)
        await db_session.refresh(user)
        assert user.last_log_in.replace(tzinfo=None) > datetime(2000, 1, 1)


class TestSearchUsers:

    @pytest.mark.asyncio
    async def test_case_insensitive_partial_match(self, db_session):
        await add_user(db_session, "Alice@Example.com")
        await add_user(db_session, "bob@example.com")

        users = await UserDirectory(db_session).search_users("alice")

        assert [u.email for u in users] == ["Alice@Example.com"]

    @pytest.mark.asyncio
    async def test_capped_at_ten_results(self, db_session):
        for i in range(12):
            await add_user(db_session, f"user{i:02d}@example.com")

        users = await UserDirectory(db_session).search_users("example")

        assert len(users) == 10

    @pytest.mark.asyncio
    async def test_like_wildcards_are_literal(self, db_session):
        await add_user(db_session, "bob@example.com")

        with pytest.raises(NotFoundError):
            await UserDirectory(db_session).search_users("%")

    @pytest.mark.asyncio
    async def test_no_match_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await UserDirectory(db_session).search_users("nobody")


class TestResolveRoleChange:

    def test_promotion_stashes_current_role(self):
        assert resolve_role_change(UserRole.RIDER, None, UserRole.ADMIN) == (UserRole.ADMIN, UserRole.RIDER)

    def test_promoting_an_admin_keeps_everything(self):
        assert resolve_role_change(UserRole.ADMIN, UserRole.RIDER, UserRole.ADMIN) == (UserRole.ADMIN, UserRole.RIDER)

    def test_demotion_restores_and_clears(self):
        assert resolve_role_change(UserRole.ADMIN, UserRole.RIDER, UserRole.USER) == (UserRole.RIDER, None)

    def test_demotion_without_stash_defaults_to_user(self):
        assert resolve_role_change(UserRole.ADMIN, None, UserRole.RIDER) == (UserRole.USER, None)


class TestSetRole:

    @pytest.mark.asyncio
    async def test_admin_round_trip_restores_previous_role(self, db_session):
        user = await add_user(db_session, "r@x.com", UserRole.RIDER)
        directory = UserDirectory(db_session)

        assert await directory.set_role("r@x.com", "admin") is UserRole.ADMIN
        await db_session.refresh(user)
        assert user.previous_role is UserRole.RIDER

        assert await directory.set_role("r@x.com", "user") is UserRole.RIDER
        await db_session.refresh(user)
        assert user.role is UserRole.RIDER
        assert user.previous_role is None

    @pytest.mark.asyncio
    async def test_demoting_admin_without_history_gives_user(self, db_session):
        await add_user(db_session, "boss@x.com", UserRole.ADMIN)

        assert await UserDirectory(db_session).set_role("boss@x.com", "rider") is UserRole.USER

    @pytest.mark.asyncio
    async def test_invalid_role(self, db_session):
        await add_user(db_session, "a@x.com")

        with pytest.raises(InvalidInputError):
            await UserDirectory(db_session).set_role("a@x.com", "superuser")

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session):
        with pytest.raises(NotFoundError):
            await UserDirectory(db_session).set_role("ghost@x.com", "admin")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role, requested", [
        (UserRole.USER, "user"),
        (UserRole.ADMIN, "admin"),
    ])
    async def test_unchanged_role_raises_no_change(self, db_session, role, requested):
        await add_user(db_session, "a@x.com", role)

        with pytest.raises(NoChangeError):
            await UserDirectory(db_session).set_role("a@x.com", requested)

    @pytest.mark.asyncio
    async def test_get_role(self, db_session):
        await add_user(db_session, "r@x.com", UserRole.RIDER)

        assert await UserDirectory(db_session).get_role("r@x.com") is UserRole.RIDER
