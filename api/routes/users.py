"""
User and role endpoints
"""

from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db
from schemas.user import (
    RoleResponse,
    RoleUpdateRequest,
    RoleUpdateResponse,
    UserLogin,
    UserLoginResponse,
    UserSearchResult,
)
from services.users import UserDirectory

router = APIRouter(tags=["Users"])


@router.post("/users", response_model=UserLoginResponse, status_code=status.HTTP_201_CREATED)
async def upsert_user(login: UserLogin, response: Response, db: AsyncSession = Depends(get_db)):
    """
    Register a login.

    201 when the user is new; 200 when it existed and only last_log_in moved.
    """
    created, user_id = await UserDirectory(db).upsert_login(login)
    if not created:
        response.status_code = status.HTTP_200_OK
        return UserLoginResponse(message="User already exists", inserted=False)
    return UserLoginResponse(message="User created", inserted=True, insertedId=user_id)


@router.get("/users/search", response_model=List[UserSearchResult])
async def search_users(
    email: str = Query(..., min_length=1, description="Part of the email, any case"),
    db: AsyncSession = Depends(get_db)
):
    """Up to 10 users whose email contains the query"""
    return await UserDirectory(db).search_users(email)


@router.get("/users/role/{email}", response_model=RoleResponse)
async def get_user_role(email: str, db: AsyncSession = Depends(get_db)):
    role = await UserDirectory(db).get_role(email)
    return RoleResponse(role=role)


@router.patch("/users/role/{email}", response_model=RoleUpdateResponse)
async def update_user_role(email: str, body: RoleUpdateRequest, db: AsyncSession = Depends(get_db)):
    """
    Promote to admin, or demote.

    Any non-admin role in the body demotes: the role held before promotion
    is restored (user if none was recorded).
    """
    role = await UserDirectory(db).set_role(email, body.role)
    return RoleUpdateResponse(message=f"User role updated to {role.value}", role=role)
