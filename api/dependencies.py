"""
FastAPI dependencies: database session, external collaborators, auth
"""

from typing import AsyncIterator, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import session_scope
from core.exceptions import AuthenticationError
from core.security import IdentityProvider, VerifiedIdentity
from services.gateway import PaymentGateway

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Session from the factory built at startup"""
    async for session in session_scope(request.app.state.session_maker):
        yield session


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity_provider: IdentityProvider = Depends(get_identity_provider)
) -> VerifiedIdentity:
    """
    Verify the bearer token.

    Missing or malformed Authorization header -> 401; token rejected by the
    identity provider -> 403.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Unauthorized access")

    return await identity_provider.verify_token(credentials.credentials)
