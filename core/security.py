"""
Bearer token verification against an external identity provider.

The provider speaks the Identity Toolkit ``accounts:lookup`` protocol:
POST the ID token, get back the account it belongs to. A 400 answer means
the token is invalid or expired.
"""

import httpx
from dataclasses import dataclass
from typing import Optional
from core.config import Settings
from core.exceptions import ForbiddenError, IdentityProviderError
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity extracted from a verified token"""
    uid: str
    email: Optional[str] = None


class IdentityProvider:
    """
    Verify ID tokens with the configured identity provider.

    Attributes:
        lookup_url: Account lookup endpoint
        api_key: Project API key sent as the ``key`` query parameter
        timeout: Request timeout in seconds
    """

    def __init__(self, lookup_url: str, api_key: Optional[str] = None, timeout: float = 15.0):
        self.lookup_url = lookup_url
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityProvider":
        return cls(
            lookup_url=settings.IDENTITY_PROVIDER_URL,
            api_key=settings.IDENTITY_API_KEY,
            timeout=settings.HTTP_TIMEOUT
        )

    async def verify_token(self, token: str) -> VerifiedIdentity:
        """
        Verify a bearer token.

        Returns:
            The identity the token was issued for

        Raises:
            ForbiddenError: The provider rejected the token
            IdentityProviderError: The provider could not be reached
        """
        params = {"key": self.api_key} if self.api_key else {}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.lookup_url,
                    params=params,
                    json={"idToken": token}
                )
        except httpx.HTTPError as e:
            raise IdentityProviderError(
                "Identity provider unreachable",
                context={"lookup_url": self.lookup_url},
                original_exception=e
            )

        if response.status_code in (400, 401, 403):
            logger.info("Token rejected by identity provider")
            raise ForbiddenError("Forbidden access", context={"status_code": response.status_code})

        if response.status_code != 200:
            raise IdentityProviderError(
                "Unexpected identity provider response",
                context={
                    "lookup_url": self.lookup_url,
                    "status_code": response.status_code,
                    "response_body": response.text[:500]
                }
            )

        try:
            users = response.json().get("users") or []
        except ValueError as e:
            raise IdentityProviderError(
                "Identity provider returned an unreadable response",
                context={"lookup_url": self.lookup_url, "response_body": response.text[:500]},
                original_exception=e
            )

        if not users:
            raise ForbiddenError("Forbidden access", context={"detail": "token has no account"})

        account = users[0]
        return VerifiedIdentity(uid=account.get("localId", ""), email=account.get("email"))
