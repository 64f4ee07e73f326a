"""
Custom exceptions for the parcel marketplace with structured error context.

Every exception carries the HTTP status it maps to, so route handlers raise
domain errors and the API layer renders them into one JSON envelope.

Exception Hierarchy:
    MarketplaceError (base, 500)
    ├── InvalidInputError (400)
    ├── AuthenticationError (401)
    ├── ForbiddenError (403)
    ├── NotFoundError (404)
    │   └── NoChangeError (404)
    ├── ConflictError (409)
    └── InternalError (500)
        ├── PaymentGatewayError
        └── IdentityProviderError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class MarketplaceError(Exception):
    """
    Base exception for all marketplace errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (entity id, email, etc.)
        original_exception: The original exception that was caught (if any)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    @property
    def detail(self) -> Optional[str]:
        """Underlying error detail, when there is one"""
        if self.original_exception:
            return str(self.original_exception)
        return self.context.get("detail")

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidInputError(MarketplaceError):
    """Missing or malformed required field."""
    status_code = 400


class AuthenticationError(MarketplaceError):
    """Bearer token absent or malformed."""
    status_code = 401


class ForbiddenError(MarketplaceError):
    """Bearer token present but rejected by the identity provider."""
    status_code = 403


class NotFoundError(MarketplaceError):
    """Referenced entity does not exist."""
    status_code = 404


class NoChangeError(NotFoundError):
    """
    The update matched nothing or left the stored value as it was.

    Rendered as 404, like the not-found case it cannot be told apart from
    when only a modified-count is available.
    """
    pass


class ConflictError(MarketplaceError):
    """Natural key already taken (duplicate rider application)."""
    status_code = 409


class InternalError(MarketplaceError):
    """Unexpected store or collaborator failure."""
    status_code = 500


class PaymentGatewayError(InternalError):
    """
    Payment gateway call failed.

    Context should include:
        - gateway_url: The endpoint that failed
        - status_code: HTTP status code (if a response arrived)
    """
    pass


class IdentityProviderError(InternalError):
    """Identity provider could not be reached or answered unexpectedly."""
    pass
