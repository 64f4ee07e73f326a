"""
Core utilities and configuration for the parcel marketplace backend.

This package provides foundational components used by every route:

Modules:
    config: Application configuration and environment variable management
    database: Engine and session factory construction
    exceptions: Custom exception hierarchy mapped to HTTP status codes
    logging: Logging configuration and utilities
    security: Bearer token verification against the identity provider

Usage:
    from core.config import settings
    from core.database import create_engine_from_settings, create_session_maker
    from core.exceptions import NotFoundError, ConflictError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Build the session factory once, at startup
    engine = create_engine_from_settings(settings)
    session_maker = create_session_maker(engine)
    async with session_maker() as session:
        pass
"""

__all__ = [
    "settings",
    "create_engine_from_settings",
    "create_session_maker",
    "setup_logging",
    "IdentityProvider",
    # Exceptions
    "MarketplaceError",
    "InvalidInputError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "NoChangeError",
    "ConflictError",
    "InternalError",
    "PaymentGatewayError",
    "IdentityProviderError",
]
