"""
SQLAlchemy ORM models for database tables.

This package defines the database schema using SQLAlchemy ORM models:

Models:
    base: Base declarative class and shared enums (PaymentStatus, UserRole, RiderStatus)
    parcel: Delivery requests owned by their creator
    payment: Immutable payment records
    tracking: Append-only tracking events
    user: Accounts and roles
    rider: Rider applications

Database Schema:
    All models inherit from the Base declarative class. Free-form client
    fields live in JSON columns (JSONB on PostgreSQL).

Usage:
    from models import Parcel, Payment, User
    from models.base import PaymentStatus, UserRole

Relationships:
    There are no foreign keys: payments and tracking events reference
    parcels by id only, and riders map to users by email.
"""

from models.base import Base, PaymentStatus, UserRole, RiderStatus
from models.parcel import Parcel
from models.payment import Payment
from models.tracking import TrackingEvent
from models.user import User
from models.rider import Rider

__all__ = [
    "Base",
    "PaymentStatus",
    "UserRole",
    "RiderStatus",
    "Parcel",
    "Payment",
    "TrackingEvent",
    "User",
    "Rider",
]
