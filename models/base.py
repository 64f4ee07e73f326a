from datetime import datetime, timezone
from sqlalchemy import JSON, Enum
from sqlalchemy.orm import declarative_base
from sqlalchemy.dialects.postgresql import JSONB
import enum
import uuid

Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def new_id() -> str:
    """Database-generated opaque identifier"""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_column(enum_cls, name: str) -> Enum:
    """Enum column storing member values ("paid"), not member names ("PAID")"""
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True
    )


# ============================================================================
# ENUMS
# ============================================================================

class PaymentStatus(str, enum.Enum):
    """Parcel payment status"""
    UNPAID = "unpaid"
    PAID = "paid"


class UserRole(str, enum.Enum):
    """User roles"""
    USER = "user"
    RIDER = "rider"
    ADMIN = "admin"


class RiderStatus(str, enum.Enum):
    """Rider application status"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ACTIVE = "active"
    DEACTIVATED = "deactivated"


# Statuses an administrator may set through the status update endpoint
RIDER_DECISION_STATUSES = frozenset({
    RiderStatus.ACCEPTED,
    RiderStatus.REJECTED,
    RiderStatus.ACTIVE,
    RiderStatus.DEACTIVATED,
})

# Riders that count as available for delivery
RIDER_AVAILABLE_STATUSES = frozenset({RiderStatus.ACCEPTED, RiderStatus.ACTIVE})
