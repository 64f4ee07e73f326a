from sqlalchemy import Column, String, DateTime
from models.base import Base, JSONType, UserRole, enum_column, new_id, utcnow


class User(Base):
    """
    Marketplace account, keyed by email.

    previous_role is only populated while role is admin; it remembers the
    role to restore on demotion.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)

    email = Column(String(320), nullable=False, unique=True, index=True)
    role = Column(enum_column(UserRole, "user_role"), nullable=False, default=UserRole.USER)
    previous_role = Column(enum_column(UserRole, "user_previous_role"), nullable=True)

    # Profile fields sent at login (name, photo, ...)
    profile = Column(JSONType, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_log_in = Column(DateTime(timezone=True), nullable=False, default=utcnow)
