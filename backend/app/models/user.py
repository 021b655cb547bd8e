# backend/app/models/user.py
"""
User model for the Cadence platform.

A user is a person known to the identity provider. Everything organization
specific (role, status, availability) hangs off `OrganizationMembership`;
the user row only carries identity fields and the wall-clock timezone that
applies to every schedule the person owns.
"""

import logging

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.constants import DEFAULT_TIMEZONE
from ..database import Base

logger = logging.getLogger(__name__)


class User(Base):
    """
    Identity record shared by every membership of one person.

    Attributes:
        id: ULID primary key
        email: Unique email address
        first_name: Given name (optional; the identity provider may omit it)
        last_name: Family name (optional)
        timezone: IANA zone used to interpret availability (defaults to America/New_York)
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    timezone = Column(String(50), nullable=False, default=DEFAULT_TIMEZONE)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    memberships = relationship(
        "OrganizationMembership", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else self.email

    def __repr__(self) -> str:
        return f"<User {self.email}>"
