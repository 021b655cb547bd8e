# backend/app/models/organization.py
"""
Organization and membership models.

Availability is owned by a membership (a person's seat in one organization),
not by the bare user, so the same person can keep separate schedules in two
organizations.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.enums import INSTRUCTOR_CAPABLE_ROLES, MembershipRole, MembershipStatus
from ..database import Base
from .base_enum import create_safe_enum


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    name = Column(String(255), nullable=False)
    slug = Column(String(100), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    memberships = relationship(
        "OrganizationMembership", back_populates="organization", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Organization {self.slug}>"


class OrganizationMembership(Base):
    """A user's role and status inside one organization."""

    __tablename__ = "organization_memberships"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    organization_id = Column(
        String(26), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role = Column(create_safe_enum(MembershipRole, "membership_role"), nullable=False)
    status = Column(
        create_safe_enum(MembershipStatus, "membership_status"),
        nullable=False,
        default=MembershipStatus.ACTIVE,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    organization = relationship("Organization", back_populates="memberships")
    user = relationship("User", back_populates="memberships", lazy="joined")
    availability = relationship(
        "InstructorAvailability",
        back_populates="instructor",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_membership_org_user"),
        Index("idx_memberships_org_role", "organization_id", "role"),
    )

    @property
    def is_active(self) -> bool:
        return self.status == MembershipStatus.ACTIVE

    @property
    def is_instructor_capable(self) -> bool:
        return self.role in INSTRUCTOR_CAPABLE_ROLES

    def __repr__(self) -> str:
        return f"<OrganizationMembership {self.id} {self.role}>"
