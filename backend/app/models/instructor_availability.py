# backend/app/models/instructor_availability.py
"""
Recurring weekly availability rows.

One row is one block on one weekday. A day's rows are always replaced as a
whole (delete then insert inside one transaction); there is no version column,
so concurrent writers to the same day resolve as last write wins.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class InstructorAvailability(Base):
    """A single `[start_time, end_time)` block for one weekday (0 = Sunday)."""

    __tablename__ = "instructor_availability"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    instructor_id = Column(
        String(26),
        ForeignKey("organization_memberships.id", ondelete="CASCADE"),
        nullable=False,
    )
    organization_id = Column(
        String(26), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    instructor = relationship("OrganizationMembership", back_populates="availability")

    __table_args__ = (
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_availability_day"),
        CheckConstraint("end_time > start_time", name="ck_availability_range"),
        Index("idx_availability_instructor", "instructor_id"),
        Index("idx_availability_organization", "organization_id"),
        Index("idx_availability_instructor_day", "instructor_id", "day_of_week"),
    )

    def __repr__(self) -> str:
        return (
            f"<InstructorAvailability {self.instructor_id} day={self.day_of_week} "
            f"{self.start_time}-{self.end_time}>"
        )
