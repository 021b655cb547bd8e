# backend/app/repositories/factory.py
"""
Repository Factory for the Cadence platform.

Provides centralized creation of repository instances so services never
construct repositories ad hoc.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .instructor_availability_repository import InstructorAvailabilityRepository
    from .membership_repository import MembershipRepository


class RepositoryFactory:
    """Factory class for creating repository instances."""

    @staticmethod
    def create_instructor_availability_repository(
        db: Session,
    ) -> "InstructorAvailabilityRepository":
        """Create repository for recurring weekly availability rows."""
        from .instructor_availability_repository import InstructorAvailabilityRepository

        return InstructorAvailabilityRepository(db)

    @staticmethod
    def create_membership_repository(db: Session) -> "MembershipRepository":
        """Create repository for organization memberships."""
        from .membership_repository import MembershipRepository

        return MembershipRepository(db)
