# backend/app/repositories/membership_repository.py
"""
Membership Repository for the Cadence platform.

Resolves organization memberships (with their user row, which carries the
timezone) for availability ownership and authorization checks.
"""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from ..core.enums import INSTRUCTOR_CAPABLE_ROLES, MembershipStatus
from ..models.organization import OrganizationMembership
from ..models.user import User
from .base_repository import BaseRepository


class MembershipRepository(BaseRepository[OrganizationMembership]):
    def __init__(self, db: Session):
        super().__init__(db, OrganizationMembership)

    def get_in_organization(
        self, organization_id: str, membership_id: str
    ) -> Optional[OrganizationMembership]:
        query = (
            self._build_query()
            .options(joinedload(OrganizationMembership.user))
            .filter(
                OrganizationMembership.id == membership_id,
                OrganizationMembership.organization_id == organization_id,
            )
        )
        results = self._execute_query(query.limit(1))
        return results[0] if results else None

    def get_active_in_organization(
        self, organization_id: str, membership_id: str
    ) -> Optional[OrganizationMembership]:
        membership = self.get_in_organization(organization_id, membership_id)
        if membership is None or membership.status != MembershipStatus.ACTIVE:
            return None
        return membership

    def list_instructor_capable(self, organization_id: str) -> List[OrganizationMembership]:
        """Active members who can own a schedule, ordered by name."""
        query = (
            self._build_query()
            .join(User, OrganizationMembership.user_id == User.id)
            .options(joinedload(OrganizationMembership.user))
            .filter(
                OrganizationMembership.organization_id == organization_id,
                OrganizationMembership.status == MembershipStatus.ACTIVE,
                OrganizationMembership.role.in_(list(INSTRUCTOR_CAPABLE_ROLES)),
            )
            .order_by(User.first_name, User.last_name, User.email)
        )
        return self._execute_query(query)
