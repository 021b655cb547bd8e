# backend/app/services/availability_access_policy.py
"""
Who may read or change whose weekly availability.

- Anyone may read their own schedule; reading another member's requires SUPER_ADMIN.
- Changing a schedule requires an instructor-capable role. An INSTRUCTOR may only
  change their own schedule; a SUPER_ADMIN may change any instructor's.
- Listing every instructor's summary is SUPER_ADMIN only.

The policy only answers the role question. Whether the target membership
exists, is active and can own a schedule is checked by the service against
the database.
"""

from typing import Optional

from ..core.constants import ERROR_ADMIN_ONLY, ERROR_EDIT_OWN_ONLY, ERROR_VIEW_OWN_ONLY
from ..core.enums import MembershipRole
from ..core.exceptions import ForbiddenException
from ..principal import ActorPrincipal


class AvailabilityAccessPolicy:
    """Pure role checks; raises `ForbiddenException` on refusal."""

    def resolve_read_target(self, actor: ActorPrincipal, instructor_id: Optional[str]) -> str:
        """Membership whose schedule `actor` is reading (defaults to their own)."""
        if instructor_id and instructor_id != actor.membership_id and not actor.is_admin:
            raise ForbiddenException(ERROR_VIEW_OWN_ONLY, code="VIEW_OWN_ONLY")
        return instructor_id or actor.membership_id

    def resolve_edit_target(self, actor: ActorPrincipal, instructor_id: Optional[str]) -> str:
        """Membership whose schedule `actor` is changing (defaults to their own)."""
        if not actor.is_instructor_capable:
            raise ForbiddenException(
                "Only instructors and administrators can edit availability",
                code="INSTRUCTOR_ROLE_REQUIRED",
            )
        if actor.role == MembershipRole.INSTRUCTOR:
            if instructor_id and instructor_id != actor.membership_id:
                raise ForbiddenException(ERROR_EDIT_OWN_ONLY, code="EDIT_OWN_ONLY")
            return actor.membership_id
        return instructor_id or actor.membership_id

    def can_edit(self, actor: ActorPrincipal, instructor_id: str) -> bool:
        if not actor.is_instructor_capable:
            return False
        return actor.is_admin or instructor_id == actor.membership_id

    def require_admin(self, actor: ActorPrincipal) -> None:
        if not actor.is_admin:
            raise ForbiddenException(ERROR_ADMIN_ONLY, code="ADMIN_ONLY")
