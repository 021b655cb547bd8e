"""Callers of the availability API and the scope of each operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.enums import ADMIN_ROLES, INSTRUCTOR_CAPABLE_ROLES, MembershipRole


@dataclass(frozen=True)
class ActorPrincipal:
    """A membership acting inside one organization, resolved from trusted headers."""

    organization_id: str
    membership_id: str
    role: MembershipRole
    user_id: Optional[str] = None

    @property
    def id(self) -> str:
        return self.membership_id

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @property
    def is_instructor_capable(self) -> bool:
        return self.role in INSTRUCTOR_CAPABLE_ROLES


@dataclass(frozen=True)
class EditContext:
    """
    Explicit scope of one availability operation.

    Built once by the access policy and passed to every service call, so
    nothing downstream reads organization or actor from ambient state.
    """

    organization_id: str
    instructor_id: str
    actor_membership_id: str
    actor_role: MembershipRole
    can_edit: bool
    timezone: Optional[str] = None

    @property
    def is_self(self) -> bool:
        return self.instructor_id == self.actor_membership_id
