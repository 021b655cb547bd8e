# backend/app/api/dependencies/auth.py
"""
Caller identity dependencies.

Authentication happens upstream (gateway / session layer). By the time a
request reaches this service it carries two trusted headers naming the
organization and the caller's membership in it. The membership row is looked
up so the role used for authorization always comes from the database, never
from the request.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from ...core.constants import MEMBERSHIP_HEADER, ORGANIZATION_HEADER
from ...core.enums import MembershipRole
from ...principal import ActorPrincipal
from ...repositories.membership_repository import MembershipRepository
from .repositories import get_membership_repo

logger = logging.getLogger(__name__)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"message": message, "code": "UNAUTHENTICATED", "details": {}},
    )


def get_current_principal(
    organization_id: Optional[str] = Header(None, alias=ORGANIZATION_HEADER),
    membership_id: Optional[str] = Header(None, alias=MEMBERSHIP_HEADER),
    membership_repository: MembershipRepository = Depends(get_membership_repo),
) -> ActorPrincipal:
    """
    Resolve the acting membership for the current request.

    Raises:
        HTTPException: 401 if a header is missing or the membership is not an
            active member of the named organization
    """
    if not organization_id or not membership_id:
        raise _unauthorized("Organization and membership headers are required")

    membership = membership_repository.get_active_in_organization(organization_id, membership_id)
    if membership is None:
        logger.warning(
            "Rejected request for unknown membership %s in organization %s",
            membership_id,
            organization_id,
        )
        raise _unauthorized("Membership not found in this organization")

    return ActorPrincipal(
        organization_id=organization_id,
        membership_id=membership.id,
        role=MembershipRole(membership.role),
        user_id=membership.user_id,
    )
