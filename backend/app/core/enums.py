# backend/app/core/enums.py
"""
Core enums for the Cadence platform.

Membership roles and statuses mirror the identity provider's organization
membership records; availability only cares about who may own and edit a
weekly schedule.
"""

from enum import Enum


class MembershipRole(str, Enum):
    """Role of a user inside one organization."""

    SUPER_ADMIN = "super_admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"
    GUARDIAN = "guardian"


class MembershipStatus(str, Enum):
    """Lifecycle of an organization membership."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


# Roles that can own a weekly availability schedule (and edit availability at all)
INSTRUCTOR_CAPABLE_ROLES = frozenset({MembershipRole.SUPER_ADMIN, MembershipRole.INSTRUCTOR})

# Roles allowed to view and manage other members' availability
ADMIN_ROLES = frozenset({MembershipRole.SUPER_ADMIN})
