"""
Database models for the Cadence platform.

- Identity: users, organizations and organization memberships
- Availability: recurring weekly blocks owned by a membership
"""

from .instructor_availability import InstructorAvailability
from .organization import Organization, OrganizationMembership
from .user import User

__all__ = [
    "InstructorAvailability",
    "Organization",
    "OrganizationMembership",
    "User",
]
