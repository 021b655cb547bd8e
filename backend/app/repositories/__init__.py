# backend/app/repositories/__init__.py
"""
Repository Pattern Implementation for the Cadence platform.

Key Components:
- BaseRepository: Foundation for all repositories with common queries
- RepositoryFactory: Factory for creating repository instances
- InstructorAvailabilityRepository: Recurring weekly blocks, replaced per day
- MembershipRepository: Organization memberships and their users

Usage:
    from app.repositories import RepositoryFactory

    repository = RepositoryFactory.create_instructor_availability_repository(db)
    rows = repository.list_for_instructor(organization_id, instructor_id)
"""

from .base_repository import BaseRepository
from .factory import RepositoryFactory
from .instructor_availability_repository import InstructorAvailabilityRepository
from .membership_repository import MembershipRepository

__all__ = [
    "BaseRepository",
    "InstructorAvailabilityRepository",
    "MembershipRepository",
    "RepositoryFactory",
]
