# backend/app/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .auth import get_current_principal
from .database import get_db
from .repositories import get_membership_repo
from .services import get_instructor_availability_service

__all__ = [
    # Auth
    "get_current_principal",
    # Database
    "get_db",
    # Repositories
    "get_membership_repo",
    # Services
    "get_instructor_availability_service",
]
