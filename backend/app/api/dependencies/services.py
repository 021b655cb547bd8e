# backend/app/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.instructor_availability_service import InstructorAvailabilityService
from .database import get_db


def get_instructor_availability_service(
    db: Session = Depends(get_db),
) -> InstructorAvailabilityService:
    """
    Get instructor availability service instance.

    Args:
        db: Database session

    Returns:
        InstructorAvailabilityService bound to the request session
    """
    return InstructorAvailabilityService(db)
