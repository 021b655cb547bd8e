"""Repository-level dependency providers."""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...repositories.membership_repository import MembershipRepository
from .database import get_db


def get_membership_repo(db: Session = Depends(get_db)) -> MembershipRepository:
    """Provide a MembershipRepository instance."""

    return MembershipRepository(db)
