# backend/tests/conftest.py
"""
Pytest configuration for the Cadence availability backend.

Every test gets a fresh in-memory SQLite schema. A single shared connection
(`StaticPool`) is used so the session can also be driven from the worker
threads the availability gateway runs in.
"""

import os

# Set testing mode BEFORE any app imports
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from dataclasses import dataclass
from datetime import time
from typing import Callable, Dict, Iterator

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.dependencies.database import get_db
from app.core.constants import MEMBERSHIP_HEADER, ORGANIZATION_HEADER
from app.core.enums import MembershipRole, MembershipStatus
from app.database import Base, configure_engine
from app.main import fastapi_app as app  # Use FastAPI instance for tests
from app.models import InstructorAvailability, Organization, OrganizationMembership, User
from app.principal import ActorPrincipal
from app.services.base import BaseService

test_engine = configure_engine(
    create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
)
TestSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=test_engine, expire_on_commit=False
)


@pytest.fixture(scope="function")
def db() -> Iterator[Session]:
    """Fresh schema and session for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def _reset_service_metrics() -> Iterator[None]:
    yield
    BaseService._class_metrics.clear()


# ============================================================================
# Organization fixtures
# ============================================================================


@dataclass
class Members:
    """Seeded organization with one membership per role of interest."""

    organization: Organization
    admin: OrganizationMembership
    instructor: OrganizationMembership
    other_instructor: OrganizationMembership
    student: OrganizationMembership
    suspended_instructor: OrganizationMembership
    outsider: OrganizationMembership


def _member(
    db: Session,
    organization: Organization,
    email: str,
    role: MembershipRole,
    *,
    first_name: str,
    last_name: str = "Test",
    timezone: str = "America/New_York",
    status: MembershipStatus = MembershipStatus.ACTIVE,
) -> OrganizationMembership:
    user = User(email=email, first_name=first_name, last_name=last_name, timezone=timezone)
    db.add(user)
    db.flush()
    membership = OrganizationMembership(
        organization_id=organization.id, user_id=user.id, role=role, status=status
    )
    db.add(membership)
    db.flush()
    return membership


@pytest.fixture
def members(db: Session) -> Members:
    org = Organization(name="Harbor Music School", slug="harbor-music")
    other_org = Organization(name="Elsewhere Dance", slug="elsewhere-dance")
    db.add_all([org, other_org])
    db.flush()

    seeded = Members(
        organization=org,
        admin=_member(db, org, "admin@harbor.example", MembershipRole.SUPER_ADMIN, first_name="Ada"),
        instructor=_member(
            db,
            org,
            "sarah@harbor.example",
            MembershipRole.INSTRUCTOR,
            first_name="Sarah",
            timezone="America/Chicago",
        ),
        other_instructor=_member(
            db, org, "mike@harbor.example", MembershipRole.INSTRUCTOR, first_name="Mike"
        ),
        student=_member(db, org, "emma@harbor.example", MembershipRole.STUDENT, first_name="Emma"),
        suspended_instructor=_member(
            db,
            org,
            "zed@harbor.example",
            MembershipRole.INSTRUCTOR,
            first_name="Zed",
            status=MembershipStatus.SUSPENDED,
        ),
        outsider=_member(
            db, other_org, "olga@elsewhere.example", MembershipRole.INSTRUCTOR, first_name="Olga"
        ),
    )
    db.commit()
    return seeded


def _principal(membership: OrganizationMembership) -> ActorPrincipal:
    return ActorPrincipal(
        organization_id=membership.organization_id,
        membership_id=membership.id,
        role=MembershipRole(membership.role),
        user_id=membership.user_id,
    )


@pytest.fixture
def principal_for() -> Callable[[OrganizationMembership], ActorPrincipal]:
    return _principal


@pytest.fixture
def admin_principal(members: Members) -> ActorPrincipal:
    return _principal(members.admin)


@pytest.fixture
def instructor_principal(members: Members) -> ActorPrincipal:
    return _principal(members.instructor)


@pytest.fixture
def student_principal(members: Members) -> ActorPrincipal:
    return _principal(members.student)


@pytest.fixture
def add_block(db: Session) -> Callable[..., InstructorAvailability]:
    """Insert one stored block directly, bypassing the service."""

    def _add(
        membership: OrganizationMembership, day_of_week: int, start: str, end: str
    ) -> InstructorAvailability:
        row = InstructorAvailability(
            instructor_id=membership.id,
            organization_id=membership.organization_id,
            day_of_week=day_of_week,
            start_time=time.fromisoformat(start),
            end_time=time.fromisoformat(end),
        )
        db.add(row)
        db.commit()
        return row

    return _add


# ============================================================================
# HTTP fixtures
# ============================================================================


@pytest.fixture
def client(db: Session) -> Iterator[TestClient]:
    """Create a test client with the test database."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture
def headers_for() -> Callable[[OrganizationMembership], Dict[str, str]]:
    """Trusted identity headers for acting as the given membership."""

    def _headers(membership: OrganizationMembership) -> Dict[str, str]:
        return {
            ORGANIZATION_HEADER: membership.organization_id,
            MEMBERSHIP_HEADER: membership.id,
        }

    return _headers
