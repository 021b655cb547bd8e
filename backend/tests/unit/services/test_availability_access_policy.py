"""Tests for availability role checks."""

import pytest

from app.core.enums import MembershipRole
from app.core.exceptions import ForbiddenException
from app.principal import ActorPrincipal, EditContext
from app.services.availability_access_policy import AvailabilityAccessPolicy

policy = AvailabilityAccessPolicy()


def actor(role: MembershipRole, membership_id: str = "m_self") -> ActorPrincipal:
    return ActorPrincipal(organization_id="org_1", membership_id=membership_id, role=role)


@pytest.mark.unit
class TestReadTarget:
    def test_defaults_to_self(self) -> None:
        assert policy.resolve_read_target(actor(MembershipRole.STUDENT), None) == "m_self"

    def test_own_id_allowed(self) -> None:
        assert policy.resolve_read_target(actor(MembershipRole.INSTRUCTOR), "m_self") == "m_self"

    def test_admin_reads_anyone(self) -> None:
        assert policy.resolve_read_target(actor(MembershipRole.SUPER_ADMIN), "m_other") == "m_other"

    @pytest.mark.parametrize("role", [MembershipRole.INSTRUCTOR, MembershipRole.STUDENT])
    def test_non_admin_cannot_read_others(self, role: MembershipRole) -> None:
        with pytest.raises(ForbiddenException) as exc_info:
            policy.resolve_read_target(actor(role), "m_other")
        assert exc_info.value.code == "VIEW_OWN_ONLY"
        assert exc_info.value.message == "You can only view your own availability"


@pytest.mark.unit
class TestEditTarget:
    def test_instructor_edits_self(self) -> None:
        assert policy.resolve_edit_target(actor(MembershipRole.INSTRUCTOR), None) == "m_self"

    def test_instructor_cannot_edit_others(self) -> None:
        with pytest.raises(ForbiddenException) as exc_info:
            policy.resolve_edit_target(actor(MembershipRole.INSTRUCTOR), "m_other")
        assert exc_info.value.code == "EDIT_OWN_ONLY"

    def test_admin_edits_anyone(self) -> None:
        assert policy.resolve_edit_target(actor(MembershipRole.SUPER_ADMIN), "m_other") == "m_other"
        assert policy.resolve_edit_target(actor(MembershipRole.SUPER_ADMIN), None) == "m_self"

    @pytest.mark.parametrize("role", [MembershipRole.STUDENT, MembershipRole.GUARDIAN])
    def test_other_roles_cannot_edit(self, role: MembershipRole) -> None:
        with pytest.raises(ForbiddenException) as exc_info:
            policy.resolve_edit_target(actor(role), None)
        assert exc_info.value.code == "INSTRUCTOR_ROLE_REQUIRED"

    def test_can_edit(self) -> None:
        assert policy.can_edit(actor(MembershipRole.INSTRUCTOR), "m_self")
        assert not policy.can_edit(actor(MembershipRole.INSTRUCTOR), "m_other")
        assert policy.can_edit(actor(MembershipRole.SUPER_ADMIN), "m_other")
        assert not policy.can_edit(actor(MembershipRole.STUDENT), "m_self")


@pytest.mark.unit
class TestAdminOnly:
    def test_require_admin(self) -> None:
        policy.require_admin(actor(MembershipRole.SUPER_ADMIN))
        with pytest.raises(ForbiddenException) as exc_info:
            policy.require_admin(actor(MembershipRole.INSTRUCTOR))
        assert exc_info.value.status_code == 403


@pytest.mark.unit
class TestPrincipal:
    def test_actor_properties(self) -> None:
        admin = actor(MembershipRole.SUPER_ADMIN)
        assert admin.id == "m_self"
        assert admin.is_admin and admin.is_instructor_capable
        student = actor(MembershipRole.STUDENT)
        assert not student.is_admin and not student.is_instructor_capable

    def test_edit_context_is_self(self) -> None:
        context = EditContext(
            organization_id="org_1",
            instructor_id="m_self",
            actor_membership_id="m_self",
            actor_role=MembershipRole.INSTRUCTOR,
            can_edit=True,
        )
        assert context.is_self
