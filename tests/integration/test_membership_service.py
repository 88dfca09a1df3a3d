"""Tests for the membership store."""

import pytest
import pytest_asyncio
from sqlalchemy import select

from ingest.models.destination import Destination
from ingest.models.membership import (
    DestinationMember,
    MemberRole,
    MemberStatus,
    ProjectMember,
    ResolvedMember,
    UnresolvedInvite,
)
from ingest.models.project import Project
from ingest.services.account_service import AccountService
from ingest.services.destination_service import DestinationService
from ingest.services.membership_service import MembershipService
from ingest.services.project_service import ProjectService
from ingest.utils.exceptions import ConflictError, ValidationError

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def destination(db_session, owner):
    destination = Destination(name="Bucket", type="s3", inserted_by=owner.id)
    db_session.add(destination)
    await db_session.commit()
    await db_session.refresh(destination)
    return destination


@pytest_asyncio.fixture
async def project(db_session, owner):
    project = Project(name="Study", inserted_by=owner.id)
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


class TestAddMemberByEmail:
    async def test_unknown_email_creates_unresolved_invite(self, db_session, destination):
        service = MembershipService(db_session, DestinationMember)

        membership = await service.add_member_by_email(destination.id, "nobody@example.com")

        assert membership.user_id is None
        assert membership.email == "nobody@example.com"
        assert membership.role == MemberRole.UPLOADER.value
        assert membership.status == MemberStatus.PENDING.value
        assert membership.identity == UnresolvedInvite(email="nobody@example.com")
        assert await service.list_active(destination.id) == []

    async def test_existing_user_is_bound_immediately(self, db_session, destination, other_user):
        service = MembershipService(db_session, DestinationMember)

        membership = await service.add_member_by_email(
            destination.id, other_user.email, MemberRole.MANAGER
        )

        assert membership.user_id == other_user.id
        assert membership.identity == ResolvedMember(user_id=other_user.id)
        assert membership.role == "manager"
        assert membership.status == "pending"
        assert [m.id for m in await service.list_active(destination.id)] == [membership.id]

    async def test_duplicate_invite_raises_conflict(self, db_session, destination, other_user):
        service = MembershipService(db_session, DestinationMember)
        await service.add_member_by_email(destination.id, other_user.email)

        with pytest.raises(ConflictError):
            await service.add_member_by_email(destination.id, other_user.email)

    async def test_invalid_email_is_rejected(self, db_session, destination):
        service = MembershipService(db_session, DestinationMember)

        with pytest.raises(ValidationError):
            await service.add_member_by_email(destination.id, "not-an-email")
        with pytest.raises(ValidationError):
            await service.add_member_by_email(destination.id, "")

    async def test_invalid_role_is_rejected(self, db_session, destination):
        service = MembershipService(db_session, DestinationMember)

        with pytest.raises(ValidationError):
            await service.add_member_by_email(destination.id, "someone@example.com", "owner")


class TestMembershipMutations:
    async def test_update_role_and_status_report_counts(self, db_session, destination, other_user):
        service = MembershipService(db_session, DestinationMember)
        await service.add_member_by_email(destination.id, other_user.email)

        assert await service.update_role(destination.id, other_user.id, "manager") == 1
        assert await service.update_status(destination.id, other_user.id, MemberStatus.ACCEPTED) == 1

        membership = await service.get_accepted(destination.id, other_user.id)
        assert membership is not None
        assert membership.role == "manager"

    async def test_missing_membership_affects_nothing(self, db_session, destination, other_user):
        service = MembershipService(db_session, DestinationMember)

        assert await service.update_role(destination.id, other_user.id, "manager") == 0
        assert await service.update_status(destination.id, other_user.id, "accepted") == 0
        assert await service.remove(destination.id, other_user.id) == 0

    async def test_remove_deletes_membership(self, db_session, destination, other_user):
        service = MembershipService(db_session, DestinationMember)
        await service.add_member_by_email(destination.id, other_user.email)

        assert await service.remove(destination.id, other_user.id) == 1
        assert await service.get_membership(destination.id, other_user.id) is None

    async def test_invalid_status_is_rejected(self, db_session, destination, other_user):
        service = MembershipService(db_session, DestinationMember)

        with pytest.raises(ValidationError):
            await service.update_status(destination.id, other_user.id, "maybe")

    async def test_pending_membership_grants_nothing(self, db_session, destination, other_user):
        service = MembershipService(db_session, DestinationMember)
        membership = await service.add_member_by_email(destination.id, other_user.email, "manager")

        assert membership.allowed_actions == frozenset()
        assert await service.get_accepted(destination.id, other_user.id) is None

    async def test_list_for_user_returns_every_membership(
        self, db_session, destination, owner, other_user
    ):
        service = MembershipService(db_session, DestinationMember)
        second = Destination(name="Second", inserted_by=owner.id)
        db_session.add(second)
        await db_session.commit()

        first = await service.add_member_by_email(destination.id, other_user.email)
        other = await service.add_member_by_email(second.id, other_user.email, "manager")
        await service.add_member_by_email(second.id, "someone@example.com")

        memberships = await service.list_for_user(other_user.id)

        assert [m.id for m in memberships] == [first.id, other.id]


class TestBackfill:
    async def test_registration_binds_pending_invites_of_every_kind(
        self, db_session, destination, project
    ):
        email = "invitee@example.com"
        await MembershipService(db_session, DestinationMember).add_member_by_email(destination.id, email)
        await MembershipService(db_session, ProjectMember).add_member_by_email(project.id, email)

        user, backfilled = await AccountService(db_session).register_user(email, "Password123!")

        assert backfilled == 2
        for model in (DestinationMember, ProjectMember):
            result = await db_session.execute(
                select(model).where(model.email == email).execution_options(populate_existing=True)
            )
            membership = result.scalar_one()
            assert membership.user_id == user.id
            assert membership.status == MemberStatus.PENDING.value

    async def test_backfill_uses_exact_email_match(self, db_session, destination, user_factory):
        await MembershipService(db_session, DestinationMember).add_member_by_email(
            destination.id, "Invitee@example.com"
        )

        user = await user_factory("invitee@example.com")
        backfilled = await MembershipService(db_session, DestinationMember).backfill_on_registration(user)

        assert backfilled == 0

    async def test_backfill_skips_answered_invites(self, db_session, destination, user_factory):
        service = MembershipService(db_session, DestinationMember)
        invite = await service.add_member_by_email(destination.id, "late@example.com")
        invite.status = MemberStatus.REJECTED.value
        await db_session.commit()

        user = await user_factory("late@example.com")

        assert await service.backfill_on_registration(user) == 0


class TestResourceDeletion:
    async def test_deleting_project_removes_its_memberships(self, db_session, project, other_user):
        service = MembershipService(db_session, ProjectMember)
        await service.add_member_by_email(project.id, other_user.email, "manager")
        await service.add_member_by_email(project.id, "pending@example.com")

        await ProjectService(db_session).delete(project)

        result = await db_session.execute(select(ProjectMember))
        assert result.scalars().all() == []

    async def test_memberships_of_other_resources_survive(self, db_session, owner, destination, other_user):
        service = MembershipService(db_session, DestinationMember)
        doomed = Destination(name="Doomed", inserted_by=owner.id)
        db_session.add(doomed)
        await db_session.commit()
        await service.add_member_by_email(doomed.id, other_user.email)
        kept = await service.add_member_by_email(destination.id, other_user.email)

        await DestinationService(db_session).delete(doomed)

        result = await db_session.execute(select(DestinationMember.id))
        assert result.scalars().all() == [kept.id]
