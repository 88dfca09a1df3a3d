"""Tests for the policy evaluator decision order."""

import pytest
import pytest_asyncio

from ingest.access.base import Actor, ResourceRef
from ingest.access.evaluator import PolicyEvaluator
from ingest.models.base import Visibility
from ingest.models.destination import Destination
from ingest.models.membership import DestinationMember, MemberRole, MemberStatus
from ingest.models.policy import Action
from ingest.models.project import Project
from ingest.services.policy_service import PolicyService
from ingest.utils.exceptions import InvalidRequestError

pytestmark = pytest.mark.asyncio


async def add_policy(db_session, **overrides):
    attrs = {
        "name": "policy",
        "actions": ["update"],
        "resource_types": ["Destination"],
        "attributes": {},
        "matcher": "match_all",
        "scope": "global",
    }
    attrs.update(overrides)
    return await PolicyService(db_session).create_policy(attrs)


async def add_membership(db_session, destination, user, role, status):
    membership = DestinationMember(
        destination_id=destination.id,
        user_id=user.id,
        email=user.email,
        role=role.value,
        status=status.value,
    )
    db_session.add(membership)
    await db_session.commit()
    return membership


@pytest_asyncio.fixture
async def destination(db_session, owner):
    destination = Destination(
        name="Private bucket",
        type="s3",
        inserted_by=owner.id,
        visibility=Visibility.PRIVATE.value,
        attributes={"region": "east"},
    )
    db_session.add(destination)
    await db_session.commit()
    await db_session.refresh(destination)
    return destination


@pytest_asyncio.fixture
async def public_destination(db_session, owner):
    destination = Destination(
        name="Public bucket",
        type="internal",
        inserted_by=owner.id,
        visibility=Visibility.PUBLIC.value,
    )
    db_session.add(destination)
    await db_session.commit()
    await db_session.refresh(destination)
    return destination


@pytest.fixture
def evaluator(db_session):
    return PolicyEvaluator(db_session)


class TestOwnership:
    @pytest.mark.parametrize("action", list(Action))
    async def test_owner_is_always_allowed(
        self, db_session, evaluator, destination, owner_actor, owner, action
    ):
        # Neither a veto policy nor a rejected membership affects the owner
        await add_policy(db_session, matcher="match_none", attributes={"region": "east"}, actions=[action.value])
        await add_membership(db_session, destination, owner, MemberRole.UPLOADER, MemberStatus.REJECTED)

        decision = await evaluator.evaluate(owner_actor, "Destination", action, destination)

        assert decision.allowed

    async def test_owner_check_uses_resource_owner_id(self, evaluator, other_actor):
        ref = ResourceRef(type_tag="Project", id=1, owner_id=other_actor.id)

        assert (await evaluator.evaluate(other_actor, "Project", "delete", ref)).allowed


class TestPublicRead:
    async def test_public_resource_is_readable_by_anyone(self, evaluator, public_destination, other_actor):
        decision = await evaluator.evaluate(other_actor, "Destination", Action.READ, public_destination)

        assert decision.allowed

    @pytest.mark.parametrize("action", [Action.CREATE, Action.UPDATE, Action.DELETE])
    async def test_public_resource_is_not_writable(self, evaluator, public_destination, other_actor, action):
        decision = await evaluator.evaluate(other_actor, "Destination", action, public_destination)

        assert not decision.allowed


class TestMembershipPath:
    @pytest.mark.parametrize("status", [MemberStatus.PENDING, MemberStatus.REJECTED])
    @pytest.mark.parametrize("role", list(MemberRole))
    async def test_unaccepted_membership_grants_nothing(
        self, db_session, evaluator, destination, other_user, other_actor, role, status
    ):
        await add_membership(db_session, destination, other_user, role, status)

        decision = await evaluator.evaluate(other_actor, "Destination", Action.READ, destination)

        assert not decision.allowed

    async def test_accepted_uploader_can_create_and_read(
        self, db_session, evaluator, destination, other_user, other_actor
    ):
        await add_membership(db_session, destination, other_user, MemberRole.UPLOADER, MemberStatus.ACCEPTED)

        assert (await evaluator.evaluate(other_actor, "Destination", Action.CREATE, destination)).allowed
        assert (await evaluator.evaluate(other_actor, "Destination", Action.READ, destination)).allowed
        assert not (await evaluator.evaluate(other_actor, "Destination", Action.UPDATE, destination)).allowed

    async def test_accepted_uploader_cannot_delete(
        self, db_session, evaluator, destination, other_user, other_actor
    ):
        await add_membership(db_session, destination, other_user, MemberRole.UPLOADER, MemberStatus.ACCEPTED)

        decision = await evaluator.evaluate(other_actor, "Destination", Action.DELETE, destination)

        assert not decision.allowed

    async def test_accepted_manager_has_full_control(
        self, db_session, evaluator, destination, other_user, other_actor
    ):
        await add_membership(db_session, destination, other_user, MemberRole.MANAGER, MemberStatus.ACCEPTED)

        for action in Action:
            assert (await evaluator.evaluate(other_actor, "Destination", action, destination)).allowed

    async def test_membership_is_per_resource(
        self, db_session, evaluator, destination, owner, other_user, other_actor
    ):
        await add_membership(db_session, destination, other_user, MemberRole.MANAGER, MemberStatus.ACCEPTED)
        second = Destination(name="Another", inserted_by=owner.id)
        db_session.add(second)
        await db_session.commit()

        assert not (await evaluator.evaluate(other_actor, "Destination", Action.READ, second)).allowed


class TestPolicyPath:
    async def test_global_match_all_policy_with_empty_attributes_grants_action(
        self, db_session, evaluator, destination, other_actor
    ):
        await add_policy(db_session, actions=["update"])

        assert (await evaluator.evaluate(other_actor, "Destination", Action.UPDATE, destination)).allowed

    async def test_action_outside_policy_is_denied(self, db_session, evaluator, destination, other_actor):
        await add_policy(db_session, actions=["update"])

        assert not (await evaluator.evaluate(other_actor, "Destination", Action.READ, destination)).allowed

    async def test_policy_for_other_resource_type_does_not_apply(
        self, db_session, evaluator, destination, other_actor
    ):
        await add_policy(db_session, actions=["update"], resource_types=["Project"])

        assert not (await evaluator.evaluate(other_actor, "Destination", Action.UPDATE, destination)).allowed

    async def test_attribute_conditions_use_resource_attributes(
        self, db_session, evaluator, destination, other_actor
    ):
        await add_policy(db_session, actions=["read"], attributes={"type": "s3", "region": "east"})
        await add_policy(db_session, actions=["delete"], attributes={"region": "west"})

        assert (await evaluator.evaluate(other_actor, "Destination", Action.READ, destination)).allowed
        assert not (await evaluator.evaluate(other_actor, "Destination", Action.DELETE, destination)).allowed

    async def test_match_none_overrides_other_grants(self, db_session, evaluator, destination, other_actor):
        await add_policy(db_session, name="grant", actions=["update"])
        await add_policy(db_session, name="veto", matcher="match_none", attributes={"region": "east"})

        decision = await evaluator.evaluate(other_actor, "Destination", Action.UPDATE, destination)

        assert not decision.allowed

    async def test_match_none_without_attribute_hit_does_not_veto(
        self, db_session, evaluator, destination, other_actor
    ):
        await add_policy(db_session, name="grant", actions=["update"])
        await add_policy(db_session, name="veto", matcher="match_none", attributes={"region": "west"})

        assert (await evaluator.evaluate(other_actor, "Destination", Action.UPDATE, destination)).allowed

    async def test_user_scoped_policy_applies_only_to_that_user(
        self, db_session, evaluator, destination, other_user, other_actor, user_factory
    ):
        await add_policy(db_session, actions=["delete"], scope="user", scope_id=other_user.id)
        stranger = Actor.from_user(await user_factory())

        assert (await evaluator.evaluate(other_actor, "Destination", Action.DELETE, destination)).allowed
        assert not (await evaluator.evaluate(stranger, "Destination", Action.DELETE, destination)).allowed

    async def test_group_scoped_policy_applies_only_to_group_members(
        self, db_session, evaluator, destination, other_user
    ):
        await add_policy(db_session, actions=["update"], scope="group", scope_id=7)
        in_group = Actor.from_user(other_user, group_ids=[7])
        outside = Actor.from_user(other_user, group_ids=[8])

        assert (await evaluator.evaluate(in_group, "Destination", Action.UPDATE, destination)).allowed
        assert not (await evaluator.evaluate(outside, "Destination", Action.UPDATE, destination)).allowed

    async def test_create_without_resource_needs_policy(self, db_session, evaluator, other_actor):
        assert not (await evaluator.evaluate(other_actor, "Project", Action.CREATE)).allowed

        await add_policy(db_session, actions=["create"], resource_types=["Project"])

        assert (await evaluator.evaluate(other_actor, "Project", Action.CREATE)).allowed

    async def test_attributes_round_trip_through_store(self, db_session):
        policy = await add_policy(db_session, attributes={"region": "east"})

        fetched = await PolicyService(db_session).get_policy(policy.id)

        assert fetched.attributes == {"region": "east"}


class TestInvalidRequests:
    async def test_unknown_resource_type(self, evaluator, other_actor):
        with pytest.raises(InvalidRequestError):
            await evaluator.evaluate(other_actor, "Spaceship", Action.READ)

    async def test_unknown_action(self, evaluator, other_actor):
        with pytest.raises(InvalidRequestError):
            await evaluator.evaluate(other_actor, "Project", "publish")

    async def test_missing_actor_id(self, evaluator):
        with pytest.raises(InvalidRequestError):
            await evaluator.evaluate(Actor(id=None), "Project", Action.READ)

    async def test_resource_of_other_kind(self, evaluator, other_actor):
        project = Project(id=1, name="P", inserted_by=None, visibility="private")

        with pytest.raises(InvalidRequestError):
            await evaluator.evaluate(other_actor, "Destination", Action.READ, project)

    async def test_invalid_input_runs_no_query(self, db_session, other_actor):
        class ExplodingPolicies:
            async def candidate_policies(self, resource_type, actor):
                raise AssertionError("store was queried")

        evaluator = PolicyEvaluator(db_session, policy_service=ExplodingPolicies())

        with pytest.raises(InvalidRequestError):
            await evaluator.evaluate(other_actor, "Spaceship", Action.READ)
