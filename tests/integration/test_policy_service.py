"""Tests for the policy store."""

import pytest

from ingest.access.base import Actor
from ingest.models.policy import Action
from ingest.services.policy_service import PolicyService
from ingest.utils.exceptions import NotFoundError, ValidationError

pytestmark = pytest.mark.asyncio


def policy_attrs(**overrides):
    attrs = {
        "name": "Read S3 destinations",
        "actions": ["read"],
        "resource_types": ["Destination"],
        "attributes": {"type": "s3"},
        "matcher": "match_all",
        "scope": "global",
    }
    attrs.update(overrides)
    return attrs


class TestPolicyCrud:
    async def test_create_round_trips_fields(self, db_session):
        service = PolicyService(db_session)

        policy = await service.create_policy(
            policy_attrs(attributes={"type": "s3", "tags": {"pii": False}})
        )
        fetched = await service.get_policy(policy.id)

        assert fetched.name == "Read S3 destinations"
        assert fetched.actions == ["read"]
        assert fetched.resource_types == ["Destination"]
        assert fetched.attributes == {"type": "s3", "tags": {"pii": False}}
        assert fetched.matcher == "match_all"
        assert fetched.scope == "global"
        assert fetched.scope_id is None

    async def test_create_defaults_attributes_to_empty(self, db_session):
        policy = await PolicyService(db_session).create_policy(policy_attrs(attributes=None))

        assert policy.attributes == {}

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"name": ""}, "name"),
            ({"name": "   "}, "name"),
            ({"actions": []}, "actions"),
            ({"actions": ["publish"]}, "actions"),
            ({"resource_types": []}, "resource_types"),
            ({"resource_types": [" "]}, "resource_types"),
            ({"matcher": "match_some"}, "matcher"),
            ({"matcher": None}, "matcher"),
            ({"scope": None}, "scope"),
            ({"scope": "everyone"}, "scope"),
        ],
    )
    async def test_create_rejects_invalid_fields(self, db_session, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            await PolicyService(db_session).create_policy(policy_attrs(**overrides))

        assert field in exc_info.value.fields
        assert await PolicyService(db_session).list_policies() == []

    async def test_create_requires_scope(self, db_session):
        attrs = policy_attrs()
        del attrs["scope"]

        with pytest.raises(ValidationError) as exc_info:
            await PolicyService(db_session).create_policy(attrs)

        assert "scope" in exc_info.value.fields

    async def test_update_merges_over_stored_values(self, db_session):
        service = PolicyService(db_session)
        policy = await service.create_policy(policy_attrs())

        updated = await service.update_policy(policy.id, {"actions": ["read", "update"]})

        assert updated.actions == ["read", "update"]
        assert updated.attributes == {"type": "s3"}
        assert updated.matcher == "match_all"

    async def test_invalid_update_leaves_policy_unchanged(self, db_session):
        service = PolicyService(db_session)
        policy = await service.create_policy(policy_attrs())

        with pytest.raises(ValidationError):
            await service.update_policy(policy.id, {"name": "Renamed", "matcher": "sometimes"})

        await db_session.refresh(policy)
        assert policy.name == "Read S3 destinations"
        assert policy.matcher == "match_all"

    async def test_missing_policy_raises_not_found(self, db_session):
        service = PolicyService(db_session)

        with pytest.raises(NotFoundError):
            await service.get_policy(404)
        with pytest.raises(NotFoundError):
            await service.update_policy(404, {"name": "x"})
        with pytest.raises(NotFoundError):
            await service.delete_policy(404)

    async def test_delete_removes_policy(self, db_session):
        service = PolicyService(db_session)
        policy = await service.create_policy(policy_attrs())

        await service.delete_policy(policy.id)

        with pytest.raises(NotFoundError):
            await service.get_policy(policy.id)


class TestListPolicies:
    async def test_filters_by_type_and_action_intersection(self, db_session):
        service = PolicyService(db_session)
        read_dest = await service.create_policy(policy_attrs(name="read dest"))
        write_proj = await service.create_policy(
            policy_attrs(name="write proj", actions=["create", "update"], resource_types=["Project"])
        )
        both = await service.create_policy(
            policy_attrs(name="both", actions=["read", "delete"], resource_types=["Destination", "Project"])
        )

        by_type = await service.list_policies(resource_types=["Project"])
        assert [p.id for p in by_type] == [write_proj.id, both.id]

        by_action = await service.list_policies(actions=[Action.READ])
        assert [p.id for p in by_action] == [read_dest.id, both.id]

        combined = await service.list_policies(resource_types=["Project"], actions=["delete"])
        assert [p.id for p in combined] == [both.id]

        assert len(await service.list_policies()) == 3

    async def test_unknown_action_filter_is_rejected(self, db_session):
        with pytest.raises(ValidationError):
            await PolicyService(db_session).list_policies(actions=["publish"])


class TestCandidatePolicies:
    async def test_scope_limits_which_actors_see_a_policy(self, db_session):
        service = PolicyService(db_session)
        global_policy = await service.create_policy(policy_attrs(name="global"))
        user_policy = await service.create_policy(policy_attrs(name="user", scope="user", scope_id=1))
        group_policy = await service.create_policy(policy_attrs(name="group", scope="group", scope_id=10))
        await service.create_policy(policy_attrs(name="project only", resource_types=["Project"]))

        def ids(policies):
            return sorted(p.id for p in policies)

        plain = await service.candidate_policies("Destination", Actor(id=2))
        assert ids(plain) == [global_policy.id]

        named = await service.candidate_policies("Destination", Actor(id=1))
        assert ids(named) == [global_policy.id, user_policy.id]

        grouped = await service.candidate_policies("Destination", Actor(id=2, group_ids=frozenset({10, 11})))
        assert ids(grouped) == [global_policy.id, group_policy.id]

    async def test_type_match_is_exact_not_substring(self, db_session):
        service = PolicyService(db_session)
        exact = await service.create_policy(policy_attrs(name="exact"))
        await service.create_policy(policy_attrs(name="longer tag", resource_types=["DestinationArchive"]))
        await service.create_policy(
            policy_attrs(name="key only", resource_types=["Project"], attributes={"Destination": "x"})
        )

        candidates = await service.candidate_policies("Destination", Actor(id=2))

        assert [p.id for p in candidates] == [exact.id]

    async def test_wildcard_characters_in_tags_are_literal(self, db_session):
        service = PolicyService(db_session)
        underscored = await service.create_policy(policy_attrs(name="underscored", resource_types=["Data_Set"]))
        await service.create_policy(policy_attrs(name="lookalike", resource_types=["DataXSet"]))

        assert [p.id for p in await service.candidate_policies("Data_Set", Actor(id=2))] == [underscored.id]
        assert await service.candidate_policies("Data%", Actor(id=2)) == []
        assert [p.id for p in await service.list_policies(resource_types=["Data_Set"])] == [underscored.id]
