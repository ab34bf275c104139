"""Tests for document channels and access assignments."""

import pytest

from syncgate.auth.access import (
    ChannelAccessAssignment,
    RoleAccessAssignment,
    assign_user_access,
    get_all_doc_channels,
)
from syncgate.definitions.types import AccessAssignment, Dynamic
from syncgate.errors import ConfigurationError
from syncgate.host import SessionHost

from conftest import make_definition


class TestGetAllDocChannels:
    def test_union_without_duplicates(self):
        definition = make_definition(
            channels={"view": "v", "write": ["w", "v"], "add": "a", "replace": ["r", "a"], "remove": "d"}
        )
        assert get_all_doc_channels({"_id": "x"}, None, definition) == ["v", "w", "a", "r", "d"]

    def test_no_channels(self):
        assert get_all_doc_channels({"_id": "x"}, None, make_definition()) == []

    def test_dynamic_channels(self):
        definition = make_definition(channels=Dynamic(lambda doc, old_doc: {"view": doc["_id"]}))
        assert get_all_doc_channels({"_id": "x"}, None, definition) == ["x"]


class TestAssignUserAccess:
    def test_channel_assignment(self):
        host = SessionHost()
        definition = make_definition(
            access_assignments=[AccessAssignment(channels=["c1"], roles=["r1"], users=["u1", None])]
        )
        results = assign_user_access({"_id": "x"}, None, definition, host)

        assert host.access_calls == [(["u1", "role:r1"], ["c1"])]
        assert results == [ChannelAccessAssignment(users_and_roles=["u1", "role:r1"], channels=["c1"])]

    def test_role_assignment(self):
        host = SessionHost()
        definition = make_definition(access_assignments=[AccessAssignment(type="role", roles="admin", users="u1")])
        results = assign_user_access({"_id": "x"}, None, definition, host)

        assert host.role_calls == [(["u1"], ["role:admin"])]
        assert results == [RoleAccessAssignment(users=["u1"], roles=["role:admin"])]

    def test_dynamic_fields(self):
        host = SessionHost()
        assignment = AccessAssignment(
            channels=Dynamic(lambda doc, old_doc: [f"{doc['_id']}-chan"]),
            users=Dynamic(lambda doc, old_doc: doc["members"]),
        )
        definition = make_definition(access_assignments=[assignment])
        assign_user_access({"_id": "team", "members": ["a", "b"]}, None, definition, host)
        assert host.access_calls == [(["a", "b"], ["team-chan"])]

    def test_dynamic_assignment_list(self):
        host = SessionHost()
        definition = make_definition(
            access_assignments=Dynamic(
                lambda doc, old_doc: [AccessAssignment(type="role", roles=["r"], users=[doc["owner"]])]
            )
        )
        assign_user_access({"owner": "ann"}, {"_deleted": True}, definition, host)
        assert host.role_calls == [(["ann"], ["role:r"])]

    def test_invalid_assignment_type(self):
        with pytest.raises(ConfigurationError):
            AccessAssignment(type="group")

    def test_invalid_dynamic_result(self):
        definition = make_definition(access_assignments=Dynamic(lambda doc, old_doc: [{"channels": "c"}]))
        with pytest.raises(ConfigurationError):
            assign_user_access({"_id": "x"}, None, definition, SessionHost())
