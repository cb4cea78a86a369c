"""Tests for RoleStore and role definition validation."""

from __future__ import annotations

from contextrbac import RBAC, RoleDefinition, RoleStore
from contextrbac.permissions import resolve_permissions


def _roles() -> dict:
    return {
        "guest": {
            "name": "Guest User",
            "description": "Unauthenticated visitor",
            "permissions": {"posts": ["read"]},
        },
        "member": {
            "name": "Member",
            "permissions": {"posts": ["create:own"], "profile": ["edit:own"]},
            "inherits": ["guest"],
        },
        "bot": {
            "permissions": {"posts": ["read"]},
        },
    }


class TestRoleDefinition:
    """Tests for the RoleDefinition model."""

    def test_defaults(self) -> None:
        """Everything but the role key is optional."""
        definition = RoleDefinition()
        assert definition.name is None
        assert definition.description is None
        assert definition.permissions == {}
        assert definition.inherits is None
        assert definition.parents == []

    def test_duplicates_collapse(self) -> None:
        """Duplicate tokens per resource collapse, first occurrence kept."""
        definition = RoleDefinition(permissions={"posts": ["read", "update", "read"]})
        assert definition.permissions == {"posts": ["read", "update"]}

    def test_unknown_keys_ignored(self) -> None:
        """Extra keys in a definition are ignored."""
        definition = RoleDefinition.model_validate({"permissions": {}, "color": "blue"})
        assert definition.permissions == {}

    def test_store_accepts_model_instances(self) -> None:
        """RoleDefinition instances can be passed directly."""
        store = RoleStore({"guest": RoleDefinition(permissions={"posts": ["read"]})})
        assert store.direct_permissions("guest", "posts") == ["read"]


class TestRoleStoreLookups:
    """Tests for read operations."""

    def test_roles_in_insertion_order(self) -> None:
        assert RoleStore(_roles()).roles() == ["guest", "member", "bot"]

    def test_get(self) -> None:
        store = RoleStore(_roles())
        assert store.get("guest").name == "Guest User"
        assert store.get("nope") is None

    def test_display_name(self) -> None:
        """Configured name, falling back to the role name."""
        store = RoleStore(_roles())
        assert store.display_name("guest") == "Guest User"
        assert store.display_name("bot") == "bot"
        assert store.display_name("nope") == "nope"

    def test_description(self) -> None:
        store = RoleStore(_roles())
        assert store.description("guest") == "Unauthenticated visitor"
        assert store.description("member") is None
        assert store.description("nope") is None

    def test_parents(self) -> None:
        store = RoleStore(_roles())
        assert store.parents("member") == ["guest"]
        assert store.parents("guest") == []
        assert store.parents("nope") == []

    def test_direct_permissions(self) -> None:
        """Direct permissions exclude inherited ones."""
        store = RoleStore(_roles())
        assert store.direct_permissions("member", "posts") == ["create:own"]
        assert store.direct_permissions("member", "nope") == []
        assert store.direct_permissions("nope", "posts") == []

    def test_resources(self) -> None:
        store = RoleStore(_roles())
        assert store.resources("member") == ["posts", "profile"]
        assert store.resources("nope") == []

    def test_container_protocol(self) -> None:
        store = RoleStore(_roles())
        assert "guest" in store
        assert "nope" not in store
        assert len(store) == 3

    def test_empty_store(self) -> None:
        store = RoleStore()
        assert store.roles() == []
        assert len(store) == 0

    def test_input_not_aliased(self) -> None:
        """Mutating the input after construction does not affect the store."""
        config = _roles()
        store = RoleStore(config)
        config["guest"]["permissions"]["posts"].append("delete")
        assert store.direct_permissions("guest", "posts") == ["read"]

    def test_get_returns_copy(self) -> None:
        """Editing the result of get() does not change the store."""
        store = RoleStore(_roles())
        definition = store.get("guest")
        definition.permissions["posts"].append("delete")
        definition.inherits = ["bot"]
        assert store.direct_permissions("guest", "posts") == ["read"]
        assert store.parents("guest") == []

    def test_get_copy_does_not_grant(self) -> None:
        """A grant added to a copy is never seen by decisions."""
        rbac = RBAC(_roles())
        rbac.store.get("member").permissions["posts"].append("delete")
        assert not rbac.can("member", "delete", "posts")


class TestMergeUpdate:
    """Tests for merge-style updates."""

    def test_new_role_inserted(self) -> None:
        store = RoleStore(_roles())
        store.merge_update({"developer": {"name": "Developer", "permissions": {"logs": ["read"]}}})
        assert store.roles()[-1] == "developer"
        assert store.display_name("developer") == "Developer"

    def test_tokens_unioned(self) -> None:
        """Per-resource tokens are unioned without duplicates."""
        store = RoleStore(_roles())
        store.merge_update({"guest": {"permissions": {"posts": ["read", "update"]}}})
        assert store.direct_permissions("guest", "posts") == ["read", "update"]

    def test_old_resources_kept(self) -> None:
        """Resources only in the old definition survive the merge."""
        store = RoleStore(_roles())
        store.merge_update({"member": {"permissions": {"comments": ["read"]}}})
        assert store.direct_permissions("member", "profile") == ["edit:own"]
        assert store.direct_permissions("member", "comments") == ["read"]

    def test_display_name_kept_unless_supplied(self) -> None:
        store = RoleStore(_roles())
        store.merge_update({"guest": {"permissions": {}}})
        assert store.display_name("guest") == "Guest User"
        store.merge_update({"guest": {"name": "Visitor"}})
        assert store.display_name("guest") == "Visitor"

    def test_description_kept_unless_supplied(self) -> None:
        store = RoleStore(_roles())
        store.merge_update({"guest": {"permissions": {"posts": ["list"]}}})
        assert store.description("guest") == "Unauthenticated visitor"

    def test_parents_kept_when_omitted(self) -> None:
        store = RoleStore(_roles())
        store.merge_update({"member": {"permissions": {"posts": ["update:own"]}}})
        assert store.parents("member") == ["guest"]

    def test_parents_replaced_when_supplied(self) -> None:
        """Parent lists are replaced wholesale, never unioned."""
        store = RoleStore(_roles())
        store.merge_update({"member": {"inherits": ["bot"]}})
        assert store.parents("member") == ["bot"]
        store.merge_update({"member": {"inherits": []}})
        assert store.parents("member") == []

    def test_merge_is_idempotent(self) -> None:
        """Applying the same update twice resolves to the same token set."""
        update = {"member": {"permissions": {"posts": ["update:own", "read"]}}}
        once = RoleStore(_roles())
        once.merge_update(update)
        twice = RoleStore(_roles())
        twice.merge_update(update)
        twice.merge_update(update)

        assert set(resolve_permissions(once, "member", "posts")) == set(resolve_permissions(twice, "member", "posts"))
        assert twice.direct_permissions("member", "posts") == ["create:own", "update:own", "read"]

    def test_replace(self) -> None:
        """replace() discards every previous role."""
        store = RoleStore(_roles())
        store.replace({"auditor": {"permissions": {"logs": ["read"]}}})
        assert store.roles() == ["auditor"]
        assert store.get("guest") is None
