"""Unit tests for domain value types."""

import pytest
from pydantic import ValidationError

from protrack.domain.error import MissingTenantContext
from protrack.domain.value import (
    AccessLevel,
    Email,
    PermissionSet,
    Resource,
    Role,
    Subdomain,
    require_scope,
)


class TestPermissionSet:
    """Tests for PermissionSet."""

    def test_master_template_writes_everything(self):
        permissions = PermissionSet.for_role(Role.MASTER)

        assert all(
            permissions.level(resource) == AccessLevel.WRITE for resource in Resource
        )

    def test_entry_template(self):
        permissions = PermissionSet.for_role(Role.ENTRY)

        assert permissions.level(Resource.MATERIAL) == AccessLevel.WRITE
        assert permissions.level(Resource.CAP_LEASES) == AccessLevel.WRITE
        assert permissions.level(Resource.INVOICES) == AccessLevel.READ
        assert permissions.level(Resource.PROJECTS) == AccessLevel.READ
        assert permissions.level(Resource.USERS) == AccessLevel.NONE

    def test_view_template(self):
        permissions = PermissionSet.for_role(Role.VIEW)

        assert permissions.level(Resource.LABOR) == AccessLevel.READ
        assert permissions.level(Resource.USERS) == AccessLevel.NONE
        assert not permissions.allows(Resource.LABOR, AccessLevel.WRITE)

    def test_missing_resources_default_to_none(self):
        permissions = PermissionSet({Resource.USERS: AccessLevel.WRITE})

        assert permissions.level(Resource.USERS) == AccessLevel.WRITE
        assert permissions.level(Resource.MATERIAL) == AccessLevel.NONE
        assert set(permissions.to_json()) == {resource.value for resource in Resource}

    def test_write_implies_read(self):
        permissions = PermissionSet({Resource.USERS: AccessLevel.WRITE})

        assert permissions.allows(Resource.USERS, AccessLevel.READ)
        assert permissions.allows(Resource.USERS, AccessLevel.WRITE)

    def test_json_uses_wire_names(self):
        json = PermissionSet.for_role(Role.MASTER).to_json()

        assert json["capLeases"] == "write"
        assert json["users"] == "write"

    def test_rejects_unknown_level(self):
        with pytest.raises(ValidationError):
            PermissionSet({"users": "admin"})


class TestEmail:
    """Tests for Email."""

    def test_normalizes_case_and_whitespace(self):
        assert Email("  Jane.Doe@Example.COM ").root == "jane.doe@example.com"

    def test_rejects_invalid_address(self):
        with pytest.raises(ValidationError):
            Email("not-an-email")


class TestSubdomain:
    """Tests for Subdomain."""

    @pytest.mark.parametrize("value", ["acme", "acme-builders", "a1b", "ABC"])
    def test_valid(self, value):
        assert Subdomain.is_valid(value)
        assert Subdomain(value).root == value.lower()

    @pytest.mark.parametrize(
        "value", ["ab", "-acme", "acme-", "acme_builders", "a" * 51, "ac me"]
    )
    def test_invalid(self, value):
        assert not Subdomain.is_valid(value)
        with pytest.raises(ValidationError):
            Subdomain(value)

    def test_suggest_from_organization_name(self):
        assert Subdomain.suggest("Acme  Builders, Inc.") == "acme-builders-inc"


def test_require_scope_fails_without_scope():
    with pytest.raises(MissingTenantContext):
        require_scope(None, "list_by_tenant")
