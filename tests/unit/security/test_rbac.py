"""Security tests: permission and role guards over users."""

from datetime import timedelta

import pytest

from identity_core.domain.models.enums import UserPermission, UserRole, UserStatus
from identity_core.domain.models.record import utcnow
from identity_core.security.exceptions import AuthorizationError
from identity_core.security.rbac import AuthorizationService


@pytest.fixture
def authz():
    return AuthorizationService()


def test_admin_passes_every_permission_check(authz, make_user):
    admin = make_user(role=UserRole.ADMIN)
    authz.require_permission(admin, *UserPermission)
    authz.require_any_permission(admin, UserPermission.SYSTEM_CONFIG)


def test_granted_permissions_pass(authz, make_user):
    user = make_user(permissions={UserPermission.ATOM_READ, UserPermission.ATOM_EXECUTE})
    authz.require_permission(user, UserPermission.ATOM_READ, UserPermission.ATOM_EXECUTE)
    authz.require_any_permission(user, UserPermission.ATOM_WRITE, UserPermission.ATOM_READ)


def test_missing_permission_named_in_error(authz, make_user):
    user = make_user(permissions={UserPermission.ATOM_READ})
    with pytest.raises(AuthorizationError) as exc_info:
        authz.require_permission(user, UserPermission.ATOM_READ, UserPermission.ATOM_DELETE)
    assert "ATOM_DELETE" in exc_info.value.message
    assert "ATOM_READ" not in exc_info.value.message


def test_require_any_permission_denied(authz, make_user):
    with pytest.raises(AuthorizationError):
        authz.require_any_permission(make_user(), UserPermission.BILLING_READ, UserPermission.BILLING_WRITE)


def test_require_role(authz, make_user):
    authz.require_role(make_user(role=UserRole.ANALYST), UserRole.ANALYST, UserRole.MANAGER)
    with pytest.raises(AuthorizationError):
        authz.require_role(make_user(role=UserRole.VIEWER), UserRole.ANALYST)


@pytest.mark.parametrize("status", [UserStatus.SUSPENDED, UserStatus.INACTIVE, UserStatus.PENDING])
def test_disabled_admin_is_denied(authz, make_user, status):
    admin = make_user(role=UserRole.ADMIN, status=status)
    with pytest.raises(AuthorizationError) as exc_info:
        authz.require_permission(admin, UserPermission.USER_READ)
    assert "not enabled" in exc_info.value.message


def test_deleted_user_is_denied(authz, make_user):
    user = make_user(permissions={UserPermission.USER_READ}).soft_delete("admin1")
    with pytest.raises(AuthorizationError):
        authz.require_permission(user, UserPermission.USER_READ)


def test_locked_user_is_denied(authz, make_user):
    user = make_user(
        permissions={UserPermission.USER_READ},
        account_locked_until=utcnow() + timedelta(minutes=5),
    )
    with pytest.raises(AuthorizationError) as exc_info:
        authz.require_permission(user, UserPermission.USER_READ)
    assert "locked" in exc_info.value.message
