import itertools

import pytest

from crm.core.exceptions import AuthorizationError
from crm.core.permissions import (
    Action,
    ListScope,
    Ownership,
    Principal,
    authorize,
    default_scope,
    is_allowed,
)
from crm.models.enums.user_role import UserRole

SUPERADMIN = Principal(id=1, role=UserRole.superadmin)
ADMIN = Principal(id=2, role=UserRole.admin, tenant_admin_id=2)
OTHER_ADMIN = Principal(id=3, role=UserRole.admin, tenant_admin_id=3)
USER = Principal(id=4, role=UserRole.user, tenant_admin_id=2)
OTHER_USER = Principal(id=5, role=UserRole.user, tenant_admin_id=3)

# created by USER, filed under ADMIN
USERS_QUOTATION = Ownership(owner_id=4, admin_id=2)


def test_every_role_may_create():
    for principal in (SUPERADMIN, ADMIN, USER):
        assert is_allowed(principal, Action.CREATE)


def test_user_reads_only_own_quotations():
    assert is_allowed(USER, Action.READ, USERS_QUOTATION)
    assert not is_allowed(OTHER_USER, Action.READ, USERS_QUOTATION)


def test_admin_reads_tenant_quotations_only():
    assert is_allowed(ADMIN, Action.READ, USERS_QUOTATION)
    assert not is_allowed(OTHER_ADMIN, Action.READ, USERS_QUOTATION)


def test_admin_reads_quotation_they_own():
    own = Ownership(owner_id=ADMIN.id, admin_id=ADMIN.id)
    assert is_allowed(ADMIN, Action.READ, own)


def test_superadmin_reads_and_updates_everything():
    orphan = Ownership(owner_id=99, admin_id=None)
    for ownership in (USERS_QUOTATION, orphan):
        assert is_allowed(SUPERADMIN, Action.READ, ownership)
        assert is_allowed(SUPERADMIN, Action.UPDATE, ownership)


def test_only_managing_admin_or_superadmin_updates():
    assert is_allowed(ADMIN, Action.UPDATE, USERS_QUOTATION)
    assert not is_allowed(OTHER_ADMIN, Action.UPDATE, USERS_QUOTATION)
    # owning a quotation does not let a user change its terms
    assert not is_allowed(USER, Action.UPDATE, USERS_QUOTATION)


def test_record_actions_without_ownership_are_denied():
    assert not is_allowed(ADMIN, Action.READ)
    assert not is_allowed(USER, Action.UPDATE)


@pytest.mark.parametrize(
    "principal,scope,expected",
    [
        (USER, ListScope.USER, True),
        (USER, ListScope.ADMIN, False),
        (USER, ListScope.SUPERADMIN, False),
        (ADMIN, ListScope.USER, True),
        (ADMIN, ListScope.ADMIN, True),
        (ADMIN, ListScope.SUPERADMIN, False),
        (SUPERADMIN, ListScope.USER, True),
        (SUPERADMIN, ListScope.SUPERADMIN, True),
        (SUPERADMIN, ListScope.ADMIN, False),
    ],
)
def test_list_scopes(principal, scope, expected):
    assert is_allowed(principal, Action.LIST, scope=scope) is expected


def test_default_scope_follows_role():
    assert default_scope(USER) == ListScope.USER
    assert default_scope(ADMIN) == ListScope.ADMIN
    assert default_scope(SUPERADMIN) == ListScope.SUPERADMIN


def test_decisions_are_deterministic():
    principals = (SUPERADMIN, ADMIN, OTHER_ADMIN, USER, OTHER_USER)
    ownerships = (USERS_QUOTATION, Ownership(owner_id=5, admin_id=3), None)
    for principal, action, ownership in itertools.product(principals, Action, ownerships):
        first = is_allowed(principal, action, ownership, ListScope.USER)
        assert all(
            is_allowed(principal, action, ownership, ListScope.USER) == first
            for _ in range(3)
        )


def test_authorize_raises_forbidden():
    with pytest.raises(AuthorizationError) as exc_info:
        authorize(OTHER_USER, Action.READ, USERS_QUOTATION)
    assert exc_info.value.status_code == 403

    with pytest.raises(AuthorizationError):
        authorize(USER, Action.LIST, scope=ListScope.SUPERADMIN)


def test_authorize_passes_silently():
    assert authorize(USER, Action.READ, USERS_QUOTATION) is None
