"""
Access rules for quotations.

Every decision here is a pure function of the caller (role, id, tenant),
the requested action and, for record-level actions, the record's ownership.
Nothing in this module touches the database or the request.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from crm.core.exceptions import AuthorizationError
from crm.models.enums.user_role import UserRole


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    LIST = "list"
    UPDATE = "update"


class ListScope(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


@dataclass(frozen=True)
class Principal:
    id: int
    role: UserRole
    tenant_admin_id: Optional[int] = None

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(
            id=user.id,
            role=UserRole(user.role),
            tenant_admin_id=user.tenant_admin_id,
        )


@dataclass(frozen=True)
class Ownership:
    owner_id: int
    admin_id: Optional[int] = None

    @classmethod
    def from_quotation(cls, quotation) -> "Ownership":
        return cls(owner_id=quotation.owner_id, admin_id=quotation.admin_id)


LIST_SCOPES_BY_ROLE = {
    UserRole.user: {ListScope.USER},
    UserRole.admin: {ListScope.USER, ListScope.ADMIN},
    UserRole.superadmin: {ListScope.USER, ListScope.SUPERADMIN},
}

CREATE_ROLES = {UserRole.user, UserRole.admin, UserRole.superadmin}


def is_allowed(
    principal: Principal,
    action: Action,
    ownership: Optional[Ownership] = None,
    scope: Optional[ListScope] = None,
) -> bool:
    role = principal.role

    if action == Action.CREATE:
        return role in CREATE_ROLES

    if action == Action.LIST:
        return scope in LIST_SCOPES_BY_ROLE.get(role, set())

    if role == UserRole.superadmin:
        return True

    # record-level actions below
    if ownership is None:
        return False

    manages = role == UserRole.admin and ownership.admin_id == principal.id

    if action == Action.READ:
        return ownership.owner_id == principal.id or manages

    if action == Action.UPDATE:
        return manages

    return False


def authorize(
    principal: Principal,
    action: Action,
    ownership: Optional[Ownership] = None,
    scope: Optional[ListScope] = None,
) -> None:
    if not is_allowed(principal, action, ownership, scope):
        if action == Action.LIST:
            scope_name = scope.value if scope else "unknown"
            raise AuthorizationError(
                f"Role {principal.role.value} cannot list {scope_name} quotations"
            )
        raise AuthorizationError(f"Not allowed to {action.value} this quotation")


def default_scope(principal: Principal) -> ListScope:
    return ListScope(principal.role.value)
