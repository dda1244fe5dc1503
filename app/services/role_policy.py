"""Role policy: which actor role may create, update or delete which target role.

Pure decisions over the hierarchy admin > manager > staff. No actor may create or
promote a peer or superior; admins are shielded from deletion by anyone, and from
being moved off the admin role. Endpoint-level gating (who may call /users at all)
is separate and lives in the API dependencies.
"""

from dataclasses import dataclass
from typing import assert_never

from app.models.user import Role


@dataclass(frozen=True)
class RoleCapabilities:
    """Static capability summary shown on the profile page."""

    can_manage_users: bool
    can_manage_roles: bool
    can_manage_system: bool
    access_permissions: tuple[str, ...]


ADMIN_CAPABILITIES = RoleCapabilities(
    can_manage_users=True,
    can_manage_roles=True,
    can_manage_system=True,
    access_permissions=(
        "Full system access",
        "User management",
        "Role assignment",
        "System configuration",
        "Financial reports",
        "Inventory management",
        "Order processing",
        "Reservation management",
        "Event management",
        "Customer data access",
    ),
)

MANAGER_CAPABILITIES = RoleCapabilities(
    can_manage_users=True,
    can_manage_roles=False,
    can_manage_system=False,
    access_permissions=(
        "Dashboard access",
        "Team management",
        "Order processing",
        "Reservation management",
        "Event management",
        "Inventory oversight",
        "Staff scheduling",
        "Basic reporting",
    ),
)

STAFF_CAPABILITIES = RoleCapabilities(
    can_manage_users=False,
    can_manage_roles=False,
    can_manage_system=False,
    access_permissions=(
        "Dashboard access",
        "Order processing",
        "Reservation management",
        "Event assistance",
        "Inventory updates",
        "Customer service",
    ),
)


def can_create(actor: Role, target: Role) -> bool:
    """Admin creates managers and staff; manager creates staff; staff creates nobody."""
    if actor is Role.ADMIN or actor is Role.MANAGER:
        return target.rank < actor.rank
    if actor is Role.STAFF:
        return False
    assert_never(actor)


def can_update(
    actor: Role,
    target: Role,
    changing_role: bool = False,
    new_role: Role | None = None,
) -> bool:
    """
    Decide whether actor may update an account currently holding `target`.

    A role change is in play when changing_role is True or new_role is given.
    Admin: any target, but an admin target may only be "changed" to admin.
    Manager: staff targets only, and never the role field (not even a no-op).
    Staff: nobody.
    """
    changing_role = changing_role or new_role is not None
    if actor is Role.ADMIN:
        if target is Role.ADMIN and changing_role and new_role is not Role.ADMIN:
            return False
        return True
    if actor is Role.MANAGER:
        return target is Role.STAFF and not changing_role
    if actor is Role.STAFF:
        return False
    assert_never(actor)


def can_delete(actor: Role, target: Role) -> bool:
    """Admin and manager may delete staff only; manager-vs-manager is denied."""
    if actor is Role.ADMIN:
        return target is Role.STAFF
    if actor is Role.MANAGER:
        return target is Role.STAFF
    if actor is Role.STAFF:
        return False
    assert_never(actor)


def role_display(role: Role) -> str:
    if role is Role.ADMIN:
        return "System Administrator"
    if role is Role.MANAGER:
        return "Management Team"
    if role is Role.STAFF:
        return "Staff Member"
    assert_never(role)


def role_capabilities(role: Role) -> RoleCapabilities:
    if role is Role.ADMIN:
        return ADMIN_CAPABILITIES
    if role is Role.MANAGER:
        return MANAGER_CAPABILITIES
    if role is Role.STAFF:
        return STAFF_CAPABILITIES
    assert_never(role)
