from dataclasses import dataclass

from app.models.enums import Permission, Role

ROLE_PERMS: dict[Role, frozenset[Permission]] = {
    Role.owner: frozenset(
        {
            Permission.view_tasks,
            Permission.manage_tasks,
            Permission.manage_users,
            Permission.view_audit_log,
        }
    ),
    # admin is not a superset of everything below owner: no manage_users
    Role.admin: frozenset(
        {
            Permission.view_tasks,
            Permission.manage_tasks,
            Permission.view_audit_log,
        }
    ),
    Role.viewer: frozenset({Permission.view_tasks}),
}

def permissions_of(role: Role) -> frozenset[Permission]:
    return ROLE_PERMS[role]

def has_permission(role: Role, permission: Permission) -> bool:
    return permission in ROLE_PERMS[role]


@dataclass(frozen=True)
class Public:
    """Operation open to anyone; no principal is extracted."""


@dataclass(frozen=True)
class RequiresPermissions:
    """Operation needs an authenticated principal holding every listed permission."""

    permissions: frozenset[Permission] = frozenset()


RouteAccess = Public | RequiresPermissions

ROUTES: dict[str, RouteAccess] = {
    "auth:login": Public(),
    "users:seed": Public(),

    "users:me": RequiresPermissions(),
    "users:update_me": RequiresPermissions(),
    "users:change_password": RequiresPermissions(),
    "users:list": RequiresPermissions(frozenset({Permission.manage_users})),
    "users:create": RequiresPermissions(frozenset({Permission.manage_users})),

    "tasks:create": RequiresPermissions(frozenset({Permission.manage_tasks})),
    "tasks:read": RequiresPermissions(frozenset({Permission.view_tasks})),
    "tasks:update": RequiresPermissions(frozenset({Permission.manage_tasks})),
    "tasks:delete": RequiresPermissions(frozenset({Permission.manage_tasks})),

    "audit:read": RequiresPermissions(frozenset({Permission.view_audit_log})),
}
