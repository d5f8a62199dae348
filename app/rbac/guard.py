from collections.abc import Iterable

from app.auth.claims import Principal
from app.errors import Forbidden
from app.models.enums import Permission
from app.rbac.perms import permissions_of

def authorize(principal: Principal, required: Iterable[Permission]) -> bool:
    """True when the principal's role holds every required permission.

    An empty requirement always passes. A principal without a role passes
    nothing else.
    """
    required = frozenset(required)
    if not required:
        return True
    if principal.role is None:
        return False
    return required <= permissions_of(principal.role)

def ensure_authorized(principal: Principal, required: Iterable[Permission]) -> None:
    if not authorize(principal, required):
        raise Forbidden("insufficient permissions")
