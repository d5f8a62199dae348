import logging

from fastapi import Depends

from app.auth.claims import Principal
from app.auth.deps import get_principal
from app.errors import Forbidden
from app.rbac.guard import authorize
from app.rbac.perms import ROUTES, Public

logger = logging.getLogger(__name__)

def require_route(operation: str):
    access = ROUTES.get(operation)
    if access is None:
        raise RuntimeError(f"unknown route operation: {operation}")

    # public routes never look at credentials
    if isinstance(access, Public):
        def _public() -> None:
            return None

        return _public

    def _checker(principal: Principal = Depends(get_principal)) -> Principal:
        if not authorize(principal, access.permissions):
            logger.info(
                "denied %s for user=%s role=%s",
                operation,
                principal.user_id,
                principal.role.value if principal.role else None,
            )
            raise Forbidden("forbidden")
        return principal

    return _checker
