from collections.abc import Iterable

from app.audit.sink import AuditSink
from app.auth.claims import Principal
from app.models.enums import Role
from app.models.task import Task

ORG_WIDE_ROLES = {Role.owner, Role.admin}

def visible_tasks(principal: Principal, tasks: Iterable[Task], audit: AuditSink) -> list[Task]:
    """Tasks the principal may see, newest first.

    The organization boundary is applied before any role narrowing, and the
    role step can only drop tasks. Each call leaves one TASK_LIST_VIEW entry.
    """
    if principal.org_id is None:
        audit.append(principal, "TASK_LIST_VIEW", {"count": 0, "scope": "none"})
        return []

    in_org = [t for t in tasks if t.org_id == principal.org_id]

    if principal.role in ORG_WIDE_ROLES:
        scope = "org"
        result = in_org
    else:
        scope = "viewer-limited"
        result = [
            t for t in in_org
            if t.created_by == principal.user_id or t.assigned_to == principal.user_id
        ]

    # stable, so rows created in the same instant keep their load order
    result = sorted(result, key=lambda t: t.created_at, reverse=True)

    audit.append(principal, "TASK_LIST_VIEW", {"count": len(result), "scope": scope})
    return result
