from fastapi import APIRouter, Depends

from app.audit.sink import AuditSink, get_audit_sink
from app.auth.claims import Principal
from app.rbac.deps import require_route
from app.schemas.audit import AuditEntryOut

router = APIRouter(prefix="/audit-log", tags=["audit"])

# the guard checks view_audit_log; the sink only scopes by organization
@router.get("", response_model=list[AuditEntryOut])
def get_audit_log(
    principal: Principal = Depends(require_route("audit:read")),
    audit: AuditSink = Depends(get_audit_sink),
) -> list[AuditEntryOut]:
    return [AuditEntryOut.model_validate(e) for e in audit.query(principal)]
