import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.audit.sink import AuditSink, get_audit_sink
from app.auth.claims import Principal
from app.db import get_db
from app.rbac.deps import require_route
from app.schemas.tasks import TaskCreateIn, TaskOut, TaskUpdateIn
from app.services.tasks import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

def get_task_service(
    db: Session = Depends(get_db),
    audit: AuditSink = Depends(get_audit_sink),
) -> TaskService:
    return TaskService(db, audit)

@router.post("", response_model=TaskOut)
def create_task(
    payload: TaskCreateIn,
    principal: Principal = Depends(require_route("tasks:create")),
    svc: TaskService = Depends(get_task_service),
) -> TaskOut:
    t = svc.create(principal, payload)
    return TaskOut.model_validate(t)

@router.get("", response_model=list[TaskOut])
def list_tasks(
    principal: Principal = Depends(require_route("tasks:read")),
    svc: TaskService = Depends(get_task_service),
) -> list[TaskOut]:
    return [TaskOut.model_validate(t) for t in svc.list_visible(principal)]

@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: uuid.UUID,
    payload: TaskUpdateIn,
    principal: Principal = Depends(require_route("tasks:update")),
    svc: TaskService = Depends(get_task_service),
) -> TaskOut:
    t = svc.update(principal, task_id, payload)
    return TaskOut.model_validate(t)

@router.delete("/{task_id}")
def delete_task(
    task_id: uuid.UUID,
    principal: Principal = Depends(require_route("tasks:delete")),
    svc: TaskService = Depends(get_task_service),
) -> dict:
    svc.delete(principal, task_id)
    return {"deleted": True}
