import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.audit.sink import AuditSink
from app.auth.claims import Principal
from app.errors import Forbidden, InvalidState, NotFound
from app.models.org import Org
from app.models.task import Task
from app.models.user import User
from app.schemas.tasks import TaskCreateIn, TaskUpdateIn
from app.services.scope import visible_tasks

# fields a patch may touch besides the assignee
_PATCHABLE = ("title", "description", "status", "category")

def find_user_in_org(db: Session, user_id: uuid.UUID, org_id: uuid.UUID) -> User | None:
    return db.scalar(select(User).where(User.id == user_id, User.org_id == org_id))

class TaskService:
    """Task reads and writes on behalf of a principal.

    Route guards have already checked the permission each operation needs.
    The viewer checks below repeat that on purpose so a mis-declared route
    still cannot let a viewer write.
    """

    def __init__(self, db: Session, audit: AuditSink):
        self.db = db
        self.audit = audit

    def create(self, principal: Principal, payload: TaskCreateIn) -> Task:
        if principal.org_id is None:
            raise InvalidState("user must belong to an organization to create tasks")

        if principal.is_viewer:
            raise Forbidden("viewer cannot create tasks")

        org = self.db.get(Org, principal.org_id)
        if org is None:
            raise InvalidState("organization not found")

        creator = self.db.get(User, principal.user_id)
        if creator is None:
            raise InvalidState("user not found")

        assignee_id = None
        if payload.assigned_to is not None:
            assignee_id = self._resolve_assignee(principal, payload.assigned_to)

        t = Task(
            org_id=org.id,
            title=payload.title,
            description=payload.description if payload.description is not None else "",
            status=payload.status,
            category=payload.category,
            created_by=creator.id,
            assigned_to=assignee_id,
        )
        self.db.add(t)
        self.db.commit()

        self.audit.append(
            principal,
            "TASK_CREATED",
            {"task_id": str(t.id), "title": t.title, "org_id": str(org.id)},
        )
        return self.fetch_owned(principal, t.id)

    def list_visible(self, principal: Principal) -> list[Task]:
        if principal.org_id is None:
            return visible_tasks(principal, [], self.audit)

        q = (
            select(Task)
            .where(Task.org_id == principal.org_id)
            .order_by(Task.created_at.desc())
        )
        rows = self.db.scalars(q).all()
        return visible_tasks(principal, rows, self.audit)

    def fetch_owned(self, principal: Principal, task_id: uuid.UUID) -> Task:
        # not found is reported before the org check, for every role
        t = self.db.get(Task, task_id)
        if t is None:
            raise NotFound("task not found")

        if t.org_id != principal.org_id:
            raise Forbidden("cannot access tasks from another organization")

        self.db.refresh(t)
        return t

    def update(self, principal: Principal, task_id: uuid.UUID, payload: TaskUpdateIn) -> Task:
        if principal.is_viewer:
            raise Forbidden("viewer cannot update tasks")

        t = self.fetch_owned(principal, task_id)
        fields = payload.model_fields_set

        # validate before touching the row so a bad assignee leaves it as is
        assignee_id = None
        if "assigned_to" in fields and payload.assigned_to is not None:
            assignee_id = self._resolve_assignee(principal, payload.assigned_to)

        for name in _PATCHABLE:
            if name not in fields:
                continue
            value = getattr(payload, name)
            if value is None and name != "description":
                continue
            setattr(t, name, value)

        if "assigned_to" in fields:
            t.assigned_to = assignee_id

        self.db.add(t)
        self.db.commit()

        self.audit.append(
            principal,
            "TASK_UPDATED",
            {"task_id": str(t.id), "status": t.status.value, "category": t.category.value},
        )
        return self.fetch_owned(principal, t.id)

    def delete(self, principal: Principal, task_id: uuid.UUID) -> None:
        if principal.is_viewer:
            raise Forbidden("viewer cannot delete tasks")

        t = self.fetch_owned(principal, task_id)
        deleted_id, deleted_title = str(t.id), t.title

        self.db.delete(t)
        self.db.commit()

        self.audit.append(principal, "TASK_DELETED", {"task_id": deleted_id, "title": deleted_title})

    def _resolve_assignee(self, principal: Principal, user_id: uuid.UUID) -> uuid.UUID:
        assignee = find_user_in_org(self.db, user_id, principal.org_id)
        if assignee is None:
            raise InvalidState("assigned user not found in your organization")
        return assignee.id
