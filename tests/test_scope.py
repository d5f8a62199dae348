import uuid
from datetime import datetime, timedelta, timezone

import pytest

from app.audit.sink import AuditSink
from app.auth.claims import Principal
from app.models.enums import Role
from app.models.task import Task
from app.services.scope import visible_tasks

ORG_A = uuid.uuid4()
ORG_B = uuid.uuid4()
ME = uuid.uuid4()
SOMEONE = uuid.uuid4()
BASE = datetime(2026, 1, 1, tzinfo=timezone.utc)

def _task(title: str, org_id: uuid.UUID, minutes: int, created_by=None, assigned_to=None) -> Task:
    return Task(
        id=uuid.uuid4(),
        title=title,
        org_id=org_id,
        created_by=created_by,
        assigned_to=assigned_to,
        created_at=BASE + timedelta(minutes=minutes),
    )

@pytest.fixture()
def tasks() -> list[Task]:
    return [
        _task("mine", ORG_A, 1, created_by=ME),
        _task("assigned", ORG_A, 2, created_by=SOMEONE, assigned_to=ME),
        _task("theirs", ORG_A, 3, created_by=SOMEONE, assigned_to=SOMEONE),
        _task("unowned", ORG_A, 4),
        _task("other org, mine", ORG_B, 5, created_by=ME, assigned_to=ME),
    ]

def _p(role: Role | None, org_id: uuid.UUID | None = ORG_A) -> Principal:
    return Principal(user_id=ME, email="me@example.com", role=role, org_id=org_id)

@pytest.mark.parametrize("role", [Role.owner, Role.admin])
def test_org_wide_roles_see_whole_org_newest_first(role, tasks):
    audit = AuditSink()
    result = visible_tasks(_p(role), tasks, audit)
    assert [t.title for t in result] == ["unowned", "theirs", "assigned", "mine"]

def test_viewer_sees_only_created_or_assigned(tasks):
    audit = AuditSink()
    result = visible_tasks(_p(Role.viewer), tasks, audit)
    assert [t.title for t in result] == ["assigned", "mine"]

@pytest.mark.parametrize("role", [*Role, None])
def test_unaffiliated_principal_sees_nothing(role, tasks):
    assert visible_tasks(_p(role, org_id=None), tasks, AuditSink()) == []

def test_org_boundary_applies_before_viewer_narrowing(tasks):
    # created and assigned to me, but in another org
    result = visible_tasks(_p(Role.viewer, org_id=ORG_B), tasks, AuditSink())
    assert [t.title for t in result] == ["other org, mine"]

def test_every_call_records_count_and_scope(tasks):
    audit = AuditSink()
    visible_tasks(_p(Role.admin), tasks, audit)
    visible_tasks(_p(Role.viewer), tasks, audit)
    visible_tasks(_p(Role.viewer, org_id=None), tasks, audit)

    assert len(audit) == 3
    entries = audit.query(_p(Role.admin))
    assert [e.action for e in entries] == ["TASK_LIST_VIEW"] * 2
    assert entries[0].metadata == {"count": 4, "scope": "org"}
    assert entries[1].metadata == {"count": 2, "scope": "viewer-limited"}
