import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.passwords import hash_password
from app.db import SessionLocal, init_db
from app.models.enums import Role, TaskCategory
from app.models.org import Org
from app.models.task import Task
from app.models.user import User

DEMO_PASSWORD = "password123"

@dataclass
class SeedResult:
    owner_email: str
    admin_email: str
    viewer_email: str
    child_viewer_email: str
    root_org_id: uuid.UUID
    child_org_id: uuid.UUID
    task_ids: list[uuid.UUID]

def get_or_create_org(db: Session, name: str, parent_id: uuid.UUID | None = None) -> Org:
    o = db.scalar(select(Org).where(Org.name == name))
    if o is None:
        o = Org(name=name, parent_id=parent_id)
        db.add(o)
        db.flush()
    return o

def get_or_create_user(db: Session, email: str, name: str, role: Role, org_id: uuid.UUID) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        u = User(
            email=email,
            name=name,
            role=role,
            org_id=org_id,
            password_hash=hash_password(DEMO_PASSWORD),
        )
        db.add(u)
        db.flush()
    else:
        if u.role != role or u.org_id != org_id:
            u.role = role
            u.org_id = org_id
            db.add(u)
            db.flush()
    return u

def get_or_create_task(
    db: Session,
    org_id: uuid.UUID,
    title: str,
    category: TaskCategory,
    created_by: uuid.UUID,
    assigned_to: uuid.UUID | None,
) -> Task:
    t = db.scalar(select(Task).where(Task.org_id == org_id, Task.title == title))
    if t is None:
        t = Task(
            org_id=org_id,
            title=title,
            category=category,
            created_by=created_by,
            assigned_to=assigned_to,
        )
        db.add(t)
        db.flush()
    elif t.assigned_to != assigned_to:
        # keep it stable if you re-run seed
        t.assigned_to = assigned_to
        db.add(t)
        db.flush()
    return t

def seed() -> SeedResult:
    init_db()
    db = SessionLocal()
    try:
        root = get_or_create_org(db, "Root Org")
        child = get_or_create_org(db, "Child Org", parent_id=root.id)

        owner = get_or_create_user(db, "owner@example.com", "owner", Role.owner, root.id)
        admin = get_or_create_user(db, "admin@example.com", "admin", Role.admin, root.id)
        viewer = get_or_create_user(db, "viewer@example.com", "viewer", Role.viewer, root.id)
        child_viewer = get_or_create_user(db, "child-viewer@example.com", "child viewer", Role.viewer, child.id)

        tasks = [
            get_or_create_task(db, root.id, "quarterly report", TaskCategory.work, owner.id, viewer.id),
            get_or_create_task(db, root.id, "team offsite", TaskCategory.other, admin.id, None),
            get_or_create_task(db, child.id, "child org backlog", TaskCategory.work, child_viewer.id, None),
        ]

        db.commit()

        return SeedResult(
            owner_email=owner.email,
            admin_email=admin.email,
            viewer_email=viewer.email,
            child_viewer_email=child_viewer.email,
            root_org_id=root.id,
            child_org_id=child.id,
            task_ids=[t.id for t in tasks],
        )
    finally:
        db.close()

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"root_org_id={r.root_org_id}")
    print(f"child_org_id={r.child_org_id}")
    print(f"task_ids={', '.join(str(t) for t in r.task_ids)}")
    print(f"users (password {DEMO_PASSWORD}):")
    print(f"  owner:        {r.owner_email}")
    print(f"  admin:        {r.admin_email}")
    print(f"  viewer:       {r.viewer_email}")
    print(f"  child viewer: {r.child_viewer_email}")
