from enum import Enum

class Role(str, Enum):
    owner = "owner"
    admin = "admin"
    viewer = "viewer"

class Permission(str, Enum):
    view_tasks = "view_tasks"
    manage_tasks = "manage_tasks"
    manage_users = "manage_users"
    view_audit_log = "view_audit_log"

class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in_progress"
    done = "done"

class TaskCategory(str, Enum):
    work = "work"
    personal = "personal"
    other = "other"
