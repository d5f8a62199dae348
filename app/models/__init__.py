from app.models.base import Base
from app.models.org import Org
from app.models.task import Task
from app.models.user import User

__all__ = ["Base", "User", "Org", "Task"]
