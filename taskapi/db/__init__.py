from .connection import Database
from .tasks import TaskRepository

__all__ = ["Database", "TaskRepository"]
