from task_manager.models.label import Label
from task_manager.models.task import Task
from task_manager.models.task_status import TaskStatus
from task_manager.models.user import User

__all__ = ["User", "TaskStatus", "Label", "Task"]
