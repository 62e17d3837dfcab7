from .employee import Employee, EmployeeRole, Category
from .client import Client
from .project import Project, ProjectStatus, ProjectPriority
from .task import Task, TaskAssignment, TaskStatus
from .notification import Notification
from .attendance import ClockRecord

__all__ = [
    "Employee", "EmployeeRole", "Category",
    "Client",
    "Project", "ProjectStatus", "ProjectPriority",
    "Task", "TaskAssignment", "TaskStatus",
    "Notification",
    "ClockRecord",
]
