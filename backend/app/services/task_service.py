"""
Daybook Backend — Task Service
================================

Lists are ordered by due date, earliest first. Tasks without a due date come
before all dated ones, on every backend (PostgreSQL would otherwise put NULLs
last and SQLite first).

On update, `"status": null` keeps the stored status; only a create falls back
to the default "pending".
"""

from app.models.task import Task
from app.services.store import ResourceService
from app.validation import validate_task


class TaskService(ResourceService[Task]):
    model = Task
    resource = "task"
    validator = staticmethod(validate_task)
    keep_on_null = ("status",)

    def ordering(self):
        return (Task.due_date.asc().nulls_first(), Task.id)


task_service = TaskService()
