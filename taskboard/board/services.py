from __future__ import annotations

from typing import List, Optional

from loguru import logger

from taskboard.board.enums import TaskStatus, UserRole
from taskboard.board.models import Column, Department, Task, User, initial_columns
from taskboard.board.schemas import TaskFields
from taskboard.ids import IdGenerator
from taskboard.utils import NotFound


class DepartmentRegistry:
    """Departments held in process memory; gone after a restart."""

    def __init__(self, id_generator: IdGenerator):
        self.id_generator = id_generator
        self.departments: List[Department] = []

    def create_department(
        self,
        name: str,
        description: str = "",
        creator_id: Optional[str] = None,
    ) -> Department:
        """Create a department managed by its creator."""
        department = Department(
            id=self.id_generator(),
            name=name,
            description=description,
            manager_id=creator_id,
        )
        self.departments.append(department)
        logger.info("department {} ({}) created by {}", department.id, name, creator_id)
        return department

    def get_department(self, department_id: str) -> Department:
        for department in self.departments:
            if department.id == department_id:
                return department
        raise NotFound(f"Department {department_id} not found")

    def has_department(self, department_id: Optional[str]) -> bool:
        return any(d.id == department_id for d in self.departments)

    def list_departments(self) -> List[Department]:
        return list(self.departments)

    def list_visible_departments(self, user: Optional[User]) -> List[Department]:
        """
        List departments. Admins see all departments,
        everyone else only the ones they belong to.
        """
        if user is None:
            return []
        if user.role == UserRole.ADMIN:
            return list(self.departments)
        return [d for d in self.departments if d.id in user.department_ids]


class TaskBoard:
    """
    Tasks partitioned into the four status columns.

    A task's ``status`` always equals the id of the column holding it;
    ``move_task`` is the only way a task changes.
    """

    def __init__(self, id_generator: IdGenerator):
        self.id_generator = id_generator
        self.columns: List[Column] = initial_columns()

    def column(self, status: TaskStatus) -> Column:
        for column in self.columns:
            if column.id == status:
                return column
        raise NotFound(f"Column {status} not found")

    def all_tasks(self) -> List[Task]:
        return [task for column in self.columns for task in column.tasks]

    def find_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.all_tasks() if t.id == task_id), None)

    def create_task(
        self,
        fields: TaskFields,
        creator_id: Optional[str],
        department_id: Optional[str],
        target_status: TaskStatus,
    ) -> Optional[Task]:
        """
        Append a new task to the ``target_status`` column.

        Without a creator or a selected department nothing happens and
        None is returned.
        """
        if not creator_id or not department_id:
            logger.debug("task creation skipped: no user or no department selected")
            return None

        task = Task(
            id=self.id_generator(),
            title=fields.title,
            description=fields.description,
            priority=fields.priority,
            status=target_status,
            department_id=department_id,
            created_by=creator_id,
        )
        self.column(target_status).tasks.append(task)
        logger.info("task {} created in {}/{}", task.id, department_id, target_status.value)
        return task

    def move_task(self, task_id: str, target_status: TaskStatus) -> Optional[Task]:
        """Move a task to the end of another column. Unknown ids are ignored."""
        task = self.find_task(task_id)
        if task is None:
            logger.debug("move of unknown task {} ignored", task_id)
            return None

        for column in self.columns:
            column.tasks = [t for t in column.tasks if t.id != task_id]
        moved = task.model_copy(update={"status": target_status})
        self.column(target_status).tasks.append(moved)
        logger.info("task {} moved {} -> {}", task_id, task.status.value, target_status.value)
        return moved

    def tasks_visible_in_department(self, department_id: str) -> List[Task]:
        return [t for t in self.all_tasks() if t.department_id == department_id]

    def columns_for_department(self, department_id: str) -> List[Column]:
        """The board as shown for one department."""
        return [
            Column(
                id=column.id,
                title=column.title,
                tasks=[t for t in column.tasks if t.department_id == department_id],
            )
            for column in self.columns
        ]
