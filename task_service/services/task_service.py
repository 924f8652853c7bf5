"""
Task Service
Task lifecycle; a task is only written once its project is confirmed to exist
"""

from typing import List

import structlog

from shared.clients.project_client import ProjectClient
from shared.schemas.task import TaskCreateSchema, TaskSchema, TaskStatus
from shared.utils.rpc import RpcFault

from task_service.utils.database import TaskDatabase

logger = structlog.get_logger(__name__)

PROJECT_NOT_FOUND_MESSAGE = "Project not found"
TASK_NOT_FOUND_MESSAGE = "Task not found"


class TaskService:
    """Task CRUD with a synchronous project existence check"""

    def __init__(self, db: TaskDatabase, project_client: ProjectClient):
        self.db = db
        self.project_client = project_client

    async def create(self, dto: TaskCreateSchema) -> TaskSchema:
        """
        Create a task in TO_DO state

        Asks the project service for ``dto.project_id`` first and writes
        nothing when it is absent. ``assigned_to`` is not checked.

        Raises:
            RpcFault: 404 when the project does not exist, or the project
                service fault when the lookup itself fails
        """
        project = await self.project_client.get_project_by_id(dto.project_id)
        if project is None:
            logger.info("Task rejected, project missing", project_id=dto.project_id)
            raise RpcFault(404, PROJECT_NOT_FOUND_MESSAGE)

        return await self.db.create_task(dto, TaskStatus.TODO)

    async def list_by_project(self, project_id: str) -> List[TaskSchema]:
        """Every task of the project, regardless of who asks"""
        return await self.db.get_tasks_by_project(project_id)

    async def update_status(self, task_id: str, status: TaskStatus) -> TaskSchema:
        """Any status may replace any other"""
        task = await self.db.update_task_status(task_id, status)
        if task is None:
            raise RpcFault(404, TASK_NOT_FOUND_MESSAGE)

        logger.info("Task status updated", task_id=task_id, status=status.value)
        return task
