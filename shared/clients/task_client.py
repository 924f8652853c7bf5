"""
Task Service RPC Client
"""

from typing import List

from shared.schemas.task import (
    ProjectTasksPayload, TaskCommand, TaskCreateSchema, TaskSchema, TaskStatus,
    UpdateTaskStatusPayload,
)
from shared.utils.rpc import RpcServiceClient


class TaskClient(RpcServiceClient):
    """Client for the task service commands"""

    service_name = "task-service"

    async def create_task(self, dto: TaskCreateSchema) -> TaskSchema:
        result = await self.send(TaskCommand.CREATE_TASK, dto)
        return TaskSchema.model_validate(result)

    async def get_tasks_by_project(self, project_id: str) -> List[TaskSchema]:
        result = await self.send(TaskCommand.GET_TASKS_BY_PROJECT, ProjectTasksPayload(project_id=project_id))
        return [TaskSchema.model_validate(task) for task in result or []]

    async def update_task_status(self, task_id: str, status: TaskStatus) -> TaskSchema:
        result = await self.send(
            TaskCommand.UPDATE_TASK_STATUS,
            UpdateTaskStatusPayload(task_id=task_id, status=status)
        )
        return TaskSchema.model_validate(result)
