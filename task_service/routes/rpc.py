"""
Task service RPC endpoint
"""

from typing import Any, Dict

from fastapi import Request

from shared.schemas.task import (
    ProjectTasksPayload, TaskCommand, TaskCreateSchema, UpdateTaskStatusPayload,
)
from shared.utils.rpc import RpcFault, create_rpc_router

from task_service.services.task_service import TaskService


def get_task_service(request: Request) -> TaskService:
    """Dependency to get the service instance built at startup"""
    return request.app.state.task_service


async def dispatch(command: TaskCommand, payload: Dict[str, Any], service: TaskService) -> Any:
    """Route one command to its handler"""
    if command is TaskCommand.CREATE_TASK:
        return await service.create(TaskCreateSchema.model_validate(payload))
    elif command is TaskCommand.GET_TASKS_BY_PROJECT:
        return await service.list_by_project(ProjectTasksPayload.model_validate(payload).project_id)
    elif command is TaskCommand.UPDATE_TASK_STATUS:
        data = UpdateTaskStatusPayload.model_validate(payload)
        return await service.update_status(data.task_id, data.status)
    raise RpcFault(400, f"Unsupported command: {command.value}")


router = create_rpc_router(TaskCommand, dispatch, get_task_service)
