"""
Project service RPC endpoint
"""

from typing import Any, Dict

from fastapi import Request

from shared.schemas.project import (
    CreateProjectPayload, ProjectCommand, ProjectIdPayload, ProjectOwnerPayload,
    UpdateProjectPayload,
)
from shared.utils.rpc import RpcFault, create_rpc_router

from project_service.services.project_service import ProjectService


def get_project_service(request: Request) -> ProjectService:
    """Dependency to get the service instance built at startup"""
    return request.app.state.project_service


async def dispatch(command: ProjectCommand, payload: Dict[str, Any], service: ProjectService) -> Any:
    """Route one command to its handler"""
    if command is ProjectCommand.CREATE_PROJECT:
        data = CreateProjectPayload.model_validate(payload)
        return await service.create(data.dto, data.user_id)
    elif command is ProjectCommand.GET_ALL_PROJECTS:
        return await service.list_created_by(ProjectOwnerPayload.model_validate(payload).user_id)
    elif command is ProjectCommand.GET_MY_PROJECTS:
        return await service.list_assigned_to(ProjectOwnerPayload.model_validate(payload).user_id)
    elif command is ProjectCommand.GET_PROJECT_BY_ID:
        return await service.get_by_id(ProjectIdPayload.model_validate(payload).id)
    elif command is ProjectCommand.UPDATE_PROJECT:
        data = UpdateProjectPayload.model_validate(payload)
        return await service.update(data.id, data.dto, data.user_id)
    raise RpcFault(400, f"Unsupported command: {command.value}")


router = create_rpc_router(ProjectCommand, dispatch, get_project_service)
