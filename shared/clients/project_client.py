"""
Project Service RPC Client

Used by the gateway and by the task service to check that a project exists
before a task is written.
"""

from typing import List, Optional

from shared.schemas.project import (
    CreateProjectPayload, ProjectCommand, ProjectCreateSchema, ProjectIdPayload,
    ProjectOwnerPayload, ProjectSchema, ProjectUpdateSchema, UpdateProjectPayload,
)
from shared.utils.rpc import RpcServiceClient


class ProjectClient(RpcServiceClient):
    """Client for the project service commands"""

    service_name = "project-service"

    async def create_project(self, dto: ProjectCreateSchema, user_id: str) -> ProjectSchema:
        result = await self.send(
            ProjectCommand.CREATE_PROJECT,
            CreateProjectPayload(dto=dto, user_id=user_id)
        )
        return ProjectSchema.model_validate(result)

    async def get_all_projects(self, user_id: str) -> List[ProjectSchema]:
        """Projects created by the given user"""
        result = await self.send(ProjectCommand.GET_ALL_PROJECTS, ProjectOwnerPayload(user_id=user_id))
        return [ProjectSchema.model_validate(project) for project in result or []]

    async def get_my_projects(self, user_id: str) -> List[ProjectSchema]:
        """Projects the given user is assigned to"""
        result = await self.send(ProjectCommand.GET_MY_PROJECTS, ProjectOwnerPayload(user_id=user_id))
        return [ProjectSchema.model_validate(project) for project in result or []]

    async def get_project_by_id(self, project_id: str) -> Optional[ProjectSchema]:
        result = await self.send(ProjectCommand.GET_PROJECT_BY_ID, ProjectIdPayload(id=project_id))
        if result is None:
            return None
        return ProjectSchema.model_validate(result)

    async def update_project(
        self,
        project_id: str,
        dto: ProjectUpdateSchema,
        user_id: Optional[str] = None
    ) -> ProjectSchema:
        result = await self.send(
            ProjectCommand.UPDATE_PROJECT,
            UpdateProjectPayload(id=project_id, dto=dto, user_id=user_id)
        )
        return ProjectSchema.model_validate(result)
