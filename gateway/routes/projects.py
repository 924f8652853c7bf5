"""
Project Routes
Role aware listing and creator injection in front of the project service
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel
import structlog

from shared.schemas.project import ProjectCreateSchema, ProjectUpdateSchema

from gateway.utils.dependencies import AuthenticatedUser, ProjectClientDep

logger = structlog.get_logger(__name__)

router = APIRouter()


class CreateProjectRequest(BaseModel):
    """Request body, the project fields travel under ``dto``"""
    dto: ProjectCreateSchema


@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: CreateProjectRequest,
    current_user: AuthenticatedUser,
    project_client: ProjectClientDep
):
    """
    Create a project

    The creator is always the authenticated caller, whatever the body says.
    """
    project = await project_client.create_project(body.dto, current_user.user_id)
    logger.info("Project created", project_id=project.id, created_by=current_user.user_id)
    return project.to_wire()


@router.get("", response_model=list)
async def list_projects(current_user: AuthenticatedUser, project_client: ProjectClientDep):
    """Admins see the projects they created, everyone else what they are assigned to"""
    if current_user.is_admin:
        projects = await project_client.get_all_projects(current_user.user_id)
    else:
        projects = await project_client.get_my_projects(current_user.user_id)
    return [project.to_wire() for project in projects]


@router.get("/my", response_model=list)
async def list_my_projects(current_user: AuthenticatedUser, project_client: ProjectClientDep):
    projects = await project_client.get_my_projects(current_user.user_id)
    return [project.to_wire() for project in projects]


@router.get("/{project_id}", response_model=dict)
async def get_project(
    project_id: str,
    current_user: AuthenticatedUser,
    project_client: ProjectClientDep
):
    project = await project_client.get_project_by_id(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project.to_wire()


@router.patch("/{project_id}", response_model=dict)
async def update_project(
    project_id: str,
    dto: ProjectUpdateSchema,
    current_user: AuthenticatedUser,
    project_client: ProjectClientDep
):
    """Partial update, fields left out of the body stay untouched"""
    project = await project_client.update_project(project_id, dto, current_user.user_id)
    return project.to_wire()
