"""
Task Routes
"""

from fastapi import APIRouter, status
import structlog

from shared.schemas.task import TaskCreateSchema, TaskStatusUpdateSchema

from gateway.utils.dependencies import AuthenticatedUser, TaskClientDep

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/tasks", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_task(
    dto: TaskCreateSchema,
    current_user: AuthenticatedUser,
    task_client: TaskClientDep
):
    """Create a task, 404 when its project does not exist"""
    task = await task_client.create_task(dto)
    logger.info("Task created", task_id=task.id, project_id=task.project_id, user_id=current_user.user_id)
    return task.to_wire()


@router.get("/projects/{project_id}/tasks", response_model=list)
async def list_project_tasks(
    project_id: str,
    current_user: AuthenticatedUser,
    task_client: TaskClientDep
):
    tasks = await task_client.get_tasks_by_project(project_id)
    return [task.to_wire() for task in tasks]


@router.patch("/tasks/{task_id}/status", response_model=dict)
async def update_task_status(
    task_id: str,
    body: TaskStatusUpdateSchema,
    current_user: AuthenticatedUser,
    task_client: TaskClientDep
):
    task = await task_client.update_task_status(task_id, body.status)
    logger.info("Task status changed", task_id=task_id, status=task.status.value, user_id=current_user.user_id)
    return task.to_wire()
