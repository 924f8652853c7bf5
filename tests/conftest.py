"""
Pytest fixtures for project tracker tests

The stores are replaced by in-memory fakes exposing the same coroutines as
the asyncpg backed classes.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from shared.schemas.project import ProjectSchema
from shared.schemas.task import TaskCreateSchema, TaskSchema, TaskStatus
from shared.schemas.user import UserRecord, UserRole
from shared.utils.security import SecurityUtils

from auth_service.services.auth_service import AuthService
from auth_service.utils.database import DuplicateEmailError
from project_service.services.project_service import ProjectService
from task_service.services.task_service import TaskService

TEST_JWT_SECRET = "test-secret-key-with-enough-length-for-hs256"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class FakeUserDatabase:
    """In-memory user store"""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}

    async def create_user(self, name: str, email: str, password_hash: str, role: UserRole) -> str:
        if any(user.email == email for user in self.users.values()):
            raise DuplicateEmailError(email)
        user_id = uuid.uuid4().hex
        self.users[user_id] = UserRecord(
            id=user_id, name=name, email=email, password_hash=password_hash, role=role,
            created_at=_now(), updated_at=_now()
        )
        return user_id

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    async def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self.users.get(user_id)

    async def get_users_by_role(self, role: UserRole) -> List[UserRecord]:
        return [user for user in self.users.values() if user.role == role]


class FakeProjectDatabase:
    """In-memory project store"""

    def __init__(self):
        self.projects: Dict[str, ProjectSchema] = {}

    async def create_project(self, title, description, created_by, assigned_users) -> ProjectSchema:
        project = ProjectSchema(
            id=uuid.uuid4().hex, title=title, description=description, created_by=created_by,
            assigned_users=list(assigned_users), created_at=_now(), updated_at=_now()
        )
        self.projects[project.id] = project
        return project

    async def get_project(self, project_id: str) -> Optional[ProjectSchema]:
        return self.projects.get(project_id)

    async def get_projects_created_by(self, user_id: str) -> List[ProjectSchema]:
        return [p for p in self.projects.values() if p.created_by == user_id]

    async def get_projects_assigned_to(self, user_id: str) -> List[ProjectSchema]:
        return [p for p in self.projects.values() if user_id in p.assigned_users]

    async def update_project(self, project_id: str, updates: Dict[str, Any]) -> Optional[ProjectSchema]:
        project = self.projects.get(project_id)
        if project is None:
            return None
        updated = project.model_copy(update={**updates, "updated_at": _now()})
        self.projects[project_id] = updated
        return updated


class FakeTaskDatabase:
    """In-memory task store"""

    def __init__(self):
        self.tasks: Dict[str, TaskSchema] = {}

    async def create_task(self, dto: TaskCreateSchema, status: TaskStatus = TaskStatus.TODO) -> TaskSchema:
        task = TaskSchema(
            id=uuid.uuid4().hex, title=dto.title, description=dto.description, status=status,
            due_date=dto.due_date, project_id=dto.project_id, assigned_to=dto.assigned_to,
            created_at=_now(), updated_at=_now()
        )
        self.tasks[task.id] = task
        return task

    async def get_tasks_by_project(self, project_id: str) -> List[TaskSchema]:
        return [t for t in self.tasks.values() if t.project_id == project_id]

    async def update_task_status(self, task_id: str, status: TaskStatus) -> Optional[TaskSchema]:
        task = self.tasks.get(task_id)
        if task is None:
            return None
        updated = task.model_copy(update={"status": status, "updated_at": _now()})
        self.tasks[task_id] = updated
        return updated


@pytest.fixture
def security() -> SecurityUtils:
    return SecurityUtils(TEST_JWT_SECRET)


@pytest.fixture
def user_db() -> FakeUserDatabase:
    return FakeUserDatabase()


@pytest.fixture
def auth_service(user_db, security) -> AuthService:
    return AuthService(user_db, security)


@pytest.fixture
def project_db() -> FakeProjectDatabase:
    return FakeProjectDatabase()


@pytest.fixture
def project_service(project_db) -> ProjectService:
    return ProjectService(project_db)


@pytest.fixture
def task_db() -> FakeTaskDatabase:
    return FakeTaskDatabase()


@pytest.fixture
def mock_project_client() -> MagicMock:
    """Project client whose lookups find nothing unless configured"""
    client = MagicMock()
    client.get_project_by_id = AsyncMock(return_value=None)
    return client


@pytest.fixture
def task_service(task_db, mock_project_client) -> TaskService:
    return TaskService(task_db, mock_project_client)


@pytest.fixture
def sample_project() -> ProjectSchema:
    return ProjectSchema(
        id="project-1",
        title="Website",
        description="Relaunch",
        created_by="admin-1",
        assigned_users=["admin-1", "user-1"],
    )


@pytest.fixture
def sample_task_data() -> Dict[str, Any]:
    """Task creation body as a client sends it"""
    return {
        "title": "Write copy",
        "description": "Landing page text",
        "dueDate": "2025-01-31T00:00:00Z",
        "projectId": "project-1",
        "assignedTo": "user-1",
    }
