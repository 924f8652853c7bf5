"""
Database utilities for task service
"""

from typing import List, Optional

import structlog

from shared.schemas.task import TaskCreateSchema, TaskSchema, TaskStatus
from shared.utils.database import BaseDatabase

logger = structlog.get_logger(__name__)


class TaskDatabase(BaseDatabase):
    """Task store"""

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS tasks (
        id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
        title TEXT NOT NULL,
        description TEXT,
        status TEXT NOT NULL DEFAULT 'TO_DO',
        due_date TIMESTAMPTZ NOT NULL,
        project_id TEXT NOT NULL,
        assigned_to TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    );
    CREATE INDEX IF NOT EXISTS idx_tasks_project_id ON tasks (project_id);
    """

    async def create_task(self, dto: TaskCreateSchema, status: TaskStatus = TaskStatus.TODO) -> TaskSchema:
        async with self.acquire() as conn:
            row = await conn.fetchrow("""
                INSERT INTO tasks (title, description, status, due_date, project_id, assigned_to)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING *
            """,
                dto.title,
                dto.description,
                status.value,
                dto.due_date,
                dto.project_id,
                dto.assigned_to
            )

        logger.info("Task created", task_id=row['id'], project_id=dto.project_id)
        return TaskSchema(**dict(row))

    async def get_tasks_by_project(self, project_id: str) -> List[TaskSchema]:
        async with self.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM tasks WHERE project_id = $1 ORDER BY created_at",
                project_id
            )
        return [TaskSchema(**dict(row)) for row in rows]

    async def update_task_status(self, task_id: str, status: TaskStatus) -> Optional[TaskSchema]:
        """Replace the status, None if the task does not exist"""
        async with self.acquire() as conn:
            row = await conn.fetchrow("""
                UPDATE tasks
                SET status = $1, updated_at = NOW()
                WHERE id = $2
                RETURNING *
            """, status.value, task_id)
        return TaskSchema(**dict(row)) if row else None
