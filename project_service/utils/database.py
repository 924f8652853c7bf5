"""
Database utilities for project service
"""

from typing import Any, Dict, List, Optional

import structlog

from shared.schemas.project import ProjectSchema
from shared.utils.database import BaseDatabase

logger = structlog.get_logger(__name__)

# Columns a partial update may touch
UPDATABLE_COLUMNS = ("title", "description", "assigned_users")


class ProjectDatabase(BaseDatabase):
    """Project store"""

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS projects (
        id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
        title TEXT NOT NULL,
        description TEXT,
        created_by TEXT NOT NULL,
        assigned_users TEXT[] NOT NULL DEFAULT '{}',
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    );
    CREATE INDEX IF NOT EXISTS idx_projects_created_by ON projects (created_by);
    CREATE INDEX IF NOT EXISTS idx_projects_assigned_users ON projects USING GIN (assigned_users);
    """

    async def create_project(
        self,
        title: str,
        description: Optional[str],
        created_by: str,
        assigned_users: List[str]
    ) -> ProjectSchema:
        async with self.acquire() as conn:
            row = await conn.fetchrow("""
                INSERT INTO projects (title, description, created_by, assigned_users)
                VALUES ($1, $2, $3, $4)
                RETURNING *
            """, title, description, created_by, assigned_users)

        logger.info("Project created", project_id=row['id'], created_by=created_by)
        return ProjectSchema(**dict(row))

    async def get_project(self, project_id: str) -> Optional[ProjectSchema]:
        async with self.acquire() as conn:
            row = await conn.fetchrow("SELECT * FROM projects WHERE id = $1", project_id)
        return ProjectSchema(**dict(row)) if row else None

    async def get_projects_created_by(self, user_id: str) -> List[ProjectSchema]:
        async with self.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM projects WHERE created_by = $1 ORDER BY created_at DESC",
                user_id
            )
        return [ProjectSchema(**dict(row)) for row in rows]

    async def get_projects_assigned_to(self, user_id: str) -> List[ProjectSchema]:
        async with self.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM projects WHERE $1 = ANY(assigned_users) ORDER BY created_at DESC",
                user_id
            )
        return [ProjectSchema(**dict(row)) for row in rows]

    async def update_project(self, project_id: str, updates: Dict[str, Any]) -> Optional[ProjectSchema]:
        """
        Apply a partial update in a single statement

        Args:
            project_id: Project ID
            updates: Column -> value, only UPDATABLE_COLUMNS are applied

        Returns:
            The updated project, or None if it does not exist
        """
        set_clauses = []
        values = []
        for column in UPDATABLE_COLUMNS:
            if column in updates:
                values.append(updates[column])
                set_clauses.append(f"{column} = ${len(values)}")

        if not set_clauses:
            return await self.get_project(project_id)

        set_clauses.append("updated_at = NOW()")
        values.append(project_id)

        query = f"""
            UPDATE projects
            SET {', '.join(set_clauses)}
            WHERE id = ${len(values)}
            RETURNING *
        """

        async with self.acquire() as conn:
            row = await conn.fetchrow(query, *values)

        if row:
            logger.info("Project updated", project_id=project_id, fields=list(updates))
        return ProjectSchema(**dict(row)) if row else None
