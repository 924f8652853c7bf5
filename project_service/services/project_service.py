"""
Project Service
Project lifecycle and the creator membership invariant
"""

from typing import Iterable, List, Optional

import structlog

from shared.schemas.project import ProjectCreateSchema, ProjectSchema, ProjectUpdateSchema
from shared.utils.rpc import RpcFault

from project_service.utils.database import ProjectDatabase

logger = structlog.get_logger(__name__)

PROJECT_NOT_FOUND_MESSAGE = "Project not found"


def ensure_member(creator_id: str, user_ids: Optional[Iterable[str]]) -> List[str]:
    """
    Deduplicate ``user_ids`` keeping first occurrences, with the creator
    placed first when it is missing.
    """
    members: List[str] = []
    for user_id in user_ids or []:
        if user_id not in members:
            members.append(user_id)
    if creator_id not in members:
        members.insert(0, creator_id)
    return members


class ProjectService:
    """Project CRUD on top of the project store"""

    def __init__(self, db: ProjectDatabase):
        self.db = db

    async def create(self, dto: ProjectCreateSchema, creator_id: str) -> ProjectSchema:
        """
        Create a project owned by ``creator_id``

        The creator always heads the assigned users. Assigned ids are not
        checked against the identity store.
        """
        assigned_users = ensure_member(creator_id, [creator_id] + list(dto.assigned_users or []))
        return await self.db.create_project(
            title=dto.title,
            description=dto.description,
            created_by=creator_id,
            assigned_users=assigned_users
        )

    async def list_created_by(self, user_id: str) -> List[ProjectSchema]:
        """Projects the user created (admin view, self-scoped)"""
        return await self.db.get_projects_created_by(user_id)

    async def list_assigned_to(self, user_id: str) -> List[ProjectSchema]:
        """Projects the user is assigned to"""
        return await self.db.get_projects_assigned_to(user_id)

    async def get_by_id(self, project_id: str) -> Optional[ProjectSchema]:
        return await self.db.get_project(project_id)

    async def update(
        self,
        project_id: str,
        dto: ProjectUpdateSchema,
        caller_id: Optional[str] = None
    ) -> ProjectSchema:
        """
        Partial update, only fields present in ``dto`` are written

        When ``assigned_users`` is present the stored creator is put back if the
        caller left it out. Read then write, no locking: concurrent updates of
        the same project are last-writer-wins.

        Raises:
            RpcFault: 404 if the project does not exist
        """
        updates = dto.model_dump(exclude_unset=True)
        if updates.get("title") is None:
            updates.pop("title", None)
        if "assigned_users" in updates and updates["assigned_users"] is None:
            updates.pop("assigned_users")

        existing = await self.db.get_project(project_id)
        if not existing:
            raise RpcFault(404, PROJECT_NOT_FOUND_MESSAGE)

        if "assigned_users" in updates:
            updates["assigned_users"] = ensure_member(existing.created_by, updates["assigned_users"])

        updated = await self.db.update_project(project_id, updates)
        if not updated:
            raise RpcFault(404, PROJECT_NOT_FOUND_MESSAGE)

        logger.info("Project update applied", project_id=project_id, caller_id=caller_id)
        return updated
