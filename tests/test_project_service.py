"""
Project service tests
"""

import pytest

from shared.schemas.project import ProjectCreateSchema, ProjectUpdateSchema
from shared.utils.rpc import RpcFault

from project_service.services.project_service import ensure_member


class TestEnsureMember:
    def test_creator_added_first(self):
        assert ensure_member("a", ["b", "c"]) == ["a", "b", "c"]

    def test_duplicates_collapsed(self):
        assert ensure_member("a", ["b", "a", "b"]) == ["b", "a"]

    def test_empty(self):
        assert ensure_member("a", None) == ["a"]


class TestProjectService:
    @pytest.mark.asyncio
    async def test_create_puts_creator_first(self, project_service):
        project = await project_service.create(
            ProjectCreateSchema(title="Website", assignedUsers=["user-1", "user-2"]),
            "admin-1"
        )

        assert project.created_by == "admin-1"
        assert project.assigned_users == ["admin-1", "user-1", "user-2"]

    @pytest.mark.asyncio
    async def test_create_without_members(self, project_service):
        project = await project_service.create(ProjectCreateSchema(title="Solo"), "admin-1")
        assert project.assigned_users == ["admin-1"]

    @pytest.mark.asyncio
    async def test_create_dedupes_creator(self, project_service):
        project = await project_service.create(
            ProjectCreateSchema(title="Website", assignedUsers=["admin-1", "user-1"]),
            "admin-1"
        )
        assert project.assigned_users == ["admin-1", "user-1"]

    def test_blank_title_rejected(self):
        with pytest.raises(ValueError):
            ProjectCreateSchema(title="   ")

    @pytest.mark.asyncio
    async def test_listings(self, project_service):
        own = await project_service.create(ProjectCreateSchema(title="Own", assignedUsers=["user-1"]), "admin-1")
        other = await project_service.create(ProjectCreateSchema(title="Other", assignedUsers=["admin-1"]), "admin-2")

        assert [p.id for p in await project_service.list_created_by("admin-1")] == [own.id]
        assert [p.id for p in await project_service.list_created_by("admin-2")] == [other.id]
        assert sorted(p.id for p in await project_service.list_assigned_to("admin-1")) == sorted([own.id, other.id])
        assert [p.id for p in await project_service.list_assigned_to("user-1")] == [own.id]
        assert await project_service.list_assigned_to("nobody") == []

    @pytest.mark.asyncio
    async def test_get_by_id_missing_returns_none(self, project_service):
        assert await project_service.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_update_reinserts_creator(self, project_service):
        project = await project_service.create(
            ProjectCreateSchema(title="Website", assignedUsers=["user-1"]),
            "admin-1"
        )

        updated = await project_service.update(
            project.id,
            ProjectUpdateSchema(assignedUsers=["user-2"]),
            "admin-1"
        )
        assert updated.assigned_users == ["admin-1", "user-2"]

    @pytest.mark.asyncio
    async def test_update_with_empty_members_keeps_creator(self, project_service):
        project = await project_service.create(
            ProjectCreateSchema(title="Website", assignedUsers=["user-1"]),
            "admin-1"
        )

        updated = await project_service.update(project.id, ProjectUpdateSchema(assignedUsers=[]))
        assert updated.assigned_users == ["admin-1"]

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, project_service):
        project = await project_service.create(
            ProjectCreateSchema(title="Website", description="Relaunch", assignedUsers=["user-1"]),
            "admin-1"
        )

        updated = await project_service.update(project.id, ProjectUpdateSchema(title="Webshop"))
        assert updated.title == "Webshop"
        assert updated.description == "Relaunch"
        assert updated.assigned_users == ["admin-1", "user-1"]

    @pytest.mark.asyncio
    async def test_update_missing_project(self, project_service):
        with pytest.raises(RpcFault) as exc_info:
            await project_service.update("missing", ProjectUpdateSchema(title="X"))
        assert exc_info.value.status == 404
        assert exc_info.value.message == "Project not found"

    def test_wire_shape(self, sample_project):
        wire = sample_project.to_wire()
        assert wire["_id"] == "project-1"
        assert wire["createdBy"] == "admin-1"
        assert wire["assignedUsers"] == ["admin-1", "user-1"]
