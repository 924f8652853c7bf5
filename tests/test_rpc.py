"""
Internal RPC tests, client side against mocked transports and server side
through the real project service router
"""

import json

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from shared.clients import AuthClient, ProjectClient
from shared.schemas.project import ProjectCreateSchema, ProjectUpdateSchema
from shared.schemas.user import UserRole
from shared.utils.rpc import RpcFault, register_rpc_exception_handlers

from auth_service.routes import rpc as auth_rpc
from project_service.routes import rpc as project_rpc


def _client(client_cls, handler):
    return client_cls("http://service.test", transport=httpx.MockTransport(handler))


class TestRpcServiceClient:
    @pytest.mark.asyncio
    async def test_send_posts_envelope_and_returns_result(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"result": {"userId": "u1", "email": "a@b.co", "role": "ADMIN"}})

        client = _client(AuthClient, handler)
        await client.start()
        try:
            claims = await client.verify_token("tok")
        finally:
            await client.stop()

        assert seen["path"] == "/rpc"
        assert seen["body"] == {"cmd": "verify_token", "payload": {"token": "tok"}}
        assert claims.user_id == "u1"
        assert claims.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_fault_answer_raises(self):
        def handler(request):
            return httpx.Response(409, json={"status": 409, "message": "User already exists"})

        client = _client(AuthClient, handler)
        with pytest.raises(RpcFault) as exc_info:
            await client.get_all_users()

        assert exc_info.value.status == 409
        assert exc_info.value.message == "User already exists"

    @pytest.mark.asyncio
    async def test_fault_without_body_keeps_http_status(self):
        def handler(request):
            return httpx.Response(502, text="bad gateway")

        client = _client(AuthClient, handler)
        with pytest.raises(RpcFault) as exc_info:
            await client.get_all_users()
        assert exc_info.value.status == 502

    @pytest.mark.asyncio
    async def test_unreachable_service_is_503(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(ProjectClient, handler)
        with pytest.raises(RpcFault) as exc_info:
            await client.get_project_by_id("p1")

        assert exc_info.value.status == 503
        assert "project-service" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout_is_503(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = _client(ProjectClient, handler)
        with pytest.raises(RpcFault) as exc_info:
            await client.get_project_by_id("p1")
        assert exc_info.value.status == 503

    @pytest.mark.asyncio
    async def test_null_result(self):
        def handler(request):
            return httpx.Response(200, json={"result": None})

        client = _client(ProjectClient, handler)
        assert await client.get_project_by_id("p1") is None

    @pytest.mark.asyncio
    async def test_update_sends_only_set_fields(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"result": {
                "_id": "p1", "title": "New", "createdBy": "a1", "assignedUsers": ["a1"]
            }})

        client = _client(ProjectClient, handler)
        project = await client.update_project("p1", ProjectUpdateSchema(title="New"), "a1")

        assert seen["body"]["payload"] == {"id": "p1", "dto": {"title": "New"}, "userId": "a1"}
        assert project.id == "p1"

    @pytest.mark.asyncio
    async def test_health_check(self):
        def handler(request):
            if request.url.path == "/health":
                return httpx.Response(200, json={"status": "healthy"})
            return httpx.Response(404)

        assert await _client(AuthClient, handler).health_check() == "healthy"

    @pytest.mark.asyncio
    async def test_health_check_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert await _client(AuthClient, handler).health_check() == "unreachable"


@pytest.fixture
def project_app(project_service) -> FastAPI:
    """Bare app carrying the project service RPC router"""
    app = FastAPI()
    register_rpc_exception_handlers(app)
    app.include_router(project_rpc.router)
    app.state.project_service = project_service
    return app


class TestRpcEndpoint:
    def test_unknown_command(self, project_app):
        response = TestClient(project_app).post("/rpc", json={"cmd": "drop_everything", "payload": {}})
        assert response.status_code == 400
        assert response.json()["status"] == 400

    def test_invalid_payload(self, project_app):
        response = TestClient(project_app).post("/rpc", json={"cmd": "create_project", "payload": {"dto": {}}})
        assert response.status_code == 400
        assert response.json() == {"status": 400, "message": "Invalid command payload"}

    def test_malformed_envelope(self, project_app):
        response = TestClient(project_app).post("/rpc", json={"payload": {}})
        assert response.status_code == 400
        assert response.json()["status"] == 400

    def test_fault_passthrough(self, project_app):
        response = TestClient(project_app).post("/rpc", json={
            "cmd": "update_project",
            "payload": {"id": "missing", "dto": {"title": "X"}}
        })
        assert response.status_code == 404
        assert response.json() == {"status": 404, "message": "Project not found"}

    def test_null_result(self, project_app):
        response = TestClient(project_app).post("/rpc", json={
            "cmd": "get_project_by_id",
            "payload": {"id": "missing"}
        })
        assert response.status_code == 200
        assert response.json() == {"result": None}

    def test_unexpected_error_is_generic(self, project_app, project_db):
        async def broken(*args, **kwargs):
            raise RuntimeError("pool exploded")
        project_db.get_projects_created_by = broken

        response = TestClient(project_app).post("/rpc", json={
            "cmd": "get_all_projects",
            "payload": {"userId": "a1"}
        })
        assert response.status_code == 500
        assert response.json() == {"status": 500, "message": "Internal server error"}

    @pytest.mark.asyncio
    async def test_client_to_service_roundtrip(self, project_app):
        client = ProjectClient("http://project-service", transport=httpx.ASGITransport(app=project_app))

        created = await client.create_project(ProjectCreateSchema(title="Website", assignedUsers=["u1"]), "a1")
        assert created.created_by == "a1"
        assert created.assigned_users == ["a1", "u1"]

        mine = await client.get_my_projects("u1")
        assert [p.id for p in mine] == [created.id]

        fetched = await client.get_project_by_id(created.id)
        assert fetched.title == "Website"


class TestAuthRpcEndpoint:
    @pytest.fixture
    def auth_app(self, auth_service) -> FastAPI:
        app = FastAPI()
        register_rpc_exception_handlers(app)
        app.include_router(auth_rpc.router)
        app.state.auth_service = auth_service
        return app

    def test_register_password_over_72_bytes(self, auth_app, user_db):
        response = TestClient(auth_app).post("/rpc", json={
            "cmd": "register",
            "payload": {"name": "Ana", "email": "ana@example.com", "password": "p" * 80, "role": "USER"}
        })

        assert response.status_code == 400
        assert response.json() == {"status": 400, "message": "Invalid command payload"}
        assert user_db.users == {}
