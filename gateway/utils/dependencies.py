"""
FastAPI Dependencies
Downstream RPC clients and identity resolution
"""

from typing import Annotated, Optional

import structlog
from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel

from shared.clients import AuthClient, ProjectClient, TaskClient
from shared.schemas.user import UserRole
from shared.utils.rpc import RpcFault

from gateway.config import settings

logger = structlog.get_logger(__name__)


class CurrentUser(BaseModel):
    """Identity resolved for the current request"""
    user_id: str
    email: str
    name: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def get_auth_client(request: Request) -> AuthClient:
    return request.app.state.auth_client


def get_project_client(request: Request) -> ProjectClient:
    return request.app.state.project_client


def get_task_client(request: Request) -> TaskClient:
    return request.app.state.task_client


def extract_token(request: Request) -> Optional[str]:
    """Token from the identity cookie, falling back to a Bearer header"""
    token = request.cookies.get(settings.access_token_cookie)
    if token:
        return token

    authorization = request.headers.get("Authorization")
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    auth_client: AuthClient = Depends(get_auth_client)
) -> CurrentUser:
    """
    Resolve the caller identity

    The token is verified by the auth service, then the user is looked up
    again so a role or name changed since issuance is honoured.

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired, or its
            user no longer exists
    """
    token = extract_token(request)
    if not token:
        raise _unauthorized("No token provided")

    try:
        claims = await auth_client.verify_token(token)
        user = await auth_client.validate_user(claims.user_id)
    except RpcFault as fault:
        logger.info("Token rejected", fault_status=fault.status, message=fault.message)
        raise _unauthorized("Invalid token")

    if user is None:
        logger.info("Token user no longer exists", user_id=claims.user_id)
        raise _unauthorized("Invalid token")

    current_user = CurrentUser(user_id=user.id, email=user.email, name=user.name, role=user.role)
    request.state.user_id = current_user.user_id
    return current_user


# Type aliases for cleaner dependency injection
AuthClientDep = Annotated[AuthClient, Depends(get_auth_client)]
ProjectClientDep = Annotated[ProjectClient, Depends(get_project_client)]
TaskClientDep = Annotated[TaskClient, Depends(get_task_client)]
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
