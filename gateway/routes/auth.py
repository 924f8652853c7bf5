"""
Authentication Routes
Registration, cookie based login and logout, profile lookups
"""

from fastapi import APIRouter, Response, status
import structlog

from shared.schemas.user import UserCreateSchema, UserLoginSchema

from gateway.config import settings
from gateway.utils.dependencies import AuthClientDep, AuthenticatedUser

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/register", response_model=dict, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreateSchema, auth_client: AuthClientDep):
    """Register a new user, 409 when the email is already taken"""
    result = await auth_client.register(user_data)
    logger.info("User registered", user_id=result.user_id, role=user_data.role.value)
    return result.to_wire()


@router.post("/login", response_model=dict)
async def login(login_data: UserLoginSchema, response: Response, auth_client: AuthClientDep):
    """
    Authenticate and set the identity cookie

    The token only travels in the ``httponly`` cookie, never in the body.
    """
    result = await auth_client.login(login_data)

    response.set_cookie(
        key=settings.access_token_cookie,
        value=result.access_token,
        max_age=settings.access_token_max_age,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.cookie_secure
    )

    logger.info("User logged in", user_id=result.user.id)
    return {
        "message": "Login successful",
        "user": {
            "id": result.user.id,
            "name": result.user.name,
            "role": result.user.role.value,
        }
    }


@router.post("/logout", response_model=dict)
async def logout(response: Response):
    """Expire the identity cookie, nothing is revoked server side"""
    response.set_cookie(
        key=settings.access_token_cookie,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.cookie_secure
    )
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=dict)
async def get_me(current_user: AuthenticatedUser, auth_client: AuthClientDep):
    profile = await auth_client.get_profile(current_user.user_id)
    return profile.to_response()


@router.get("/users", response_model=list)
async def list_users(current_user: AuthenticatedUser, auth_client: AuthClientDep):
    """Every user holding the USER role, used to pick project members"""
    users = await auth_client.get_all_users()
    return [user.to_response() for user in users]
