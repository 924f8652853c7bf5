"""
Auth service RPC endpoint
"""

from typing import Any, Dict

from fastapi import Request

from shared.schemas.user import (
    AuthCommand, TokenPayload, UserCreateSchema, UserIdPayload, UserLoginSchema,
)
from shared.utils.rpc import RpcFault, create_rpc_router

from auth_service.services.auth_service import AuthService


def get_auth_service(request: Request) -> AuthService:
    """Dependency to get the service instance built at startup"""
    return request.app.state.auth_service


async def dispatch(command: AuthCommand, payload: Dict[str, Any], service: AuthService) -> Any:
    """Route one command to its handler"""
    if command is AuthCommand.REGISTER:
        return await service.register(UserCreateSchema.model_validate(payload))
    elif command is AuthCommand.LOGIN:
        return await service.login(UserLoginSchema.model_validate(payload))
    elif command is AuthCommand.VERIFY_TOKEN:
        return await service.verify_token(TokenPayload.model_validate(payload).token)
    elif command is AuthCommand.VALIDATE_USER:
        return await service.validate_user(UserIdPayload.model_validate(payload).user_id)
    elif command is AuthCommand.GET_PROFILE:
        return await service.get_profile(UserIdPayload.model_validate(payload).user_id)
    elif command is AuthCommand.GET_ALL_USERS:
        return await service.get_all_users()
    raise RpcFault(400, f"Unsupported command: {command.value}")


router = create_rpc_router(AuthCommand, dispatch, get_auth_service)
