"""
Auth Service RPC Client
"""

from typing import List, Optional

from shared.schemas.user import (
    AuthCommand, LoginResultSchema, RegisterResultSchema, TokenClaimsSchema,
    TokenPayload, UserCreateSchema, UserIdPayload, UserLoginSchema, UserProfileSchema,
)
from shared.utils.rpc import RpcServiceClient


class AuthClient(RpcServiceClient):
    """Client for the auth service commands"""

    service_name = "auth-service"

    async def register(self, data: UserCreateSchema) -> RegisterResultSchema:
        result = await self.send(AuthCommand.REGISTER, data)
        return RegisterResultSchema.model_validate(result)

    async def login(self, data: UserLoginSchema) -> LoginResultSchema:
        result = await self.send(AuthCommand.LOGIN, data)
        return LoginResultSchema.model_validate(result)

    async def verify_token(self, token: str) -> TokenClaimsSchema:
        result = await self.send(AuthCommand.VERIFY_TOKEN, TokenPayload(token=token))
        return TokenClaimsSchema.model_validate(result)

    async def validate_user(self, user_id: str) -> Optional[UserProfileSchema]:
        result = await self.send(AuthCommand.VALIDATE_USER, UserIdPayload(user_id=user_id))
        if result is None:
            return None
        return UserProfileSchema.model_validate(result)

    async def get_profile(self, user_id: str) -> UserProfileSchema:
        result = await self.send(AuthCommand.GET_PROFILE, UserIdPayload(user_id=user_id))
        return UserProfileSchema.model_validate(result)

    async def get_all_users(self) -> List[UserProfileSchema]:
        result = await self.send(AuthCommand.GET_ALL_USERS)
        return [UserProfileSchema.model_validate(user) for user in result or []]
