"""
Authentication Service
Credential verification, token issuance/verification and user lookup
"""

import asyncio
from typing import List, Optional

import structlog

from shared.schemas.user import (
    LoginResultSchema, RegisterResultSchema, TokenClaimsSchema, UserCreateSchema,
    UserLoginSchema, UserProfileSchema, UserRecord, UserRole, UserSummarySchema,
)
from shared.utils.rpc import RpcFault
from shared.utils.security import SecurityUtils

from auth_service.utils.database import DuplicateEmailError, UserDatabase

logger = structlog.get_logger(__name__)

USER_EXISTS_MESSAGE = "User already exists"
# Same text for unknown email and wrong password
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials! Please check your email and password."
INVALID_TOKEN_MESSAGE = "Invalid or expired token"
USER_NOT_FOUND_MESSAGE = "User not found"


def to_profile(user: UserRecord) -> UserProfileSchema:
    """Public projection of a stored user"""
    return UserProfileSchema(id=user.id, name=user.name, email=user.email, role=user.role)


class AuthService:
    """Identity authority backed by the user store"""

    def __init__(self, db: UserDatabase, security: SecurityUtils):
        self.db = db
        self.security = security

    async def hash_password(self, password: str) -> str:
        """Hash password using bcrypt in thread pool to avoid blocking"""
        return await asyncio.to_thread(self.security.hash_password, password)

    async def verify_password(self, password: str, hashed_password: str) -> bool:
        """Verify password against hash in thread pool to avoid blocking"""
        return await asyncio.to_thread(self.security.verify_password, password, hashed_password)

    async def register(self, data: UserCreateSchema) -> RegisterResultSchema:
        """
        Register new user

        Raises:
            RpcFault: 409 if the email is already registered
        """
        existing_user = await self.db.get_user_by_email(data.email)
        if existing_user:
            raise RpcFault(409, USER_EXISTS_MESSAGE)

        password_hash = await self.hash_password(data.password)

        try:
            user_id = await self.db.create_user(data.name, data.email, password_hash, data.role)
        except DuplicateEmailError:
            # Lost a race with a concurrent registration of the same email
            raise RpcFault(409, USER_EXISTS_MESSAGE)

        logger.info("User registered", user_id=user_id, role=data.role.value)
        return RegisterResultSchema(message="User registered successfully", user_id=user_id)

    async def login(self, data: UserLoginSchema) -> LoginResultSchema:
        """
        Authenticate credentials and issue an identity token

        Raises:
            RpcFault: 401 with one message for both unknown email and bad password
        """
        user = await self.db.get_user_by_email(data.email)
        if not user:
            raise RpcFault(401, INVALID_CREDENTIALS_MESSAGE)

        if not await self.verify_password(data.password, user.password_hash):
            raise RpcFault(401, INVALID_CREDENTIALS_MESSAGE)

        access_token = self.security.generate_token({
            "userId": user.id,
            "email": user.email,
            "role": user.role.value
        })

        logger.info("User logged in", user_id=user.id)
        return LoginResultSchema(
            access_token=access_token,
            user=UserSummarySchema(id=user.id, name=user.name, role=user.role)
        )

    async def verify_token(self, token: str) -> TokenClaimsSchema:
        """
        Decode a token and check signature and expiry

        Raises:
            RpcFault: 401 on any decode, signature, expiry or claim failure
        """
        claims = self.security.verify_token(token)
        if not claims:
            raise RpcFault(401, INVALID_TOKEN_MESSAGE)

        try:
            return TokenClaimsSchema.model_validate(claims)
        except ValueError:
            logger.warning("Token is missing identity claims")
            raise RpcFault(401, INVALID_TOKEN_MESSAGE)

    async def validate_user(self, user_id: str) -> Optional[UserProfileSchema]:
        """Fresh lookup of a user by ID, None if gone"""
        user = await self.db.get_user_by_id(user_id)
        return to_profile(user) if user else None

    async def get_profile(self, user_id: str) -> UserProfileSchema:
        user = await self.db.get_user_by_id(user_id)
        if not user:
            raise RpcFault(404, USER_NOT_FOUND_MESSAGE)
        return to_profile(user)

    async def get_all_users(self) -> List[UserProfileSchema]:
        """All USER role identities; ADMIN accounts are never listed"""
        users = await self.db.get_users_by_role(UserRole.USER)
        return [to_profile(user) for user in users]
