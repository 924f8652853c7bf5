"""
Database utilities for auth service
"""

from typing import List, Optional

import asyncpg
import structlog

from shared.schemas.user import UserRecord, UserRole
from shared.utils.database import BaseDatabase

logger = structlog.get_logger(__name__)


class DuplicateEmailError(Exception):
    """Raised when an insert collides with the unique email index"""


class UserDatabase(BaseDatabase):
    """Identity store: find by email, find by id, insert"""

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
        name TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        role TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    );
    CREATE INDEX IF NOT EXISTS idx_users_role ON users (role);
    """

    async def create_user(self, name: str, email: str, password_hash: str, role: UserRole) -> str:
        """
        Insert a new user

        Returns:
            str: New user ID

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        async with self.acquire() as conn:
            try:
                user_id = await conn.fetchval("""
                    INSERT INTO users (name, email, password_hash, role)
                    VALUES ($1, $2, $3, $4)
                    RETURNING id
                """, name, email, password_hash, role.value)
            except asyncpg.UniqueViolationError:
                raise DuplicateEmailError(email)

        logger.info("User created", user_id=user_id)
        return user_id

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        async with self.acquire() as conn:
            row = await conn.fetchrow("SELECT * FROM users WHERE email = $1", email)
        return UserRecord(**dict(row)) if row else None

    async def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        async with self.acquire() as conn:
            row = await conn.fetchrow("SELECT * FROM users WHERE id = $1", user_id)
        return UserRecord(**dict(row)) if row else None

    async def get_users_by_role(self, role: UserRole) -> List[UserRecord]:
        async with self.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM users WHERE role = $1 ORDER BY created_at",
                role.value
            )
        return [UserRecord(**dict(row)) for row in rows]
