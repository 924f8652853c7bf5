"""
User data schemas

Pydantic models for registration, login, token claims and the public
user projections that cross service boundaries.
"""

from typing import Optional
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator

from .base import CamelModel


class UserRole(str, Enum):
    """User role enumeration"""
    ADMIN = "ADMIN"
    USER = "USER"


class AuthCommand(str, Enum):
    """Commands served by the auth service RPC endpoint"""
    REGISTER = "register"
    LOGIN = "login"
    VALIDATE_USER = "validate_user"
    VERIFY_TOKEN = "verify_token"
    GET_PROFILE = "get_profile"
    GET_ALL_USERS = "get_all_users"


class UserCreateSchema(BaseModel):
    """Schema for registering a new user"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str
    role: UserRole

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Normalize email casing"""
        return v.lower()

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        """Validate password length"""
        if len(v) < 6:
            raise ValueError('Password must be at least 6 characters long')
        # bcrypt only hashes the first 72 bytes
        if len(v.encode('utf-8')) > 72:
            raise ValueError('Password must be at most 72 bytes long')
        return v


class UserLoginSchema(BaseModel):
    """Schema for user login"""
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Normalize email casing"""
        return v.lower()


class UserRecord(BaseModel):
    """Full user row as stored by the auth service, password hash included"""
    id: str
    name: str
    email: str
    password_hash: str
    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserProfileSchema(BaseModel):
    """Public user projection, never carries the password hash"""
    id: str
    name: str
    email: str
    role: UserRole

    def to_response(self) -> dict:
        """Client facing shape, exposing the id under both keys"""
        return {
            "id": self.id,
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }


class UserSummarySchema(BaseModel):
    """User summary returned on login"""
    id: str
    name: str
    role: UserRole


class RegisterResultSchema(CamelModel):
    message: str
    user_id: str


class LoginResultSchema(CamelModel):
    access_token: str
    user: UserSummarySchema


class TokenClaimsSchema(CamelModel):
    """Decoded identity token claims"""
    user_id: str
    email: str
    role: UserRole


class TokenPayload(BaseModel):
    token: str


class UserIdPayload(CamelModel):
    user_id: str
