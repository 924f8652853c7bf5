"""
Shared data schemas for the project tracker

This package contains the schemas and RPC command enums used across all
microservices.
"""

from .base import CamelModel
from .user import (
    AuthCommand, UserRole, UserCreateSchema, UserLoginSchema, UserRecord,
    UserProfileSchema, UserSummarySchema, RegisterResultSchema,
    LoginResultSchema, TokenClaimsSchema,
)
from .project import (
    ProjectCommand, ProjectCreateSchema, ProjectUpdateSchema, ProjectSchema,
)
from .task import (
    TaskCommand, TaskStatus, TaskCreateSchema, TaskStatusUpdateSchema, TaskSchema,
)

__all__ = [
    "CamelModel",
    "AuthCommand",
    "UserRole",
    "UserCreateSchema",
    "UserLoginSchema",
    "UserRecord",
    "UserProfileSchema",
    "UserSummarySchema",
    "RegisterResultSchema",
    "LoginResultSchema",
    "TokenClaimsSchema",
    "ProjectCommand",
    "ProjectCreateSchema",
    "ProjectUpdateSchema",
    "ProjectSchema",
    "TaskCommand",
    "TaskStatus",
    "TaskCreateSchema",
    "TaskStatusUpdateSchema",
    "TaskSchema",
]

__version__ = "1.0.0"
