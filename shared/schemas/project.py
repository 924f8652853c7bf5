"""
Project data schemas
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from .base import CamelModel


class ProjectCommand(str, Enum):
    """Commands served by the project service RPC endpoint"""
    CREATE_PROJECT = "create_project"
    GET_ALL_PROJECTS = "get_all_projects"
    GET_MY_PROJECTS = "get_my_projects"
    GET_PROJECT_BY_ID = "get_project_by_id"
    UPDATE_PROJECT = "update_project"


class ProjectCreateSchema(CamelModel):
    """Schema for creating a project"""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    assigned_users: Optional[List[str]] = None

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        """Trim surrounding whitespace, rejecting blank titles"""
        v = v.strip()
        if not v:
            raise ValueError('Title should not be empty')
        return v


class ProjectUpdateSchema(CamelModel):
    """Schema for a partial project update, only set fields are applied"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    assigned_users: Optional[List[str]] = None

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError('Title should not be empty')
        return v


class ProjectSchema(CamelModel):
    """Stored project document"""
    id: str = Field(..., alias="_id")
    title: str
    description: Optional[str] = None
    created_by: str
    assigned_users: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# RPC payloads

class CreateProjectPayload(CamelModel):
    dto: ProjectCreateSchema
    user_id: str


class ProjectOwnerPayload(CamelModel):
    user_id: str


class ProjectIdPayload(CamelModel):
    id: str


class UpdateProjectPayload(CamelModel):
    id: str
    dto: ProjectUpdateSchema
    user_id: Optional[str] = None
