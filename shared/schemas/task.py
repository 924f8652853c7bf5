"""
Task data schemas
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .base import CamelModel


class TaskStatus(str, Enum):
    """Task workflow status, any status may move to any other"""
    TODO = "TO_DO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskCommand(str, Enum):
    """Commands served by the task service RPC endpoint"""
    CREATE_TASK = "create_task"
    GET_TASKS_BY_PROJECT = "get_tasks_by_project"
    UPDATE_TASK_STATUS = "update_task_status"


class TaskCreateSchema(CamelModel):
    """Schema for creating a task"""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    due_date: datetime
    project_id: str = Field(..., min_length=1)
    assigned_to: Optional[str] = None

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Title should not be empty')
        return v

    @field_validator('assigned_to')
    @classmethod
    def blank_assignee_is_none(cls, v):
        return v or None


class TaskStatusUpdateSchema(BaseModel):
    status: TaskStatus


class TaskSchema(CamelModel):
    """Stored task document"""
    id: str = Field(..., alias="_id")
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    due_date: datetime
    project_id: str
    assigned_to: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# RPC payloads

class ProjectTasksPayload(CamelModel):
    project_id: str


class UpdateTaskStatusPayload(CamelModel):
    task_id: str
    status: TaskStatus
