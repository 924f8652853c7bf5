"""
Typed RPC clients, one per backend service
"""

from .auth_client import AuthClient
from .project_client import ProjectClient
from .task_client import TaskClient

__all__ = ["AuthClient", "ProjectClient", "TaskClient"]
