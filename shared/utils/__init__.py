"""
Shared utilities for the project tracker

This package contains common utilities used across all microservices.
"""

from .database import BaseDatabase, build_database_url
from .logger import setup_logging
from .rpc import RpcFault, RpcServiceClient, create_rpc_router
from .security import SecurityUtils

__all__ = [
    "BaseDatabase",
    "build_database_url",
    "setup_logging",
    "RpcFault",
    "RpcServiceClient",
    "create_rpc_router",
    "SecurityUtils",
]

__version__ = "1.0.0"
