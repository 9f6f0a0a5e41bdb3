"""Data models for the DevOps Center bridge."""

from .connection import Connection
from .requests import TaskQuery, ImportRequest
from .results import ErrorDetail, FetchResult, ImportResult
from .config import BridgeConfig, OrgConfig, JiraConfig

__all__ = [
    "Connection",
    "TaskQuery",
    "ImportRequest",
    "ErrorDetail",
    "FetchResult",
    "ImportResult",
    "BridgeConfig",
    "OrgConfig",
    "JiraConfig",
]
