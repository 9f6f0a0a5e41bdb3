"""DevOps Center JIRA import integration."""

from .client import DevOpsClient, API_VERSION
from .envelope import unwrap, extract_tasks
from .tasks import get_jira_tasks, import_jira_tasks, build_import_body

__all__ = [
    "DevOpsClient",
    "API_VERSION",
    "unwrap",
    "extract_tasks",
    "get_jira_tasks",
    "import_jira_tasks",
    "build_import_body",
]
