"""Inputs to the fetch and import operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskQuery:
    """Which JIRA project to list tasks for, in which DevOps Center project."""

    project_id: str
    jira_project: str


@dataclass(frozen=True)
class ImportRequest:
    """JIRA tasks to turn into DevOps Center work items."""

    project_id: str
    jira_project: str
    task_ids: tuple[str, ...]

    def __post_init__(self) -> None:
        task_ids = tuple(self.task_ids)
        if not task_ids:
            raise ValueError("task_ids must contain at least one JIRA task ID")
        if not all(isinstance(task_id, str) for task_id in task_ids):
            raise ValueError("task_ids must be strings")
        object.__setattr__(self, "task_ids", task_ids)
