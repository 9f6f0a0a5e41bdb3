"""Result shapes returned by the fetch and import operations."""

from dataclasses import dataclass
from typing import Any


@dataclass
class ErrorDetail:
    """Diagnostic information about a failed DevOps Center call."""

    message: str
    url: str
    details: Any = None
    status: int | None = None
    status_text: str | None = None
    request_body: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary, omitting fields that were never captured."""
        data: dict[str, Any] = {"message": self.message, "url": self.url}
        if self.details is not None:
            data["details"] = self.details
        if self.status is not None:
            data["status"] = self.status
        if self.status_text is not None:
            data["statusText"] = self.status_text
        if self.request_body is not None:
            data["requestBody"] = self.request_body
        return data


@dataclass
class FetchResult:
    """Either the fetched task list or an error, never both."""

    tasks: list[Any] | None = None
    success: bool | None = None
    error: ErrorDetail | None = None

    @classmethod
    def failed(cls, error: ErrorDetail) -> "FetchResult":
        return cls(error=error)

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"error": self.error.to_dict()}
        return {"tasks": self.tasks, "success": self.success}


@dataclass
class ImportResult:
    """Outcome of an import as reported by DevOps Center, or an error."""

    created_work_item_ids: list[str] | None = None
    failed_jira_tasks: list[str] | None = None
    message: str | None = None
    success: bool | None = None
    error: ErrorDetail | None = None

    @classmethod
    def failed(cls, error: ErrorDetail) -> "ImportResult":
        return cls(error=error)

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"error": self.error.to_dict()}
        return {
            "createdWorkItemIds": self.created_work_item_ids,
            "failedJiraTasks": self.failed_jira_tasks,
            "message": self.message,
            "success": self.success,
        }
