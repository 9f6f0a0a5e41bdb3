"""DevOps Center Connect API client."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..errors import MissingConnectionError
from ..models import Connection

logger = logging.getLogger(__name__)

API_VERSION = "v65.0"


class DevOpsClient:
    """Async DevOps Center Connect API client using httpx."""

    def __init__(self, connection: Connection, timeout: float | None = None):
        """Initialize the client.

        Args:
            connection: Resolved access token and instance URL
            timeout: Request timeout in seconds. None keeps the httpx default.

        Raises:
            MissingConnectionError: If the token or instance URL is missing
        """
        if not connection.is_complete():
            raise MissingConnectionError()

        self.instance_url = connection.instance_url.rstrip("/")
        self.base_url = (
            f"{self.instance_url}/services/data/{API_VERSION}/connect/devops"
        )
        self._access_token = connection.access_token
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "DevOpsClient":
        kwargs: dict[str, Any] = {}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "Content-Type": "application/json",
            },
            **kwargs,
        )
        return self

    async def __aexit__(self, *args) -> None:
        if self._client:
            await self._client.aclose()

    def get_from_jira_url(self, project_id: str, jira_project: str) -> str:
        """URL listing the JIRA tasks of a project."""
        return (
            f"{self.base_url}/projects/{_segment(project_id)}"
            f"/workitems/getFromJIRA/{_segment(jira_project)}"
        )

    def create_from_jira_url(self, project_id: str) -> str:
        """URL creating work items from JIRA tasks."""
        return f"{self.base_url}/projects/{_segment(project_id)}/workitems/createFromJIRA"

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        """Make one API request and return the decoded JSON body, or None if empty.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response
            ValueError: If the response body is not valid JSON
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with context.")

        logger.debug("%s %s", method, url)
        response = await self._client.request(method, url, **kwargs)
        response.raise_for_status()

        return response.json() if response.content else None

    async def get_from_jira(self, project_id: str, jira_project: str) -> Any:
        """Fetch the JIRA tasks DevOps Center can import for a project."""
        return await self._request(
            "GET", self.get_from_jira_url(project_id, jira_project)
        )

    async def create_from_jira(self, project_id: str, body: dict[str, Any]) -> Any:
        """Create work items in a project from the JIRA tasks named in ``body``."""
        return await self._request(
            "POST", self.create_from_jira_url(project_id), json=body
        )


def _segment(value: str) -> str:
    # Keep IDs readable in URLs, but never let them add path segments
    return quote(value, safe="")
