"""Fetching JIRA tasks from DevOps Center and importing them as work items."""

import json
import logging
from typing import Any

import httpx

from ..auth import AuthResolver
from ..models import (
    ErrorDetail,
    FetchResult,
    ImportRequest,
    ImportResult,
    JiraConfig,
    TaskQuery,
)
from .client import DevOpsClient
from .envelope import extract_tasks, unwrap

logger = logging.getLogger(__name__)

REDACTED = "***"
EMPTY_RESPONSE = "Empty response body from DevOps Center"


async def get_jira_tasks(
    resolver: AuthResolver, username: str, query: TaskQuery
) -> FetchResult:
    """List the JIRA tasks of ``query.jira_project`` available to a DevOps Center project.

    Args:
        resolver: Source of the caller's connection
        username: DevOps Center org username
        query: DevOps Center project ID and JIRA project

    Returns:
        FetchResult with the tasks, or with an ErrorDetail if the call failed

    Raises:
        MissingConnectionError: If no access token or instance URL could be resolved
    """
    connection = await resolver.resolve(username)
    client = DevOpsClient(connection)
    url = client.get_from_jira_url(query.project_id, query.jira_project)

    try:
        async with client:
            body = await client.get_from_jira(query.project_id, query.jira_project)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Fetching JIRA tasks failed: %s", e)
        return FetchResult.failed(_error_detail(e, url))

    payload = unwrap(body)
    if payload is None:
        logger.warning("Fetching JIRA tasks returned no payload")
        return FetchResult.failed(ErrorDetail(message=EMPTY_RESPONSE, url=url))

    return FetchResult(tasks=extract_tasks(payload), success=True)


def build_import_body(request: ImportRequest, jira: JiraConfig) -> dict[str, Any]:
    """Build the createFromJIRA request body.

    ``jiraURL`` and ``jiraToken`` are None when not configured.
    """
    return {
        "jiraNamedCredential": jira.named_credential,
        "jiraProject": request.jira_project,
        "jiraTasks": list(request.task_ids),
        "jiraURL": jira.url,
        "jiraToken": jira.api_token,
    }


async def import_jira_tasks(
    resolver: AuthResolver, username: str, request: ImportRequest
) -> ImportResult:
    """Create DevOps Center work items from JIRA tasks.

    A single request carries every task ID. Tasks DevOps Center could not
    convert come back in ``failed_jira_tasks``; nothing is retried, so calling
    again with the same IDs may create duplicates.

    Raises:
        MissingConnectionError: If no access token or instance URL could be resolved
    """
    connection = await resolver.resolve(username)
    client = DevOpsClient(connection)
    jira = await resolver.resolve_jira(username)
    body = build_import_body(request, jira)
    url = client.create_from_jira_url(request.project_id)

    try:
        async with client:
            response_body = await client.create_from_jira(request.project_id, body)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Importing JIRA tasks failed: %s", e)
        error = _error_detail(e, url)
        error.request_body = _redact(body)
        return ImportResult.failed(error)

    result = unwrap(response_body)
    if result is None:
        logger.warning("Importing JIRA tasks returned no payload")
        return ImportResult.failed(
            ErrorDetail(message=EMPTY_RESPONSE, url=url, request_body=_redact(body))
        )
    if not isinstance(result, dict):
        result = {}

    return ImportResult(
        created_work_item_ids=result.get("createdWorkItemIds"),
        failed_jira_tasks=result.get("failedJiraTasks"),
        message=result.get("message"),
        success=result.get("success"),
    )


def _error_detail(error: Exception, url: str) -> ErrorDetail:
    """Capture what is known about a failed call."""
    detail = ErrorDetail(message=str(error), url=url)

    response = getattr(error, "response", None)
    if isinstance(response, httpx.Response):
        detail.status = response.status_code
        detail.status_text = response.reason_phrase
        if response.content:
            detail.details = _response_body(response)

    return detail


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except json.JSONDecodeError:
        return response.text


def _redact(body: dict[str, Any]) -> dict[str, Any]:
    redacted = dict(body)
    for key in ("jiraURL", "jiraToken"):
        if redacted.get(key) is not None:
            redacted[key] = REDACTED
    return redacted
