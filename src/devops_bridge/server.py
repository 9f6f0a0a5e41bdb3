"""DevOps Center bridge MCP server."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from .auth import AuthResolver, ConfigAuthResolver
from .devops import get_jira_tasks, import_jira_tasks
from .errors import ToolInputError
from .models import ImportRequest, TaskQuery
from .store import ConfigStore

logger = logging.getLogger(__name__)

GET_TASKS_TOOL = "get_jira_tasks_from_devops_center"
IMPORT_TASKS_TOOL = "import_jira_tasks_to_devops_center"


def get_root_path() -> Path:
    """Get the root path from environment or current directory."""
    root = os.environ.get("DEVOPS_BRIDGE_ROOT")
    if root:
        return Path(root)
    return Path.cwd()


def get_resolver() -> AuthResolver:
    """Get the resolver for the configured root."""
    return ConfigAuthResolver(ConfigStore(get_root_path()))


# Create the MCP server
server = Server("devops-bridge")

_COMMON_PROPERTIES: dict[str, Any] = {
    "username": {
        "type": "string",
        "minLength": 1,
        "description": "Username of the DevOps Center org.",
    },
    "projectId": {
        "type": "string",
        "minLength": 1,
        "description": "DevOps Center Project ID (e.g., 1Qgxx0000004CU0CAM).",
    },
    "jiraProject": {
        "type": "string",
        "minLength": 1,
        "description": "JIRA project identifier.",
    },
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name=GET_TASKS_TOOL,
            description=(
                "Retrieve JIRA tasks for a DevOps Center project. This is step 1 of the JIRA import workflow: "
                "call it first, show the returned tasks with their IDs to the user, and ask which ones to import "
                f"with '{IMPORT_TASKS_TOOL}'. Use only against the DevOps Center org; if the username is unknown, "
                "ask the user for it rather than picking an org."
            ),
            inputSchema={
                "type": "object",
                "properties": dict(_COMMON_PROPERTIES),
                "required": ["username", "projectId", "jiraProject"],
            },
        ),
        Tool(
            name=IMPORT_TASKS_TOOL,
            description=(
                "Import JIRA tasks as DevOps Center work items. This is step 2 of the JIRA import workflow: "
                f"call '{GET_TASKS_TOOL}' first and import only task IDs the user explicitly selected. "
                "Returns the created work item IDs and any JIRA tasks that failed to import. "
                "Importing the same tasks twice may create duplicate work items."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    **_COMMON_PROPERTIES,
                    "jiraTasks": {
                        "type": "array",
                        "items": {"type": "string"},
                        "minItems": 1,
                        "description": 'JIRA task IDs to import (e.g., ["10000", "10001"]).',
                    },
                },
                "required": ["username", "projectId", "jiraProject", "jiraTasks"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> CallToolResult:
    """Handle tool calls."""
    resolver = get_resolver()

    if name == GET_TASKS_TOOL:
        return await handle_get_jira_tasks(resolver, arguments)
    elif name == IMPORT_TASKS_TOOL:
        return await handle_import_jira_tasks(resolver, arguments)
    else:
        return _error_result(f"Unknown tool: {name}")


def _require_string(arguments: dict, key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ToolInputError(f"'{key}' must be a non-empty string")
    return value


def _require_task_ids(arguments: dict) -> list[str]:
    value = arguments.get("jiraTasks")
    if not isinstance(value, list) or not value:
        raise ToolInputError("'jiraTasks' must be a non-empty array of strings")
    if not all(isinstance(task_id, str) and task_id for task_id in value):
        raise ToolInputError("'jiraTasks' must only contain non-empty strings")
    return value


def _json_result(payload: dict[str, Any], is_error: bool = False) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(payload, indent=2))],
        isError=is_error,
    )


def _error_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=True)


async def handle_get_jira_tasks(
    resolver: AuthResolver, arguments: dict
) -> CallToolResult:
    """Handle get_jira_tasks_from_devops_center tool call."""
    try:
        username = _require_string(arguments, "username")
        query = TaskQuery(
            project_id=_require_string(arguments, "projectId"),
            jira_project=_require_string(arguments, "jiraProject"),
        )

        result = await get_jira_tasks(resolver, username, query)

        if result.error:
            return _json_result(
                {
                    "error": result.error.message,
                    "details": result.error.details,
                    "status": result.error.status,
                },
                is_error=True,
            )

        tasks = result.tasks or []
        return _json_result(
            {
                "success": result.success,
                "tasks": result.tasks,
                "taskCount": len(tasks) if isinstance(tasks, list) else 0,
            }
        )

    except ToolInputError as e:
        return _error_result(f"Error getting JIRA tasks: {e}")
    except Exception as e:
        logger.exception("Unexpected error in %s", GET_TASKS_TOOL)
        return _error_result(f"Error getting JIRA tasks: {e}")


async def handle_import_jira_tasks(
    resolver: AuthResolver, arguments: dict
) -> CallToolResult:
    """Handle import_jira_tasks_to_devops_center tool call."""
    try:
        username = _require_string(arguments, "username")
        request = ImportRequest(
            project_id=_require_string(arguments, "projectId"),
            jira_project=_require_string(arguments, "jiraProject"),
            task_ids=tuple(_require_task_ids(arguments)),
        )

        result = await import_jira_tasks(resolver, username, request)

        if result.error:
            return _json_result(
                {
                    "error": result.error.message,
                    "details": result.error.details,
                    "status": result.error.status,
                },
                is_error=True,
            )

        return _json_result(
            {
                "success": result.success,
                "message": result.message,
                "createdWorkItemIds": result.created_work_item_ids,
                "failedJiraTasks": result.failed_jira_tasks,
            }
        )

    except ToolInputError as e:
        return _error_result(f"Error importing JIRA tasks: {e}")
    except Exception as e:
        logger.exception("Unexpected error in %s", IMPORT_TASKS_TOOL)
        return _error_result(f"Error importing JIRA tasks: {e}")


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main():
    """Entry point for the MCP server."""
    import asyncio

    # stdout carries the MCP protocol
    logging.basicConfig(
        level=os.environ.get("DEVOPS_BRIDGE_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
