"""DevOps Center bridge CLI interface."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .auth import ConfigAuthResolver
from .devops import get_jira_tasks, import_jira_tasks
from .errors import DevOpsBridgeError
from .models import ImportRequest, JiraConfig, OrgConfig, TaskQuery
from .models.config import DEFAULT_NAMED_CREDENTIAL
from .store import ConfigStore


def get_store(root: Path | None = None) -> ConfigStore:
    """Get the config store for a directory."""
    if root is None:
        root = Path.cwd()
    return ConfigStore(root)


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize .devops-bridge/ in current directory."""
    store = get_store()

    if store.bridge_dir.exists():
        print("Bridge already initialized in this directory.")
        return 0

    store.initialize()
    print(f"Initialized bridge in {store.bridge_dir}")
    return 0


def cmd_org_add(args: argparse.Namespace) -> int:
    """Store credentials for a DevOps Center org user."""
    store = get_store()

    try:
        instance_url = args.instance_url or input("Instance URL (e.g., https://myorg.my.salesforce.com): ").strip()
        token = args.token or input("Access token: ").strip()

        if not all([instance_url, token]):
            print("Error: instance URL and access token are required.", file=sys.stderr)
            return 1

        store.save_org(args.username, OrgConfig(access_token=token, instance_url=instance_url))
        print(f"Saved org credentials for {args.username}.")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_org_list(args: argparse.Namespace) -> int:
    """List stored org users."""
    store = get_store()

    try:
        orgs = store.get_config().orgs
        if not orgs:
            print("No orgs configured. Use 'devops-bridge org add' first.")
            return 0

        for username, org in sorted(orgs.items()):
            print(f"{username}: {org.instance_url}")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_org_remove(args: argparse.Namespace) -> int:
    """Remove stored credentials for an org user."""
    store = get_store()

    try:
        if not store.remove_org(args.username):
            print(f"No org configured for {args.username}.", file=sys.stderr)
            return 1

        print(f"Removed org credentials for {args.username}.")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_org(args: argparse.Namespace) -> int:
    """Handle org subcommand dispatch."""
    if args.org_command == "add":
        return cmd_org_add(args)
    elif args.org_command == "list":
        return cmd_org_list(args)
    elif args.org_command == "remove":
        return cmd_org_remove(args)
    else:
        print("Usage: devops-bridge org {add|list|remove}", file=sys.stderr)
        return 1


def cmd_jira_setup(args: argparse.Namespace) -> int:
    """Configure the JIRA settings sent with imports."""
    store = get_store()

    try:
        jira = JiraConfig(
            url=args.url,
            api_token=args.token,
            named_credential=args.named_credential or DEFAULT_NAMED_CREDENTIAL,
        )
        store.save_jira(jira)

        if jira.is_configured():
            print(f"JIRA configuration saved ({jira.url}, credential {jira.named_credential}).")
        else:
            print(f"JIRA configuration saved (credential {jira.named_credential} only).")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_jira(args: argparse.Namespace) -> int:
    """Handle jira subcommand dispatch."""
    if args.jira_command == "setup":
        return cmd_jira_setup(args)
    else:
        print("Usage: devops-bridge jira {setup}", file=sys.stderr)
        return 1


def cmd_tasks_fetch(args: argparse.Namespace) -> int:
    """Fetch JIRA tasks through DevOps Center."""
    resolver = ConfigAuthResolver(get_store())
    query = TaskQuery(project_id=args.project_id, jira_project=args.jira_project)

    try:
        result = asyncio.run(get_jira_tasks(resolver, args.username, query))
    except (FileNotFoundError, DevOpsBridgeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 1 if result.error else 0


def cmd_tasks_import(args: argparse.Namespace) -> int:
    """Import JIRA tasks as DevOps Center work items."""
    resolver = ConfigAuthResolver(get_store())

    try:
        request = ImportRequest(
            project_id=args.project_id,
            jira_project=args.jira_project,
            task_ids=tuple(args.task_ids),
        )
        result = asyncio.run(import_jira_tasks(resolver, args.username, request))
    except (FileNotFoundError, ValueError, DevOpsBridgeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 1 if result.error else 0


def cmd_tasks(args: argparse.Namespace) -> int:
    """Handle tasks subcommand dispatch."""
    if args.tasks_command == "fetch":
        return cmd_tasks_fetch(args)
    elif args.tasks_command == "import":
        return cmd_tasks_import(args)
    else:
        print("Usage: devops-bridge tasks {fetch|import}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the MCP server."""
    from .server import main as server_main

    server_main()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="devops-bridge",
        description="Import JIRA tasks into DevOps Center as work items",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log requests to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init
    subparsers.add_parser("init", help="Initialize .devops-bridge/ in current directory")

    # org
    org_parser = subparsers.add_parser("org", help="DevOps Center org credentials")
    org_subparsers = org_parser.add_subparsers(dest="org_command")

    org_add_parser = org_subparsers.add_parser("add", help="Store credentials for an org user")
    org_add_parser.add_argument("username", help="DevOps Center org username")
    org_add_parser.add_argument("--instance-url", help="Org instance URL")
    org_add_parser.add_argument("--token", help="Access token")

    org_subparsers.add_parser("list", help="List stored org users")

    org_remove_parser = org_subparsers.add_parser("remove", help="Remove stored credentials for an org user")
    org_remove_parser.add_argument("username", help="DevOps Center org username")

    # jira
    jira_parser = subparsers.add_parser("jira", help="JIRA settings for imports")
    jira_subparsers = jira_parser.add_subparsers(dest="jira_command")

    jira_setup_parser = jira_subparsers.add_parser("setup", help="Configure JIRA settings")
    jira_setup_parser.add_argument("--url", help="JIRA instance URL")
    jira_setup_parser.add_argument("--token", help="JIRA API token")
    jira_setup_parser.add_argument(
        "--named-credential",
        help=f"Named credential in DevOps Center (default: {DEFAULT_NAMED_CREDENTIAL})",
    )

    # tasks
    tasks_parser = subparsers.add_parser("tasks", help="Fetch or import JIRA tasks")
    tasks_subparsers = tasks_parser.add_subparsers(dest="tasks_command")

    fetch_parser = tasks_subparsers.add_parser("fetch", help="List JIRA tasks for a project")
    fetch_parser.add_argument("username", help="DevOps Center org username")
    fetch_parser.add_argument("project_id", help="DevOps Center project ID")
    fetch_parser.add_argument("jira_project", help="JIRA project identifier")

    import_parser = tasks_subparsers.add_parser("import", help="Import JIRA tasks as work items")
    import_parser.add_argument("username", help="DevOps Center org username")
    import_parser.add_argument("project_id", help="DevOps Center project ID")
    import_parser.add_argument("jira_project", help="JIRA project identifier")
    import_parser.add_argument("task_ids", nargs="+", help="JIRA task IDs to import")

    # serve
    subparsers.add_parser("serve", help="Start the MCP server")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    # Dispatch to command handlers
    handlers = {
        "init": cmd_init,
        "org": cmd_org,
        "jira": cmd_jira,
        "tasks": cmd_tasks,
        "serve": cmd_serve,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
