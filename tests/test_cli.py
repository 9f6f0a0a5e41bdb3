"""Tests for the command line interface."""

import json

import httpx
import pytest
import respx

from devops_bridge import cli
from devops_bridge.auth import ACCESS_TOKEN_ENV, INSTANCE_URL_ENV
from devops_bridge.store import ConfigStore

GET_URL = (
    "https://example.com/services/data/v65.0/connect/devops"
    "/projects/1Qg/workitems/getFromJIRA/Project_1"
)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run commands in an empty directory without credential overrides."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(ACCESS_TOKEN_ENV, raising=False)
    monkeypatch.delenv(INSTANCE_URL_ENV, raising=False)
    return tmp_path


class TestCli:
    """Tests for CLI commands."""

    def test_init(self, workdir, capsys):
        assert cli.main(["init"]) == 0
        assert (workdir / ".devops-bridge" / "config.json").exists()

        assert cli.main(["init"]) == 0
        assert "already initialized" in capsys.readouterr().out

    def test_org_add_requires_init(self, workdir, capsys):
        code = cli.main(["org", "add", "me@example.com", "--instance-url", "https://example.com", "--token", "t"])

        assert code == 1
        assert "not initialized" in capsys.readouterr().err

    def test_org_add_and_list(self, workdir, capsys):
        cli.main(["init"])
        cli.main(["org", "add", "me@example.com", "--instance-url", "https://example.com", "--token", "t"])
        capsys.readouterr()

        assert cli.main(["org", "list"]) == 0
        assert "me@example.com: https://example.com" in capsys.readouterr().out

    def test_jira_setup(self, workdir):
        cli.main(["init"])

        assert cli.main(["jira", "setup", "--named-credential", "MY_JIRA"]) == 0
        assert ConfigStore(workdir).get_config().jira.named_credential == "MY_JIRA"

    @respx.mock
    def test_tasks_fetch(self, workdir, capsys):
        cli.main(["init"])
        cli.main(["org", "add", "me@example.com", "--instance-url", "https://example.com", "--token", "t"])
        capsys.readouterr()
        respx.get(GET_URL).mock(return_value=httpx.Response(200, json=[{"id": "10000"}]))

        assert cli.main(["tasks", "fetch", "me@example.com", "1Qg", "Project_1"]) == 0
        assert json.loads(capsys.readouterr().out) == {
            "tasks": [{"id": "10000"}],
            "success": True,
        }

    def test_tasks_fetch_unknown_org(self, workdir, capsys):
        cli.main(["init"])

        assert cli.main(["tasks", "fetch", "nobody@example.com", "1Qg", "Project_1"]) == 1
        assert "Missing access token or instance URL." in capsys.readouterr().err

    def test_org_remove(self, workdir, capsys):
        cli.main(["init"])
        cli.main(["org", "add", "me@example.com", "--instance-url", "https://example.com", "--token", "t"])

        assert cli.main(["org", "remove", "me@example.com"]) == 0
        assert ConfigStore(workdir).get_org("me@example.com") is None

        assert cli.main(["org", "remove", "me@example.com"]) == 1
        assert "No org configured" in capsys.readouterr().err
