"""Tests for connection resolution."""

import tempfile

import pytest

from devops_bridge.auth import ACCESS_TOKEN_ENV, INSTANCE_URL_ENV, ConfigAuthResolver
from devops_bridge.models import JiraConfig, OrgConfig
from devops_bridge.store import ConfigStore


@pytest.fixture
def store():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = ConfigStore(tmpdir)
        store.initialize()
        yield store


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv(ACCESS_TOKEN_ENV, raising=False)
    monkeypatch.delenv(INSTANCE_URL_ENV, raising=False)


class TestConfigAuthResolver:
    """Tests for ConfigAuthResolver."""

    @pytest.mark.asyncio
    async def test_resolves_stored_org(self, store):
        store.save_org("me@example.com", OrgConfig("token", "https://example.com"))

        connection = await ConfigAuthResolver(store).resolve("me@example.com")

        assert connection.access_token == "token"
        assert connection.instance_url == "https://example.com"
        assert connection.is_complete()

    @pytest.mark.asyncio
    async def test_unknown_user_is_incomplete(self, store):
        connection = await ConfigAuthResolver(store).resolve("nobody@example.com")

        assert not connection.is_complete()

    @pytest.mark.asyncio
    async def test_environment_overrides(self, store, monkeypatch):
        store.save_org("me@example.com", OrgConfig("stored", "https://stored.example.com"))
        monkeypatch.setenv(ACCESS_TOKEN_ENV, "env-token")

        connection = await ConfigAuthResolver(store).resolve("me@example.com")

        assert connection.access_token == "env-token"
        assert connection.instance_url == "https://stored.example.com"

    @pytest.mark.asyncio
    async def test_environment_only(self, monkeypatch):
        monkeypatch.setenv(ACCESS_TOKEN_ENV, "env-token")
        monkeypatch.setenv(INSTANCE_URL_ENV, "https://env.example.com")

        # Store is never read, so it need not exist
        resolver = ConfigAuthResolver(ConfigStore("/nonexistent"))
        connection = await resolver.resolve("anyone")

        assert connection.access_token == "env-token"
        assert connection.instance_url == "https://env.example.com"

    @pytest.mark.asyncio
    async def test_resolve_jira(self, store):
        store.save_jira(JiraConfig(named_credential="MY_JIRA"))

        jira = await ConfigAuthResolver(store).resolve_jira("me@example.com")

        assert jira.named_credential == "MY_JIRA"

    @pytest.mark.asyncio
    async def test_resolve_jira_without_store(self, monkeypatch):
        """Test that environment-only setups still get default JIRA settings."""
        monkeypatch.setenv(ACCESS_TOKEN_ENV, "env-token")
        monkeypatch.setenv(INSTANCE_URL_ENV, "https://env.example.com")

        jira = await ConfigAuthResolver(ConfigStore("/nonexistent")).resolve_jira("anyone")

        assert jira == JiraConfig()
