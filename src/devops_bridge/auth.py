"""Resolution of DevOps Center connections and JIRA settings."""

import logging
import os
from typing import Protocol

from .models import Connection, JiraConfig
from .store import ConfigStore

logger = logging.getLogger(__name__)

ACCESS_TOKEN_ENV = "DEVOPS_BRIDGE_ACCESS_TOKEN"
INSTANCE_URL_ENV = "DEVOPS_BRIDGE_INSTANCE_URL"


class AuthResolver(Protocol):
    """Maps a DevOps Center username to what a call needs to authenticate."""

    async def resolve(self, username: str) -> Connection: ...

    async def resolve_jira(self, username: str) -> JiraConfig: ...


class ConfigAuthResolver:
    """AuthResolver backed by the JSON config store.

    ``DEVOPS_BRIDGE_ACCESS_TOKEN`` and ``DEVOPS_BRIDGE_INSTANCE_URL`` take
    precedence over stored values for every username. An unknown username
    resolves to an empty Connection.
    """

    def __init__(self, store: ConfigStore):
        self.store = store

    async def resolve(self, username: str) -> Connection:
        access_token = os.environ.get(ACCESS_TOKEN_ENV)
        instance_url = os.environ.get(INSTANCE_URL_ENV)

        if not (access_token and instance_url):
            org = self.store.get_org(username)
            if org is None:
                logger.warning("No stored credentials for %s", username)
            else:
                access_token = access_token or org.access_token
                instance_url = instance_url or org.instance_url

        return Connection(access_token=access_token, instance_url=instance_url)

    async def resolve_jira(self, username: str) -> JiraConfig:
        # JIRA settings are shared by every org user
        if not self.store.bridge_dir.exists():
            return JiraConfig()
        return self.store.get_config().jira
