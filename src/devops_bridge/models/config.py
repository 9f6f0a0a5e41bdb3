"""Configuration model for the DevOps Center bridge."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_NAMED_CREDENTIAL = "JIRA_CREDENTIAL"


@dataclass
class OrgConfig:
    """Stored credentials for one DevOps Center org user."""

    access_token: str | None = None
    instance_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "instance_url": self.instance_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrgConfig":
        return cls(
            access_token=data.get("access_token"),
            instance_url=data.get("instance_url"),
        )


@dataclass
class JiraConfig:
    """JIRA settings forwarded to DevOps Center when importing tasks.

    ``named_credential`` names a credential configured on the DevOps Center
    side. ``url`` and ``api_token`` are optional and only sent when set.
    """

    url: str | None = None
    api_token: str | None = None
    named_credential: str = DEFAULT_NAMED_CREDENTIAL

    def is_configured(self) -> bool:
        """Check if an explicit JIRA URL and token are stored."""
        return all([self.url, self.api_token])

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "url": self.url,
            "api_token": self.api_token,
            "named_credential": self.named_credential,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JiraConfig":
        """Create a JiraConfig from a dictionary."""
        return cls(
            url=data.get("url"),
            api_token=data.get("api_token"),
            named_credential=data.get("named_credential") or DEFAULT_NAMED_CREDENTIAL,
        )


@dataclass
class BridgeConfig:
    """Bridge configuration stored in .devops-bridge/config.json."""

    version: str = "0.1"
    orgs: dict[str, OrgConfig] = field(default_factory=dict)
    jira: JiraConfig = field(default_factory=JiraConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "orgs": {name: org.to_dict() for name, org in self.orgs.items()},
            "jira": self.jira.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BridgeConfig":
        """Create a BridgeConfig from a dictionary."""
        jira_data = data.get("jira", {})
        return cls(
            version=data.get("version", "0.1"),
            orgs={
                name: OrgConfig.from_dict(org)
                for name, org in data.get("orgs", {}).items()
            },
            jira=JiraConfig.from_dict(jira_data) if jira_data else JiraConfig(),
        )
