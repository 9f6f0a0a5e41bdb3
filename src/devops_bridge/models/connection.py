"""Resolved DevOps Center connection."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Connection:
    """Access token and instance URL for a DevOps Center org user."""

    access_token: str | None = None
    instance_url: str | None = None

    def is_complete(self) -> bool:
        """Check that both the token and the instance URL are present."""
        return bool(self.access_token) and bool(self.instance_url)
