"""JSON-based configuration store."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ..models import BridgeConfig, JiraConfig, OrgConfig

logger = logging.getLogger(__name__)


class ConfigStore:
    """Configuration store using a JSON file in the .devops-bridge/ directory."""

    def __init__(self, root_path: str | Path | None = None):
        """Initialize the store.

        Args:
            root_path: Root directory containing .devops-bridge/. Defaults to current directory.
        """
        self.root = Path(root_path) if root_path else Path.cwd()
        self.bridge_dir = self.root / ".devops-bridge"
        self.config_file = self.bridge_dir / "config.json"

    def ensure_initialized(self) -> None:
        """Ensure the .devops-bridge directory exists."""
        if not self.bridge_dir.exists():
            raise FileNotFoundError(
                f"Bridge not initialized. Run 'devops-bridge init' in {self.root}"
            )

    def initialize(self) -> None:
        """Create the .devops-bridge directory with a default config."""
        self.bridge_dir.mkdir(parents=True, exist_ok=True)

        if not self.config_file.exists():
            self._write_json(self.config_file, BridgeConfig().to_dict())

    def _read_json(self, path: Path) -> dict[str, Any]:
        """Read and parse a JSON file."""
        with open(path) as f:
            return json.load(f)

    def _write_json(self, path: Path, data: dict[str, Any]) -> None:
        """Write data to JSON file atomically with sorted keys."""
        fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=".tmp_", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)
                f.write("\n")
            os.rename(temp_path, path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def get_config(self) -> BridgeConfig:
        """Load the bridge configuration."""
        self.ensure_initialized()
        data = self._read_json(self.config_file)
        return BridgeConfig.from_dict(data)

    def save_config(self, config: BridgeConfig) -> None:
        """Save the bridge configuration."""
        self.ensure_initialized()
        self._write_json(self.config_file, config.to_dict())

    def get_org(self, username: str) -> OrgConfig | None:
        """Get stored credentials for a DevOps Center username."""
        return self.get_config().orgs.get(username)

    def save_org(self, username: str, org: OrgConfig) -> None:
        """Store credentials for a DevOps Center username, replacing any existing entry."""
        config = self.get_config()
        config.orgs[username] = org
        self.save_config(config)
        logger.debug("Saved org credentials for %s", username)

    def remove_org(self, username: str) -> bool:
        """Remove a stored org. Returns True if it existed."""
        config = self.get_config()
        if config.orgs.pop(username, None) is None:
            return False
        self.save_config(config)
        return True

    def save_jira(self, jira: JiraConfig) -> None:
        """Store the JIRA settings used for imports."""
        config = self.get_config()
        config.jira = jira
        self.save_config(config)
