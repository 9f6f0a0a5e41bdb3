"""Configuration store implementations."""

from .config_store import ConfigStore

__all__ = ["ConfigStore"]
