"""Configuration store clients."""

from .config_store import ConfigMapStore, ConfigStore, StaticConfigStore

__all__ = ["ConfigMapStore", "ConfigStore", "StaticConfigStore"]
