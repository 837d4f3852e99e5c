"""Module de configuration."""

from linux_u2f_store.config.loader import (
    ConfigLoader,
    FileConfigLoader,
    load_settings,
)
from linux_u2f_store.config.settings import DEFAULT_SCHEMA, StoreSettings

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "load_settings",
    "DEFAULT_SCHEMA",
    "StoreSettings",
]
