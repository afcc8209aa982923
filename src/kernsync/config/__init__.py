"""Configuration management for kernsync."""

from .settings import (
    CONFIG_NAME,
    ChainSettings,
    KernsyncConfig,
    SyncSettings,
    discover_config_path,
    get_config,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_NAME",
    "ChainSettings",
    "KernsyncConfig",
    "SyncSettings",
    "discover_config_path",
    "get_config",
    "load_config",
    "parse_config",
]
