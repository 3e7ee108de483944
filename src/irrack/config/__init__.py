from __future__ import annotations

from .settings import (
    APP_NAME,
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    DeviceConfig,
    DispatcherConfig,
    HubConfig,
    Settings,
    StorageConfig,
    data_dir_from_settings,
    default_config_path,
    default_data_dir,
    get_settings,
    load_settings,
    next_host,
    render_settings_toml,
    resolve_config_path,
    write_settings,
)

__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "DeviceConfig",
    "DispatcherConfig",
    "HubConfig",
    "Settings",
    "StorageConfig",
    "data_dir_from_settings",
    "default_config_path",
    "default_data_dir",
    "get_settings",
    "load_settings",
    "next_host",
    "render_settings_toml",
    "resolve_config_path",
    "write_settings",
]
