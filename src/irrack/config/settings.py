"""Service settings: hub endpoint, dispatcher, rack inventory."""

from __future__ import annotations

import json
import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from irrack.transport.http import DEFAULT_HTTP_TIMEOUT
from irrack.transport.pool import DEFAULT_POOL_SIZE, DEFAULT_POOL_WAIT
from irrack.transport.telnet import DEFAULT_HUB_PORT, DEFAULT_READ_TIMEOUT

logger = logging.getLogger(__name__)

APP_NAME = "irrack"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "IRRACK_CONFIG"
DEFAULT_MAX_PORTS = 16


def expand_path(value: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(value)))


def default_config_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME / CONFIG_FILENAME


def default_data_dir() -> Path:
    base = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(base) / APP_NAME


class HubConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    host: str | None = None
    port: int = Field(default=DEFAULT_HUB_PORT, ge=1, le=65535)
    pool_size: int = Field(default=DEFAULT_POOL_SIZE, ge=1)
    pool_wait: float = Field(default=DEFAULT_POOL_WAIT, gt=0)
    read_timeout: float = Field(default=DEFAULT_READ_TIMEOUT, gt=0)
    retries: int = Field(default=2, ge=0)
    retry_backoff: float = Field(default=0.5, ge=0)


class DispatcherConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    api_base: str | None = None
    timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0)


class StorageConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    path: str = Field(default_factory=lambda: str(default_data_dir()))


class DeviceConfig(BaseModel):
    """Block of ``count`` identical devices starting at ``host``."""

    model_config = {"frozen": True, "extra": "forbid"}

    type: str | None = None
    host: str
    port: int | None = None
    count: int = Field(default=1, ge=1)
    max_ports: int = Field(default=DEFAULT_MAX_PORTS, ge=1)
    name: str | None = None
    module: str | None = None


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    hub: HubConfig = Field(default_factory=HubConfig)
    dispatcher: DispatcherConfig = Field(default_factory=DispatcherConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    devices: list[DeviceConfig] = []

    def normalized_devices(self) -> list[DeviceConfig]:
        """One entry per physical device, with ``count`` blocks expanded."""
        result = []
        for block in self.devices:
            host = block.host
            for index in range(block.count):
                if index > 0:
                    host = next_host(host)
                result.append(block.model_copy(update={"host": host, "count": 1}))
        return result


def next_host(host: str) -> str:
    """Next IPv4 address, carrying into the higher octet past 254."""
    octets = host.replace("http://", "").split(".")
    for index in range(len(octets) - 1, -1, -1):
        value = int(octets[index])
        if value + 1 < 255:
            octets[index] = str(value + 1)
            break
        octets[index] = "0"
    return ".".join(octets)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        logger.debug("Loading settings from %s", path)
        return load_settings(path)
    return Settings()


def data_dir_from_settings(settings: Settings) -> Path:
    return expand_path(settings.storage.path)


def _toml_value(value: object) -> str:
    # JSON literals for str/int/float/bool are valid TOML
    return json.dumps(value)


def _toml_table(model: BaseModel) -> list[str]:
    return [
        f"{key} = {_toml_value(value)}"
        for key, value in model.model_dump().items()
        if value is not None
    ]


def render_settings_toml(settings: Settings) -> str:
    lines = ["# irrack configuration", "", "[hub]"]
    lines += _toml_table(settings.hub)
    lines += ["", "[dispatcher]"]
    lines += _toml_table(settings.dispatcher)
    lines += ["", "[storage]"]
    lines += _toml_table(settings.storage)
    for device in settings.devices:
        lines += ["", "[[devices]]"]
        lines += _toml_table(device)
    lines.append("")
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
