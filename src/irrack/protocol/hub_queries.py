"""Hub management and status queries."""

from __future__ import annotations

LIST_REDRATS = 'hubQuery="list redrats"'
LIST_DATASETS = 'hubQuery="list datasets"'
HUB_VERSION = 'hubQuery="hub version"'

# read exactly one reply line
LINE = "LINE"


def firmware_version(ip: str) -> str:
    return f'hardwareQuery="firmware version" ip="{ip}"'


def hardware_type(ip: str) -> str:
    return f'hardwareQuery="hardware type" ip="{ip}"'


def add_irnetbox(ip: str) -> str:
    return f'hubQuery="add irnetbox" ip="{ip}"'
