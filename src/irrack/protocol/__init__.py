from __future__ import annotations

from .translators import (
    HTTP_EXPECTED,
    HUB_EXPECTED,
    DeviceAddress,
    Translation,
    translate,
    translator_for,
)

__all__ = [
    "HTTP_EXPECTED",
    "HUB_EXPECTED",
    "DeviceAddress",
    "Translation",
    "translate",
    "translator_for",
]
