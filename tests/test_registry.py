"""Tests for the device registry."""

from __future__ import annotations

import threading

import pytest
from fakes import FakeSender

from irrack.core.registry import DEFAULT_REDRAT3_NAME, DeviceRegistry
from irrack.errors import ConfigurationError, TransportError
from irrack.models.hardware import HardwareKind


def test_devices_are_cached_per_kind_and_host():
    registry = DeviceRegistry(hub_sender=FakeSender(), http_sender=FakeSender())

    first = registry.get_device(HardwareKind.IRNETBOXPRO3, "10.0.0.1")

    assert registry.get_device(HardwareKind.IRNETBOXPRO3, "10.0.0.1") is first
    assert registry.get_device(HardwareKind.IRNETBOXPRO3, "10.0.0.2") is not first
    assert len(registry.devices()) == 2


def test_missing_backend_is_a_configuration_error():
    registry = DeviceRegistry(hub_sender=FakeSender())

    with pytest.raises(ConfigurationError):
        registry.get_device(HardwareKind.ITACH, "10.0.0.5")


def test_named_redrat3_units_share_a_host():
    registry = DeviceRegistry(hub_sender=FakeSender())

    one = registry.get_device(HardwareKind.REDRAT3, "hub", name="One")
    two = registry.get_device(HardwareKind.REDRAT3, "hub", name="Two")

    assert one is not two
    assert registry.get_device(HardwareKind.REDRAT3, "hub", name="One") is one
    assert one.id == "One"


def test_unnamed_redrat3_gets_default_name():
    registry = DeviceRegistry(hub_sender=FakeSender())

    device = registry.get_device(HardwareKind.REDRAT3, "10.0.0.7")

    assert device.name == DEFAULT_REDRAT3_NAME
    assert device.id == "10.0.0.7"


def test_new_irnetbox_is_announced_once():
    announced = []
    registry = DeviceRegistry(
        hub_sender=FakeSender(), http_sender=FakeSender(), announce=announced.append
    )

    registry.get_device(HardwareKind.IRNETBOXPRO3, "10.0.0.1")
    registry.get_device(HardwareKind.IRNETBOXPRO3, "10.0.0.1")
    registry.get_device(HardwareKind.ITACH, "10.0.0.2")

    assert announced == ["10.0.0.1"]


def test_announce_failure_is_not_raised():
    def announce(ip):
        raise TransportError("hub down")

    registry = DeviceRegistry(hub_sender=FakeSender(), announce=announce)

    assert registry.get_device(HardwareKind.IRNETBOXPRO3, "10.0.0.1").host == "10.0.0.1"


def test_concurrent_lookups_create_one_device():
    registry = DeviceRegistry(hub_sender=FakeSender())
    found = []

    def lookup():
        found.append(registry.get_device(HardwareKind.IRNETBOXPRO3, "10.0.0.1"))

    threads = [threading.Thread(target=lookup) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len({id(device) for device in found}) == 1
    assert len(registry.devices()) == 1


def test_clear():
    registry = DeviceRegistry(hub_sender=FakeSender())
    registry.get_device(HardwareKind.IRNETBOXPRO3, "10.0.0.1")
    registry.clear()
    assert registry.devices() == []
