"""Tests for remote-control operations."""

from __future__ import annotations

import pytest
from fakes import FakeSender

from irrack.core.registry import DeviceRegistry
from irrack.core.remote import Remote, RemoteFactory, channel_keys, shorthand_keys
from irrack.errors import ConfigurationError, InvalidArgumentError, InvalidKeyError
from irrack.models.hardware import HardwareKind


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def remote(sender):
    factory = RemoteFactory(DeviceRegistry(hub_sender=sender, http_sender=sender))
    return factory.get_remote(HardwareKind.IRNETBOXPRO3, "10.0.0.1", "SKY", 4)


@pytest.fixture
def no_sleep(monkeypatch):
    slept = []
    monkeypatch.setattr("time.sleep", slept.append)
    return slept


def _signals(sender):
    return [command.split('signal="')[1].split('"')[0] for command in sender.commands]


def test_press_key(remote, sender):
    assert remote.press_key("MENU") is True
    assert sender.commands == ['ip="10.0.0.1" dataset="SKY" signal="MENU" output="4"']


def test_press_keys_is_one_ordered_command(remote, sender, no_sleep):
    assert remote.press_keys(["UP", "UP", "OK"], delay=200)

    assert _signals(sender) == ["UP", "UP", "OK"]
    assert no_sleep == [0.2, 0.2, 0.2]


def test_press_keys_needs_keys(remote):
    with pytest.raises(InvalidArgumentError):
        remote.press_keys([])


def test_tune_appends_select_unless_auto_tune(remote, sender, no_sleep):
    remote.tune("702")
    assert _signals(sender) == ["SEVEN", "ZERO", "TWO", "SELECT"]

    sender.sent.clear()
    remote.auto_tune = True
    remote.tune(15)
    assert _signals(sender) == ["ONE", "FIVE"]


@pytest.mark.parametrize("channel", ["", "12345", "1a", "-1"])
def test_tune_rejects_bad_channels(remote, channel, sender):
    with pytest.raises(InvalidArgumentError):
        remote.tune(channel)
    assert sender.sent == []


def test_hold(remote, sender):
    remote.press_key_and_hold("RIGHT", 3)
    remote.press_key_and_hold_duration("RIGHT", 2)

    assert sender.commands[0].endswith(' repeats="3"')
    assert sender.commands[1].endswith(' duration="2000"')


def test_send_text_types_each_character(remote, sender, no_sleep):
    remote.send_text("AB")

    assert _signals(sender) == ["A", "B"]
    assert no_sleep == [0.5, 0.5]


def test_shorthand(remote, sender, no_sleep):
    remote.shorthand("MDDO")
    assert _signals(sender) == ["MENU", "DOWN", "DOWN", "OK"]

    with pytest.raises(InvalidArgumentError):
        remote.shorthand("zz")


def test_remote_delay_bounds(remote):
    with pytest.raises(InvalidArgumentError):
        remote.delay = 30001
    with pytest.raises(InvalidArgumentError):
        Remote(remote.port, "SKY", delay=-1)
    remote.delay = 30000


def test_remote_sleeps_after_send(remote, no_sleep):
    remote.delay = 250
    remote.press_key("OK")
    assert no_sleep == [0.25]


def test_failures_raise_typed_errors():
    sender = FakeSender(errors={"NOPE": InvalidKeyError("unknown key")})
    factory = RemoteFactory(DeviceRegistry(hub_sender=sender))
    remote = factory.get_remote(HardwareKind.IRNETBOXPRO3, "10.0.0.1", "SKY", 1)

    with pytest.raises(InvalidKeyError):
        remote.press_key("NOPE")


def test_factory_rejects_unknown_port(sender):
    factory = RemoteFactory(DeviceRegistry(http_sender=sender))

    with pytest.raises(ConfigurationError):
        factory.get_remote(HardwareKind.ITACH, "10.0.0.2", "SKY", 4)


def test_key_helpers():
    assert channel_keys("09") == ["ZERO", "NINE"]
    assert shorthand_keys("[]?!") == ["CHDN", "CHUP", "MUTE"]


def test_press_key_times_sends_separate_commands(remote, sender, no_sleep, monkeypatch):
    trees = []
    send = remote.port.send
    monkeypatch.setattr(remote.port, "send", lambda tree: trees.append(tree) or send(tree))

    assert remote.press_key_times(3, "OK", delay=200)

    assert _signals(sender) == ["OK", "OK", "OK"]
    assert len(trees) == 3
    assert no_sleep == [0.2, 0.2, 0.2]


def test_press_keys_times_repeats_the_batch(remote, sender, no_sleep, monkeypatch):
    trees = []
    send = remote.port.send
    monkeypatch.setattr(remote.port, "send", lambda tree: trees.append(tree) or send(tree))

    assert remote.press_keys_times(2, ["UP", "OK"], delay=100)

    assert _signals(sender) == ["UP", "OK", "UP", "OK"]
    assert [len(tree.flatten()) for tree in trees] == [4, 4]
    assert no_sleep == [0.1, 0.1, 0.1, 0.1]


def test_press_keys_times_checks_delay(remote, sender):
    with pytest.raises(InvalidArgumentError):
        remote.press_keys_times(2, ["UP"], delay=-1)
    assert sender.sent == []
