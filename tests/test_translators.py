"""Tests for per-family wire translation."""

from __future__ import annotations

import pytest

from irrack.models.commands import Delay, HoldMode, PressKey, PressKeyAndHold
from irrack.models.hardware import HardwareKind
from irrack.protocol import DeviceAddress, translate
from irrack.protocol.translators import TRANSLATORS, gc100_translate, itach_translate


def test_irnetbox_press():
    translation = translate(
        HardwareKind.IRNETBOXPRO3, PressKey("MENU", "SKYHD"), DeviceAddress("192.168.1.20", 3)
    )

    assert translation.command == 'ip="192.168.1.20" dataset="SKYHD" signal="MENU" output="3"'
    assert translation.expected == "OK"


def test_irnetbox_hold_suffixes():
    address = DeviceAddress("192.168.1.20", 1)
    repeat = translate(
        HardwareKind.IRNETBOXPRO3, PressKeyAndHold("UP", "SKY", 5, HoldMode.REPEAT), address
    )
    duration = translate(
        HardwareKind.IRNETBOXPRO3, PressKeyAndHold("UP", "SKY", 2, HoldMode.DURATION), address
    )

    assert repeat.command.endswith(' output="1" repeats="5"')
    assert duration.command.endswith(' output="1" duration="2000"')


def test_redrat3_is_addressed_by_name():
    translation = translate(
        HardwareKind.REDRAT3, PressKey("OK", "SKY"), DeviceAddress("10.0.0.1", 1, name="Rack 4")
    )

    assert translation.command == 'name="Rack 4" dataset="SKY" signal="OK"'
    assert translation.expected == "OK"


def test_itach_query_normalises_keyset_and_key():
    translation = itach_translate(PressKey("ch up", "skyhd"), DeviceAddress("10.0.0.2", 2))

    assert translation.command == "host=10.0.0.2&ir_port_number=2&keyset=SKYHD&key=CH_UP"
    assert translation.expected == "success"


def test_itach_hold():
    translation = itach_translate(
        PressKeyAndHold("right", "sky", 3, HoldMode.REPEAT), DeviceAddress("10.0.0.2", 1)
    )
    assert translation.command.endswith("&key=RIGHT&repeats=3")


def test_gc100_uses_module_and_connector():
    default = gc100_translate(PressKey("GUIDE", "sky"), DeviceAddress("10.0.0.3", 4))
    module = gc100_translate(
        PressKeyAndHold("GUIDE", "sky", 1, HoldMode.DURATION),
        DeviceAddress("10.0.0.3", 2, module="5"),
    )

    assert default.command == "module=1:4&keyset=SKY&key=GUIDE"
    assert module.command == "module=5:2&keyset=SKY&key=GUIDE&duration=1000"


@pytest.mark.parametrize("kind", list(TRANSLATORS))
def test_delay_has_no_wire_form(kind):
    assert translate(kind, Delay(100), DeviceAddress("10.0.0.1", 1)) is None
