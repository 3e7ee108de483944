"""Tests for command trees."""

from __future__ import annotations

import pytest

from irrack.errors import InvalidArgumentError
from irrack.models.commands import Delay, HoldMode, PressKey, PressKeyAndHold, flatten, new_group


def _tree():
    inner = new_group("inner").add(PressKey("TWO", "SKY")).add(Delay(50))
    return (
        new_group("outer")
        .add(PressKey("ONE", "SKY"))
        .add(inner)
        .add(new_group("empty"))
        .add(PressKey("THREE", "SKY"))
    )


def test_flatten_is_preorder_in_insertion_order():
    leaves = flatten(_tree())

    assert leaves == [
        PressKey("ONE", "SKY"),
        PressKey("TWO", "SKY"),
        Delay(50),
        PressKey("THREE", "SKY"),
    ]


def test_flatten_can_be_repeated():
    tree = _tree()
    assert tree.flatten() == tree.flatten()


def test_leaf_flattens_to_itself():
    leaf = PressKey("MENU", "SKY")
    assert leaf.flatten() == [leaf]


def test_group_rejects_none_and_itself():
    group = new_group("g")
    with pytest.raises(InvalidArgumentError):
        group.add(None)
    with pytest.raises(InvalidArgumentError):
        group.add(group)
    assert len(group) == 0


def test_negative_values_are_clamped():
    assert Delay(-5).ms == 0
    hold = PressKeyAndHold("UP", "SKY", -3, HoldMode.DURATION)
    assert hold.value == 0
    assert hold.duration == 0


def test_hold_exposes_count_or_duration():
    repeat = PressKeyAndHold("UP", "SKY", 4, HoldMode.REPEAT)
    duration = PressKeyAndHold("UP", "SKY", 2, HoldMode.DURATION)

    assert (repeat.count, repeat.duration) == (4, 0)
    assert (duration.count, duration.duration) == (0, 2)
    assert repeat.name == "PressKeyAndHold"
