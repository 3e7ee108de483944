"""Composable IR command trees.

A tree is built once by the caller and handed to a port as one unit. Leaves
are immutable; groups only ever grow through :meth:`Group.add`. Traversal is
a pure function of the tree, so the same tree can be sent any number of
times.

Example:
    tree = new_group("GoToGuide")
    tree.add(PressKey("MENU", "SKYHD")).add(Delay(500)).add(PressKey("GUIDE", "SKYHD"))
    for leaf in tree.flatten():
        ...
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from irrack.errors import InvalidArgumentError


class HoldMode(Enum):
    REPEAT = 1
    DURATION = 2


@dataclass(frozen=True)
class PressKey:
    """Single key press."""

    key: str
    keyset: str

    @property
    def name(self) -> str:
        return "PressKey"

    def flatten(self) -> list[Leaf]:
        return flatten(self)


@dataclass(frozen=True)
class PressKeyAndHold(PressKey):
    """Key held for ``value`` repeats or ``value`` seconds, depending on ``mode``."""

    value: int = 0
    mode: HoldMode = HoldMode.REPEAT

    def __post_init__(self) -> None:
        if self.value < 0:
            object.__setattr__(self, "value", 0)

    @property
    def name(self) -> str:
        return "PressKeyAndHold"

    @property
    def count(self) -> int:
        return self.value if self.mode is HoldMode.REPEAT else 0

    @property
    def duration(self) -> int:
        return self.value if self.mode is HoldMode.DURATION else 0


@dataclass(frozen=True)
class Delay:
    """Pause of ``ms`` milliseconds between two other leaves."""

    ms: int

    def __post_init__(self) -> None:
        if self.ms < 0:
            object.__setattr__(self, "ms", 0)

    @property
    def name(self) -> str:
        return "Delay Command"

    def flatten(self) -> list[Leaf]:
        return flatten(self)


@dataclass
class Group:
    """Named, ordered collection of leaves and nested groups."""

    name: str = ""
    children: list[Node] = field(default_factory=list)

    @classmethod
    def new(cls, name: str) -> Group:
        return cls(name=name)

    def add(self, child: Node | None) -> Group:
        if child is None:
            raise InvalidArgumentError("Command should not be None")
        if child is self:
            raise InvalidArgumentError("A group cannot contain itself")
        self.children.append(child)
        return self

    def flatten(self) -> list[Leaf]:
        return flatten(self)

    def __len__(self) -> int:
        return len(self.children)

    def __str__(self) -> str:
        return self.name


Leaf = Union[PressKey, PressKeyAndHold, Delay]
Node = Union[PressKey, PressKeyAndHold, Delay, Group]


def new_group(name: str) -> Group:
    return Group.new(name)


def iter_leaves(node: Node) -> Iterator[Leaf]:
    """Yield leaves in pre-order, depth-first, children in insertion order."""
    if isinstance(node, Group):
        for child in node.children:
            yield from iter_leaves(child)
    else:
        yield node


def flatten(node: Node) -> list[Leaf]:
    return list(iter_leaves(node))
