"""Factory zone hierarchy and a binary search tree of robots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .robots import Robot

ZONE_NAME_LIMIT = 49


@dataclass
class ZoneNode:
    """A named zone of the factory with nested sub-zones."""

    name: str
    children: list[ZoneNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.name = self.name[:ZONE_NAME_LIMIT]

    def add_child(self, child: ZoneNode) -> ZoneNode:
        self.children.append(child)
        return child

    def render(self, depth: int = 0) -> str:
        """Return the subtree as indented lines, two spaces per level."""
        text = f"{'  ' * depth}- {self.name}\n"
        return text + "".join(child.render(depth + 1) for child in self.children)


def create_factory_tree() -> ZoneNode:
    """Build the standard factory layout."""
    factory = ZoneNode("Factory")
    factory.add_child(ZoneNode("Raw Materials Zone"))
    assembly = factory.add_child(ZoneNode("Assembly Zone"))
    assembly.add_child(ZoneNode("Robot Arm A"))
    assembly.add_child(ZoneNode("Robot Arm B"))
    factory.add_child(ZoneNode("Quality Control"))
    factory.add_child(ZoneNode("Dispatch Section"))
    return factory


@dataclass
class _Node:
    robot: Robot
    left: _Node | None = None
    right: _Node | None = None


class RobotBST:
    """Robots keyed by id; duplicate ids keep the first robot inserted."""

    def __init__(self) -> None:
        self._root: _Node | None = None
        self._size = 0

    def insert(self, robot: Robot) -> bool:
        """Insert a robot; return False if its id is already present."""
        if self._root is None:
            self._root = _Node(robot)
            self._size += 1
            return True
        node = self._root
        while True:
            if robot.id == node.robot.id:
                return False
            side = "left" if robot.id < node.robot.id else "right"
            nxt = getattr(node, side)
            if nxt is None:
                setattr(node, side, _Node(robot))
                self._size += 1
                return True
            node = nxt

    def search(self, robot_id: int) -> Robot | None:
        node = self._root
        while node is not None:
            if robot_id == node.robot.id:
                return node.robot
            node = node.left if robot_id < node.robot.id else node.right
        return None

    def __iter__(self) -> Iterator[Robot]:
        """Yield robots in ascending id order."""
        stack: list[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.robot
            node = node.right

    def __len__(self) -> int:
        return self._size