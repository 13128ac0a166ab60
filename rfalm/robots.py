"""Robot records and the registry that holds the fleet."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, Iterator

MAX_ROBOTS = 1000
NAME_LIMIT = 49
TOOLS_LIMIT = 99
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _format_time(timestamp: float) -> str:
    return time.strftime(_TIME_FORMAT, time.localtime(timestamp))


class RobotStatus(IntEnum):
    """Operating state of a robot."""

    IDLE = 0
    WORKING = 1
    ERROR = 2


class RobotNotFoundError(LookupError):
    """Raised when no robot has the requested id."""


class FleetFullError(Exception):
    """Raised when the registry cannot take another robot."""


@dataclass
class Robot:
    """A single factory robot."""

    id: int
    name: str
    tools: str = ""
    status: RobotStatus = RobotStatus.IDLE
    tasks_completed: int = 0
    last_maintenance: float = 0.0

    def details(self) -> str:
        """Return a multi-line description of the robot."""
        return "\n".join(
            [
                "=== Robot Details ===",
                f"ID: {self.id}",
                f"Name: {self.name}",
                f"Status: {RobotStatus(self.status).name}",
                f"Tasks Completed: {self.tasks_completed}",
                f"Last Maintenance: {_format_time(self.last_maintenance)}",
                f"Tools: {self.tools}",
                "======================",
            ]
        )


class RobotRegistry:
    """Ordered collection of robots with id lookup."""

    def __init__(
        self,
        robots: Iterable[Robot] = (),
        *,
        capacity: int = MAX_ROBOTS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._robots: list[Robot] = list(robots)
        self.capacity = capacity
        self._clock = clock

    def add(self, name: str, tools: str) -> Robot:
        """Create an idle robot and return it."""
        if len(self._robots) >= self.capacity:
            raise FleetFullError("Maximum robots reached!")
        robot = Robot(
            id=len(self._robots) + 1,
            name=name[:NAME_LIMIT],
            tools=tools[:TOOLS_LIMIT],
            last_maintenance=self._clock(),
        )
        self._robots.append(robot)
        return robot

    def find(self, robot_id: int) -> Robot | None:
        """Return the robot with this id, or None."""
        return next((r for r in self._robots if r.id == robot_id), None)

    def get(self, robot_id: int) -> Robot:
        """Return the robot with this id or raise RobotNotFoundError."""
        robot = self.find(robot_id)
        if robot is None:
            raise RobotNotFoundError(f"Robot with ID {robot_id} not found!")
        return robot

    def rename(self, robot_id: int, name: str) -> Robot:
        robot = self.get(robot_id)
        robot.name = name[:NAME_LIMIT]
        return robot

    def set_tools(self, robot_id: int, tools: str) -> Robot:
        robot = self.get(robot_id)
        robot.tools = tools[:TOOLS_LIMIT]
        return robot

    def delete(self, robot_id: int) -> Robot:
        """Remove and return the robot with this id."""
        if not self._robots:
            raise RobotNotFoundError("No robots to delete!")
        robot = self.get(robot_id)
        self._robots.remove(robot)
        return robot

    def by_status(self, status: int) -> list[Robot]:
        """Return the robots currently in the given status."""
        try:
            wanted = RobotStatus(status)
        except ValueError:
            raise ValueError("Invalid status code!") from None
        return [r for r in self._robots if r.status == wanted]

    def reset_status(self, robot_id: int) -> Robot:
        """Set a robot back to IDLE and stamp its maintenance time."""
        robot = self.get(robot_id)
        robot.status = RobotStatus.IDLE
        robot.last_maintenance = self._clock()
        return robot

    def __iter__(self) -> Iterator[Robot]:
        return iter(self._robots)

    def __len__(self) -> int:
        return len(self._robots)