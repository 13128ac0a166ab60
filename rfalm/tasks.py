"""Assembly tasks and the board that holds them."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, Iterator

from .robots import RobotRegistry, RobotStatus

MAX_TASKS = 1000
MAX_COMPONENTS = 10
DESCRIPTION_LIMIT = 199
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _format_time(timestamp: float) -> str:
    return time.strftime(_TIME_FORMAT, time.localtime(timestamp))


def _leading_int(token: str) -> int:
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


class Stage(IntEnum):
    """Progress stage of a task."""

    PENDING = 0
    ACTIVE = 1
    COMPLETED = 2


class TaskNotFoundError(LookupError):
    """Raised when no task has the requested id."""


class TaskBoardFullError(Exception):
    """Raised when the board cannot take another task."""


def parse_components(text: str, positive_only: bool = True) -> list[int]:
    """Parse a comma-separated list of component ids, at most ten.

    With positive_only, non-positive entries are skipped; otherwise each
    token yields a value, unparsable ones giving 0.
    """
    values: list[int] = []
    for token in filter(None, text.split(",")):
        if len(values) >= MAX_COMPONENTS:
            break
        value = _leading_int(token)
        if positive_only and value <= 0:
            continue
        values.append(value)
    return values


@dataclass
class Task:
    """A unit of assembly work."""

    id: int
    description: str
    stage: Stage = Stage.PENDING
    components: tuple[int, ...] = ()
    robot_assigned: int = -1
    start_time: float = 0.0
    end_time: float = 0.0

    def details(self) -> str:
        """Return a multi-line description of the task."""
        lines = [
            f"ID: {self.id}",
            f"Desc: {self.description}",
            f"Status: {int(self.stage)}",
            f"Start: {_format_time(self.start_time)}",
        ]
        if self.stage == Stage.COMPLETED:
            lines.append(f"End: {_format_time(self.end_time)}")
        lines.append("Components: " + "".join(f"{c} " for c in self.components))
        lines.append(f"Robot: {self.robot_assigned}")
        return "\n".join(lines)


def _clean_components(components: Iterable[int]) -> tuple[int, ...]:
    return tuple(c for c in list(components)[:MAX_COMPONENTS] if c != 0)


class TaskBoard:
    """Ordered collection of tasks with id lookup."""

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        capacity: int = MAX_TASKS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._tasks: list[Task] = list(tasks)
        self.capacity = capacity
        self._clock = clock

    def create(self, description: str, components: Iterable[int] = ()) -> Task:
        """Create a pending task; only positive component ids are kept."""
        if len(self._tasks) >= self.capacity:
            raise TaskBoardFullError("Maximum tasks reached!")
        positive = [c for c in components if c > 0][:MAX_COMPONENTS]
        task = Task(
            id=len(self._tasks) + 1,
            description=description[:DESCRIPTION_LIMIT],
            components=tuple(positive),
            start_time=self._clock(),
        )
        self._tasks.append(task)
        return task

    def find(self, task_id: int) -> Task | None:
        return next((t for t in self._tasks if t.id == task_id), None)

    def get(self, task_id: int) -> Task:
        task = self.find(task_id)
        if task is None:
            raise TaskNotFoundError(f"Task {task_id} not found!")
        return task

    def delete(self, task_id: int) -> Task:
        task = self.get(task_id)
        self._tasks.remove(task)
        return task

    def by_stage(self, stage: int) -> list[Task]:
        return [t for t in self._tasks if t.stage == stage]

    def set_description(self, task_id: int, description: str) -> Task:
        task = self.get(task_id)
        task.description = description[:DESCRIPTION_LIMIT]
        return task

    def set_components(self, task_id: int, components: Iterable[int]) -> Task:
        task = self.get(task_id)
        task.components = _clean_components(components)
        return task

    def set_stage(self, task_id: int, stage: int) -> Task:
        """Change a task's stage; completing it stamps the end time."""
        task = self.get(task_id)
        try:
            new_stage = Stage(stage)
        except ValueError:
            raise ValueError(f"Invalid stage: {stage}") from None
        task.stage = new_stage
        if new_stage == Stage.COMPLETED:
            task.end_time = self._clock()
        return task

    def complete(self, task_id: int, robots: RobotRegistry | None = None) -> Task:
        """Mark a task completed and release its assigned robot."""
        task = self.get(task_id)
        task.stage = Stage.COMPLETED
        task.end_time = self._clock()
        if task.robot_assigned != -1 and robots is not None:
            robot = robots.find(task.robot_assigned)
            if robot is not None:
                robot.tasks_completed += 1
                robot.status = RobotStatus.IDLE
        return task

    def assign(self, task_id: int, robot_id: int, robots: RobotRegistry) -> Task:
        """Give a task to a robot, making both active."""
        task = self.get(task_id)
        robot = robots.get(robot_id)
        task.robot_assigned = robot_id
        robot.status = RobotStatus.WORKING
        task.stage = Stage.ACTIVE
        task.start_time = self._clock()
        return task

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)