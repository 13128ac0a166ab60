"""Saving and restoring the whole factory state as a binary file."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from .robots import MAX_ROBOTS, Robot, RobotRegistry, RobotStatus
from .taskqueue import TaskQueue, UndoStack
from .tasks import MAX_COMPONENTS, MAX_TASKS, Stage, Task, TaskBoard

_COUNT = struct.Struct("<i")
# id, name[50], status, tasks completed, last maintenance, tools[100]
_ROBOT = struct.Struct("<i50s2xiiq100s4x")
# id, description[200], stage, components[10], robot, start, end
_TASK = struct.Struct(f"<i200si{MAX_COMPONENTS}ii4xqq")


class SessionError(Exception):
    """Raised when a session cannot be written or read."""


def _encode(text: str, size: int) -> bytes:
    return text.encode("utf-8")[: size - 1]


def _decode(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="ignore")


def _pack_robot(robot: Robot) -> bytes:
    return _ROBOT.pack(
        robot.id,
        _encode(robot.name, 50),
        int(robot.status),
        robot.tasks_completed,
        int(robot.last_maintenance),
        _encode(robot.tools, 100),
    )


def _unpack_robot(fields: tuple) -> Robot:
    robot_id, name, status, completed, maintenance, tools = fields
    return Robot(
        id=robot_id,
        name=_decode(name),
        tools=_decode(tools),
        status=RobotStatus(status),
        tasks_completed=completed,
        last_maintenance=maintenance,
    )


def _pack_task(task: Task) -> bytes:
    components = list(task.components)[:MAX_COMPONENTS]
    components += [0] * (MAX_COMPONENTS - len(components))
    return _TASK.pack(
        task.id,
        _encode(task.description, 200),
        int(task.stage),
        *components,
        task.robot_assigned,
        int(task.start_time),
        int(task.end_time),
    )


def _unpack_task(fields: tuple) -> Task:
    task_id, description, stage, *rest = fields
    components = rest[:MAX_COMPONENTS]
    robot, start, end = rest[MAX_COMPONENTS:]
    return Task(
        id=task_id,
        description=_decode(description),
        stage=Stage(stage),
        components=tuple(c for c in components if c != 0),
        robot_assigned=robot,
        start_time=start,
        end_time=end,
    )


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def take(self, layout: struct.Struct) -> tuple:
        end = self._offset + layout.size
        if end > len(self._data):
            raise SessionError("Error reading from file: unexpected end of data")
        values = layout.unpack_from(self._data, self._offset)
        self._offset = end
        return values

    def count(self, limit: int | None = None) -> int:
        (value,) = self.take(_COUNT)
        if value < 0 or (limit is not None and value > limit):
            raise SessionError(f"Error reading from file: invalid record count {value}")
        return value


@dataclass(eq=False)
class Session:
    """Robots, tasks, the assembly queue and its undo stack."""

    robots: RobotRegistry = field(default_factory=RobotRegistry)
    tasks: TaskBoard = field(default_factory=TaskBoard)
    queue: TaskQueue = field(default_factory=TaskQueue)

    @property
    def undo(self) -> UndoStack:
        return self.queue.undo

    def to_bytes(self) -> bytes:
        """Serialize the session; the undo stack is written top first."""
        robots = list(self.robots)
        tasks = list(self.tasks)
        queued = list(self.queue)
        stacked = list(self.undo)
        parts = [_COUNT.pack(len(robots))]
        parts += [_pack_robot(r) for r in robots]
        parts.append(_COUNT.pack(len(tasks)))
        parts += [_pack_task(t) for t in tasks]
        parts.append(_COUNT.pack(len(queued)))
        parts += [_pack_task(t) for t in queued]
        parts.append(_COUNT.pack(len(stacked)))
        parts += [_pack_task(t) for t in stacked]
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, data: bytes) -> Session:
        """Rebuild a session; undo entries are pushed in the order stored."""
        reader = _Reader(bytes(data))
        try:
            robots = [
                _unpack_robot(reader.take(_ROBOT))
                for _ in range(reader.count(MAX_ROBOTS))
            ]
            tasks = [
                _unpack_task(reader.take(_TASK)) for _ in range(reader.count(MAX_TASKS))
            ]
            queued = [_unpack_task(reader.take(_TASK)) for _ in range(reader.count())]
            stacked = [_unpack_task(reader.take(_TASK)) for _ in range(reader.count())]
        except ValueError as exc:
            raise SessionError(f"Error reading from file: {exc}") from exc
        session = cls(RobotRegistry(robots), TaskBoard(tasks), TaskQueue())
        for task in queued:
            session.queue.enqueue(task)
        for task in stacked:
            session.undo.push(task)
        return session

    def save(self, path: str | PathLike[str]) -> None:
        try:
            Path(path).write_bytes(self.to_bytes())
        except OSError as exc:
            raise SessionError(f"Error writing to file: {exc}") from exc

    @classmethod
    def load(cls, path: str | PathLike[str]) -> Session:
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise SessionError(f"Error opening file for reading: {exc}") from exc
        return cls.from_bytes(data)