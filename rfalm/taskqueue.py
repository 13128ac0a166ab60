"""The assembly queue and the undo stack it feeds."""

from __future__ import annotations

from collections import deque
from dataclasses import replace
from typing import Iterator

from .tasks import Task


class EmptyError(LookupError):
    """Raised when taking from an empty queue or stack."""


class UndoStack:
    """Last-in first-out store of processed tasks."""

    def __init__(self) -> None:
        self._items: list[Task] = []

    def push(self, task: Task) -> None:
        self._items.append(replace(task))

    def pop(self) -> Task:
        if not self._items:
            raise EmptyError("Undo stack is empty!")
        return self._items.pop()

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self) -> Iterator[Task]:
        """Iterate from the top of the stack down."""
        return reversed(self._items)

    def __len__(self) -> int:
        return len(self._items)


class TaskQueue:
    """First-in first-out queue of tasks; dequeued tasks go to the undo stack."""

    def __init__(self, undo: UndoStack | None = None) -> None:
        self._items: deque[Task] = deque()
        self.undo = undo if undo is not None else UndoStack()

    def enqueue(self, task: Task) -> None:
        self._items.append(replace(task))

    def dequeue(self) -> Task:
        if not self._items:
            raise EmptyError("Queue is empty!")
        task = self._items.popleft()
        self.undo.push(task)
        return task

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self) -> Iterator[Task]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)