import pytest

from rfalm.taskqueue import EmptyError, TaskQueue, UndoStack
from rfalm.tasks import Stage, Task


def task(n):
    return Task(id=n, description=f"task {n}")


def test_queue_is_fifo():
    queue = TaskQueue()
    for n in (1, 2, 3):
        queue.enqueue(task(n))
    assert [t.id for t in queue] == [1, 2, 3]
    assert queue.dequeue().id == 1
    assert [t.id for t in queue] == [2, 3]


def test_dequeue_empty_raises():
    queue = TaskQueue()
    with pytest.raises(EmptyError):
        queue.dequeue()
    assert len(queue.undo) == 0


def test_dequeue_pushes_onto_undo():
    queue = TaskQueue()
    queue.enqueue(task(4))
    queue.enqueue(task(5))
    queue.dequeue()
    queue.dequeue()
    assert [t.id for t in queue.undo] == [5, 4]
    assert queue.undo.pop().id == 5


def test_shared_undo_stack():
    undo = UndoStack()
    queue = TaskQueue(undo)
    queue.enqueue(task(7))
    queue.dequeue()
    assert len(undo) == 1


def test_stack_is_lifo_and_empty_raises():
    stack = UndoStack()
    for n in (1, 2, 3):
        stack.push(task(n))
    assert [stack.pop().id for _ in range(len(stack))] == [3, 2, 1]
    with pytest.raises(EmptyError):
        stack.pop()


def test_clear():
    queue = TaskQueue()
    queue.enqueue(task(1))
    queue.undo.push(task(2))
    queue.clear()
    queue.undo.clear()
    assert len(queue) == 0
    assert list(queue.undo) == []


def test_enqueue_stores_a_copy():
    original = task(1)
    queue = TaskQueue()
    queue.enqueue(original)
    original.stage = Stage.COMPLETED
    assert queue.dequeue().stage is Stage.PENDING