import struct

import pytest

from rfalm.robots import RobotRegistry, RobotStatus
from rfalm.session import Session, SessionError
from rfalm.tasks import TaskBoard


def _populated():
    robots = RobotRegistry(clock=lambda: 1000.0)
    robots.add("Arm", "welder,drill")
    robots.add("Lifter", "clamp")
    robots.get(2).status = RobotStatus.ERROR
    tasks = TaskBoard(clock=lambda: 2000.0)
    tasks.create("Weld frame", [3, 7])
    tasks.create("Paint body", [1])
    tasks.create("Pack", [])
    tasks.assign(1, 1, robots)
    session = Session(robots, tasks)
    session.queue.enqueue(tasks.get(2))
    session.queue.enqueue(tasks.get(3))
    session.queue.enqueue(tasks.get(1))
    session.queue.dequeue()
    session.queue.dequeue()
    return session


def test_empty_session_is_four_zero_counts():
    assert Session().to_bytes() == bytes(16)


def test_empty_round_trip():
    loaded = Session.from_bytes(Session().to_bytes())
    assert len(loaded.robots) == 0
    assert len(loaded.tasks) == 0
    assert len(loaded.queue) == 0
    assert len(loaded.undo) == 0


def test_record_layout_sizes():
    session = Session()
    session.robots.add("a", "b")
    session.tasks.create("t", [1])
    assert len(session.to_bytes()) == 16 + 176 + 272


def test_round_trip_keeps_robots_tasks_and_queue():
    session = _populated()
    loaded = Session.from_bytes(session.to_bytes())
    assert list(loaded.robots) == list(session.robots)
    assert list(loaded.tasks) == list(session.tasks)
    assert list(loaded.queue) == list(session.queue)


def test_undo_stack_is_restored_in_stored_order():
    session = _populated()
    original = list(session.undo)
    loaded = Session.from_bytes(session.to_bytes())
    assert list(loaded.undo) == list(reversed(original))


def test_long_multibyte_name_is_cut_cleanly():
    session = Session()
    session.robots.add("é" * 49, "")
    loaded = Session.from_bytes(session.to_bytes())
    name = loaded.robots.get(1).name
    assert session.robots.get(1).name.startswith(name)
    assert len(name.encode("utf-8")) <= 49


def test_truncated_data_raises():
    data = _populated().to_bytes()
    with pytest.raises(SessionError):
        Session.from_bytes(data[:-1])


def test_negative_count_raises():
    with pytest.raises(SessionError):
        Session.from_bytes(struct.pack("<i", -1))


def test_too_many_robots_raises():
    with pytest.raises(SessionError):
        Session.from_bytes(struct.pack("<i", 1001))


def test_invalid_status_raises():
    session = Session()
    session.robots.add("a", "b")
    data = bytearray(session.to_bytes())
    # status field follows id, name and padding in the first robot record
    data[4 + 4 + 52 : 4 + 4 + 56] = struct.pack("<i", 9)
    with pytest.raises(SessionError):
        Session.from_bytes(bytes(data))


def test_save_and_load_file(tmp_path):
    path = tmp_path / "session.dat"
    session = _populated()
    session.save(path)
    loaded = Session.load(path)
    assert list(loaded.tasks) == list(session.tasks)
    assert list(loaded.robots) == list(session.robots)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(SessionError):
        Session.load(tmp_path / "absent.dat")


def test_save_into_missing_directory_raises(tmp_path):
    with pytest.raises(SessionError):
        Session().save(tmp_path / "no" / "such" / "session.dat")