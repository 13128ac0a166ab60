import pytest

from rfalm.robots import (
    NAME_LIMIT,
    TOOLS_LIMIT,
    FleetFullError,
    Robot,
    RobotNotFoundError,
    RobotRegistry,
    RobotStatus,
)


def make_registry(*names, clock=lambda: 1000.0, capacity=None):
    kwargs = {"clock": clock}
    if capacity is not None:
        kwargs["capacity"] = capacity
    registry = RobotRegistry(**kwargs)
    for name in names:
        registry.add(name, "welder,drill")
    return registry


def test_add_assigns_sequential_ids():
    registry = make_registry("alpha", "beta", "gamma")
    assert [r.id for r in registry] == list(range(1, len(registry) + 1))
    assert [r.name for r in registry] == ["alpha", "beta", "gamma"]


def test_new_robot_is_idle_and_stamped():
    registry = RobotRegistry(clock=lambda: 1234.0)
    robot = registry.add("arm", "gripper")
    assert robot.status is RobotStatus.IDLE
    assert robot.tasks_completed == 0
    assert robot.last_maintenance == 1234.0
    assert robot.tools == "gripper"


def test_long_name_and_tools_truncated():
    registry = make_registry()
    robot = registry.add("n" * 80, "t" * 150)
    assert robot.name == "n" * NAME_LIMIT
    assert robot.tools == "t" * TOOLS_LIMIT


def test_capacity_enforced():
    registry = make_registry("a", "b", capacity=2)
    with pytest.raises(FleetFullError):
        registry.add("c", "")
    assert len(registry) == 2


def test_get_and_find():
    registry = make_registry("a", "b")
    assert registry.get(2).name == "b"
    assert registry.find(99) is None
    with pytest.raises(RobotNotFoundError):
        registry.get(99)


def test_rename_and_set_tools():
    registry = make_registry("a")
    registry.rename(1, "renamed")
    registry.set_tools(1, "laser")
    robot = registry.get(1)
    assert (robot.name, robot.tools) == ("renamed", "laser")
    with pytest.raises(RobotNotFoundError):
        registry.rename(5, "x")


def test_delete_keeps_order():
    registry = make_registry("a", "b", "c")
    removed = registry.delete(2)
    assert removed.name == "b"
    assert [r.name for r in registry] == ["a", "c"]


def test_delete_errors():
    with pytest.raises(RobotNotFoundError):
        RobotRegistry().delete(1)
    registry = make_registry("a")
    with pytest.raises(RobotNotFoundError):
        registry.delete(7)
    assert len(registry) == 1


def test_by_status_filters():
    registry = make_registry("a", "b", "c")
    registry.get(2).status = RobotStatus.WORKING
    registry.get(3).status = RobotStatus.ERROR
    assert [r.name for r in registry.by_status(RobotStatus.WORKING)] == ["b"]
    assert [r.name for r in registry.by_status(0)] == ["a"]
    assert [r.name for r in registry.by_status(2)] == ["c"]


def test_by_status_rejects_invalid_code():
    registry = make_registry("a")
    with pytest.raises(ValueError):
        registry.by_status(3)


def test_reset_status():
    times = iter([10.0, 500.0])
    registry = RobotRegistry(clock=lambda: next(times))
    robot = registry.add("a", "")
    robot.status = RobotStatus.ERROR
    registry.reset_status(robot.id)
    assert robot.status is RobotStatus.IDLE
    assert robot.last_maintenance == 500.0
    with pytest.raises(RobotNotFoundError):
        registry.reset_status(42)


def test_details_lists_fields():
    robot = Robot(id=3, name="Robot Arm A", tools="drill", status=RobotStatus.WORKING)
    lines = robot.details().splitlines()
    assert lines[0] == "=== Robot Details ==="
    assert "Name: Robot Arm A" in lines
    assert "Status: WORKING" in lines
    assert "Tools: drill" in lines
    assert lines[-1] == "======================"