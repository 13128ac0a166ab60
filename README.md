# rfalm

A small console manager for a robotic factory assembly line. It keeps a
fleet of robots and a board of assembly tasks, feeds tasks through a FIFO
assembly queue with an undo stack, shows the factory's zone layout as a
tree, prints a production summary, and saves or restores the whole session
to a binary file.

## Installing

```
pip install .
```

## Running

```
rfalm
rfalm --session-file factory.dat
```

`--session-file` names the file used by the save and load entries; it
defaults to `session.dat` in the current directory. The main menu offers:

1. Manage robots: add, edit name or tools, delete, view by ID, list all,
   search by status (0 IDLE, 1 WORKING, 2 ERROR), show work history (the
   robot's completed count and the tasks assigned to it), reset to IDLE.
2. Manage tasks: create, update (description, components, stage, mark
   completed), delete, view, list, search by stage
   (0 PENDING, 1 ACTIVE, 2 COMPLETED).
3. View and control the task queue: view, add a task, process the next
   task, clear.
4. Assign a task to a robot: the robot becomes WORKING and the task ACTIVE.
5. Undo the last processed task: it goes back on the queue.
6. Display the factory structure tree.
7. View the production summary.
8. Save the session to the session file.
9. Load the session from the session file.
10. Exit.

The menu also ends when standard input runs out.

## Using it as a library

```python
from rfalm.robots import RobotRegistry, RobotStatus
from rfalm.tasks import TaskBoard, Stage
from rfalm.taskqueue import TaskQueue
from rfalm.production import summarize

robots = RobotRegistry()
arm = robots.add("Arm A", "welder,gripper")

board = TaskBoard()
task = board.create("Weld chassis", [12, 7])
board.assign(task.id, arm.id, robots)
board.complete(task.id, robots)

queue = TaskQueue()
queue.enqueue(task)
done = queue.dequeue()      # also pushed onto queue.undo

print(summarize(robots, board).render())
```

The modules:

- `rfalm.robots`: `Robot`, `RobotStatus`, and `RobotRegistry` with `add`,
  `get`, `find`, `rename`, `set_tools`, `delete`, `by_status` and
  `reset_status`. Unknown ids raise `RobotNotFoundError`; a full registry
  raises `FleetFullError`.
- `rfalm.tasks`: `Task`, `Stage`, `parse_components`, and `TaskBoard` with
  `create`, `get`, `find`, `delete`, `by_stage`, `set_description`,
  `set_components`, `set_stage`, `complete` and `assign`. Unknown ids raise
  `TaskNotFoundError`; a full board raises `TaskBoardFullError`.
- `rfalm.taskqueue`: `TaskQueue` and `UndoStack`; taking from an empty one
  raises `EmptyError`.
- `rfalm.tree`: `ZoneNode`, `create_factory_tree()` and `RobotBST`, a
  binary search tree of robots keyed by id that iterates in id order.
- `rfalm.production`: `summarize(robots, tasks, now=None)` returns a
  `ProductionSummary`, whose `render()` gives the printable report.
- `rfalm.session`: `Session` bundles robots, tasks, queue and undo stack,
  and offers `save(path)` / `Session.load(path)` along with `to_bytes()` /
  `Session.from_bytes(data)`. A file that cannot be written or read raises
  `SessionError`.
- `rfalm.cli`: `App` runs the menu over any text streams; `main()` is the
  `rfalm` command.

## Testing

```
pip install .[test]
pytest
```