"""Interactive menu front end for the factory manager."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Callable, TextIO

from .production import summarize
from .robots import FleetFullError, RobotNotFoundError, RobotStatus
from .session import Session, SessionError
from .taskqueue import EmptyError
from .tasks import Stage, TaskBoardFullError, parse_components
from .tree import create_factory_tree

_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_WHITE = "\033[97m"
_RESET = "\033[0m"
_INT = re.compile(r"\s*([+-]?\d+)")

_MAIN_ITEMS = [
    "Manage Robots ",
    "Manage Tasks ",
    "View & Control Task Queue ",
    "Assign Task to Robot ",
    "Undo Last Task (Stack) ",
    "Display Factory Structure Tree ",
    "View Production Summary ",
    "Save Session to File ",
    "Load Session from File ",
    "Exit ",
]
_ROBOT_ITEMS = [
    "Add New Robot",
    "Edit Robot Information",
    "Delete Robot",
    "View Robot by ID",
    "List All Robots",
    "Search by Status (0-IDLE,1-WORKING,2-ERROR)",
    "Show Work History",
    "Reset Robot Status",
    "Return to Main Menu",
]
_TASK_ITEMS = [
    "Create New Task",
    "Update Task",
    "Delete Task",
    "View Task Details",
    "List All Tasks",
    "Search by Stage (0-PENDING,1-ACTIVE,2-COMPLETED)",
    "Return to Main Menu",
]
_QUEUE_ITEMS = [
    "View Queue",
    "Add Task to Queue",
    "Process Next Task",
    "Clear Queue",
    "Return to Main Menu",
]


def _parse_int(text: str) -> int | None:
    match = _INT.match(text)
    return int(match.group(1)) if match else None


def _menu_lines(items: list[str], width: int) -> list[str]:
    return [
        f"{_CYAN}{n}.{_WHITE}{' ' * (width - len(str(n)) - 1)}{label}"
        for n, label in enumerate(items, start=1)
    ]


class App:
    """The menu-driven application bound to a session and text streams."""

    def __init__(
        self,
        session: Session | None = None,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        session_file: str = "session.dat",
    ) -> None:
        self.session = session if session is not None else Session()
        self.factory = create_factory_tree()
        self.session_file = session_file
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout

    # -- input and output -------------------------------------------------

    def _say(self, *lines: str) -> None:
        for line in lines:
            print(line, file=self._out)

    def _ask(self, prompt: str) -> str:
        self._out.write(prompt)
        self._out.flush()
        line = self._in.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def _ask_int(self, prompt: str) -> int | None:
        return _parse_int(self._ask(prompt))

    def _read_id(self, prompt: str, error: str = "Invalid ID.") -> int | None:
        value = self._ask_int(prompt)
        if value is None:
            self._say(error)
        return value

    def _submenu(
        self,
        title: str,
        items: list[str],
        width: int,
        actions: dict[int, Callable[[], None]],
    ) -> None:
        last = len(items)
        while True:
            self._say(f"\n{_CYAN}=== {_YELLOW} {title}{_CYAN} ==={_RESET}")
            lines = _menu_lines(items, width)
            lines[-1] += _RESET
            self._say(*lines)
            choice = self._ask_int("Choose an option: ")
            if choice is None:
                self._say(f"Invalid input. Please enter a number 1-{last}.")
                continue
            if choice == last:
                return
            action = actions.get(choice)
            if action is None:
                self._say(f"Invalid choice! Please select 1-{last}.")
            else:
                action()

    # -- main loop --------------------------------------------------------

    def run(self) -> None:
        """Show the main menu until Exit is chosen or input runs out."""
        actions: dict[int, Callable[[], None]] = {
            1: self._robots_menu,
            2: self._tasks_menu,
            3: self._queue_menu,
            4: self._assign,
            5: self._undo,
            6: self._show_tree,
            7: self._show_summary,
            8: self._save,
            9: self._load,
        }
        try:
            while True:
                self._say(
                    f"{_CYAN}\n==============={_YELLOW} RFALM Menu{_CYAN} ==============="
                )
                self._say(*_menu_lines(_MAIN_ITEMS, 6))
                choice = self._ask_int("Choose an option: ")
                if choice == 10:
                    self._say("Exiting...")
                    return
                action = actions.get(choice) if choice is not None else None
                if action is None:
                    self._say("Invalid choice! Please try again.")
                else:
                    action()
        except EOFError:
            self._say("")

    def _assign(self) -> None:
        task_id = self._ask_int("Task ID: ")
        if task_id is None:
            return
        if self.session.tasks.find(task_id) is None:
            self._say("Task not found.")
            return
        robot_id = self._ask_int("Robot ID: ")
        if robot_id is None:
            return
        if self.session.robots.find(robot_id) is None:
            self._say("Robot not found.")
            return
        self.session.tasks.assign(task_id, robot_id, self.session.robots)
        self._say(f"Assigned Task {task_id} to Robot {robot_id}.")

    def _undo(self) -> None:
        try:
            task = self.session.undo.pop()
        except EmptyError as exc:
            self._say(str(exc))
            return
        self.session.queue.enqueue(task)
        self._say(f"Task {task.id} queued successfully!", f"Undid task {task.id}")

    def _show_tree(self) -> None:
        self._out.write(self.factory.render(0))

    def _show_summary(self) -> None:
        summary = summarize(self.session.robots, self.session.tasks)
        self._say("\n" + summary.render())

    def _save(self) -> None:
        try:
            self.session.save(self.session_file)
        except SessionError as exc:
            self._say(str(exc), "Failed to save session!")
        else:
            self._say(f"Session saved to {self.session_file} successfully!")

    def _load(self) -> None:
        try:
            self.session = Session.load(self.session_file)
        except SessionError as exc:
            self._say(str(exc), "Failed to load session!")
        else:
            self._say(f"Session loaded from {self.session_file} successfully!")

    # -- robots -----------------------------------------------------------

    def _robots_menu(self) -> None:
        self._submenu(
            "Manage Robots",
            _ROBOT_ITEMS,
            5,
            {
                1: self._add_robot,
                2: self._edit_robot,
                3: self._delete_robot,
                4: self._view_robot,
                5: self._list_robots,
                6: self._robots_by_status,
                7: self._work_history,
                8: self._reset_robot,
            },
        )

    def _add_robot(self) -> None:
        robots = self.session.robots
        if len(robots) >= robots.capacity:
            self._say("Maximum robots reached!")
            return
        name = self._ask("Enter robot name: ")
        tools = self._ask("Enter tools (comma-separated): ")
        try:
            robot = robots.add(name, tools)
        except FleetFullError as exc:
            self._say(str(exc))
            return
        self._say(f"Robot added! ID: {robot.id}")

    def _edit_robot(self) -> None:
        robot_id = self._read_id("Enter Robot ID to edit: ")
        if robot_id is None:
            return
        robots = self.session.robots
        robot = robots.find(robot_id)
        if robot is None:
            self._say(f"\n❌ Error: Robot with ID {robot_id} not found!")
            return
        while True:
            self._say(
                f"\n=== Editing Robot ID {robot_id} ===",
                "1. Edit Name",
                "2. Edit Tools",
                "3. Return",
            )
            choice = self._ask_int("Choose: ")
            if choice is None:
                self._say("Invalid input.")
            elif choice == 1:
                name = self._ask(f"Current name: {robot.name}\nEnter new name: ")
                robots.rename(robot_id, name)
                self._say("✅ Name updated.")
            elif choice == 2:
                tools = self._ask(f"Current tools: {robot.tools}\nEnter new tools: ")
                robots.set_tools(robot_id, tools)
                self._say("✅ Tools updated.")
            elif choice == 3:
                return
            else:
                self._say("❌ Invalid choice!")

    def _delete_robot(self) -> None:
        robot_id = self._read_id("Enter Robot ID to delete: ")
        if robot_id is None:
            return
        try:
            self.session.robots.delete(robot_id)
        except RobotNotFoundError as exc:
            self._say(f"\n❌ Error: {exc}")
            return
        self._say(f"Robot ID {robot_id} deleted.")

    def _view_robot(self) -> None:
        robot_id = self._read_id("Enter Robot ID to view: ")
        if robot_id is None:
            return
        robot = self.session.robots.find(robot_id)
        if robot is None:
            self._say(f"Robot with ID {robot_id} not found!")
        else:
            self._say("\n" + robot.details())

    def _list_robots(self) -> None:
        robots = self.session.robots
        if not len(robots):
            self._say("\nNo robots in the system!")
            return
        self._say(f"\n=== All Robots ({len(robots)}) ===")
        for robot in robots:
            self._say("\n" + robot.details())

    def _robots_by_status(self) -> None:
        status = self._read_id(
            "Enter status (0-IDLE,1-WORKING,2-ERROR): ", "Invalid status."
        )
        if status is None:
            return
        try:
            found = self.session.robots.by_status(status)
        except ValueError:
            self._say("\nInvalid status code!")
            return
        self._say(f"\n=== Robots in {RobotStatus(status).name} Status ===")
        for robot in found:
            self._say("\n" + robot.details())
        if not found:
            self._say("No robots found in that status!")

    def _work_history(self) -> None:
        robot_id = self._read_id("Enter Robot ID: ")
        if robot_id is None:
            return
        robot = self.session.robots.find(robot_id)
        if robot is None:
            self._say(f"Robot with ID {robot_id} not found!")
            return
        self._say(
            f"\nWork history for Robot ID {robot.id}:",
            f"Tasks completed: {robot.tasks_completed}",
        )
        assigned = [t for t in self.session.tasks if t.robot_assigned == robot.id]
        for task in assigned:
            self._say(task.details())
        if not assigned:
            self._say("No tasks assigned.")

    def _reset_robot(self) -> None:
        robot_id = self._read_id("Enter Robot ID: ")
        if robot_id is None:
            return
        try:
            self.session.robots.reset_status(robot_id)
        except RobotNotFoundError:
            self._say(f"\n❌ Error: Robot {robot_id} not found!")
            return
        self._say(f"\n✅ Robot {robot_id} reset to IDLE")

    # -- tasks ------------------------------------------------------------

    def _tasks_menu(self) -> None:
        self._submenu(
            "Manage Tasks",
            _TASK_ITEMS,
            5,
            {
                1: self._create_task,
                2: self._update_task,
                3: self._delete_task,
                4: self._view_task,
                5: self._list_tasks,
                6: self._tasks_by_stage,
            },
        )

    def _create_task(self) -> None:
        board = self.session.tasks
        if len(board) >= board.capacity:
            self._say("Error: Maximum tasks reached!")
            return
        description = self._ask("Enter task description: ")
        components = parse_components(
            self._ask("Enter component IDs (comma-separated, max 10): ")
        )
        try:
            task = board.create(description, components)
        except TaskBoardFullError as exc:
            self._say(f"Error: {exc}")
            return
        self._say(
            f"Task created! ID: {task.id} | Components: {len(task.components)}"
            " | Status: PENDING"
        )

    def _update_task(self) -> None:
        task_id = self._read_id("Enter Task ID to update: ")
        if task_id is None:
            return
        board = self.session.tasks
        task = board.find(task_id)
        if task is None:
            self._say(f"Error: Task {task_id} not found!")
            return
        while True:
            choice = self._ask_int(
                f"Editing Task {task_id}:\n1) Description\n2) Components\n"
                "3) Status\n4) Mark Completed\n5) Return\nChoose: "
            )
            if choice == 1:
                board.set_description(
                    task_id, self._ask(f"Current: {task.description}\nNew description: ")
                )
            elif choice == 2:
                components = parse_components(
                    self._ask("Enter new components: "), positive_only=False
                )
                board.set_components(task_id, components)
            elif choice == 3:
                stage = self._ask_int("New status (0=PENDING,1=ACTIVE,2=COMPLETED): ")
                if stage is not None and Stage.PENDING <= stage <= Stage.COMPLETED:
                    board.set_stage(task_id, stage)
            elif choice == 4:
                board.complete(task_id, self.session.robots)
            elif choice == 5:
                return

    def _delete_task(self) -> None:
        task_id = self._read_id("Enter Task ID to delete: ")
        if task_id is None:
            return
        if self.session.tasks.find(task_id) is None:
            self._say("Error: Task not found!")
            return
        self.session.tasks.delete(task_id)

    def _view_task(self) -> None:
        task_id = self._read_id("Enter Task ID to view: ")
        if task_id is None:
            return
        task = self.session.tasks.find(task_id)
        if task is None:
            self._say(f"Task with ID {task_id} not found!")
        else:
            self._say(task.details())

    def _list_tasks(self) -> None:
        if not len(self.session.tasks):
            self._say("No tasks available.")
            return
        for task in self.session.tasks:
            self._say(task.details())

    def _tasks_by_stage(self) -> None:
        stage = self._read_id(
            "Enter stage (0=PENDING,1=ACTIVE,2=COMPLETED): ", "Invalid stage."
        )
        if stage is None:
            return
        for task in self.session.tasks.by_stage(stage):
            self._say(task.details())

    # -- queue ------------------------------------------------------------

    def _queue_menu(self) -> None:
        self._submenu(
            "Task Queue Control",
            _QUEUE_ITEMS,
            4,
            {
                1: self._show_queue,
                2: self._queue_task,
                3: self._process_next,
                4: self._clear_queue,
            },
        )

    def _show_queue(self) -> None:
        queue = self.session.queue
        if not len(queue):
            self._say("Task Queue is empty!")
            return
        self._say(f"\n=== Task Queue ({len(queue)} tasks) ===")
        for position, task in enumerate(queue, start=1):
            self._say(f"\nPosition {position}:", task.details())
        self._say("==============================")

    def _queue_task(self) -> None:
        task_id = self._read_id("Enter Task ID to queue: ")
        if task_id is None:
            return
        task = self.session.tasks.find(task_id)
        if task is None:
            self._say(f"Task {task_id} not found!")
            return
        self.session.queue.enqueue(task)
        self._say(f"Task {task.id} queued successfully!")

    def _process_next(self) -> None:
        try:
            task = self.session.queue.dequeue()
        except EmptyError as exc:
            self._say(str(exc))
            return
        self._say(f"\nProcessing task {task.id}:", task.details())

    def _clear_queue(self) -> None:
        self.session.queue.clear()
        self._say("Queue cleared successfully!")


def main(argv: list[str] | None = None) -> int:
    """Run the interactive factory manager."""
    parser = argparse.ArgumentParser(
        prog="rfalm", description="Robotic factory assembly line manager."
    )
    parser.add_argument(
        "--session-file",
        default="session.dat",
        help="file used by the save and load menu entries",
    )
    args = parser.parse_args(argv)
    App(session_file=args.session_file).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())