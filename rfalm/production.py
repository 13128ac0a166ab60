"""Production statistics over the robot fleet and the task board."""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from .robots import Robot, RobotStatus
from .tasks import Stage, Task


@dataclass(frozen=True)
class ProductionSummary:
    """Counts and timings describing the state of production."""

    total_tasks: int = 0
    completed_tasks: int = 0
    active_tasks: int = 0
    pending_tasks: int = 0
    total_robots: int = 0
    working_robots: int = 0
    idle_robots: int = 0
    error_robots: int = 0
    total_op_time_sec: float = 0.0
    total_prod_time_sec: float = 0.0

    @property
    def avg_task_time_min(self) -> float:
        """Mean duration of a completed task, in minutes."""
        if self.completed_tasks <= 0:
            return 0.0
        return self.total_prod_time_sec / self.completed_tasks / 60.0

    @property
    def efficiency_pct(self) -> float:
        """Production time as a percentage of robot operating time."""
        if self.total_op_time_sec <= 0:
            return 0.0
        return self.total_prod_time_sec / self.total_op_time_sec * 100.0

    def render(self) -> str:
        """Return the summary as a printable report."""
        if self.total_tasks == 0:
            return "No production data available!"
        completed_pct = self.completed_tasks / self.total_tasks * 100.0
        lines = [
            "============ Production Summary ============",
            "",
            "Tasks:",
            f" Total:        {self.total_tasks}",
            f" Completed:    {self.completed_tasks} ({completed_pct:.1f}%)",
            f" Active:       {self.active_tasks}",
            f" Pending:      {self.pending_tasks}",
            "",
            "Robots:",
            f" Total:        {self.total_robots}",
            f" Working:      {self.working_robots}",
            f" Idle:         {self.idle_robots}",
            f" Error:        {self.error_robots}",
            f" Total Op.Time: {self.total_op_time_sec / 3600.0:.1f} hours",
            "",
            "Performance:",
            f" Avg Task Time:  {self.avg_task_time_min:.1f} minutes",
            f" Efficiency:     {self.efficiency_pct:.1f}%",
            f" Total Prod.Time: {self.total_prod_time_sec / 3600.0:.1f} hours",
            "============================================",
        ]
        return "\n".join(lines)


def summarize(
    robots: Iterable[Robot], tasks: Iterable[Task], now: float | None = None
) -> ProductionSummary:
    """Compute a production summary as of the moment ``now``."""
    moment = time.time() if now is None else now
    task_list = list(tasks)
    robot_list = list(robots)

    stages = Counter(task.stage for task in task_list)
    prod_time = sum(
        (
            task.end_time - task.start_time
            for task in task_list
            if task.stage == Stage.COMPLETED and task.end_time > task.start_time
        ),
        0.0,
    )
    statuses = Counter(robot.status for robot in robot_list)
    op_time = sum((moment - robot.last_maintenance for robot in robot_list), 0.0)

    return ProductionSummary(
        total_tasks=len(task_list),
        completed_tasks=stages[Stage.COMPLETED],
        active_tasks=stages[Stage.ACTIVE],
        pending_tasks=stages[Stage.PENDING],
        total_robots=len(robot_list),
        working_robots=statuses[RobotStatus.WORKING],
        idle_robots=statuses[RobotStatus.IDLE],
        error_robots=statuses[RobotStatus.ERROR],
        total_op_time_sec=float(op_time),
        total_prod_time_sec=float(prod_time),
    )