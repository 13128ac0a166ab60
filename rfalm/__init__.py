"""Robotic factory assembly line manager: robots, tasks, queue, summaries and sessions."""

__version__ = "0.1.0"
__all__ = ["robots", "tasks", "taskqueue", "tree", "production", "session", "cli"]