"""Exceptions raised by the task model and store.

Everything derives from TaskError so a caller can catch the whole family
in one place. Load-time problems are not represented here: a missing or
corrupt tasks file degrades to an empty collection instead of raising.
"""
from __future__ import annotations
from pathlib import Path
from typing import Union


class TaskError(Exception):
    """Base class for task tracker errors."""


class ValidationError(TaskError):
    """A field value was rejected while building or editing a task."""


class InvalidPriority(ValidationError):
    def __init__(self, text: str):
        self.text = text
        super().__init__("Invalid priority level")


class InvalidDueDate(ValidationError):
    def __init__(self, text: str, detail: str):
        self.text = text
        self.detail = detail
        super().__init__(f"Invalid date format: {detail}")


class InvalidTitle(ValidationError):
    def __init__(self):
        super().__init__("Title must not be empty")


class TaskNotFound(TaskError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")


class PersistenceError(TaskError):
    """Writing the tasks file failed; the original OSError is chained."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        super().__init__(f"Failed to save tasks to {self.path}: {reason}")
