"""Task store: owns the ordered task list, id assignment, queries and mutation.

The list is loaded once when the store is opened and written back in full
after every successful mutation. If the write fails the in-memory change
stays applied and PersistenceError propagates to the caller.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import List, Optional, Union

from config import default_store_path
from errors import TaskNotFound
from models import Task, TaskUpdates
from storage import Storage

logger = logging.getLogger(__name__)


@dataclass
class ListFilters:
    """Narrowing options for list_tasks.

    category and priority compare case-insensitively against the display
    label. If both completed and pending are set, completed wins.
    """
    category: Optional[str] = None
    priority: Optional[str] = None
    completed: bool = False
    pending: bool = False

    def matches(self, task: Task) -> bool:
        if self.category is not None and task.category.label.lower() != self.category.lower():
            return False
        if self.priority is not None and task.priority.label.lower() != self.priority.lower():
            return False
        if self.completed:
            return task.completed
        if self.pending:
            return not task.completed
        return True


class TaskStore:
    def __init__(self, path: Union[str, Path]):
        self.path: Path = Path(path)
        self.tasks: List[Task] = Storage.load_tasks(self.path)

    @classmethod
    def default(cls) -> TaskStore:
        """Open the store at the configured location (see config)."""
        return cls(default_store_path())

    # -------------------- persistence --------------------
    def save(self) -> None:
        Storage.save_tasks(self.path, self.tasks)

    # -------------------- id management --------------------
    def next_id(self) -> int:
        # Size-based: after a removal this can hand out an id that is still
        # in use (remove 1 of [1, 2], next add gets 2 again).
        # TODO: switch to max(id) + 1 once existing files can be migrated.
        return len(self.tasks) + 1

    # -------------------- queries --------------------
    def _index_of(self, task_id: int) -> int:
        for idx, task in enumerate(self.tasks):
            if task.id == task_id:
                return idx
        raise TaskNotFound(task_id)

    def _find(self, task_id: int) -> Task:
        return self.tasks[self._index_of(task_id)]

    def show_task(self, task_id: int) -> Task:
        return self._find(task_id)

    def list_tasks(self, filters: Optional[ListFilters] = None) -> List[Task]:
        """Tasks matching filters, in insertion order."""
        if filters is None:
            return list(self.tasks)
        return [task for task in self.tasks if filters.matches(task)]

    # -------------------- task operations --------------------
    def add_task(self, task: Task) -> None:
        self.tasks.append(task)
        logger.debug("Added task %d", task.id)
        self.save()

    def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        due: Optional[str] = None,
        priority: str = "medium",
        category: str = "personal",
        tags: Optional[str] = None,
    ) -> Task:
        """Build a task with the next id and add it.

        Validation errors are raised before anything is stored.
        """
        task = Task.create(self.next_id(), title, description, due, priority, category, tags)
        self.add_task(task)
        return task

    def complete_task(self, task_id: int) -> Task:
        task = self._find(task_id)
        task.completed = True
        logger.debug("Completed task %d", task_id)
        self.save()
        return task

    def remove_task(self, task_id: int) -> Task:
        task = self.tasks.pop(self._index_of(task_id))
        logger.debug("Removed task %d", task_id)
        self.save()
        return task

    def edit_task(self, task_id: int, updates: TaskUpdates) -> Task:
        task = self._find(task_id)
        task.apply(updates)
        logger.debug("Edited task %d", task_id)
        self.save()
        return task

    def __len__(self) -> int:
        return len(self.tasks)

    def __str__(self) -> str:
        done = sum(1 for t in self.tasks if t.completed)
        return f'{len(self.tasks)} tasks, {done} completed, {len(self.tasks) - done} pending'
