"""Persistence helpers (load/save) for the task list.

The whole collection lives in one pretty-printed JSON array and is
rewritten in full on every save. There is no temp file or rename, so an
interrupted write can leave a broken file; load_tasks then falls back to
an empty list rather than failing.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import List, Sequence, Union

from errors import PersistenceError
from models import Task

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Storage:
    @staticmethod
    def load_tasks(path: PathLike) -> List[Task]:
        """Load tasks from disk.

        Missing file -> empty list. Unreadable or malformed file -> empty
        list as well, with a warning logged.
        """
        path = Path(path)
        if not path.exists():
            logger.debug("No tasks file at %s, starting empty", path)
            return []
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
            if not isinstance(data, list):
                raise TypeError(f"expected a JSON array, got {type(data).__name__}")
            tasks = [Task.from_dict(raw) for raw in data]
        except (OSError, ValueError, LookupError, TypeError, ArithmeticError, RecursionError) as exc:
            logger.warning("Could not load tasks from %s (%s); starting empty", path, exc)
            return []
        logger.debug("Loaded %d task(s) from %s", len(tasks), path)
        return tasks

    @staticmethod
    def save_tasks(path: PathLike, tasks: Sequence[Task]) -> None:
        """Overwrite the tasks file with the full collection."""
        path = Path(path)
        contents = json.dumps([task.to_dict() for task in tasks], indent=2)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding='utf-8')
        except OSError as exc:
            raise PersistenceError(path, str(exc)) from exc
        logger.debug("Saved %d task(s) to %s", len(tasks), path)
