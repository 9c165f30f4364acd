"""Data models for the todo tracker.

A Task carries a priority from a closed set and a category that is either
one of four fixed variants or a free-text label (OtherCategory). Text coming
from the command line is turned into these types by the parse_* helpers,
which raise ValidationError subclasses on bad input.

Stored shape (one JSON object per task):
    {"id": 1, "title": "...", "description": null, "completed": false,
     "created_at": "2024-05-01T09:30:00.123456+02:00",
     "due_date": "2024-05-03T17:00:00", "priority": "High",
     "category": "Work" | {"Other": "garden"}, "tags": ["a", "b"]}
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union
import re

from errors import InvalidDueDate, InvalidPriority, InvalidTitle

DUE_FORMAT = "%Y-%m-%d %H:%M"
_LONG_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class Priority(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def label(self) -> str:
        return self.value


class Category(Enum):
    PERSONAL = "Personal"
    WORK = "Work"
    SHOPPING = "Shopping"
    HEALTH = "Health"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class OtherCategory:
    """User-defined category; the label is kept exactly as typed."""
    label: str


CategoryValue = Union[Category, OtherCategory]

_PRIORITIES: Dict[str, Priority] = {p.label.lower(): p for p in Priority}
_CATEGORIES: Dict[str, Category] = {c.label.lower(): c for c in Category}


# -------------------- text parsing --------------------
def parse_priority(text: str) -> Priority:
    try:
        return _PRIORITIES[text.lower()]
    except KeyError:
        raise InvalidPriority(text) from None


def parse_category(text: str) -> CategoryValue:
    return _CATEGORIES.get(text.lower()) or OtherCategory(text)


def parse_due(text: str) -> datetime:
    """Parse 'YYYY-MM-DD HH:MM' (24h, no seconds, no timezone)."""
    try:
        return datetime.strptime(text, DUE_FORMAT)
    except ValueError as exc:
        raise InvalidDueDate(text, str(exc)) from exc


def parse_tags(text: str) -> List[str]:
    # empty pieces and duplicates are kept: "a,,a" -> ["a", "", "a"]
    return [piece.strip() for piece in text.split(',')]


def _check_title(title: str) -> str:
    if not title:
        raise InvalidTitle()
    return title


def _now_local() -> datetime:
    return datetime.now().astimezone()


def _parse_iso(text: str) -> datetime:
    # other writers emit nanoseconds and 'Z'; fromisoformat wants at most micros
    text = _LONG_FRACTION_RE.sub(r"\1", text)
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return datetime.fromisoformat(text)


def _require(data: Mapping[str, Any], key: str, kind: type, optional: bool = False) -> None:
    # stored values are checked, not coerced: "false" must not load as True
    value = data.get(key) if optional else data[key]
    if value is None and optional:
        return
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"{key} must be {kind.__name__}, got {type(value).__name__}")


# -------------------- category encoding --------------------
def category_to_json(category: CategoryValue) -> Union[str, Dict[str, str]]:
    if isinstance(category, OtherCategory):
        return {"Other": category.label}
    return category.value


def category_from_json(raw: Any) -> CategoryValue:
    if isinstance(raw, str):
        return Category(raw)
    if isinstance(raw, Mapping) and list(raw) == ["Other"] and isinstance(raw["Other"], str):
        return OtherCategory(raw["Other"])
    raise ValueError(f"Unrecognized category value: {raw!r}")


@dataclass
class TaskUpdates:
    """Edit request; a field left as None is not touched."""
    title: Optional[str] = None
    description: Optional[str] = None
    due: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[str] = None


@dataclass
class Task:
    """A single to-do item.

    Fields:
        id: Positive integer assigned at creation (collection size + 1).
        title: Non-empty title; whitespace is kept as typed.
        description: Optional free text.
        completed: True once the task has been completed.
        created_at: Local, timezone-aware creation time. Never changes.
        due_date: Optional naive due date/time.
        priority: One of the Priority variants.
        category: A fixed Category or an OtherCategory label.
        tags: Tags in the order given.
    """
    id: int
    title: str
    description: Optional[str] = None
    completed: bool = False
    created_at: datetime = field(default_factory=_now_local)
    due_date: Optional[datetime] = None
    priority: Priority = Priority.MEDIUM
    category: CategoryValue = Category.PERSONAL
    tags: List[str] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        id: int,
        title: str,
        description: Optional[str] = None,
        due: Optional[str] = None,
        priority: str = "medium",
        category: str = "personal",
        tags: Optional[str] = None,
    ) -> Task:
        """Build a new task from user-supplied text.

        Raises InvalidPriority, InvalidDueDate or InvalidTitle.
        """
        return cls(
            id=id,
            title=_check_title(title),
            description=description,
            due_date=parse_due(due) if due is not None else None,
            priority=parse_priority(priority),
            category=parse_category(category),
            tags=parse_tags(tags) if tags is not None else [],
        )

    def apply(self, updates: TaskUpdates) -> None:
        """Apply the supplied fields of an edit.

        All supplied values are validated before anything is assigned, so a
        rejected edit leaves the task exactly as it was.
        """
        draft: Dict[str, Any] = {}
        if updates.title is not None:
            draft['title'] = _check_title(updates.title)
        if updates.description is not None:
            draft['description'] = updates.description
        if updates.due is not None:
            draft['due_date'] = parse_due(updates.due)
        if updates.priority is not None:
            draft['priority'] = parse_priority(updates.priority)
        if updates.category is not None:
            draft['category'] = parse_category(updates.category)
        if updates.tags is not None:
            draft['tags'] = parse_tags(updates.tags)
        for name, value in draft.items():
            setattr(self, name, value)

    # -------------------- serialization --------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'completed': self.completed,
            'created_at': self.created_at.isoformat(),
            'due_date': self.due_date.isoformat() if self.due_date else None,
            'priority': self.priority.value,
            'category': category_to_json(self.category),
            'tags': list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Task:
        """Rebuild a task from its stored form.

        Raises KeyError, TypeError or ValueError on malformed records.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"task record must be an object, got {type(data).__name__}")
        _require(data, 'id', int)
        _require(data, 'title', str)
        _require(data, 'completed', bool, optional=True)
        _require(data, 'description', str, optional=True)
        _require(data, 'due_date', str, optional=True)
        _require(data, 'tags', list, optional=True)
        due_raw = data.get('due_date')
        tags = data.get('tags') or []
        if not all(isinstance(t, str) for t in tags):
            raise TypeError("tags must be strings")
        return cls(
            id=data['id'],
            title=data['title'],
            description=data.get('description'),
            completed=data.get('completed', False),
            created_at=_parse_iso(data['created_at']),
            due_date=_parse_iso(due_raw) if due_raw else None,
            priority=Priority(data['priority']),
            category=category_from_json(data['category']),
            tags=list(tags),
        )
