"""Task list filtering.

``build_filter`` turns optional query parameters into a predicate value.
The same predicate can be compiled into a SQLAlchemy clause with
``to_clause`` or evaluated against a loaded task with ``matches``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union

from sqlalchemy import ColumnElement, and_, true

from task_manager.models.label import Label
from task_manager.models.task import Task
from task_manager.models.task_status import TaskStatus

@dataclass(frozen=True)
class TaskFilterParams:
    title_cont: str | None = None
    assignee_id: int | None = None
    status: str | None = None
    label_id: int | None = None

@dataclass(frozen=True)
class NoOp:
    pass

@dataclass(frozen=True)
class TitleContains:
    text: str

@dataclass(frozen=True)
class Equals:
    field: str
    value: Any

@dataclass(frozen=True)
class Contains:
    field: str
    value: Any

@dataclass(frozen=True)
class And:
    preds: tuple[Predicate, ...]

Predicate = Union[NoOp, TitleContains, Equals, Contains, And]

ASSIGNEE_ID = "assignee_id"
STATUS_SLUG = "status_slug"
LABEL_IDS = "label_ids"

def build_filter(params: TaskFilterParams) -> Predicate:
    preds: list[Predicate] = []
    # empty title_cont is kept: substring of "" matches every title
    if params.title_cont is not None:
        preds.append(TitleContains(params.title_cont))
    if params.assignee_id is not None:
        preds.append(Equals(ASSIGNEE_ID, params.assignee_id))
    if params.status is not None:
        preds.append(Equals(STATUS_SLUG, params.status))
    if params.label_id is not None:
        preds.append(Contains(LABEL_IDS, params.label_id))

    if not preds:
        return NoOp()
    if len(preds) == 1:
        return preds[0]
    return And(tuple(preds))

# sql

_EQUALS_CLAUSES: dict[str, Callable[[Any], ColumnElement[bool]]] = {
    ASSIGNEE_ID: lambda v: Task.assignee_id == v,
    STATUS_SLUG: lambda v: Task.status.has(TaskStatus.slug == v),
}

_CONTAINS_CLAUSES: dict[str, Callable[[Any], ColumnElement[bool]]] = {
    LABEL_IDS: lambda v: Task.labels.any(Label.id == v),
}

def to_clause(pred: Predicate) -> ColumnElement[bool]:
    if isinstance(pred, NoOp):
        return true()
    if isinstance(pred, TitleContains):
        return Task.title.icontains(pred.text, autoescape=True)
    if isinstance(pred, Equals):
        return _EQUALS_CLAUSES[pred.field](pred.value)
    if isinstance(pred, Contains):
        return _CONTAINS_CLAUSES[pred.field](pred.value)
    if isinstance(pred, And):
        return and_(*(to_clause(p) for p in pred.preds))
    raise TypeError(f"unknown predicate: {pred!r}")

# in memory

_FIELD_GETTERS: dict[str, Callable[[Task], Any]] = {
    ASSIGNEE_ID: lambda t: t.assignee.id if t.assignee is not None else t.assignee_id,
    STATUS_SLUG: lambda t: t.status.slug if t.status is not None else None,
    LABEL_IDS: lambda t: {label.id for label in t.labels},
}

def matches(pred: Predicate, task: Task) -> bool:
    if isinstance(pred, NoOp):
        return True
    if isinstance(pred, TitleContains):
        return pred.text.lower() in (task.title or "").lower()
    if isinstance(pred, Equals):
        value = _FIELD_GETTERS[pred.field](task)
        return value is not None and value == pred.value
    if isinstance(pred, Contains):
        return pred.value in _FIELD_GETTERS[pred.field](task)
    if isinstance(pred, And):
        return all(matches(p, task) for p in pred.preds)
    raise TypeError(f"unknown predicate: {pred!r}")
