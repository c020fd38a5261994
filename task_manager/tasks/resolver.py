from __future__ import annotations

from typing import Any

from task_manager.errors import NotFound
from task_manager.models.label import Label
from task_manager.models.task import Task
from task_manager.models.task_status import TaskStatus
from task_manager.models.user import User
from task_manager.schemas.tasks import TaskCreateIn, TaskUpdateIn
from task_manager.tasks.lookups import TaskLookups

class TaskResolver:
    """Turns an inbound task body into a fully linked ``Task``.

    ``build`` is the create path and applies defaults for everything the
    body leaves out. ``apply`` is the update path: only keys present in the
    body are touched, and every reference is resolved before the entity is
    mutated so a ``NotFound`` leaves it as it was.
    """

    def __init__(
        self,
        lookups: TaskLookups,
        default_status_slug: str = "draft",
        untitled_title: str = "Untitled Task",
    ):
        self.lookups = lookups
        self.default_status_slug = default_status_slug
        self.untitled_title = untitled_title

    def build(self, payload: TaskCreateIn) -> Task:
        status = self._resolve_status(payload.status_id, payload.status)
        assignee = self._resolve_assignee(payload.assignee_id) if payload.assignee_id is not None else None
        labels = self._resolve_labels(payload.label_ids or [])

        return Task(
            title=self._title(payload.title),
            content=payload.content or "",
            status=status,
            assignee=assignee,
            labels=labels,
        )

    def apply(self, task: Task, payload: TaskUpdateIn) -> Task:
        present = payload.model_fields_set
        changes: dict[str, Any] = {}

        if "title" in present and payload.title is not None:
            changes["title"] = self._title(payload.title)
        if "content" in present and payload.content is not None:
            changes["content"] = payload.content

        # status is only re-resolved when the body names one
        if payload.status_id is not None or _has_slug(payload.status):
            changes["status"] = self._resolve_status(payload.status_id, payload.status)

        # explicit null unassigns
        if "assignee_id" in present:
            changes["assignee"] = (
                None if payload.assignee_id is None else self._resolve_assignee(payload.assignee_id)
            )

        # an empty list clears, an absent key keeps
        if "label_ids" in present and payload.label_ids is not None:
            changes["labels"] = self._resolve_labels(payload.label_ids)

        for attr, value in changes.items():
            setattr(task, attr, value)
        return task

    def _title(self, title: str | None) -> str:
        if title is None or not title.strip():
            return self.untitled_title
        return title

    def _resolve_status(self, status_id: int | None, slug: str | None) -> TaskStatus:
        if status_id is not None:
            status = self.lookups.status_by_id(status_id)
            if status is None:
                raise NotFound("Task status", status_id)
            return status

        if _has_slug(slug):
            status = self.lookups.status_by_slug(slug)
            if status is None:
                raise NotFound("Task status", slug, f"Task status '{slug}' not found")
            return status

        status = self.lookups.status_by_slug(self.default_status_slug)
        if status is None:
            raise NotFound(
                "Task status",
                self.default_status_slug,
                f"Default status '{self.default_status_slug}' not found",
            )
        return status

    def _resolve_assignee(self, assignee_id: int) -> User:
        user = self.lookups.user_by_id(assignee_id)
        if user is None:
            raise NotFound("User", assignee_id, f"Assignee with id {assignee_id} not found")
        return user

    def _resolve_labels(self, label_ids: list[int]) -> list[Label]:
        ids = list(dict.fromkeys(label_ids))
        if not ids:
            return []

        found = {label.id: label for label in self.lookups.labels_by_ids(ids)}
        missing = [i for i in ids if i not in found]
        if missing:
            raise NotFound("Label", missing, f"Labels not found for ids: {missing}")
        return [found[i] for i in ids]

def _has_slug(slug: str | None) -> bool:
    return slug is not None and bool(slug.strip())
