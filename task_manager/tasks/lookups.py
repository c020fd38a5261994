from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from task_manager.models.label import Label
from task_manager.models.task_status import TaskStatus
from task_manager.models.user import User

class TaskLookups(Protocol):
    """Read-only access to the entities a task refers to.

    Absence is reported as ``None`` (or a shorter result for
    ``labels_by_ids``), never raised.
    """

    def status_by_id(self, status_id: int) -> TaskStatus | None: ...

    def status_by_slug(self, slug: str) -> TaskStatus | None: ...

    def user_by_id(self, user_id: int) -> User | None: ...

    def labels_by_ids(self, label_ids: Iterable[int]) -> list[Label]: ...

class SqlTaskLookups:
    def __init__(self, db: Session):
        self.db = db

    def status_by_id(self, status_id: int) -> TaskStatus | None:
        return self.db.get(TaskStatus, status_id)

    def status_by_slug(self, slug: str) -> TaskStatus | None:
        return self.db.scalar(select(TaskStatus).where(TaskStatus.slug == slug))

    def user_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def labels_by_ids(self, label_ids: Iterable[int]) -> list[Label]:
        ids = set(label_ids)
        if not ids:
            return []
        return list(self.db.scalars(select(Label).where(Label.id.in_(ids))).all())
