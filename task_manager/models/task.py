from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from task_manager.models.base import Base

if TYPE_CHECKING:
    from task_manager.models.label import Label
    from task_manager.models.task_status import TaskStatus
    from task_manager.models.user import User

task_labels = Table(
    "task_labels",
    Base.metadata,
    Column("task_id", ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("label_id", ForeignKey("labels.id", ondelete="RESTRICT"), primary_key=True),
)

class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status_id: Mapped[int] = mapped_column(
        ForeignKey("task_statuses.id", ondelete="RESTRICT"), index=True, nullable=False
    )
    assignee_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), index=True, nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    status: Mapped[TaskStatus] = relationship()
    assignee: Mapped[User | None] = relationship()
    labels: Mapped[list[Label]] = relationship(secondary=task_labels, back_populates="tasks")

    @property
    def label_ids(self) -> list[int]:
        return sorted(label.id for label in self.labels)
