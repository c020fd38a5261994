from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from task_manager.models.base import Base
from task_manager.models.task import task_labels

if TYPE_CHECKING:
    from task_manager.models.task import Task

class Label(Base):
    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(1000), unique=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # only read to veto deletion
    tasks: Mapped[list[Task]] = relationship(secondary=task_labels, back_populates="labels")
