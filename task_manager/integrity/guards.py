import logging

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from task_manager.errors import IntegrityViolation
from task_manager.models.task import Task, task_labels

logger = logging.getLogger(__name__)

def _referenced(db: Session, clause) -> bool:
    return bool(db.scalar(select(exists().where(clause))))

# callers run these before db.delete() so a refused delete never reaches the db

def enforce_status_unreferenced(db: Session, status_id: int) -> None:
    if _referenced(db, Task.status_id == status_id):
        logger.warning("refused delete of task status id=%s, tasks still use it", status_id)
        raise IntegrityViolation("Cannot delete task status with tasks")

def enforce_label_unreferenced(db: Session, label_id: int) -> None:
    if _referenced(db, task_labels.c.label_id == label_id):
        logger.warning("refused delete of label id=%s, tasks still use it", label_id)
        raise IntegrityViolation("Cannot delete label with tasks")

def enforce_user_unassigned(db: Session, user_id: int) -> None:
    if _referenced(db, Task.assignee_id == user_id):
        logger.warning("refused delete of user id=%s, still assigned to tasks", user_id)
        raise IntegrityViolation("Cannot delete user with tasks")
