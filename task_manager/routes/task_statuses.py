import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from task_manager.auth.deps import get_current_user
from task_manager.db import commit, get_db
from task_manager.errors import Conflict, NotFound
from task_manager.integrity.guards import enforce_status_unreferenced
from task_manager.models.task_status import TaskStatus
from task_manager.models.user import User
from task_manager.schemas.task_statuses import TaskStatusCreateIn, TaskStatusOut, TaskStatusUpdateIn

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/task_statuses",
    tags=["task_statuses"],
    dependencies=[Depends(get_current_user)],
)

def _out(s: TaskStatus) -> TaskStatusOut:
    return TaskStatusOut(id=s.id, name=s.name, slug=s.slug, created_at=s.created_at)

def _get_or_404(db: Session, status_id: int) -> TaskStatus:
    s = db.get(TaskStatus, status_id)
    if s is None:
        raise NotFound("Task status", status_id)
    return s

def _ensure_unique(db: Session, name: str | None, slug: str | None, status_id: int | None = None) -> None:
    conds = []
    if name is not None:
        conds.append(TaskStatus.name == name)
    if slug is not None:
        conds.append(TaskStatus.slug == slug)
    if not conds:
        return
    q = select(TaskStatus).where(or_(*conds))
    if status_id is not None:
        q = q.where(TaskStatus.id != status_id)
    if db.scalar(q) is not None:
        raise Conflict("Task status with this name or slug already exists")

@router.get("", response_model=list[TaskStatusOut])
def list_statuses(response: Response, db: Session = Depends(get_db)) -> list[TaskStatusOut]:
    rows = db.scalars(select(TaskStatus).order_by(TaskStatus.id)).all()
    response.headers["X-Total-Count"] = str(len(rows))
    return [_out(s) for s in rows]

@router.get("/{status_id}", response_model=TaskStatusOut)
def get_status(status_id: int, db: Session = Depends(get_db)) -> TaskStatusOut:
    return _out(_get_or_404(db, status_id))

@router.post("", response_model=TaskStatusOut, status_code=201)
def create_status(payload: TaskStatusCreateIn, db: Session = Depends(get_db)) -> TaskStatusOut:
    _ensure_unique(db, payload.name, payload.slug)

    s = TaskStatus(name=payload.name, slug=payload.slug)
    db.add(s)
    commit(db)
    db.refresh(s)
    logger.info("task status created id=%s slug=%s", s.id, s.slug)
    return _out(s)

@router.put("/{status_id}", response_model=TaskStatusOut)
def update_status(
    status_id: int,
    payload: TaskStatusUpdateIn,
    db: Session = Depends(get_db),
) -> TaskStatusOut:
    s = _get_or_404(db, status_id)
    _ensure_unique(db, payload.name, payload.slug, status_id=s.id)

    if payload.name is not None:
        s.name = payload.name
    if payload.slug is not None:
        s.slug = payload.slug

    db.add(s)
    commit(db)
    db.refresh(s)
    return _out(s)

@router.delete("/{status_id}", status_code=204)
def delete_status(
    status_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    s = _get_or_404(db, status_id)
    enforce_status_unreferenced(db, s.id)
    db.delete(s)
    commit(db)
    logger.info("task status id=%s deleted by user id=%s", status_id, user.id)
    return Response(status_code=204)
