import logging

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from task_manager.auth.deps import get_current_user
from task_manager.config import settings
from task_manager.db import commit, get_db
from task_manager.errors import NotFound
from task_manager.models.task import Task
from task_manager.models.user import User
from task_manager.schemas.tasks import TaskCreateIn, TaskOut, TaskUpdateIn
from task_manager.tasks.filters import TaskFilterParams, build_filter, to_clause
from task_manager.tasks.lookups import SqlTaskLookups
from task_manager.tasks.resolver import TaskResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"], dependencies=[Depends(get_current_user)])

def get_task_resolver(db: Session = Depends(get_db)) -> TaskResolver:
    return TaskResolver(
        SqlTaskLookups(db),
        default_status_slug=settings.default_status_slug,
        untitled_title=settings.untitled_task_title,
    )

def get_filter_params(
    title_cont: str | None = Query(default=None, alias="titleCont"),
    assignee_id: int | None = Query(default=None, alias="assigneeId"),
    status: str | None = Query(default=None),
    label_id: int | None = Query(default=None, alias="labelId"),
) -> TaskFilterParams:
    return TaskFilterParams(
        title_cont=title_cont,
        assignee_id=assignee_id,
        status=status,
        label_id=label_id,
    )

def _out(t: Task) -> TaskOut:
    return TaskOut(
        id=t.id,
        title=t.title,
        content=t.content,
        status=t.status.slug,
        status_id=t.status_id,
        assignee_id=t.assignee_id,
        label_ids=t.label_ids,
        created_at=t.created_at,
    )

def _get_or_404(db: Session, task_id: int) -> Task:
    t = db.get(Task, task_id)
    if t is None:
        raise NotFound("Task", task_id)
    return t

@router.get("", response_model=list[TaskOut])
def list_tasks(
    response: Response,
    params: TaskFilterParams = Depends(get_filter_params),
    db: Session = Depends(get_db),
) -> list[TaskOut]:
    q = (
        select(Task)
        .where(to_clause(build_filter(params)))
        .options(selectinload(Task.status), selectinload(Task.labels))
        .order_by(Task.id)
    )
    rows = db.scalars(q).all()
    response.headers["X-Total-Count"] = str(len(rows))
    return [_out(t) for t in rows]

@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: int, db: Session = Depends(get_db)) -> TaskOut:
    return _out(_get_or_404(db, task_id))

@router.post("", response_model=TaskOut, status_code=201)
def create_task(
    payload: TaskCreateIn,
    resolver: TaskResolver = Depends(get_task_resolver),
    db: Session = Depends(get_db),
) -> TaskOut:
    t = resolver.build(payload)
    db.add(t)
    commit(db)
    db.refresh(t)
    logger.info("task created id=%s status=%s", t.id, t.status.slug)
    return _out(t)

@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    payload: TaskUpdateIn,
    resolver: TaskResolver = Depends(get_task_resolver),
    db: Session = Depends(get_db),
) -> TaskOut:
    t = _get_or_404(db, task_id)

    # resolver raises before touching t if any reference is missing
    resolver.apply(t, payload)
    db.add(t)
    commit(db)
    db.refresh(t)
    return _out(t)

@router.delete("/{task_id}", status_code=204)
def delete_task(
    task_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    t = _get_or_404(db, task_id)
    db.delete(t)
    commit(db)
    logger.info("task id=%s deleted by user id=%s", task_id, user.id)
    return Response(status_code=204)
