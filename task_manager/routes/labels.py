import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import select
from sqlalchemy.orm import Session

from task_manager.auth.deps import get_current_user
from task_manager.db import commit, get_db
from task_manager.errors import Conflict, NotFound
from task_manager.integrity.guards import enforce_label_unreferenced
from task_manager.models.label import Label
from task_manager.schemas.labels import LabelIn, LabelOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/labels", tags=["labels"], dependencies=[Depends(get_current_user)])

def _out(label: Label) -> LabelOut:
    return LabelOut(id=label.id, name=label.name, created_at=label.created_at)

def _get_or_404(db: Session, label_id: int) -> Label:
    label = db.get(Label, label_id)
    if label is None:
        raise NotFound("Label", label_id)
    return label

def _ensure_name_free(db: Session, name: str, label_id: int | None = None) -> None:
    clash = db.scalar(select(Label).where(Label.name == name))
    if clash is not None and clash.id != label_id:
        raise Conflict(f"Label '{name}' already exists")

@router.get("", response_model=list[LabelOut])
def list_labels(response: Response, db: Session = Depends(get_db)) -> list[LabelOut]:
    rows = db.scalars(select(Label).order_by(Label.id)).all()
    response.headers["X-Total-Count"] = str(len(rows))
    return [_out(label) for label in rows]

@router.get("/{label_id}", response_model=LabelOut)
def get_label(label_id: int, db: Session = Depends(get_db)) -> LabelOut:
    return _out(_get_or_404(db, label_id))

@router.post("", response_model=LabelOut, status_code=201)
def create_label(payload: LabelIn, db: Session = Depends(get_db)) -> LabelOut:
    _ensure_name_free(db, payload.name)

    label = Label(name=payload.name)
    db.add(label)
    commit(db)
    db.refresh(label)
    logger.info("label created id=%s name=%s", label.id, label.name)
    return _out(label)

@router.put("/{label_id}", response_model=LabelOut)
def update_label(label_id: int, payload: LabelIn, db: Session = Depends(get_db)) -> LabelOut:
    label = _get_or_404(db, label_id)
    _ensure_name_free(db, payload.name, label_id=label.id)

    label.name = payload.name
    db.add(label)
    commit(db)
    db.refresh(label)
    return _out(label)

@router.delete("/{label_id}", status_code=204)
def delete_label(label_id: int, db: Session = Depends(get_db)) -> Response:
    label = _get_or_404(db, label_id)
    enforce_label_unreferenced(db, label.id)
    db.delete(label)
    commit(db)
    logger.info("label deleted id=%s", label_id)
    return Response(status_code=204)
